#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/ast/__init__.py
"""Node tree for md2latex.

The tree is produced by :class:`md2latex.parsers.MarkdownParser` (or built
by hand with :mod:`md2latex.ast.builder`) and consumed by
:class:`md2latex.renderers.LatexRenderer` through :func:`walk`.

"""

from md2latex.ast.builder import TableBuilder
from md2latex.ast.nodes import (
    CONTAINER_TYPES,
    CodeBlockData,
    HeadingData,
    LinkData,
    ListData,
    ListFlags,
    Node,
    NodeType,
    TableAlignment,
    TableBorder,
    TableCellData,
    TableData,
    TableRowData,
)
from md2latex.ast.visitors import NodeVisitor, WalkStatus, walk

__all__ = [
    "CONTAINER_TYPES",
    "CodeBlockData",
    "HeadingData",
    "LinkData",
    "ListData",
    "ListFlags",
    "Node",
    "NodeType",
    "NodeVisitor",
    "TableAlignment",
    "TableBorder",
    "TableBuilder",
    "TableCellData",
    "TableData",
    "TableRowData",
    "WalkStatus",
    "walk",
]
