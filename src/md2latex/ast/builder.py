#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/ast/builder.py
"""Builder helpers for constructing node trees.

The Markdown parser adapter uses these helpers, and they are equally handy
for building documents by hand in tests or from other front ends. The
small factory functions return fully linked :class:`Node` objects; the
:class:`TableBuilder` takes care of the head/body/row/cell bookkeeping and
the ``is_last`` flags the table layout relies on.

"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Sequence

from md2latex.ast.nodes import (
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


def _content(content: str | Node | Sequence[Node] | None) -> list[Node]:
    if content is None:
        return []
    if isinstance(content, str):
        return [text(content)]
    if isinstance(content, Node):
        return [content]
    return list(content)


def document(*children: Node) -> Node:
    return Node(NodeType.DOCUMENT, children=list(children))


def text(literal: str) -> Node:
    return Node(NodeType.TEXT, literal=literal)


def paragraph(*content: str | Node) -> Node:
    children: list[Node] = []
    for item in content:
        children.extend(_content(item))
    return Node(NodeType.PARAGRAPH, children=children)


def heading(
    level: int, content: str | Node | Sequence[Node], is_titleblock: bool = False, config: str = ""
) -> Node:
    return Node(
        NodeType.HEADING,
        children=_content(content),
        heading=HeadingData(level=level, is_titleblock=is_titleblock, config=config),
    )


def inline(node_type: NodeType, content: str | Node | Sequence[Node]) -> Node:
    """Build an EMPH, STRONG or DEL node around ``content``."""
    if node_type not in (NodeType.EMPH, NodeType.STRONG, NodeType.DEL):
        raise ValueError(f"{node_type.name} is not an inline container")
    return Node(node_type, children=_content(content))


def code(literal: str) -> Node:
    return Node(NodeType.CODE, literal=literal)


def code_block(literal: str, info: str = "") -> Node:
    return Node(NodeType.CODE_BLOCK, literal=literal, code_block=CodeBlockData(info=info))


def link(
    destination: str,
    content: str | Node | Sequence[Node] | None = None,
    title: str | None = None,
) -> Node:
    return Node(
        NodeType.LINK,
        children=_content(content),
        link=LinkData(destination=destination, title=title),
    )


def footnote_reference(note_id: int, footnote: Node | None, label: str = "") -> Node:
    """Build a footnote reference pointing at the footnote ``ITEM`` node."""
    return Node(
        NodeType.LINK,
        children=_content(label or str(note_id)),
        link=LinkData(destination="", note_id=note_id, footnote=footnote),
    )


def image(destination: str, title: str | None = None, alt: str | Node | Sequence[Node] | None = None) -> Node:
    return Node(
        NodeType.IMAGE,
        children=_content(alt),
        link=LinkData(destination=destination, title=title),
    )


def list_node(items: Sequence[Node], flags: ListFlags = ListFlags.NONE, tight: bool = True, start: int = 1) -> Node:
    return Node(
        NodeType.LIST,
        children=list(items),
        list_data=ListData(flags=flags, tight=tight, start=start),
    )


def item(*children: Node, flags: ListFlags = ListFlags.NONE) -> Node:
    return Node(NodeType.ITEM, children=list(children), list_data=ListData(flags=flags))


def block_quote(*children: Node) -> Node:
    return Node(NodeType.BLOCK_QUOTE, children=list(children))


def html_block(literal: str) -> Node:
    return Node(NodeType.HTML_BLOCK, literal=literal)


def html_span(literal: str) -> Node:
    return Node(NodeType.HTML_SPAN, literal=literal)


def softbreak() -> Node:
    return Node(NodeType.SOFTBREAK)


def hardbreak() -> Node:
    return Node(NodeType.HARDBREAK)


def horizontal_rule() -> Node:
    return Node(NodeType.HORIZONTAL_RULE)


class TableBuilder:
    """Helper for building table structures.

    Rows are collected first and linked into ``TABLE_HEAD`` / ``TABLE_BODY``
    sections by :meth:`get_table`, which also marks the last row of each
    section and the last cell of each row.

    Parameters
    ----------
    border : TableBorder, optional
        Rules to draw; no rules by default
    alignments : sequence of TableAlignment, optional
        Column alignments applied to every row

    Examples
    --------
    >>> builder = TableBuilder(alignments=[TableAlignment.LEFT, TableAlignment.RIGHT])
    >>> builder.add_row(["Name", "Age"], is_header=True)
    >>> builder.add_row(["Alice", "30"])
    >>> table = builder.get_table()

    """

    def __init__(
        self,
        border: TableBorder | None = None,
        alignments: Sequence[TableAlignment] | None = None,
    ):
        """Initialize the builder with an optional border and column alignments."""
        self.border = border or TableBorder()
        self.alignments: list[TableAlignment] = list(alignments or [])
        self.header: list[Node] = []
        self.rows: list[Node] = []

    def add_row(
        self,
        cells: Sequence[str | Node | Sequence[Node]],
        is_header: bool = False,
        opts: Sequence[dict[str, Any] | None] | None = None,
    ) -> Node:
        """Add a row to the table.

        Parameters
        ----------
        cells : sequence of str, Node, or sequence of Node
            Cell contents; plain strings become text nodes
        is_header : bool, default False
            Whether the row belongs to the table head
        opts : sequence of dict or None, optional
            Per-cell layout overrides (``"width"``, ``"sep"``); a ``"width"``
            given as a string or number is converted to :class:`~decimal.Decimal`

        Returns
        -------
        Node
            The new ``TABLE_ROW`` node

        """
        row = Node(NodeType.TABLE_ROW, row=TableRowData())
        for index, content in enumerate(cells):
            cell_opts = opts[index] if opts is not None and index < len(opts) else None
            if cell_opts and "width" in cell_opts and not isinstance(cell_opts["width"], Decimal):
                cell_opts = {**cell_opts, "width": Decimal(str(cell_opts["width"]))}
            align = self.alignments[index] if index < len(self.alignments) else TableAlignment.DEFAULT
            row.append_child(
                Node(
                    NodeType.TABLE_CELL,
                    children=_content(content),
                    cell=TableCellData(is_header=is_header, align=align, opts=cell_opts),
                )
            )
        (self.header if is_header else self.rows).append(row)
        return row

    def get_table(self) -> Node:
        """Link the collected rows into a ``TABLE`` node.

        Returns
        -------
        Node
            Completed table node

        """
        table = Node(NodeType.TABLE, table=TableData(border=self.border))
        for section_type, rows in ((NodeType.TABLE_HEAD, self.header), (NodeType.TABLE_BODY, self.rows)):
            if not rows:
                continue
            section = table.append_child(Node(section_type))
            for row in rows:
                section.append_child(row)
                if row.row is not None:
                    row.row.is_last = row is rows[-1]
                for cell in row.children:
                    if cell.cell is not None:
                        cell.cell.is_last = cell is row.children[-1]
        return table


__all__ = [
    "TableBuilder",
    "block_quote",
    "code",
    "code_block",
    "document",
    "footnote_reference",
    "hardbreak",
    "heading",
    "horizontal_rule",
    "html_block",
    "html_span",
    "image",
    "inline",
    "item",
    "link",
    "list_node",
    "paragraph",
    "softbreak",
    "text",
]
