#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/parsers/__init__.py
"""Parsers producing the md2latex node tree."""

from md2latex.parsers.base import BaseParser
from md2latex.parsers.include import expand_includes
from md2latex.parsers.markdown import MarkdownParser, markdown_to_ast

__all__ = [
    "BaseParser",
    "MarkdownParser",
    "expand_includes",
    "markdown_to_ast",
]
