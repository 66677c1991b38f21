#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/options/markdown.py
"""Configuration options for Markdown parsing."""

from __future__ import annotations

from dataclasses import dataclass, field

from md2latex.ast.nodes import TableBorder
from md2latex.constants import (
    DEFAULT_MARKDOWN_AUTOLINK,
    DEFAULT_MARKDOWN_DEFINITION_LISTS,
    DEFAULT_MARKDOWN_ENCODING,
    DEFAULT_MARKDOWN_FOOTNOTES,
    DEFAULT_MARKDOWN_HARD_LINE_BREAKS,
    DEFAULT_MARKDOWN_STRIKETHROUGH,
    DEFAULT_MARKDOWN_TABLE_BORDER,
    DEFAULT_MARKDOWN_TABLES,
    DEFAULT_MARKDOWN_TITLEBLOCK,
)
from md2latex.options.base import BaseParserOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for Markdown-to-AST parsing.

    Parameters
    ----------
    titleblock : bool, default True
        Treat leading ``% Title`` lines as the document title block.
    footnotes : bool, default True
        Parse footnote references and definitions.
    tables : bool, default True
        Parse pipe tables.
    strikethrough : bool, default True
        Parse ``~~text~~``.
    definition_lists : bool, default True
        Parse definition lists (``term`` followed by ``: definition``).
    autolink : bool, default True
        Turn bare URLs into links.
    hard_line_breaks : bool, default False
        Turn every newline inside a paragraph into a hard break.
    table_border : str, default "none"
        Rules drawn in tables: a comma-separated subset of
        ``left,right,top,bottom,column,row``, or ``all`` / ``none``.
    encoding : str, default "utf-8"
        Encoding used to decode byte input.

    """

    titleblock: bool = field(
        default=DEFAULT_MARKDOWN_TITLEBLOCK,
        metadata={"help": "Parse leading '% ' lines as title block", "cli_name": "no-titleblock", "importance": "core"},
    )
    footnotes: bool = field(
        default=DEFAULT_MARKDOWN_FOOTNOTES,
        metadata={"help": "Parse footnotes", "importance": "core"},
    )
    tables: bool = field(
        default=DEFAULT_MARKDOWN_TABLES,
        metadata={"help": "Parse pipe tables", "importance": "core"},
    )
    strikethrough: bool = field(
        default=DEFAULT_MARKDOWN_STRIKETHROUGH,
        metadata={"help": "Parse strikethrough syntax (~~text~~)", "importance": "core"},
    )
    definition_lists: bool = field(
        default=DEFAULT_MARKDOWN_DEFINITION_LISTS,
        metadata={"help": "Parse definition lists", "importance": "core"},
    )
    autolink: bool = field(
        default=DEFAULT_MARKDOWN_AUTOLINK,
        metadata={"help": "Turn bare URLs into links", "importance": "advanced"},
    )
    hard_line_breaks: bool = field(
        default=DEFAULT_MARKDOWN_HARD_LINE_BREAKS,
        metadata={"help": "Treat every newline as a hard line break", "importance": "advanced"},
    )
    table_border: str = field(
        default=DEFAULT_MARKDOWN_TABLE_BORDER,
        metadata={"help": "Table rules: left,right,top,bottom,column,row, all or none", "importance": "advanced"},
    )
    encoding: str = field(
        default=DEFAULT_MARKDOWN_ENCODING,
        metadata={"help": "Encoding for byte input", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate Markdown parser options.

        Raises
        ------
        ValueError
            If ``table_border`` names an unknown rule.

        """
        super().__post_init__()
        TableBorder.parse(self.table_border)

    @property
    def border(self) -> TableBorder:
        """Parsed :attr:`table_border`."""
        return TableBorder.parse(self.table_border)
