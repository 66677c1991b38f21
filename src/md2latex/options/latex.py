#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/options/latex.py
"""Configuration options for LaTeX rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Optional

from md2latex.constants import (
    DEFAULT_LATEX_AUTHOR,
    DEFAULT_LATEX_CHAPTER_TITLE,
    DEFAULT_LATEX_COMPLETE_PAGE,
    DEFAULT_LATEX_DOCUMENT_CLASS,
    DEFAULT_LATEX_LANGUAGES,
    DEFAULT_LATEX_NO_PAR_INDENT,
    DEFAULT_LATEX_QUOTATION_ENVIRONMENT,
    DEFAULT_LATEX_SAFE_LINKS,
    DEFAULT_LATEX_SKIP_LINKS,
    DEFAULT_LATEX_SMART_QUOTES,
    DEFAULT_LATEX_TOC,
    DEFAULT_LATEX_TOP_LEVEL_DIVISION,
    SECTIONING_COMMANDS,
    TopLevelDivision,
)
from md2latex.options.base import BaseRendererOptions

if TYPE_CHECKING:
    from typing import IO

    from md2latex.ast.nodes import Node
    from md2latex.ast.visitors import WalkStatus
    from md2latex.renderers.latex import LatexRenderer

    HtmlHandler = Callable[[LatexRenderer, IO[str], Node, bool], WalkStatus]


@dataclass(frozen=True)
class LatexRendererOptions(BaseRendererOptions):
    r"""Configuration options for AST-to-LaTeX rendering.

    Parameters
    ----------
    author : str, default ""
        Document author, written into ``\author`` and the PDF metadata.
        Passed through verbatim, so it may contain LaTeX.
    languages : str, default ""
        Comma-separated babel languages; the last one is the main language.
        No babel package is loaded when empty.
    quotation_environment : str, default "quotation"
        Environment used for block quotes (``quote``, ``quotation``, ``verse``...).
    complete_page : bool, default False
        Generate a complete document with preamble and ``\begin{document}``.
        When False, only the body is produced, ready to be ``\input``.
    chapter_title : bool, default False
        Without ``complete_page``, open the body with ``\chapter{TITLE}``
        taken from the title block.
    no_par_indent : bool, default False
        Set ``\parindent=0pt`` in the preamble.
    skip_links : bool, default False
        Never emit ``\href``; link targets go to a footnote instead.
    safe_links : bool, default False
        Only emit ``\href`` for safe schemes (http, https, mailto, ...).
    toc : bool, default False
        Emit a table of contents (and list of figures when the document has
        captioned images) after ``\begin{document}``.
    top_level_division : {"section", "chapter"}, default "section"
        Sectioning command that level-1 headings map to.
    document_class : str, default "article"
        LaTeX document class used with ``complete_page``.
    smart_quotes : bool, default True
        Turn straight quotes into curly quotes while escaping.
    html_handler : callable, optional
        Called as ``handler(renderer, out, node, entering)`` for HTML blocks
        and spans; HTML is dropped when unset.

    """

    author: str = field(
        default=DEFAULT_LATEX_AUTHOR,
        metadata={"help": "Document author (LaTeX allowed)", "importance": "core"},
    )
    languages: str = field(
        default=DEFAULT_LATEX_LANGUAGES,
        metadata={"help": "Comma-separated babel languages, main language last", "importance": "core"},
    )
    quotation_environment: str = field(
        default=DEFAULT_LATEX_QUOTATION_ENVIRONMENT,
        metadata={"help": "Environment used for block quotes", "cli_name": "quotation-env", "importance": "advanced"},
    )
    complete_page: bool = field(
        default=DEFAULT_LATEX_COMPLETE_PAGE,
        metadata={"help": "Generate a complete document with preamble", "importance": "core"},
    )
    chapter_title: bool = field(
        default=DEFAULT_LATEX_CHAPTER_TITLE,
        metadata={"help": "Open a body-only document with \\chapter{title}", "importance": "core"},
    )
    no_par_indent: bool = field(
        default=DEFAULT_LATEX_NO_PAR_INDENT,
        metadata={"help": "Disable paragraph indentation", "importance": "advanced"},
    )
    skip_links: bool = field(
        default=DEFAULT_LATEX_SKIP_LINKS,
        metadata={"help": "Render link targets as footnotes instead of hyperlinks", "importance": "core"},
    )
    safe_links: bool = field(
        default=DEFAULT_LATEX_SAFE_LINKS,
        metadata={"help": "Only hyperlink URLs with a safe scheme", "importance": "security"},
    )
    toc: bool = field(
        default=DEFAULT_LATEX_TOC,
        metadata={"help": "Generate a table of contents", "importance": "core"},
    )
    top_level_division: TopLevelDivision = field(
        default=DEFAULT_LATEX_TOP_LEVEL_DIVISION,
        metadata={
            "help": "Sectioning command for level-1 headings",
            "choices": ["section", "chapter"],
            "importance": "core",
        },
    )
    document_class: str = field(
        default=DEFAULT_LATEX_DOCUMENT_CLASS,
        metadata={"help": "LaTeX document class (article, report, book, etc.)", "importance": "core"},
    )
    smart_quotes: bool = field(
        default=DEFAULT_LATEX_SMART_QUOTES,
        metadata={"help": "Convert straight quotes to curly quotes", "importance": "advanced"},
    )
    html_handler: Optional[HtmlHandler] = field(
        default=None,
        compare=False,
        metadata={"help": "Callback for HTML blocks and spans", "exclude_from_cli": True},
    )

    def __post_init__(self) -> None:
        """Validate LaTeX renderer options.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        super().__post_init__()

        if self.top_level_division not in SECTIONING_COMMANDS[:2]:
            raise ValueError(
                f"top_level_division must be 'section' or 'chapter', got {self.top_level_division!r}"
            )
        if not self.quotation_environment.strip():
            raise ValueError("quotation_environment must not be empty")
        if not self.document_class.strip():
            raise ValueError("document_class must not be empty")
        if self.html_handler is not None and not callable(self.html_handler):
            raise ValueError("html_handler must be callable")

    @property
    def language_list(self) -> list[str]:
        """Babel languages, blanks removed."""
        return [lang.strip() for lang in self.languages.split(",") if lang.strip()]
