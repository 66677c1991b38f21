#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for md2latex.

This module centralizes the hardcoded values used across md2latex so that
option defaults, LaTeX vocabulary and link-safety policy live in one place.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Renderer Defaults - LaTeX rendering options
3. Parser Defaults - Markdown parsing options
4. LaTeX Vocabulary - Sectioning commands, delimiters, markers
5. Security Constants - Link scheme policy
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

TopLevelDivision = Literal["section", "chapter"]

# =============================================================================
# Renderer Defaults
# =============================================================================

DEFAULT_CREATOR = "md2latex"
DEFAULT_LATEX_AUTHOR = ""
DEFAULT_LATEX_LANGUAGES = ""
DEFAULT_LATEX_QUOTATION_ENVIRONMENT = "quotation"
DEFAULT_LATEX_COMPLETE_PAGE = False
DEFAULT_LATEX_CHAPTER_TITLE = False
DEFAULT_LATEX_NO_PAR_INDENT = False
DEFAULT_LATEX_SKIP_LINKS = False
DEFAULT_LATEX_SAFE_LINKS = False
DEFAULT_LATEX_TOC = False
DEFAULT_LATEX_TOP_LEVEL_DIVISION: TopLevelDivision = "section"
DEFAULT_LATEX_DOCUMENT_CLASS = "article"
DEFAULT_LATEX_SMART_QUOTES = True

# =============================================================================
# Parser Defaults
# =============================================================================

DEFAULT_MARKDOWN_TITLEBLOCK = True
DEFAULT_MARKDOWN_FOOTNOTES = True
DEFAULT_MARKDOWN_TABLES = True
DEFAULT_MARKDOWN_STRIKETHROUGH = True
DEFAULT_MARKDOWN_DEFINITION_LISTS = True
DEFAULT_MARKDOWN_AUTOLINK = True
DEFAULT_MARKDOWN_HARD_LINE_BREAKS = False
DEFAULT_MARKDOWN_TABLE_BORDER = "none"
DEFAULT_MARKDOWN_ENCODING = "utf-8"

# =============================================================================
# LaTeX Vocabulary
# =============================================================================

# Heading levels index into this tuple; "section" as top level skips "chapter".
SECTIONING_COMMANDS = (
    "chapter",
    "section",
    "subsection",
    "subsubsection",
    "paragraph",
    "subparagraph",
)

# Sectioning commands followed by a newline; the others run into their text.
BLOCK_SECTIONING_COMMANDS = frozenset({"chapter", "section", "subsection", "subsubsection"})

# Code blocks tagged with this language render as display math.
MATH_CODE_LANGUAGE = "math"

# Inline code starting with this prefix renders as inline math.
INLINE_MATH_PREFIX = "$$ "

# \lstinline delimiter ranges: '!'..')' first, then '+'..'~' ('*' and space excluded).
LSTINLINE_DELIMITER_RANGES = ((ord("!"), ord(")")), (ord("+"), ord("~")))
LSTINLINE_ERROR_MARKER = "!<RENDERING ERROR: no delimiter found>!"

# Marker that introduces a blockquote attribution line.
ATTRIBUTION_MARKER = "-- "

# Raw LaTeX passthrough comments: "<!-- :: KEY\n...\n-->".
RAW_LATEX_PREFIX = "<!-- ::"
RAW_LATEX_SUFFIX = "-->"

# Include directive in Markdown sources: ":: path/to/file.md".
INCLUDE_DIRECTIVE = ":: "

# =============================================================================
# Security Constants
# =============================================================================

REMOTE_URL_PREFIXES = ("http://", "https://")
SAFE_LINK_SCHEMES = frozenset({"http", "https", "mailto", "ftp", "ftps", "tel", "sms", ""})
