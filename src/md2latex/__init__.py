"""md2latex - convert Markdown documents to LaTeX.

md2latex parses Markdown with mistune into a small node tree and renders
that tree as LaTeX: emphasis, lists, definition lists, tables, links,
footnotes, code listings, quotations with attribution lines, images and
figures. Around the renderer it offers include expansion for books split
over several files, raw LaTeX passthrough through HTML comments, and
packaging of all outputs as a tar archive.

Examples
--------
Convert a string:

    >>> from md2latex import markdown_to_latex
    >>> markdown_to_latex("*foo_bar*")
    '\\\\emph{foo\\\\_bar}\\n'

Render a complete document:

    >>> from md2latex import LatexRendererOptions, markdown_to_latex
    >>> latex = markdown_to_latex(
    ...     "% My Title\\n\\nHello",
    ...     renderer_options=LatexRendererOptions(complete_page=True, author="Me"),
    ... )

Work with the node tree directly:

    >>> from md2latex import LatexRenderer, MarkdownParser
    >>> doc = MarkdownParser().parse("# Intro\\n\\nText")
    >>> LatexRenderer().render_to_string(doc)
    '\\\\section{Intro}\\nText\\n'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "md2latex requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from md2latex.api import ConversionResult, convert_file, format_file_name, markdown_to_latex  # noqa: E402
from md2latex.exceptions import (  # noqa: E402
    FileError,
    IncludeError,
    InvalidOptionsError,
    Md2LatexError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    UnknownNodeTypeError,
    ValidationError,
)
from md2latex.options import LatexRendererOptions, MarkdownParserOptions  # noqa: E402
from md2latex.parsers import MarkdownParser, expand_includes, markdown_to_ast  # noqa: E402
from md2latex.rawlatex import RawLatexCollector  # noqa: E402
from md2latex.renderers import LatexRenderer  # noqa: E402

__all__ = [
    "__version__",
    "ConversionResult",
    "FileError",
    "IncludeError",
    "InvalidOptionsError",
    "LatexRenderer",
    "LatexRendererOptions",
    "MarkdownParser",
    "MarkdownParserOptions",
    "Md2LatexError",
    "OutputWriteError",
    "ParsingError",
    "RawLatexCollector",
    "RenderingError",
    "UnknownNodeTypeError",
    "ValidationError",
    "convert_file",
    "expand_includes",
    "format_file_name",
    "markdown_to_ast",
    "markdown_to_latex",
]
