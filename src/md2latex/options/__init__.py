#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/options/__init__.py
"""Options for md2latex parsers and renderers."""

from md2latex.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from md2latex.options.latex import LatexRendererOptions
from md2latex.options.markdown import MarkdownParserOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "LatexRendererOptions",
    "MarkdownParserOptions",
]
