#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/utils/__init__.py
"""Utility modules for the md2latex package.

This package contains LaTeX escaping, link classification, encoding
detection and output helpers shared by the parser, the renderer and the CLI.
"""

from md2latex.utils.escape import LatexEscaper
from md2latex.utils.links import ImageKind, LinkKind, classify_image, classify_link

__all__ = [
    "ImageKind",
    "LatexEscaper",
    "LinkKind",
    "classify_image",
    "classify_link",
]
