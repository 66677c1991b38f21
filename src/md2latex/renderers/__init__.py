#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/md2latex/renderers/__init__.py
"""Renderers turning the node tree into output text.

Examples
--------
Render a hand-built tree:

    >>> from md2latex.ast import NodeType, builder
    >>> from md2latex.renderers import LatexRenderer
    >>> doc = builder.document(builder.paragraph(builder.inline(NodeType.STRONG, "foo")))
    >>> LatexRenderer().render_to_string(doc)
    '\\\\textbf{foo}\\n'

"""

from md2latex.renderers.base import BaseRenderer
from md2latex.renderers.latex import LatexRenderer

__all__ = ["BaseRenderer", "LatexRenderer"]
