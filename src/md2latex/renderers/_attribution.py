#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/renderers/_attribution.py
"""Blockquote attribution detection.

A block quote whose last line starts with ``-- `` names its author::

    > To be, or not to be.
    > -- Hamlet

The attribution is passed to the quotation environment as an argument and
removed from the quoted text. Detection produces an :class:`Attribution`
view; the node tree itself is never modified, so the same tree can be
walked any number of times.

"""

from __future__ import annotations

from dataclasses import dataclass, field

from md2latex.ast.nodes import Node, NodeType
from md2latex.constants import ATTRIBUTION_MARKER


@dataclass(frozen=True)
class Attribution:
    """Result of the attribution pre-pass over one block quote.

    Attributes
    ----------
    author : str
        The attribution text, marker and surrounding blanks removed
    text_overrides : dict
        Replacement literals for text nodes, keyed by ``id(node)``
    hidden : frozenset
        ``id()`` of nodes that must not be rendered

    """

    author: str
    text_overrides: dict[int, str] = field(default_factory=dict)
    hidden: frozenset[int] = frozenset()


def find_attribution(quote: Node) -> Attribution | None:
    """Detect an attribution line at the end of ``quote``.

    Returns
    -------
    Attribution or None
        None when the quote does not end with an attribution

    """
    paragraph = quote.last_child
    if paragraph is None or paragraph.type is not NodeType.PARAGRAPH:
        return None
    text = paragraph.last_child
    if text is None or text.type is not NodeType.TEXT or not text.literal:
        return None

    literal = text.literal
    position = literal.rfind("\n")
    if position > 0:
        last_line = literal[position + 1 :]
        if not last_line.startswith(ATTRIBUTION_MARKER):
            return None
        return Attribution(
            author=last_line[len(ATTRIBUTION_MARKER) :].strip(),
            text_overrides={id(text): literal[:position]},
        )

    if position == -1 and literal.startswith(ATTRIBUTION_MARKER):
        hidden = {id(text)}
        previous = text.prev
        if previous is not None and previous.type in (NodeType.SOFTBREAK, NodeType.HARDBREAK):
            hidden.add(id(previous))
        if all(id(child) in hidden for child in paragraph.children):
            hidden.add(id(paragraph))
        return Attribution(author=literal[len(ATTRIBUTION_MARKER) :].strip(), hidden=frozenset(hidden))

    return None
