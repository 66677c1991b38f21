#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/utils/links.py
"""Link and image classification.

The renderer emits very different LaTeX for a hyperlink, a footnote
reference, a link whose target must stay inert, a remote image and a local
figure. The helpers here decide which case applies, by prefix and scheme
only: destinations are never parsed or validated, so malformed input can
not raise.

"""

from __future__ import annotations

import re
from enum import Enum

from md2latex.ast.nodes import Node, NodeType
from md2latex.constants import REMOTE_URL_PREFIXES, SAFE_LINK_SCHEMES

_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):")


class LinkKind(Enum):
    """How a LINK node renders."""

    RAW = "raw"
    FOOTNOTE = "footnote"
    HYPERLINK = "hyperlink"


class ImageKind(Enum):
    """How an IMAGE node renders."""

    REMOTE = "remote"
    FIGURE = "figure"
    GRAPHIC = "graphic"


def url_scheme(destination: str) -> str:
    """Return the lower-cased scheme of ``destination``, or ``""`` for relative targets."""
    match = _SCHEME_RE.match(destination.strip())
    return match.group(1).lower() if match else ""


def is_remote(destination: str) -> bool:
    """Check for an ``http://`` or ``https://`` prefix, ignoring case.

    Examples
    --------
    >>> is_remote("HTTPS://example.com/a.png")
    True
    >>> is_remote("img/a.png")
    False

    """
    return destination.lower().startswith(REMOTE_URL_PREFIXES)


def is_safe_link(destination: str) -> bool:
    """Check whether ``destination`` uses a trusted scheme or is relative."""
    return url_scheme(destination) in SAFE_LINK_SCHEMES


def needs_raw_link(destination: str, skip_links: bool, safe_links: bool) -> bool:
    """Decide whether a link target must be printed instead of hyperlinked.

    Parameters
    ----------
    destination : str
        Link target
    skip_links : bool
        Never hyperlink
    safe_links : bool
        Only hyperlink trusted schemes

    """
    if skip_links:
        return True
    return safe_links and not is_safe_link(destination)


def classify_link(node: Node, skip_links: bool = False, safe_links: bool = False) -> LinkKind:
    """Classify a LINK node.

    Raw rendering wins over footnotes, which win over plain hyperlinks.
    Footnote references have no destination of their own and are never raw.
    """
    data = node.link
    if data is None:
        return LinkKind.HYPERLINK
    if data.note_id == 0 and needs_raw_link(data.destination, skip_links, safe_links):
        return LinkKind.RAW
    if data.note_id != 0:
        return LinkKind.FOOTNOTE
    return LinkKind.HYPERLINK


def is_autolink(node: Node) -> bool:
    """Whether the link's only child is a text equal to its destination."""
    if node.link is None or len(node.children) != 1:
        return False
    child = node.children[0]
    return child.type is NodeType.TEXT and child.literal == node.link.destination


def classify_image(node: Node) -> ImageKind:
    """Classify an IMAGE node; a titled local image becomes a figure."""
    data = node.link
    destination = data.destination if data else ""
    if is_remote(destination):
        return ImageKind.REMOTE
    if data is not None and data.title:
        return ImageKind.FIGURE
    return ImageKind.GRAPHIC
