#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/rawlatex.py
r"""Raw LaTeX passthrough through HTML comments.

Markdown has no syntax for raw LaTeX, but HTML comments survive parsing
untouched. A comment whose first line is ``<!-- ::KEY`` carries LaTeX:

- with an empty key (``<!-- ::``) the body is written into the document
  where the comment stands;
- with a key configured as a target (``-R KEY:dest.tex`` on the command
  line) the body is collected and written to that side file;
- any other key is ignored.

Example::

    <!-- ::
    \newpage
    -->

"""

from __future__ import annotations

import logging
from typing import IO, TYPE_CHECKING, Mapping

from md2latex.ast.nodes import Node, NodeType
from md2latex.ast.visitors import WalkStatus
from md2latex.constants import RAW_LATEX_PREFIX, RAW_LATEX_SUFFIX
from md2latex.exceptions import ValidationError

if TYPE_CHECKING:
    from md2latex.renderers.latex import LatexRenderer

logger = logging.getLogger(__name__)


def parse_raw_block(literal: str) -> tuple[str, str] | None:
    """Split a raw LaTeX comment into its key and trimmed body.

    Returns None when ``literal`` is not a raw LaTeX comment.

    Examples
    --------
    >>> parse_raw_block("<!-- ::preamble\\n\\\\usepackage{tikz}\\n-->")
    ('preamble', '\\\\usepackage{tikz}')
    >>> parse_raw_block("<!-- a comment -->") is None
    True

    """
    if not literal.startswith(RAW_LATEX_PREFIX):
        return None
    newline = literal.find("\n")
    if newline < 0:
        return None
    key = literal[len(RAW_LATEX_PREFIX) : newline].strip()
    body = literal[newline + 1 :].rstrip()
    if body.endswith(RAW_LATEX_SUFFIX):
        body = body[: -len(RAW_LATEX_SUFFIX)]
    return key, body.strip()


class RawLatexCollector:
    """HTML handler that passes raw LaTeX comments through.

    Instances are callables with the HTML handler signature expected by
    :class:`~md2latex.options.LatexRendererOptions`.

    Parameters
    ----------
    targets : mapping of str to str, optional
        Map from comment key to destination file name

    Examples
    --------
    >>> collector = RawLatexCollector({"preamble": "preamble.tex"})
    >>> options = LatexRendererOptions(html_handler=collector)
    >>> latex = LatexRenderer(options).render_to_string(doc)
    >>> for destination, content in collector.outputs():
    ...     print(destination, content)

    """

    def __init__(self, targets: Mapping[str, str] | None = None):
        self.targets: dict[str, str] = dict(targets or {})
        self.values: dict[str, list[str]] = {key: [] for key in self.targets}

    def __call__(self, renderer: LatexRenderer, out: IO[str], node: Node, entering: bool) -> WalkStatus:
        if node.type is not NodeType.HTML_BLOCK:
            return WalkStatus.GO_TO_NEXT

        parsed = parse_raw_block(node.literal)
        if parsed is None:
            return WalkStatus.GO_TO_NEXT

        key, body = parsed
        if not key:
            out.write(body)
            out.write("\n\n")
        elif key in self.values:
            self.values[key].append(body)
        else:
            logger.debug("Ignoring raw LaTeX block with unconfigured key %r", key)
        return WalkStatus.GO_TO_NEXT

    def outputs(self) -> list[tuple[str, str]]:
        """Return ``(destination, content)`` pairs sorted by destination."""
        pairs = [(self.targets[key], "\n".join(values)) for key, values in self.values.items()]
        return sorted(pairs)


def parse_raw_target(value: str) -> tuple[str, str]:
    """Split a ``KEY:DEST`` target specification.

    Raises
    ------
    ValidationError
        If the key or the destination is empty

    Examples
    --------
    >>> parse_raw_target("preamble:tex/preamble.tex")
    ('preamble', 'tex/preamble.tex')

    """
    key, sep, destination = value.partition(":")
    if not sep or not key or not destination:
        raise ValidationError(
            f"raw LaTeX target must look like KEY:DEST, got {value!r}",
            parameter_name="latex_raw_file",
            parameter_value=value,
        )
    return key, destination
