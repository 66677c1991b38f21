#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/utils/escape.py
"""LaTeX text escaping.

:class:`LatexEscaper` turns raw text runs into LaTeX-safe text. Special
characters are replaced from a fixed, read-only table and straight quotes
become curly quotes through a small state machine. The quote state lives on
the escaper instance, so a quotation opened in one text node is closed
correctly in a later one, and two renderers never share it.

"""

from __future__ import annotations

import re
import string
from types import MappingProxyType
from typing import IO, Mapping

LATEX_ESCAPES: Mapping[str, str] = MappingProxyType(
    {
        "#": r"\#",
        "$": r"\$",
        "%": r"\%",
        "&": r"\&",
        "_": r"\_",
        "{": r"\{",
        "}": r"\}",
        "~": r"\textasciitilde{}",
        "^": r"\textasciicircum{}",
        "\\": r"\textbackslash{}",
    }
)

DOUBLE_QUOTE = '"'
SINGLE_QUOTE = "'"

OPEN_DOUBLE = "“"
CLOSE_DOUBLE = "”"
OPEN_SINGLE = "‘"
CLOSE_SINGLE = "’"

# a single quote after one of these (or at the start of a run) opens a quotation
_OPENING_CONTEXT = frozenset(string.whitespace + ".")
_CLOSING_CONTEXT = frozenset(string.whitespace + string.punctuation)


class LatexEscaper:
    r"""Stateful LaTeX escaper.

    Parameters
    ----------
    smart_quotes : bool, default True
        Replace ``"`` and ``'`` with curly quotes. When False they are
        copied unchanged.
    table : Mapping[str, str], optional
        Character replacement table, :data:`LATEX_ESCAPES` by default. An
        entry mapping to the empty string leaves its character unchanged.

    Examples
    --------
        >>> escaper = LatexEscaper()
        >>> escaper.escape("50% of $x_1$")
        '50\\% of \\$x\\_1\\$'
        >>> escaper.escape('"quoted"')
        '“quoted”'

    """

    def __init__(self, smart_quotes: bool = True, table: Mapping[str, str] | None = None):
        """Initialize the escaper with an optional replacement table."""
        self.table: Mapping[str, str] = LATEX_ESCAPES if table is None else MappingProxyType(dict(table))
        self.smart_quotes = smart_quotes

        special = {char for char, replacement in self.table.items() if replacement}
        if smart_quotes:
            special |= {DOUBLE_QUOTE, SINGLE_QUOTE}
        self._pattern = re.compile("[" + re.escape("".join(sorted(special))) + "]") if special else None

        self._double_open = False
        self._single_open = False

    @property
    def in_double_quote(self) -> bool:
        return self._double_open

    @property
    def in_single_quote(self) -> bool:
        return self._single_open

    def reset(self) -> None:
        """Forget any open quotation."""
        self._double_open = False
        self._single_open = False

    def escape(self, text: str) -> str:
        """Escape ``text`` and return the result.

        Runs of characters without a replacement are copied as-is; the quote
        state carries over to the next call.
        """
        if not text or self._pattern is None:
            return text

        parts: list[str] = []
        position = 0
        for match in self._pattern.finditer(text):
            start = match.start()
            if start > position:
                parts.append(text[position:start])
            char = match.group()
            if char == DOUBLE_QUOTE:
                parts.append(self._double_quote())
            elif char == SINGLE_QUOTE:
                parts.append(self._single_quote(text, start))
            else:
                parts.append(self.table[char])
            position = match.end()
        if position < len(text):
            parts.append(text[position:])
        return "".join(parts)

    def write(self, out: IO[str], text: str) -> None:
        """Escape ``text`` straight into ``out``."""
        out.write(self.escape(text))

    def _double_quote(self) -> str:
        self._double_open = not self._double_open
        return OPEN_DOUBLE if self._double_open else CLOSE_DOUBLE

    def _single_quote(self, text: str, index: int) -> str:
        if index == 0 or text[index - 1] in _OPENING_CONTEXT:
            self._single_open = True
            return OPEN_SINGLE

        if index + 1 >= len(text) or text[index + 1] in _CLOSING_CONTEXT:
            self._single_open = False
        # otherwise an apostrophe inside a word
        return CLOSE_SINGLE
