#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/renderers/_tables.py
r"""Column specification for ``tabular`` environments.

The column spec is derived from the first row of the table: one alignment
letter (or a ``p{}`` column for cells with a width override) per cell,
with ``|`` separators according to the table border and per-cell options.

"""

from __future__ import annotations

from decimal import Decimal

from md2latex.ast.nodes import Node, NodeType, TableAlignment, TableBorder

CELL_ALIGNMENT = {
    TableAlignment.DEFAULT: "l",
    TableAlignment.LEFT: "l",
    TableAlignment.CENTER: "c",
    TableAlignment.RIGHT: "r",
}

WIDTH_ALIGNMENT = {
    TableAlignment.RIGHT: r"<{\raggedleft\arraybackslash}",
    TableAlignment.CENTER: r"<{\centering\arraybackslash}",
}


def first_row(table: Node) -> Node | None:
    """Return the first TABLE_ROW of ``table`` (head rows come first)."""
    for section in table.children:
        if section.type is NodeType.TABLE_ROW:
            return section
        for row in section.children:
            if row.type is NodeType.TABLE_ROW:
                return row
    return None


def format_width(width: Decimal) -> str:
    """Format a width fraction without exponent or trailing zeros.

    Examples
    --------
    >>> format_width(Decimal("0.250"))
    '0.25'

    """
    return format(width.normalize(), "f")


def column_spec(table: Node) -> str:
    r"""Build the ``tabular`` column spec for ``table``.

    For each cell the separator starts as the column border; an explicit
    ``opts["sep"]`` wins, otherwise the last cell gets no separator. A width
    override is independent of the separator.

    Examples
    --------
    Alignments default, left, center and right without borders give
    ``"llcr"``.

    """
    border = table.table.border if table.table is not None else TableBorder()
    row = first_row(table)
    cells = [cell for cell in row.children if cell.type is NodeType.TABLE_CELL] if row is not None else []

    parts: list[str] = []
    if border.left:
        parts.append("|")

    sep = False
    for index, cell in enumerate(cells):
        data = cell.cell
        align = data.align if data is not None else TableAlignment.DEFAULT
        opts = (data.opts if data is not None else None) or {}
        is_last = data.is_last if data is not None else index == len(cells) - 1

        if "sep" in opts:
            sep = bool(opts["sep"])
        else:
            sep = border.column and not is_last

        width = data.width if data is not None else Decimal(0)
        if width:
            parts.append(rf"p{{{format_width(width)}\textwidth}}")
            parts.append(WIDTH_ALIGNMENT.get(align, ""))
        else:
            parts.append(CELL_ALIGNMENT[align])

        if sep:
            parts.append("|")

    if border.right and not sep:
        parts.append("|")
    return "".join(parts)
