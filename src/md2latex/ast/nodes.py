#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/ast/nodes.py
"""Node tree for parsed Markdown documents.

A document is a tree of :class:`Node` objects. Every node carries a
:class:`NodeType` tag drawn from a closed enumeration, its children, a link
to its parent, and (depending on the type) one of the small data records
defined below. The literal content of leaf nodes (text, code, raw HTML) is
stored in :attr:`Node.literal`.

Node Types
----------
Block-level:
    DOCUMENT, HEADING, PARAGRAPH, CODE_BLOCK, BLOCK_QUOTE, LIST, ITEM,
    TABLE, TABLE_HEAD, TABLE_BODY, TABLE_ROW, TABLE_CELL,
    HORIZONTAL_RULE, HTML_BLOCK

Inline:
    TEXT, EMPH, STRONG, DEL, CODE, LINK, IMAGE, SOFTBREAK, HARDBREAK,
    HTML_SPAN

Only container types get a leaving visit during :func:`md2latex.ast.walk`.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum, IntEnum, IntFlag
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from md2latex.ast.visitors import NodeVisitor, WalkStatus


class NodeType(Enum):
    """Closed set of node kinds produced by the Markdown parser."""

    DOCUMENT = "document"
    BLOCK_QUOTE = "block_quote"
    LIST = "list"
    ITEM = "item"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    HORIZONTAL_RULE = "horizontal_rule"
    EMPH = "emph"
    STRONG = "strong"
    DEL = "del"
    LINK = "link"
    IMAGE = "image"
    TEXT = "text"
    HTML_BLOCK = "html_block"
    CODE_BLOCK = "code_block"
    SOFTBREAK = "softbreak"
    HARDBREAK = "hardbreak"
    CODE = "code"
    HTML_SPAN = "html_span"
    TABLE = "table"
    TABLE_CELL = "table_cell"
    TABLE_HEAD = "table_head"
    TABLE_BODY = "table_body"
    TABLE_ROW = "table_row"


CONTAINER_TYPES = frozenset(
    {
        NodeType.DOCUMENT,
        NodeType.BLOCK_QUOTE,
        NodeType.LIST,
        NodeType.ITEM,
        NodeType.PARAGRAPH,
        NodeType.HEADING,
        NodeType.EMPH,
        NodeType.STRONG,
        NodeType.DEL,
        NodeType.LINK,
        NodeType.IMAGE,
        NodeType.TABLE,
        NodeType.TABLE_HEAD,
        NodeType.TABLE_BODY,
        NodeType.TABLE_ROW,
        NodeType.TABLE_CELL,
    }
)


class ListFlags(IntFlag):
    """Flags describing a list or list item."""

    NONE = 0
    ORDERED = 1
    DEFINITION = 2
    TERM = 4


class TableAlignment(IntEnum):
    """Column alignment of a table cell."""

    DEFAULT = 0
    LEFT = 1
    RIGHT = 2
    CENTER = 3

    @classmethod
    def from_name(cls, name: str | None) -> TableAlignment:
        """Map ``"left"``/``"center"``/``"right"`` (or None) to an alignment."""
        if not name:
            return cls.DEFAULT
        try:
            return cls[name.upper()]
        except KeyError:
            return cls.DEFAULT


@dataclass(frozen=True)
class TableBorder:
    """Which rules are drawn around and inside a table."""

    left: bool = False
    right: bool = False
    top: bool = False
    bottom: bool = False
    column: bool = False
    row: bool = False

    @classmethod
    def parse(cls, spec: str) -> TableBorder:
        """Build a border from a comma-separated list such as ``"left,column,row"``.

        ``"all"`` enables every rule and ``"none"`` (or an empty string) none.

        Raises
        ------
        ValueError
            If an unknown border name is given.

        """
        names = {part.strip().lower() for part in spec.split(",") if part.strip()}
        if not names or names == {"none"}:
            return cls()
        if "all" in names:
            return cls(True, True, True, True, True, True)
        valid = {"left", "right", "top", "bottom", "column", "row"}
        unknown = names - valid
        if unknown:
            raise ValueError(f"Unknown table border(s): {', '.join(sorted(unknown))}")
        return cls(**{name: True for name in names})


@dataclass
class HeadingData:
    """Heading attributes.

    Parameters
    ----------
    level : int
        Heading level, 1 for the top level
    is_titleblock : bool, default False
        Whether the heading is the document title block (``% Title`` lines)
    config : str, default ""
        ``"*"`` for an unnumbered heading that still gets a table of
        contents entry, ``"**"`` for one that does not

    """

    level: int = 1
    is_titleblock: bool = False
    config: str = ""


@dataclass
class ListData:
    """List and list-item attributes."""

    flags: ListFlags = ListFlags.NONE
    is_footnotes_list: bool = False
    tight: bool = True
    start: int = 1


@dataclass
class LinkData:
    """Link and image attributes.

    Parameters
    ----------
    destination : str
        Target URL or path
    title : str or None
        Optional title; for images a title turns the image into a figure
    note_id : int
        Non-zero for footnote references
    footnote : Node or None
        The footnote item a reference resolves to

    """

    destination: str = ""
    title: Optional[str] = None
    note_id: int = 0
    footnote: Optional[Node] = field(default=None, repr=False)


@dataclass
class CodeBlockData:
    """Fenced or indented code block attributes."""

    info: str = ""


@dataclass
class TableData:
    """Table attributes."""

    border: TableBorder = field(default_factory=TableBorder)


@dataclass
class TableRowData:
    """Table row attributes."""

    is_last: bool = False


@dataclass
class TableCellData:
    """Table cell attributes.

    ``opts`` holds per-cell layout overrides: ``"width"`` is a
    :class:`~decimal.Decimal` fraction of the text width and ``"sep"`` a
    bool forcing or suppressing the column separator after the cell.
    """

    is_header: bool = False
    align: TableAlignment = TableAlignment.DEFAULT
    is_last: bool = False
    opts: Optional[dict[str, Any]] = None

    @property
    def width(self) -> Decimal:
        """Width override, zero when absent."""
        if not self.opts:
            return Decimal(0)
        value = self.opts.get("width")
        return value if isinstance(value, Decimal) else Decimal(0)


@dataclass(eq=False)
class Node:
    """One element of the document tree.

    Parameters
    ----------
    type : NodeType
        Kind of node
    literal : str, default ""
        Literal content of TEXT, CODE, CODE_BLOCK, HTML_BLOCK and HTML_SPAN nodes
    children : list of Node
        Child nodes, in document order; their ``parent`` is set on construction
    heading, list_data, link, code_block, table, row, cell
        Type-specific data records; only the one matching ``type`` is used

    """

    type: NodeType
    literal: str = ""
    children: list[Node] = field(default_factory=list, repr=False)
    heading: Optional[HeadingData] = None
    list_data: Optional[ListData] = None
    link: Optional[LinkData] = None
    code_block: Optional[CodeBlockData] = None
    table: Optional[TableData] = None
    row: Optional[TableRowData] = None
    cell: Optional[TableCellData] = None
    parent: Optional[Node] = field(default=None, repr=False)
    # position in parent.children, rechecked on use
    _index: int = field(default=-1, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for index, child in enumerate(self.children):
            child.parent = self
            child._index = index

    @property
    def is_container(self) -> bool:
        """Whether the node gets a leaving visit during a walk."""
        return self.type in CONTAINER_TYPES

    @property
    def first_child(self) -> Node | None:
        return self.children[0] if self.children else None

    @property
    def last_child(self) -> Node | None:
        return self.children[-1] if self.children else None

    @property
    def prev(self) -> Node | None:
        """Previous sibling, or None."""
        return self._sibling(-1)

    @property
    def next(self) -> Node | None:
        """Next sibling, or None."""
        return self._sibling(1)

    def _position(self) -> int:
        siblings = self.parent.children if self.parent is not None else []
        if not (0 <= self._index < len(siblings) and siblings[self._index] is self):
            # children was edited in place; reindex once
            for index, sibling in enumerate(siblings):
                sibling._index = index
        return self._index

    def _sibling(self, offset: int) -> Node | None:
        if self.parent is None:
            return None
        siblings = self.parent.children
        index = self._position()
        if not (0 <= index < len(siblings)) or siblings[index] is not self:
            return None
        target = index + offset
        if 0 <= target < len(siblings):
            return siblings[target]
        return None

    def append_child(self, child: Node) -> Node:
        """Append ``child`` and take ownership of it. Returns the child."""
        child.parent = self
        child._index = len(self.children)
        self.children.append(child)
        return child

    def walk(self, visitor: NodeVisitor) -> WalkStatus:
        """Walk this subtree depth-first; see :func:`md2latex.ast.visitors.walk`."""
        from md2latex.ast.visitors import walk

        return walk(self, visitor)

    @property
    def list_flags(self) -> ListFlags:
        return self.list_data.flags if self.list_data else ListFlags.NONE

    def text_content(self) -> str:
        """Concatenate the literal content of every TEXT and CODE descendant."""
        if self.type in (NodeType.TEXT, NodeType.CODE):
            return self.literal
        return "".join(child.text_content() for child in self.children)
