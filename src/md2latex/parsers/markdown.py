#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/parsers/markdown.py
"""Markdown to node tree conversion.

This module converts Markdown into the node tree rendered by
:class:`md2latex.renderers.LatexRenderer`, using mistune to tokenize the
source. On top of mistune's syntax it understands a Pandoc-style title
block: leading lines starting with ``%`` become the document title.

Footnotes are collected into a trailing ordered list flagged as the
footnotes list; each reference is a LINK node whose ``note_id`` and
``footnote`` point at the matching item of that list.

"""

from __future__ import annotations

import html
import logging
from typing import Any, Callable

import mistune

from md2latex.ast import builder
from md2latex.ast.nodes import ListData, ListFlags, Node, NodeType, TableAlignment
from md2latex.exceptions import ParsingError
from md2latex.options.markdown import MarkdownParserOptions
from md2latex.parsers.base import BaseParser, ParserInput

logger = logging.getLogger(__name__)

TokenHandler = Callable[[dict[str, Any]], "Node | list[Node] | None"]

# trailing heading markers, longest first
HEADING_CONFIG_MARKERS = ("{**}", "{*}")


def split_titleblock(text: str) -> tuple[str | None, str]:
    """Split a leading ``%`` title block from ``text``.

    Returns
    -------
    tuple of (str or None, str)
        The title text (lines joined with newlines, ``%`` markers removed)
        or None when there is no title block, and the remaining source

    Examples
    --------
    >>> split_titleblock("% Title\\n% More\\nBody\\n")
    ('Title\\nMore', 'Body\\n')

    """
    lines = text.splitlines(keepends=True)
    count = 0
    while count < len(lines) and lines[count].startswith("%"):
        count += 1
    if count == 0:
        return None, text

    title_lines = []
    for line in lines[:count]:
        line = line.rstrip("\r\n")
        if line.startswith("% "):
            line = line[2:]
        else:
            line = line[1:]
        title_lines.append(line)
    return "\n".join(title_lines), "".join(lines[count:])


def split_heading_config(children: list[Node]) -> tuple[list[Node], str]:
    """Strip a trailing ``{*}`` or ``{**}`` marker from heading content.

    ``# Preface {*}`` is an unnumbered heading listed in the table of
    contents; ``# Preface {**}`` is unnumbered and left out of it.

    Returns
    -------
    tuple of (list of Node, str)
        The heading content without the marker, and ``"*"``, ``"**"`` or
        ``""`` when there is no marker

    """
    start = len(children)
    while start > 0 and children[start - 1].type is NodeType.TEXT:
        start -= 1
    text = "".join(child.literal for child in children[start:])
    for marker in HEADING_CONFIG_MARKERS:
        if text.endswith(marker):
            remaining = text[: -len(marker)].rstrip()
            trailing = [builder.text(remaining)] if remaining else []
            return children[:start] + trailing, marker[1:-1]
    return children, ""


class MarkdownParser(BaseParser):
    r"""Convert Markdown to a node tree.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> parser = MarkdownParser()
        >>> doc = parser.parse("# Hello\n\nThis is **bold**.")

    Without title blocks:

        >>> parser = MarkdownParser(MarkdownParserOptions(titleblock=False))
        >>> doc = parser.parse("% not a title")

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options
        self._markdown = mistune.create_markdown(
            renderer=None,
            plugins=self._plugins(),
            hard_wrap=options.hard_line_breaks,
        )
        self._footnotes: dict[int, Node] = {}

        self._block_handlers: dict[str, TokenHandler] = {
            "heading": self._process_heading,
            "paragraph": self._process_paragraph,
            "block_text": self._process_paragraph,
            "block_code": self._process_code_block,
            "block_quote": self._process_block_quote,
            "list": self._process_list,
            "list_item": self._process_list_item,
            "table": self._process_table,
            "thematic_break": lambda token: builder.horizontal_rule(),
            "block_html": self._process_html_block,
            "def_list": self._process_definition_list,
            "footnotes": self._process_footnotes,
            "blank_line": lambda token: None,
        }
        self._inline_handlers: dict[str, TokenHandler] = {
            "text": self._handle_text_token,
            "strong": lambda token: self._inline_container(NodeType.STRONG, token),
            "emphasis": lambda token: self._inline_container(NodeType.EMPH, token),
            "strikethrough": lambda token: self._inline_container(NodeType.DEL, token),
            "codespan": lambda token: builder.code(token.get("raw", "")),
            "link": self._handle_link_token,
            "image": self._handle_image_token,
            "softbreak": lambda token: builder.softbreak(),
            "linebreak": lambda token: builder.hardbreak(),
            "inline_html": lambda token: builder.html_span(token.get("raw", "")),
            "footnote_ref": self._handle_footnote_ref_token,
        }

    def _plugins(self) -> list[str]:
        plugins = []
        if self.options.strikethrough:
            plugins.append("strikethrough")
        if self.options.tables:
            plugins.append("table")
        if self.options.footnotes:
            plugins.append("footnotes")
        if self.options.definition_lists:
            plugins.append("def_list")
        if self.options.autolink:
            plugins.append("url")
        return plugins

    def parse(self, input_data: ParserInput) -> Node:
        """Parse Markdown input into a DOCUMENT node.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], IO[str], or bytes
            Markdown source; a ``str`` is the text itself

        Returns
        -------
        Node
            DOCUMENT node

        Raises
        ------
        ParsingError
            If mistune fails on the input

        """
        content = self._load_text_content(input_data, self.options.encoding)
        self._footnotes = {}

        children: list[Node] = []
        if self.options.titleblock:
            title, content = split_titleblock(content)
            if title is not None:
                children.append(self._parse_titleblock(title))

        try:
            tokens, _state = self._markdown.parse(content)
        except Exception as e:
            raise ParsingError(f"Failed to parse Markdown: {e}", parsing_stage="tokenize", original_error=e) from e

        if not isinstance(tokens, list):
            raise ParsingError("mistune returned rendered output instead of tokens", parsing_stage="tokenize")

        # footnote items must exist before the references that point at them
        for token in tokens:
            if token.get("type") == "footnotes":
                self._collect_footnotes(token)

        children.extend(self._process_tokens(tokens))
        logger.debug("Parsed %d top-level nodes, %d footnotes", len(children), len(self._footnotes))
        return builder.document(*children)

    def _parse_titleblock(self, title: str) -> Node:
        tokens = self._markdown.inline(title, {})
        return builder.heading(1, self._process_inline_tokens(tokens), is_titleblock=True)

    # ------------------------------------------------------------------
    # Block tokens
    # ------------------------------------------------------------------

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        nodes: list[Node] = []
        for token in tokens:
            node = self._process_token(token)
            if node is None:
                continue
            if isinstance(node, list):
                nodes.extend(node)
            else:
                nodes.append(node)
        return nodes

    def _process_token(self, token: dict[str, Any]) -> Node | list[Node] | None:
        token_type = token.get("type", "")
        handler = self._block_handlers.get(token_type) or self._inline_handlers.get(token_type)
        if handler is None:
            logger.debug("Dropping unsupported Markdown token %r", token_type)
            return None
        return handler(token)

    def _process_heading(self, token: dict[str, Any]) -> Node:
        level = token.get("attrs", {}).get("level", 1)
        children = self._process_inline_tokens(token.get("children", []))
        children, config = split_heading_config(children)
        return builder.heading(level, children, config=config)

    def _process_paragraph(self, token: dict[str, Any]) -> Node:
        return builder.paragraph(*self._process_inline_tokens(token.get("children", [])))

    def _process_code_block(self, token: dict[str, Any]) -> Node:
        info = token.get("attrs", {}).get("info") or ""
        return builder.code_block(token.get("raw", ""), info=info.strip())

    def _process_block_quote(self, token: dict[str, Any]) -> Node:
        return builder.block_quote(*self._process_tokens(token.get("children", [])))

    def _process_list(self, token: dict[str, Any]) -> Node:
        attrs = token.get("attrs", {})
        ordered = bool(attrs.get("ordered", False))
        flags = ListFlags.ORDERED if ordered else ListFlags.NONE
        items = [self._process_list_item(child, flags) for child in token.get("children", [])]
        return builder.list_node(items, flags=flags, tight=bool(token.get("tight", True)), start=attrs.get("start", 1))

    def _process_list_item(self, token: dict[str, Any], flags: ListFlags = ListFlags.NONE) -> Node:
        return builder.item(*self._process_tokens(token.get("children", [])), flags=flags)

    def _process_table(self, token: dict[str, Any]) -> Node:
        head: list[dict[str, Any]] = []
        body_rows: list[list[dict[str, Any]]] = []
        for section in token.get("children", []):
            if section.get("type") == "table_head":
                head = section.get("children", [])
            elif section.get("type") == "table_body":
                body_rows.extend(row.get("children", []) for row in section.get("children", []))

        alignments = [TableAlignment.from_name(cell.get("attrs", {}).get("align")) for cell in head]
        table = builder.TableBuilder(border=self.options.border, alignments=alignments)
        if head:
            table.add_row([self._process_inline_tokens(cell.get("children", [])) for cell in head], is_header=True)
        for cells in body_rows:
            table.add_row([self._process_inline_tokens(cell.get("children", [])) for cell in cells])
        return table.get_table()

    def _process_html_block(self, token: dict[str, Any]) -> Node:
        return builder.html_block(token.get("raw", ""))

    def _process_definition_list(self, token: dict[str, Any]) -> Node:
        items: list[Node] = []
        for child in token.get("children", []):
            child_type = child.get("type", "")
            if child_type == "def_list_head":
                term = builder.paragraph(*self._process_inline_tokens(child.get("children", [])))
                items.append(builder.item(term, flags=ListFlags.DEFINITION | ListFlags.TERM))
            elif child_type in ("def_list_item", "def_list_content"):
                content = self._process_tokens(child.get("children", []))
                items.append(builder.item(*content, flags=ListFlags.DEFINITION))
        return builder.list_node(items, flags=ListFlags.DEFINITION)

    def _collect_footnotes(self, token: dict[str, Any]) -> None:
        for child in token.get("children", []):
            index = child.get("attrs", {}).get("index", len(self._footnotes) + 1)
            self._footnotes[index] = builder.item(*self._process_tokens(child.get("children", [])))

    def _process_footnotes(self, token: dict[str, Any]) -> Node | None:
        if not self._footnotes:
            return None
        items = [self._footnotes[index] for index in sorted(self._footnotes)]
        return Node(
            NodeType.LIST,
            children=items,
            list_data=ListData(flags=ListFlags.ORDERED, is_footnotes_list=True),
        )

    # ------------------------------------------------------------------
    # Inline tokens
    # ------------------------------------------------------------------

    def _process_inline_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        nodes: list[Node] = []
        for token in tokens:
            token_type = token.get("type", "")
            handler = self._inline_handlers.get(token_type)
            if handler is None:
                logger.debug("Dropping unsupported inline token %r", token_type)
                continue
            node = handler(token)
            if isinstance(node, list):
                nodes.extend(node)
            elif node is not None:
                nodes.append(node)
        return nodes

    def _handle_text_token(self, token: dict[str, Any]) -> Node:
        return builder.text(html.unescape(token.get("raw", "")))

    def _inline_container(self, node_type: NodeType, token: dict[str, Any]) -> Node:
        return builder.inline(node_type, self._process_inline_tokens(token.get("children", [])))

    def _handle_link_token(self, token: dict[str, Any]) -> Node:
        attrs = token.get("attrs", {})
        return builder.link(
            attrs.get("url", ""),
            self._process_inline_tokens(token.get("children", [])),
            title=attrs.get("title"),
        )

    def _handle_image_token(self, token: dict[str, Any]) -> Node:
        attrs = token.get("attrs", {})
        return builder.image(
            attrs.get("url", ""),
            title=attrs.get("title"),
            alt=self._process_inline_tokens(token.get("children", [])),
        )

    def _handle_footnote_ref_token(self, token: dict[str, Any]) -> Node:
        index = token.get("attrs", {}).get("index", 0)
        footnote = self._footnotes.get(index)
        if footnote is None:
            logger.warning("Footnote [^%s] has no definition", token.get("raw", ""))
        return builder.footnote_reference(index, footnote)


def markdown_to_ast(markdown_content: str, options: MarkdownParserOptions | None = None) -> Node:
    r"""Convert a Markdown string to a node tree.

    Parameters
    ----------
    markdown_content : str
        Markdown text to parse
    options : MarkdownParserOptions or None, default = None
        Parser configuration

    Returns
    -------
    Node
        DOCUMENT node

    Examples
    --------
    >>> doc = markdown_to_ast("# Hello\n\nWorld")
    >>> len(doc.children)
    2

    """
    return MarkdownParser(options).parse(markdown_content)
