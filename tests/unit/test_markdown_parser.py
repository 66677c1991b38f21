#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for the Markdown to node tree parser."""

from io import BytesIO, StringIO

import pytest

from md2latex.ast import ListFlags, NodeType, TableAlignment, TableBorder
from md2latex.exceptions import FileError, InvalidOptionsError
from md2latex.options import LatexRendererOptions, MarkdownParserOptions
from md2latex.parsers.markdown import MarkdownParser, markdown_to_ast, split_titleblock


@pytest.mark.unit
class TestTitleBlock:
    """Test title block extraction."""

    def test_split(self) -> None:
        """Leading % lines are the title."""
        assert split_titleblock("% Title\n% More\nBody\n") == ("Title\nMore", "Body\n")

    def test_no_space_after_marker(self) -> None:
        """The blank after % is optional."""
        assert split_titleblock("%Title\nBody") == ("Title", "Body")

    def test_no_titleblock(self) -> None:
        """Text without leading % is returned unchanged."""
        assert split_titleblock("Body\n% not a title\n") == (None, "Body\n% not a title\n")

    def test_titleblock_heading(self) -> None:
        """The title becomes a title-block heading."""
        doc = markdown_to_ast("% Title\n% Continuing title\nNormal text")
        title = doc.children[0]
        assert title.type is NodeType.HEADING
        assert title.heading.is_titleblock
        assert [child.type for child in title.children] == [NodeType.TEXT, NodeType.SOFTBREAK, NodeType.TEXT]
        assert title.children[0].literal == "Title"
        assert title.children[2].literal == "Continuing title"
        assert doc.children[1].type is NodeType.PARAGRAPH
        assert doc.children[1].text_content() == "Normal text"

    def test_titleblock_markup(self) -> None:
        """Inline markup in the title is parsed."""
        doc = markdown_to_ast("% A *big* title\n\nBody")
        title = doc.children[0]
        assert [child.type for child in title.children] == [NodeType.TEXT, NodeType.EMPH, NodeType.TEXT]

    def test_titleblock_disabled(self) -> None:
        """Without title blocks, % lines are ordinary text."""
        doc = MarkdownParser(MarkdownParserOptions(titleblock=False)).parse("% Title\n\nBody")
        assert all(child.type is NodeType.PARAGRAPH for child in doc.children)
        assert doc.children[0].text_content() == "% Title"


@pytest.mark.unit
class TestBlocks:
    """Test block-level elements."""

    def test_headings(self) -> None:
        """Heading levels are kept."""
        doc = markdown_to_ast("# H1\n\n### H3")
        assert [child.heading.level for child in doc.children] == [1, 3]
        assert not doc.children[0].heading.is_titleblock

    @pytest.mark.parametrize(
        "text,config",
        [("# Preface {*}", "*"), ("# Preface {**}", "**"), ("# Preface", "")],
    )
    def test_heading_config_marker(self, text: str, config: str) -> None:
        """A trailing {*} or {**} is removed and kept as the heading config."""
        heading = markdown_to_ast(text).children[0]
        assert heading.heading.config == config
        assert heading.text_content() == "Preface"

    def test_heading_config_after_markup(self) -> None:
        """Only the trailing text is inspected for the marker."""
        heading = markdown_to_ast("## A *b* c {**}").children[0]
        assert heading.heading.config == "**"
        assert heading.children[1].type is NodeType.EMPH
        assert heading.children[-1].literal == " c"

    def test_heading_config_requires_braces(self) -> None:
        """A bare star is part of the heading text."""
        heading = markdown_to_ast("# Preface *").children[0]
        assert heading.heading.config == ""

    def test_paragraphs(self) -> None:
        """Blank lines separate paragraphs."""
        doc = markdown_to_ast("First.\n\nSecond.")
        assert [child.type for child in doc.children] == [NodeType.PARAGRAPH, NodeType.PARAGRAPH]

    def test_fenced_code(self) -> None:
        """Fenced code keeps its info string and content."""
        doc = markdown_to_ast("```python\nprint(1)\n```")
        block = doc.children[0]
        assert block.type is NodeType.CODE_BLOCK
        assert block.code_block.info == "python"
        assert block.literal == "print(1)\n"

    def test_indented_code(self) -> None:
        """Indented code has no info string."""
        block = markdown_to_ast("    foo").children[0]
        assert block.type is NodeType.CODE_BLOCK
        assert block.code_block.info == ""
        assert block.literal == "foo\n"

    def test_block_quote(self) -> None:
        """Quotes wrap their blocks."""
        quote = markdown_to_ast("> Quote").children[0]
        assert quote.type is NodeType.BLOCK_QUOTE
        assert quote.children[0].type is NodeType.PARAGRAPH

    def test_bullet_list(self) -> None:
        """Bullet lists hold items with paragraphs."""
        lst = markdown_to_ast("- foo\n- bar").children[0]
        assert lst.type is NodeType.LIST
        assert lst.list_flags is ListFlags.NONE
        assert [item.type for item in lst.children] == [NodeType.ITEM, NodeType.ITEM]
        assert lst.children[0].children[0].text_content() == "foo"

    def test_ordered_list(self) -> None:
        """Ordered lists are flagged on the list and its items."""
        lst = markdown_to_ast("3. foo\n4. bar").children[0]
        assert lst.list_flags & ListFlags.ORDERED
        assert lst.list_data.start == 3
        assert all(item.list_flags & ListFlags.ORDERED for item in lst.children)

    def test_thematic_break(self) -> None:
        """Thematic breaks become horizontal rules."""
        doc = markdown_to_ast("a\n\n---\n\nb")
        assert doc.children[1].type is NodeType.HORIZONTAL_RULE

    def test_html_block(self) -> None:
        """HTML blocks keep their raw text."""
        block = markdown_to_ast("<!-- ::\n\\newpage\n-->").children[0]
        assert block.type is NodeType.HTML_BLOCK
        assert block.literal.startswith("<!-- ::\n\\newpage")

    def test_definition_list(self) -> None:
        """Terms and definitions become flagged items of a definition list."""
        lst = markdown_to_ast("foo\n: bar\n\nbaz\n: qux").children[0]
        assert lst.type is NodeType.LIST
        assert lst.list_flags & ListFlags.DEFINITION
        flags = [item.list_flags for item in lst.children]
        assert flags == [
            ListFlags.DEFINITION | ListFlags.TERM,
            ListFlags.DEFINITION,
            ListFlags.DEFINITION | ListFlags.TERM,
            ListFlags.DEFINITION,
        ]
        assert [item.text_content() for item in lst.children] == ["foo", "bar", "baz", "qux"]


@pytest.mark.unit
class TestTables:
    """Test pipe tables."""

    MARKDOWN = "| a | b | c | d |\n|---|:--|:-:|--:|\n| 1 | 2 | 3 | 4 |\n| 5 | 6 | 7 | 8 |"

    def test_structure(self) -> None:
        """Tables have a head and a body with flagged cells."""
        table = markdown_to_ast(self.MARKDOWN).children[0]
        assert table.type is NodeType.TABLE
        head, body = table.children
        assert head.type is NodeType.TABLE_HEAD
        assert body.type is NodeType.TABLE_BODY
        assert len(body.children) == 2
        assert all(cell.cell.is_header for cell in head.children[0].children)
        assert body.children[-1].row.is_last
        assert body.children[0].children[-1].cell.is_last

    def test_alignments(self) -> None:
        """Column alignments apply to every row."""
        table = markdown_to_ast(self.MARKDOWN).children[0]
        row = table.children[1].children[0]
        assert [cell.cell.align for cell in row.children] == [
            TableAlignment.DEFAULT,
            TableAlignment.LEFT,
            TableAlignment.CENTER,
            TableAlignment.RIGHT,
        ]

    def test_border_option(self) -> None:
        """The configured border is stored on the table."""
        parser = MarkdownParser(MarkdownParserOptions(table_border="all"))
        table = parser.parse(self.MARKDOWN).children[0]
        assert table.table.border == TableBorder.parse("all")

    def test_tables_disabled(self) -> None:
        """Without the table extension pipes are text."""
        doc = MarkdownParser(MarkdownParserOptions(tables=False)).parse(self.MARKDOWN)
        assert all(child.type is not NodeType.TABLE for child in doc.children)


@pytest.mark.unit
class TestInline:
    """Test inline elements."""

    def _inline(self, markdown: str, **options):
        return MarkdownParser(MarkdownParserOptions(**options)).parse(markdown).children[0].children

    def test_emphasis_and_strong(self) -> None:
        """Emphasis and strong emphasis."""
        children = self._inline("*a* **b**")
        assert [child.type for child in children] == [NodeType.EMPH, NodeType.TEXT, NodeType.STRONG]

    def test_strikethrough(self) -> None:
        """Strikethrough is a DEL node."""
        assert self._inline("~~foo~~")[0].type is NodeType.DEL

    def test_strikethrough_disabled(self) -> None:
        """Without the extension tildes are text."""
        children = self._inline("~~foo~~", strikethrough=False)
        assert all(child.type is NodeType.TEXT for child in children)

    def test_code_span(self) -> None:
        """Code spans keep their content."""
        code = self._inline("`a < b`")[0]
        assert code.type is NodeType.CODE
        assert code.literal == "a < b"

    def test_entities_are_decoded(self) -> None:
        """HTML entities in text become characters."""
        doc = markdown_to_ast("AT&amp;T &copy;")
        assert doc.children[0].text_content() == "AT&T ©"

    def test_link(self) -> None:
        """Links keep destination, title and text."""
        link = self._inline('[foo](http://example.com "T")')[0]
        assert link.type is NodeType.LINK
        assert link.link.destination == "http://example.com"
        assert link.link.title == "T"
        assert link.link.note_id == 0
        assert link.text_content() == "foo"

    def test_email_autolink(self) -> None:
        """Email autolinks get a mailto target."""
        link = self._inline("<doe@example.com>")[0]
        assert link.link.destination == "mailto:doe@example.com"
        assert link.text_content() == "doe@example.com"

    def test_bare_url(self) -> None:
        """Bare URLs are links when autolinking."""
        link = self._inline("see http://example.com now")[1]
        assert link.type is NodeType.LINK
        assert link.link.destination == "http://example.com"

    def test_image(self) -> None:
        """Images keep destination, title and alt text."""
        image = self._inline('![alt](a.png "Cap")')[0]
        assert image.type is NodeType.IMAGE
        assert image.link.destination == "a.png"
        assert image.link.title == "Cap"
        assert image.text_content() == "alt"

    def test_breaks(self) -> None:
        """Soft breaks, and hard breaks with hard_line_breaks."""
        assert self._inline("a\nb")[1].type is NodeType.SOFTBREAK
        assert self._inline("a\nb", hard_line_breaks=True)[1].type is NodeType.HARDBREAK
        assert self._inline("a  \nb")[1].type is NodeType.HARDBREAK

    def test_inline_html(self) -> None:
        """Inline HTML becomes an HTML span."""
        span = self._inline("a <b>x</b>")[1]
        assert span.type is NodeType.HTML_SPAN
        assert span.literal == "<b>"


@pytest.mark.unit
class TestFootnotes:
    """Test footnote references and definitions."""

    def test_reference_points_at_definition(self) -> None:
        """References resolve to items of the trailing footnotes list."""
        doc = markdown_to_ast("foo[^1] and bar[^x]\n\n[^1]: first\n[^x]: second")
        para, notes = doc.children
        refs = [child for child in para.children if child.type is NodeType.LINK]

        assert notes.type is NodeType.LIST
        assert notes.list_data.is_footnotes_list
        assert [ref.link.note_id for ref in refs] == [1, 2]
        assert refs[0].link.footnote is notes.children[0]
        assert refs[1].link.footnote is notes.children[1]
        assert refs[0].link.footnote.text_content() == "first"

    def test_undefined_reference_is_text(self) -> None:
        """A reference without definition stays text."""
        doc = markdown_to_ast("foo[^missing]")
        assert all(child.type is NodeType.TEXT for child in doc.children[0].children)

    def test_footnotes_disabled(self) -> None:
        """Without the extension no footnotes list is built."""
        doc = MarkdownParser(MarkdownParserOptions(footnotes=False)).parse("foo[^1]\n\n[^1]: bar")
        assert all(not (child.list_data and child.list_data.is_footnotes_list) for child in doc.children)


@pytest.mark.unit
class TestInputs:
    """Test input types and parser construction."""

    def test_bytes(self) -> None:
        """Bytes are decoded with the configured encoding."""
        doc = MarkdownParser().parse("café".encode("utf-8"))
        assert doc.children[0].text_content() == "café"

    def test_latin1_bytes(self) -> None:
        """Undecodable bytes fall back to detection."""
        doc = MarkdownParser().parse("café crème brûlée".encode("latin-1"))
        assert doc.children[0].text_content().startswith("caf")

    def test_path(self, tmp_path) -> None:
        """Paths are read from disk."""
        source = tmp_path / "doc.md"
        source.write_text("# From file", encoding="utf-8")
        doc = MarkdownParser().parse(source)
        assert doc.children[0].text_content() == "From file"

    def test_missing_path(self, tmp_path) -> None:
        """Unreadable paths raise FileError."""
        with pytest.raises(FileError):
            MarkdownParser().parse(tmp_path / "missing.md")

    def test_streams(self) -> None:
        """Text and binary streams are read to the end."""
        assert MarkdownParser().parse(StringIO("a")).children[0].text_content() == "a"
        assert MarkdownParser().parse(BytesIO(b"b")).children[0].text_content() == "b"

    def test_wrong_options_type(self) -> None:
        """Renderer options are rejected."""
        with pytest.raises(InvalidOptionsError):
            MarkdownParser(LatexRendererOptions())  # type: ignore[arg-type]

    def test_parser_is_reusable(self) -> None:
        """Footnotes of one document do not leak into the next."""
        parser = MarkdownParser()
        parser.parse("a[^1]\n\n[^1]: note")
        doc = parser.parse("plain")
        assert len(doc.children) == 1
