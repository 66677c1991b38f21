#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Integration tests converting Markdown snippets to LaTeX end to end."""

import pytest

from md2latex.api import markdown_to_latex
from md2latex.options import LatexRendererOptions, MarkdownParserOptions


def convert(text: str, **options: object) -> str:
    """Convert ``text``, routing keyword options to the parser or renderer."""
    parser_fields = set(MarkdownParserOptions.__dataclass_fields__)
    parser_options = {k: v for k, v in options.items() if k in parser_fields}
    renderer_options = {k: v for k, v in options.items() if k not in parser_fields}
    return markdown_to_latex(
        text,
        parser_options=MarkdownParserOptions(**parser_options),
        renderer_options=LatexRendererOptions(**renderer_options),
    )


@pytest.mark.integration
class TestCode:
    """Inline code and code blocks."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("`foo`", "\\lstinline!foo!\n"),
            ("`foo!`", '\\lstinline"foo!"\n'),
            ("`foo!\"#$%&'()`", "\\lstinline+foo!\"#$%&'()+\n"),
        ],
    )
    def test_inline(self, text: str, expected: str) -> None:
        """The first unused delimiter is chosen."""
        assert convert(text) == expected

    def test_indented_block(self) -> None:
        """Indented blocks have an empty language."""
        assert convert("    foo") == "\\begin{lstlisting}[language=]\nfoo\n\\end{lstlisting}\n\n"

    def test_fenced_block(self) -> None:
        """The info string gives the language."""
        assert convert("``` go\nfoo\n```") == "\\begin{lstlisting}[language=go]\nfoo\n\\end{lstlisting}\n\n"


@pytest.mark.integration
class TestInline:
    """Emphasis, escaping and quotes."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("_foo_", "\\emph{foo}\n"),
            ("*foo_bar*", "\\emph{foo\\_bar}\n"),
            ("**foo**", "\\textbf{foo}\n"),
            ("abcd#$%~_{}&", "abcd\\#\\$\\%\\textasciitilde{}\\_\\{\\}\\&\n"),
            ('"foo"', "\\enquote{foo}\n"),
        ],
    )
    def test_inline(self, text: str, expected: str) -> None:
        """Inline markup maps to LaTeX commands."""
        assert convert(text) == expected

    def test_strikethrough(self) -> None:
        """Strikethrough uses ulem's \\sout."""
        assert convert("~~foo~~") == "\\sout{foo}\n"

    def test_strikethrough_disabled(self) -> None:
        """Without the extension the tildes are text."""
        tilde = "\\textasciitilde{}"
        assert convert("~~foo~~", strikethrough=False) == f"{tilde}{tilde}foo{tilde}{tilde}\n"

    def test_hard_line_breaks(self) -> None:
        """Every newline can be made a hard break."""
        assert convert("foo\nbar", hard_line_breaks=True) == "foo~\\\\\nbar\n"

    def test_horizontal_rule(self) -> None:
        """Rules use the \\HRule macro."""
        assert convert("---") == "\\HRule{}\n"


@pytest.mark.integration
class TestImages:
    """Local, remote and captioned images."""

    def test_local(self) -> None:
        """Local images are centered without their extension."""
        assert convert("![Image 1](foobar.jpg)") == (
            "\\begin{center}\n"
            "\\includegraphics[max width=\\textwidth, max height=\\textheight]{foobar}\n"
            "\\end{center}\n\n"
        )

    def test_remote(self) -> None:
        """Remote images become URLs."""
        assert convert("![Image 1](http://example.com/foobar.jpg)") == "\\url{http://example.com/foobar.jpg}\n"

    def test_titled(self) -> None:
        """A title makes a captioned figure."""
        assert convert('![Image 1](foobar.jpg "foo")') == (
            "\\begin{figure}[!ht]\n"
            "\\begin{center}\n"
            "\\includegraphics[max width=\\textwidth, max height=\\textheight]{foobar}\n"
            "\\end{center}\n"
            "\\caption{foo}\n"
            "\\end{figure}\n\n"
        )


@pytest.mark.integration
class TestLinks:
    """Hyperlinks, autolinks and skipped links."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("[foo](http://example.com)", "\\href{http://example.com}{foo}\n"),
            ("[foo](mailto://doe@example.com)", "\\href{mailto://doe@example.com}{foo}\n"),
            ("http://example.com", "\\href{http://example.com}{http://example.com}\n"),
            ("<doe@example.com>", "\\href{mailto:doe@example.com}{doe@example.com}\n"),
        ],
    )
    def test_links(self, text: str, expected: str) -> None:
        """Links become \\href."""
        assert convert(text) == expected

    def test_skip_links(self) -> None:
        """Skipped links keep their text and footnote the URL."""
        assert convert("[foo](http://example.com)", skip_links=True) == (
            "foo\\footnote{\\nolinkurl{http://example.com}}\n"
        )

    def test_skip_autolink(self) -> None:
        """Skipped autolinks print the URL once."""
        assert convert("http://example.com", skip_links=True) == "\\nolinkurl{http://example.com}\n"


@pytest.mark.integration
class TestBlocks:
    """Lists, quotations, headings and tables."""

    def test_itemize(self) -> None:
        """Bullet lists are itemize environments."""
        assert convert("* foo\n* bar") == "\\begin{itemize}\n\\item foo\n\\item bar\n\\end{itemize}\n\n"

    def test_enumerate(self) -> None:
        """Ordered lists are enumerate environments."""
        assert convert("1. foo\n2. bar") == "\\begin{enumerate}\n\\item foo\n\\item bar\n\\end{enumerate}\n\n"

    def test_description(self) -> None:
        """Definition lists are description environments."""
        assert convert("foo\n: bar\n\nbaz\n: qux") == (
            "\\begin{description}\n\\item [foo] bar\n\\item [baz] qux\n\\end{description}\n\n"
        )

    def test_description_disabled(self) -> None:
        """Without the extension definitions are paragraphs."""
        assert convert("foo\n: bar\n\nbaz\n: qux", definition_lists=False) == "foo\n: bar\n\nbaz\n: qux\n"

    def test_quotation(self) -> None:
        """Block quotes use the quotation environment."""
        assert convert("> Quote") == "\\begin{quotation}\nQuote\n\\end{quotation}\n\n"

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("# foo", "\\section{foo}\n"),
            ("## foo", "\\subsection{foo}\n"),
            ("### foo", "\\subsubsection{foo}\n"),
            ("#### foo", "\\paragraph{foo} "),
            ("##### foo", "\\subparagraph{foo} "),
            ("###### foo", "\\textbf{foo} "),
        ],
    )
    def test_headings(self, text: str, expected: str) -> None:
        """Headings map to sectioning commands."""
        assert convert(text) == expected

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("# Preface {*}", "\\section*[Preface]{Preface}\n\\addcontentsline{toc}{section}{Preface}\n"),
            ("## Notes {**}", "\\subsection*[Notes]{Notes}\n"),
        ],
    )
    def test_unnumbered_headings(self, text: str, expected: str) -> None:
        """Heading markers select the starred commands."""
        assert convert(text) == expected

    def test_many_blocks(self) -> None:
        """Long documents keep their block separation."""
        text = "\n\n".join(f"Paragraph {i}." for i in range(3000))
        latex = convert(text)
        assert latex.count("\n\n") == 2999
        assert latex.endswith("Paragraph 2999.\n")

    def test_table(self) -> None:
        """Tables are centered tabulars with bold headers."""
        text = (
            "| default | left | center | right |\n"
            "|---------|:-----|:------:|------:|\n"
            "| foo     | bar  | baz    | qux   |\n"
        )
        assert convert(text) == (
            "\\begin{center}\n"
            "\\begin{tabular}{llcr}\n"
            "\\textbf{default} & \\textbf{left} & \\textbf{center} & \\textbf{right} \\\\\n"
            "\\hline\n"
            "foo & bar & baz & qux \\\\\n"
            "\\end{tabular}\n"
            "\\end{center}\n\n"
        )

    def test_table_disabled(self) -> None:
        """Without the extension table source is text."""
        text = "| default |\n|---------|\n| foo     |\n"
        assert convert(text, tables=False) == text


@pytest.mark.integration
class TestDocumentParts:
    """Title blocks and footnotes."""

    def test_titleblock(self) -> None:
        """Title lines are not part of the body."""
        assert convert("% Title\n% Continuing title\nNormal text") == "Normal text\n"

    def test_titleblock_disabled(self) -> None:
        """Without title block parsing the lines are text."""
        assert convert("% Title\n% Continuing title\nNormal text", titleblock=False) == (
            "\\% Title\n\\% Continuing title\nNormal text\n"
        )

    def test_footnote(self) -> None:
        """Footnotes are rendered where they are referenced."""
        assert convert("foo[^n]\n\n[^n]: bar") == "foo\\footnote{bar}\n"

    def test_footnote_disabled(self) -> None:
        """Without footnotes the definition is a link reference."""
        assert convert("[^foo]\n\n[^foo]: bar", footnotes=False) == "\\href{bar}{\\textasciicircum{}foo}\n"
