#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/renderers/latex.py
r"""LaTeX rendering from the node tree.

This module provides the LatexRenderer class which converts a parsed
Markdown document into LaTeX source. The renderer is driven by
:func:`md2latex.ast.walk`: it is called once for every node on the way
down and once more for container nodes on the way back up, writes to an
append-only text sink and answers with a :class:`~md2latex.ast.WalkStatus`.

Each node writes its own trailing line breaks; breaks are never prepended.

"""

from __future__ import annotations

import logging
import os
from io import StringIO
from typing import IO, Callable

from md2latex.ast.nodes import ListFlags, Node, NodeType
from md2latex.ast.visitors import WalkStatus, walk
from md2latex.constants import (
    BLOCK_SECTIONING_COMMANDS,
    INLINE_MATH_PREFIX,
    LSTINLINE_DELIMITER_RANGES,
    LSTINLINE_ERROR_MARKER,
    MATH_CODE_LANGUAGE,
    SECTIONING_COMMANDS,
)
from md2latex.exceptions import UnknownNodeTypeError
from md2latex.options.latex import LatexRendererOptions
from md2latex.renderers._attribution import find_attribution
from md2latex.renderers._tables import column_spec
from md2latex.renderers.base import BaseRenderer
from md2latex.utils.escape import LatexEscaper
from md2latex.utils.links import ImageKind, LinkKind, classify_image, classify_link, is_autolink

logger = logging.getLogger(__name__)

NodeHandler = Callable[[IO[str], Node, bool], "WalkStatus | None"]

PREAMBLE_PACKAGES = r"""
\usepackage[utf8]{inputenc}
\usepackage[T1]{fontenc}
\usepackage{lmodern}
\usepackage{marvosym}
\usepackage{textcomp}
\DeclareUnicodeCharacter{20AC}{\EUR{}}
\DeclareUnicodeCharacter{2260}{\neq}
\DeclareUnicodeCharacter{2264}{\leq}
\DeclareUnicodeCharacter{2265}{\geq}
\DeclareUnicodeCharacter{22C5}{\cdot}
\DeclareUnicodeCharacter{A0}{~}
\DeclareUnicodeCharacter{B1}{\pm}
\DeclareUnicodeCharacter{D7}{\times}

\usepackage{amsmath}
\usepackage[export]{adjustbox} % loads also graphicx
\usepackage{xcolor}
\usepackage{listings}
\usepackage[margin=1in]{geometry}
\usepackage{verbatim}
\usepackage[normalem]{ulem}
\usepackage{hyperref}

\lstset{
	numbers=left,
	breaklines=true,
	xleftmargin=2\baselineskip,
	showstringspaces=false,
	basicstyle=\ttfamily,
	keywordstyle=\bfseries\color{green!40!black},
	commentstyle=\itshape\color{purple!40!black},
	stringstyle=\color{orange},
	numberstyle=\ttfamily,
	literate=
	{á}{{\'a}}1 {é}{{\'e}}1 {í}{{\'i}}1 {ó}{{\'o}}1 {ú}{{\'u}}1
	{Á}{{\'A}}1 {É}{{\'E}}1 {Í}{{\'I}}1 {Ó}{{\'O}}1 {Ú}{{\'U}}1
	{à}{{\`a}}1 {è}{{\`e}}1 {ì}{{\`i}}1 {ò}{{\`o}}1 {ù}{{\`u}}1
	{À}{{\`A}}1 {È}{{\`E}}1 {Ì}{{\`I}}1 {Ò}{{\`O}}1 {Ù}{{\`U}}1
	{ä}{{\"a}}1 {ë}{{\"e}}1 {ï}{{\"i}}1 {ö}{{\"o}}1 {ü}{{\"u}}1
	{Ä}{{\"A}}1 {Ë}{{\"E}}1 {Ï}{{\"I}}1 {Ö}{{\"O}}1 {Ü}{{\"U}}1
	{â}{{\^a}}1 {ê}{{\^e}}1 {î}{{\^i}}1 {ô}{{\^o}}1 {û}{{\^u}}1
	{Â}{{\^A}}1 {Ê}{{\^E}}1 {Î}{{\^I}}1 {Ô}{{\^O}}1 {Û}{{\^U}}1
	{œ}{{\oe}}1 {Œ}{{\OE}}1 {æ}{{\ae}}1 {Æ}{{\AE}}1 {ß}{{\ss}}1
	{ű}{{\H{u}}}1 {Ű}{{\H{U}}}1 {ő}{{\H{o}}}1 {Ő}{{\H{O}}}1
	{ç}{{\c c}}1 {Ç}{{\c C}}1 {ø}{{\o}}1 {å}{{\r a}}1 {Å}{{\r A}}1
	{€}{{\EUR}}1 {£}{{\pounds}}1
}
"""

HYPERSETUP_OPTIONS = r"""	citecolor=black,
	filecolor=black,
	linkcolor=black,
	linktoc=page,
	urlcolor=black,
	pdfstartview=FitH,
	breaklinks=true,
"""

PREAMBLE_COMMANDS = r"""
\newcommand{\HRule}{\rule{\linewidth}{0.5mm}}
\addtolength{\parskip}{0.5\baselineskip}
"""


def lstinline_delimiter(code: str) -> str | None:
    """Return the first ASCII character usable as ``\\lstinline`` delimiter.

    Candidates are ``!`` to ``)`` and then ``+`` to ``~``; ``*`` and space
    are never used. Returns None when every candidate occurs in ``code``.

    Examples
    --------
    >>> lstinline_delimiter("foo")
    '!'
    >>> lstinline_delimiter("foo!")
    '"'

    """
    used = set(code)
    for first, last in LSTINLINE_DELIMITER_RANGES:
        for value in range(first, last + 1):
            if chr(value) not in used:
                return chr(value)
    return None


def language_attr(info: str) -> str:
    """Return the language of a code block: the info string up to the first blank."""
    words = info.split(None, 1)
    return words[0] if words else ""


class LatexRenderer(BaseRenderer):
    r"""Render a Markdown node tree to LaTeX.

    The renderer keeps the smart-quote state of its escaper and the
    blockquote attribution of the quote being rendered; both are cleared by
    :meth:`reset`, which :meth:`render_to_string` calls first. One instance
    renders one document at a time.

    Parameters
    ----------
    options : LatexRendererOptions or None, default = None
        LaTeX rendering options

    Examples
    --------
    Basic usage:

        >>> from md2latex.ast import builder
        >>> from md2latex.renderers.latex import LatexRenderer
        >>> doc = builder.document(builder.paragraph("50% off"))
        >>> LatexRenderer().render_to_string(doc)
        '50\\% off\n'

    """

    def __init__(self, options: LatexRendererOptions | None = None):
        """Initialize the LaTeX renderer with options."""
        BaseRenderer._validate_options_type(options, LatexRendererOptions, "latex")
        options = options or LatexRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: LatexRendererOptions = options
        self.escaper = LatexEscaper(smart_quotes=options.smart_quotes)
        self._text_overrides: dict[int, str] = {}
        self._hidden: set[int] = set()
        self._handlers: dict[NodeType, NodeHandler] = {
            NodeType.DOCUMENT: self._render_document,
            NodeType.BLOCK_QUOTE: self._render_block_quote,
            NodeType.LIST: self._render_list,
            NodeType.ITEM: self._render_item,
            NodeType.PARAGRAPH: self._render_paragraph,
            NodeType.HEADING: self._render_heading,
            NodeType.HORIZONTAL_RULE: self._render_horizontal_rule,
            NodeType.EMPH: self._render_emph,
            NodeType.STRONG: self._render_strong,
            NodeType.DEL: self._render_del,
            NodeType.LINK: self._render_link,
            NodeType.IMAGE: self._render_image,
            NodeType.TEXT: self._render_text,
            NodeType.HTML_BLOCK: self._render_html,
            NodeType.HTML_SPAN: self._render_html,
            NodeType.CODE_BLOCK: self._render_code_block,
            NodeType.SOFTBREAK: self._render_softbreak,
            NodeType.HARDBREAK: self._render_hardbreak,
            NodeType.CODE: self._render_code,
            NodeType.TABLE: self._render_table,
            NodeType.TABLE_HEAD: self._render_table_head,
            NodeType.TABLE_BODY: self._render_table_body,
            NodeType.TABLE_ROW: self._render_table_row,
            NodeType.TABLE_CELL: self._render_table_cell,
        }

    # ------------------------------------------------------------------
    # Output primitives
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Clear quote state and attribution overrides."""
        self.escaper.reset()
        self._text_overrides.clear()
        self._hidden.clear()

    def escape(self, out: IO[str], text: str) -> None:
        """Write ``text`` escaped for LaTeX."""
        self.escaper.write(out, text)

    def _escape_detached(self, text: str) -> str:
        # command arguments such as captions must not move the body quote state
        return LatexEscaper(smart_quotes=self.options.smart_quotes, table=self.escaper.table).escape(text)

    def env(self, out: IO[str], environment: str, entering: bool, *args: str) -> None:
        r"""Write ``\begin{environment}{arg}...`` or ``\end{environment}``."""
        if entering:
            out.write(f"\\begin{{{environment}}}")
            for arg in args:
                out.write(f"{{{arg}}}")
            out.write("\n")
        else:
            out.write(f"\\end{{{environment}}}\n\n")

    def cmd(self, out: IO[str], command: str, entering: bool) -> None:
        r"""Write ``\command{`` when entering and ``}`` when leaving."""
        out.write(f"\\{command}{{" if entering else "}")

    # ------------------------------------------------------------------
    # Node dispatch
    # ------------------------------------------------------------------

    def render_node(self, out: IO[str], node: Node, entering: bool) -> WalkStatus:
        """Render one node in one direction.

        Parameters
        ----------
        out : IO[str]
            Text sink
        node : Node
            Node to render
        entering : bool
            True on the way down, False on the way back up

        Returns
        -------
        WalkStatus
            Traversal signal for the walk

        Raises
        ------
        UnknownNodeTypeError
            If the node type has no rendering rule

        """
        if id(node) in self._hidden:
            return WalkStatus.SKIP_CHILDREN
        handler = self._handlers.get(node.type)
        if handler is None:
            raise UnknownNodeTypeError(node.type)
        status = handler(out, node, entering)
        return WalkStatus.GO_TO_NEXT if status is None else status

    def visitor(self, out: IO[str]) -> Callable[[Node, bool], WalkStatus]:
        """Bind :meth:`render_node` to ``out`` for use with :func:`walk`."""

        def visit(node: Node, entering: bool) -> WalkStatus:
            return self.render_node(out, node, entering)

        return visit

    def _render_document(self, out: IO[str], node: Node, entering: bool) -> None:
        pass

    def _render_text(self, out: IO[str], node: Node, entering: bool) -> None:
        literal = self._text_overrides.get(id(node), node.literal)
        if literal:
            self.escape(out, literal)

    def _render_softbreak(self, out: IO[str], node: Node, entering: bool) -> None:
        out.write("\n")

    def _render_hardbreak(self, out: IO[str], node: Node, entering: bool) -> None:
        out.write("~\\\\\n")

    def _render_horizontal_rule(self, out: IO[str], node: Node, entering: bool) -> None:
        out.write("\\HRule{}\n")

    def _render_emph(self, out: IO[str], node: Node, entering: bool) -> None:
        self.cmd(out, "emph", entering)

    def _render_strong(self, out: IO[str], node: Node, entering: bool) -> None:
        self.cmd(out, "textbf", entering)

    def _render_del(self, out: IO[str], node: Node, entering: bool) -> None:
        self.cmd(out, "sout", entering)

    def _render_html(self, out: IO[str], node: Node, entering: bool) -> WalkStatus | None:
        # HTML makes no sense in LaTeX unless a handler knows what to do with it
        handler = self.options.html_handler
        if handler is not None:
            return handler(self, out, node, entering)
        return None

    def _render_code(self, out: IO[str], node: Node, entering: bool) -> None:
        literal = node.literal
        if literal.startswith(INLINE_MATH_PREFIX):
            out.write(f"${literal[len(INLINE_MATH_PREFIX):]}$")
            return

        out.write("\\lstinline")
        delimiter = lstinline_delimiter(literal)
        if delimiter is None:
            logger.warning("No \\lstinline delimiter available for inline code %r", literal[:40])
            out.write(LSTINLINE_ERROR_MARKER)
        else:
            out.write(f"{delimiter}{literal}{delimiter}")

    def _render_code_block(self, out: IO[str], node: Node, entering: bool) -> None:
        info = node.code_block.info if node.code_block else ""
        lang = language_attr(info)
        literal = node.literal if node.literal.endswith("\n") else node.literal + "\n"

        if lang == MATH_CODE_LANGUAGE:
            out.write(f"\\[\n{literal}\\]\n\n")
            return
        out.write(f"\\begin{{lstlisting}}[language={lang}]\n{literal}\\end{{lstlisting}}\n\n")

    def _sectioning_command(self, level: int) -> str | None:
        offset = 0 if self.options.top_level_division == "chapter" else 1
        index = level - 1 + offset
        if 0 <= index < len(SECTIONING_COMMANDS):
            return SECTIONING_COMMANDS[index]
        return None

    def _render_heading(self, out: IO[str], node: Node, entering: bool) -> None:
        """Sectioning command by level; the ``*`` and ``**`` configs make it unnumbered."""
        data = node.heading
        if data is None or data.is_titleblock:
            # only the children of the title block are printed
            return
        command = self._sectioning_command(data.level)
        if command is None:
            self.cmd(out, "textbf", entering)
            if not entering:
                out.write(" ")
            return
        if entering:
            out.write(f"\\{command}")
            first = node.first_child
            if data.config in ("*", "**") and first is not None and first.type is NodeType.TEXT:
                short_title = self._escape_detached(first.literal)
                out.write(f"*[{short_title}]")
                if data.config == "*":
                    out.write(f"{{{short_title}}}\n\\addcontentsline{{toc}}{{{command}}}")
            out.write("{")
        else:
            out.write("}\n" if command in BLOCK_SECTIONING_COMMANDS else "} ")

    def _render_block_quote(self, out: IO[str], node: Node, entering: bool) -> None:
        """Quotation environment, with the attribution line as its argument."""
        args: list[str] = []
        if entering:
            attribution = find_attribution(node)
            if attribution is not None:
                args.append(attribution.author)
                self._text_overrides.update(attribution.text_overrides)
                self._hidden.update(attribution.hidden)
        self.env(out, self.options.quotation_environment, entering, *args)

    def _render_list(self, out: IO[str], node: Node, entering: bool) -> WalkStatus | None:
        """itemize, enumerate or description; footnote lists are skipped."""
        data = node.list_data
        if data is not None and data.is_footnotes_list:
            # footnotes are rendered at their reference
            return WalkStatus.SKIP_CHILDREN
        flags = node.list_flags
        if flags & ListFlags.DEFINITION:
            environment = "description"
        elif flags & ListFlags.ORDERED:
            environment = "enumerate"
        else:
            environment = "itemize"
        self.env(out, environment, entering)
        return None

    def _render_item(self, out: IO[str], node: Node, entering: bool) -> None:
        flags = node.list_flags
        if flags & ListFlags.TERM:
            out.write("\\item [" if entering else "] ")
        elif entering and not flags & ListFlags.DEFINITION:
            out.write("\\item ")

    def _is_rendered(self, node: Node) -> bool:
        if id(node) in self._hidden:
            return False
        return not (node.type is NodeType.LIST and node.list_data is not None and node.list_data.is_footnotes_list)

    def _render_paragraph(self, out: IO[str], node: Node, entering: bool) -> None:
        """End the paragraph, with a blank line when a rendered block follows."""
        if entering:
            return
        parent = node.parent
        if parent is not None and parent.type is NodeType.ITEM and parent.list_flags & ListFlags.TERM:
            return
        out.write("\n")
        sibling = node.next
        while sibling is not None and not self._is_rendered(sibling):
            sibling = sibling.next
        if sibling is not None:
            out.write("\n")

    def _render_footnote_body(self, footnote: Node | None) -> str:
        if footnote is None:
            logger.warning("Footnote reference without a footnote definition")
            return ""
        buffer = StringIO()
        visit = self.visitor(buffer)
        for child in footnote.children:
            if walk(child, visit) is WalkStatus.TERMINATE:
                break
        return buffer.getvalue().rstrip("\n")

    def _render_link(self, out: IO[str], node: Node, entering: bool) -> WalkStatus | None:
        """Raw URL footnote, footnote reference or ``\\href`` (in that order of precedence)."""
        data = node.link
        destination = data.destination if data else ""
        kind = classify_link(node, self.options.skip_links, self.options.safe_links)

        if kind is LinkKind.RAW:
            if is_autolink(node):
                out.write(f"\\nolinkurl{{{destination}}}")
                return WalkStatus.SKIP_CHILDREN
            if not entering:
                out.write(f"\\footnote{{\\nolinkurl{{{destination}}}}}")
            return None

        if kind is LinkKind.FOOTNOTE:
            if entering:
                body = self._render_footnote_body(data.footnote if data else None)
                out.write(f"\\footnote{{{body}}}")
            return WalkStatus.SKIP_CHILDREN

        if entering:
            out.write(f"\\href{{{destination}}}{{")
        else:
            out.write("}")
        return None

    def _render_image(self, out: IO[str], node: Node, entering: bool) -> WalkStatus:
        """Remote URL, centered graphic, or a captioned figure when titled."""
        if not entering:
            return WalkStatus.GO_TO_NEXT
        data = node.link
        destination = data.destination if data else ""
        kind = classify_image(node)

        if kind is ImageKind.REMOTE:
            out.write(f"\\url{{{destination}}}")
            return WalkStatus.SKIP_CHILDREN

        if kind is ImageKind.FIGURE:
            out.write("\\begin{figure}[!ht]\n")
        # without the extension LaTeX picks the most appropriate file
        stem, _ = os.path.splitext(destination)
        out.write("\\begin{center}\n")
        out.write(f"\\includegraphics[max width=\\textwidth, max height=\\textheight]{{{stem}}}\n")
        out.write("\\end{center}\n")
        if kind is ImageKind.FIGURE:
            out.write(f"\\caption{{{self._escape_detached(data.title or '')}}}\n\\end{{figure}}\n")
        return WalkStatus.SKIP_CHILDREN

    def _render_table(self, out: IO[str], node: Node, entering: bool) -> None:
        border = node.table.border if node.table else None
        if entering:
            out.write(f"\\begin{{center}}\n\\begin{{tabular}}{{{column_spec(node)}}}\n")
            if border is not None and border.top:
                out.write("\\hline\n")
        else:
            if border is not None and border.bottom:
                out.write("\\hline\n")
            out.write("\\end{tabular}\n\\end{center}\n\n")

    def _render_table_head(self, out: IO[str], node: Node, entering: bool) -> None:
        if not entering:
            out.write("\\hline\n")

    def _render_table_body(self, out: IO[str], node: Node, entering: bool) -> None:
        pass

    def _render_table_row(self, out: IO[str], node: Node, entering: bool) -> None:
        """End the row, adding a rule between body rows when the row border is set."""
        if entering:
            return
        section = node.parent
        table = section.parent if section is not None else None
        row_border = table is not None and table.table is not None and table.table.border.row
        in_body = section is not None and section.type is NodeType.TABLE_BODY
        is_last = node.row.is_last if node.row is not None else node.next is None
        if row_border and in_body and not is_last:
            out.write(" \\\\ \\hline\n")
        else:
            out.write(" \\\\\n")

    def _render_table_cell(self, out: IO[str], node: Node, entering: bool) -> None:
        if node.cell is not None and node.cell.is_header:
            self.cmd(out, "textbf", entering)
        if not entering and node.next is not None:
            out.write(" & ")

    # ------------------------------------------------------------------
    # Document wrapper
    # ------------------------------------------------------------------

    def get_title(self, doc: Node) -> str:
        """Render the children of the first title-block heading.

        A scratch renderer is used so that the title does not disturb the
        quote state of the body.
        """
        scratch = LatexRenderer(self.options)
        buffer = StringIO()
        visit = scratch.visitor(buffer)

        def find(node: Node, entering: bool) -> WalkStatus:
            if entering and node.type is NodeType.HEADING and node.heading and node.heading.is_titleblock:
                walk(node, visit)
                return WalkStatus.TERMINATE
            return WalkStatus.GO_TO_NEXT

        walk(doc, find)
        return buffer.getvalue()

    def has_figures(self, doc: Node) -> bool:
        """Whether ``doc`` contains an image that renders as a figure."""
        found = False

        def find(node: Node, entering: bool) -> WalkStatus:
            nonlocal found
            if node.type is NodeType.IMAGE and classify_image(node) is ImageKind.FIGURE:
                found = True
                return WalkStatus.TERMINATE
            return WalkStatus.GO_TO_NEXT

        walk(doc, find)
        return found

    def render_header(self, out: IO[str], doc: Node) -> None:
        """Write the preamble (complete page) or the chapter title."""
        options = self.options
        if options.complete_page:
            title = self.get_title(doc)
            out.write(f"\\documentclass{{{options.document_class}}}\n")
            out.write(PREAMBLE_PACKAGES)

            if options.language_list:
                out.write(f"\n\\usepackage[{','.join(options.language_list)}]{{babel}}\n")

            out.write("\\usepackage{csquotes}\n\n\\hypersetup{colorlinks,\n")
            out.write(HYPERSETUP_OPTIONS)
            if options.author:
                out.write(f"\tpdfauthor={{{options.author}}},\n")
            if options.creator:
                out.write(f"\tpdfcreator={{{options.creator}}},\n")
            out.write("}\n")
            out.write(PREAMBLE_COMMANDS)

            if options.no_par_indent:
                out.write("\\parindent=0pt\n")

            if title:
                out.write(f"\n\\title{{{title}}}\n\\author{{{options.author}}}\n")

            out.write("\n\\begin{document}\n")

            if title:
                out.write("\n\\maketitle\n")
            if options.toc:
                if title:
                    out.write("\\vfill\n\\thispagestyle{empty}\n\n")
                out.write("\\tableofcontents\n")
                if self.has_figures(doc):
                    out.write("\\listoffigures\n")
                out.write("\\clearpage\n")

            out.write("\n\n")
        elif options.chapter_title:
            title = self.get_title(doc)
            if title.strip():
                out.write(f"\\chapter{{{title}}}\n\n")

    def render_footer(self, out: IO[str], doc: Node) -> None:
        r"""Write ``\end{document}`` for complete pages."""
        if self.options.complete_page:
            out.write("\\end{document}\n")

    def render_body(self, out: IO[str], doc: Node) -> None:
        """Walk ``doc`` into ``out``, leaving out title-block headings."""
        render = self.visitor(out)

        def visit(node: Node, entering: bool) -> WalkStatus:
            if node.type is NodeType.HEADING and node.heading is not None and node.heading.is_titleblock:
                return WalkStatus.SKIP_CHILDREN
            return render(node, entering)

        walk(doc, visit)

    def render_to_string(self, doc: Node) -> str:
        """Render a document to LaTeX.

        Parameters
        ----------
        doc : Node
            DOCUMENT node to render

        Returns
        -------
        str
            LaTeX text, header and footer included

        Raises
        ------
        UnknownNodeTypeError
            If the tree contains a node type without a rendering rule

        """
        self.reset()
        out = StringIO()
        self.render_header(out, doc)
        self.render_body(out, doc)
        self.render_footer(out, doc)
        logger.debug("Rendered %d characters of LaTeX", out.tell())
        return out.getvalue()
