#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/api.py
"""The major exported API functions for Markdown to LaTeX conversion."""

from __future__ import annotations

import logging
import posixpath
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Mapping, Union, cast

from md2latex.exceptions import OutputWriteError
from md2latex.options.latex import LatexRendererOptions
from md2latex.options.markdown import MarkdownParserOptions
from md2latex.packagers.tar import STDOUT, OutputFile, parse_destination, write_tarball
from md2latex.parsers.include import expand_includes
from md2latex.parsers.markdown import MarkdownParser
from md2latex.rawlatex import RawLatexCollector
from md2latex.renderers.latex import LatexRenderer
from md2latex.utils.io_utils import create_file

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"


def format_file_name(template: str, input_path: str) -> str:
    """Expand ``%D%``, ``%B%`` and ``%BE%`` in ``template`` for ``input_path``.

    ``%D%`` is the directory of the input, ``%B%`` its base name without the
    ``.md`` suffix and ``%BE%`` its base name. The result is normalized.

    Examples
    --------
    >>> format_file_name("%D%/build/%B%.joined.md", "book/main.md")
    'book/build/main.joined.md'
    >>> format_file_name("%BE%", "notes.md")
    'notes.md'

    """
    directory = posixpath.dirname(input_path) or "."
    base = posixpath.basename(input_path)
    stem = base[: -len(MARKDOWN_SUFFIX)] if base.endswith(MARKDOWN_SUFFIX) else base
    name = template.replace("%D%", directory).replace("%B%", stem).replace("%BE%", base)
    return posixpath.normpath(name)


def default_main_name(input_path: str) -> str:
    """Name of the main ``.tex`` file for ``input_path``.

    Examples
    --------
    >>> default_main_name("book/main.md")
    'book/main.tex'

    """
    if input_path.endswith(MARKDOWN_SUFFIX):
        return input_path[: -len(MARKDOWN_SUFFIX)] + ".tex"
    return input_path + ".tex"


def markdown_to_latex(
    text: str,
    parser_options: MarkdownParserOptions | None = None,
    renderer_options: LatexRendererOptions | None = None,
) -> str:
    r"""Convert Markdown text to LaTeX.

    Parameters
    ----------
    text : str
        Markdown source
    parser_options : MarkdownParserOptions or None
        Parsing configuration
    renderer_options : LatexRendererOptions or None
        Rendering configuration

    Returns
    -------
    str
        LaTeX source

    Examples
    --------
    >>> markdown_to_latex("**foo**")
    '\\textbf{foo}\n'

    """
    doc = MarkdownParser(parser_options).parse(text)
    return LatexRenderer(renderer_options).render_to_string(doc)


@dataclass
class ConversionResult:
    """Everything one conversion produced.

    Attributes
    ----------
    latex : str
        The rendered main document
    markdown : str
        The Markdown source after include expansion
    main_name : str or None
        Name of the main ``.tex`` file; None when written to standard output
    joined_name : str or None
        Name of the joined Markdown file, when one was requested
    raw_outputs : list of (str, str)
        Raw LaTeX side files as ``(destination, content)``, sorted by destination

    """

    latex: str
    markdown: str
    main_name: str | None = None
    joined_name: str | None = None
    raw_outputs: list[tuple[str, str]] = field(default_factory=list)

    def files(self) -> list[OutputFile]:
        """Output files in archive order: joined Markdown, main LaTeX, raw side files."""
        files = []
        if self.joined_name:
            files.append(OutputFile.from_text(self.joined_name, self.markdown))
        if self.main_name:
            files.append(OutputFile.from_text(self.main_name, self.latex))
        files.extend(OutputFile.from_text(name, content) for name, content in self.raw_outputs)
        return files


def _read_source(input_path: str, root_dir: Path, encoding: str, stdin: IO[str] | None) -> str:
    if input_path == STDOUT:
        stream = stdin if stdin is not None else sys.stdin
        return stream.read()
    return expand_includes(root_dir / input_path, root_dir=root_dir, encoding=encoding)


def convert_file(
    input_path: str,
    destination: str,
    parser_options: MarkdownParserOptions | None = None,
    renderer_options: LatexRendererOptions | None = None,
    raw_targets: Mapping[str, str] | None = None,
    joined_template: str | None = None,
    root_dir: Union[str, Path, None] = None,
    stdin: IO[str] | None = None,
    stdout: IO[str] | None = None,
    mtime: float | None = None,
) -> ConversionResult:
    """Convert a Markdown file and write the outputs to ``destination``.

    Parameters
    ----------
    input_path : str
        Markdown file relative to ``root_dir``, or ``"-"`` for standard input
    destination : str
        ``"-"``, ``"tar:FILE[:MAIN]"`` or a path relative to ``root_dir``
    parser_options : MarkdownParserOptions or None
        Parsing configuration
    renderer_options : LatexRendererOptions or None
        Rendering configuration; its ``html_handler`` is replaced by the raw
        LaTeX collector
    raw_targets : mapping of str to str, optional
        Raw LaTeX keys and the side files their blocks are collected into
    joined_template : str or None
        File name template for the joined Markdown (see :func:`format_file_name`);
        ignored when reading standard input
    root_dir : str, Path or None
        Project root; defaults to the working directory
    stdin, stdout : text streams, optional
        Replacements for the process streams
    mtime : float or None
        Modification time of tar members; defaults to now

    Returns
    -------
    ConversionResult
        The produced outputs

    Raises
    ------
    IncludeError
        If the source or one of its includes cannot be read
    ValidationError
        If ``destination`` is malformed
    OutputWriteError
        If an output file cannot be written

    """
    target = parse_destination(destination)
    root = Path(root_dir) if root_dir is not None else Path(".")
    parser_options = parser_options or MarkdownParserOptions()
    renderer_options = renderer_options or LatexRendererOptions()

    joined_name = None
    if joined_template and input_path != STDOUT:
        joined_name = format_file_name(joined_template, input_path)

    logger.info("Converting %s (root dir: %s, joined output: %s)", input_path, root, joined_name or "none")

    markdown = _read_source(input_path, root, parser_options.encoding, stdin)

    collector = RawLatexCollector(raw_targets)
    renderer = LatexRenderer(renderer_options.create_updated(html_handler=collector))
    doc = MarkdownParser(parser_options).parse(markdown)
    latex = renderer.render_to_string(doc)

    result = ConversionResult(latex=latex, markdown=markdown, joined_name=joined_name, raw_outputs=collector.outputs())
    out = stdout if stdout is not None else sys.stdout

    if target.kind == "stdout":
        out.write(latex)
        return result

    if target.kind == "tar":
        result.main_name = target.main or default_main_name(input_path)
        when = time.time() if mtime is None else mtime
        if target.path == STDOUT:
            binary = cast(IO[bytes], getattr(out, "buffer", out))
            write_tarball(result.files(), binary, when)
            binary.flush()
        else:
            tar_path = Path(cast(str, target.path))
            try:
                tar_path.parent.mkdir(parents=True, exist_ok=True)
                with open(tar_path, "wb") as f:
                    write_tarball(result.files(), f, when)
            except OSError as e:
                raise OutputWriteError(str(tar_path), original_error=e) from e
            logger.info("Wrote archive %s", tar_path)
        return result

    result.main_name = cast(str, target.path)
    for output in result.files():
        create_file(root, output.name, output.data)
    logger.info("Wrote %d file(s) under %s", len(result.files()), root)
    return result
