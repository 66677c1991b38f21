#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/cli/builder.py
"""Argument parser construction for the md2latex CLI.

Renderer and parser options are exposed by introspecting their dataclass
fields: each field with ``help`` metadata becomes a command-line argument
named after the field in kebab-case. Boolean fields that default to True
get a ``--no-`` flag. Arguments default to ``argparse.SUPPRESS`` so that
only values given on the command line override the configuration file.

"""

from __future__ import annotations

import argparse
from dataclasses import MISSING, Field, fields
from typing import Any, Dict, Type

from md2latex import __version__
from md2latex.exceptions import (
    FileError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from md2latex.options.latex import LatexRendererOptions
from md2latex.options.markdown import MarkdownParserOptions

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7

# Options classes exposed on the command line, keyed by the section name
# used in dests ("latex.author") and in configuration files ([latex]).
OPTIONS_SECTIONS: Dict[str, Type[Any]] = {
    "latex": LatexRendererOptions,
    "markdown": MarkdownParserOptions,
}


def snake_to_kebab(name: str) -> str:
    """Convert snake_case to kebab-case."""
    return name.replace("_", "-")


def infer_cli_name(field: Field, metadata: Dict[str, Any]) -> str:
    """Return the ``--flag`` for a dataclass field.

    Examples
    --------
    >>> from dataclasses import fields
    >>> by_name = {f.name: f for f in fields(LatexRendererOptions)}
    >>> infer_cli_name(by_name["complete_page"], dict(by_name["complete_page"].metadata))
    '--complete-page'
    >>> infer_cli_name(by_name["smart_quotes"], dict(by_name["smart_quotes"].metadata))
    '--no-smart-quotes'

    """
    if "cli_name" in metadata:
        return f"--{metadata['cli_name']}"
    kebab_name = snake_to_kebab(field.name)
    if field.default is True and not kebab_name.startswith("no-"):
        kebab_name = f"no-{kebab_name}"
    return f"--{kebab_name}"


def get_argument_kwargs(field: Field, metadata: Dict[str, Any]) -> Dict[str, Any]:
    """Build ``add_argument`` keyword arguments for a dataclass field."""
    kwargs: Dict[str, Any] = {"help": metadata.get("help"), "default": argparse.SUPPRESS}
    default = field.default

    if isinstance(default, bool):
        kwargs["action"] = "store_false" if default else "store_true"
        return kwargs

    if "choices" in metadata:
        kwargs["choices"] = metadata["choices"]
    kwargs["type"] = str
    if default is not MISSING and default not in (None, ""):
        kwargs["help"] = f"{kwargs['help']} (default: {default})"
    return kwargs


def add_options_class_arguments(parser: argparse.ArgumentParser, section: str, options_class: Type[Any]) -> None:
    """Add one argument per CLI-exposed field of ``options_class``.

    The argument dest is ``"<section>.<field>"``.
    """
    group = parser.add_argument_group(f"{section} options")
    for field in fields(options_class):
        metadata = dict(field.metadata)
        if not field.init or metadata.get("exclude_from_cli") or "help" not in metadata:
            continue
        cli_name = infer_cli_name(field, metadata)
        group.add_argument(cli_name, dest=f"{section}.{field.name}", **get_argument_kwargs(field, metadata))


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for ``md2latex SRC DST``.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser

    """
    parser = argparse.ArgumentParser(
        prog="md2latex",
        description="Convert Markdown to LaTeX.",
        epilog=(
            "DST is '-' for standard output, 'tar:FILE[:MAIN]' for a tar archive "
            "('tar:-' writes the archive to standard output) or a file path."
        ),
    )
    parser.add_argument("source", metavar="SRC", help="Markdown file, or '-' for standard input")
    parser.add_argument("destination", metavar="DST", help="Output destination")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    parser.add_argument(
        "--config",
        help="Configuration file (.toml, .yaml, .yml or .json); overrides discovery and MD2LATEX_CONFIG",
    )
    parser.add_argument("--no-config", action="store_true", help="Do not load any configuration file")
    parser.add_argument(
        "-R",
        "--latex-raw-file",
        dest="latex_raw_file",
        action="append",
        metavar="KEY:DEST",
        default=argparse.SUPPRESS,
        help="Collect '<!-- ::KEY' raw LaTeX blocks into DEST. Repeatable.",
    )
    parser.add_argument(
        "-J",
        "--joined",
        default=argparse.SUPPRESS,
        metavar="TEMPLATE",
        help="Also save the joined Markdown. Placeholders: %%D%% (dir), %%B%% (base name without .md), "
        "%%BE%% (base name)",
    )
    parser.add_argument(
        "--root-dir",
        default=argparse.SUPPRESS,
        help="Root directory for SRC, '/'-prefixed includes and output files (default: .)",
    )

    for section, options_class in OPTIONS_SECTIONS.items():
        add_options_class_arguments(parser, section, options_class)

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        type=str.upper,
        help="Logging level (default: WARNING)",
    )
    logging_group.add_argument("--log-file", help="Also write log messages to this file")
    logging_group.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    parser.add_argument("--rich", action="store_true", help="Syntax-highlight LaTeX written to the terminal")

    return parser


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Examples
    --------
    >>> get_exit_code_for_exception(ParsingError("bad"))
    6

    """
    if isinstance(exception, (ValidationError, ValueError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, (FileError, OutputWriteError, OSError)):
        return EXIT_FILE_ERROR

    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    return EXIT_ERROR
