#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/cli/__init__.py
"""Command-line interface for md2latex.

Examples
--------
Print the LaTeX body of a document::

    $ md2latex book.md -

Write a complete document, expanding ``:: path`` includes relative to a root::

    $ md2latex --root-dir book --complete-page --toc main.md main.tex

Bundle the main file, the joined Markdown and a raw LaTeX side file::

    $ md2latex -J '%D%/%B%.joined.md' -R preamble:preamble.tex main.md tar:book.tar

Configuration is read from ``--config``, the file named by
``MD2LATEX_CONFIG``, or the first ``.md2latex.toml``/``.yaml``/``.yml``/
``.json`` (or ``[tool.md2latex]`` in ``pyproject.toml``) found from the
working directory upwards and then in the home directory.

"""

import argparse
import logging
import os
import sys
from io import StringIO
from typing import Any, Dict, Mapping

from md2latex.api import convert_file
from md2latex.cli.builder import (
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    OPTIONS_SECTIONS,
    create_parser,
    get_exit_code_for_exception,
)
from md2latex.cli.config import CONFIG_ENV_VAR, load_config_with_priority
from md2latex.exceptions import Md2LatexError
from md2latex.logging_utils import configure_logging
from md2latex.packagers.tar import STDOUT
from md2latex.rawlatex import parse_raw_target

logger = logging.getLogger(__name__)

__all__ = ["main", "create_parser"]


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    # --trace takes precedence over --log-level
    log_level = logging.DEBUG if parsed_args.trace else getattr(logging, parsed_args.log_level)
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _load_config(parsed_args: argparse.Namespace) -> Dict[str, Any]:
    if parsed_args.no_config:
        return {}
    config, path = load_config_with_priority(parsed_args.config, os.environ.get(CONFIG_ENV_VAR))
    if path is not None:
        logger.info("Using config file: %s", path)
    return config


def build_options(parsed_args: argparse.Namespace, config: Mapping[str, Any]) -> Dict[str, Any]:
    """Build parser and renderer options from the config file and the command line.

    Returns
    -------
    dict
        Options instances keyed by section name (``"latex"``, ``"markdown"``)

    Raises
    ------
    argparse.ArgumentTypeError
        If a config section is not a table
    ValueError
        If an option value is invalid

    """
    cli_values = vars(parsed_args)
    options: Dict[str, Any] = {}
    for section, options_class in OPTIONS_SECTIONS.items():
        section_config = config.get(section, {})
        if not isinstance(section_config, dict):
            raise argparse.ArgumentTypeError(f"[{section}] in the config file must be a table")
        values = dict(section_config)
        prefix = f"{section}."
        for dest, value in cli_values.items():
            if dest.startswith(prefix):
                values[dest[len(prefix) :]] = value
        options[section] = options_class.from_mapping(values)
    return options


def build_raw_targets(parsed_args: argparse.Namespace, config: Mapping[str, Any]) -> Dict[str, str]:
    """Collect ``KEY -> DEST`` raw LaTeX targets.

    The config file may give ``latex_raw_file`` as a list of ``KEY:DEST``
    strings or as a table; targets from the command line replace them.
    """
    specs = getattr(parsed_args, "latex_raw_file", None)
    if specs is None:
        specs = config.get("latex_raw_file", config.get("latex-raw-file", []))
    if isinstance(specs, dict):
        return {str(key): str(value) for key, value in specs.items()}
    if isinstance(specs, str):
        specs = [specs]
    return dict(parse_raw_target(spec) for spec in specs)


def _print_rich(latex: str) -> None:
    from rich.console import Console
    from rich.syntax import Syntax

    Console().print(Syntax(latex, "latex", word_wrap=True))


def main(args: list[str] | None = None) -> int:
    """Execute the md2latex command line."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    try:
        config = _load_config(parsed_args)
        options = build_options(parsed_args, config)
        raw_targets = build_raw_targets(parsed_args, config)
    except (argparse.ArgumentTypeError, ValueError, TypeError, Md2LatexError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    joined = getattr(parsed_args, "joined", config.get("joined"))
    root_dir = getattr(parsed_args, "root_dir", config.get("root_dir"))
    use_rich = parsed_args.rich and parsed_args.destination == STDOUT

    stdout = StringIO() if use_rich else None
    try:
        convert_file(
            parsed_args.source,
            parsed_args.destination,
            parser_options=options["markdown"],
            renderer_options=options["latex"],
            raw_targets=raw_targets,
            joined_template=joined,
            root_dir=root_dir,
            stdout=stdout,
        )
    except (Md2LatexError, OSError) as e:
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    if stdout is not None:
        _print_rich(stdout.getvalue())
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
