#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/parsers/base.py
"""Base class for document parsers.

A parser turns source text into the node tree consumed by
:class:`md2latex.renderers.LatexRenderer`.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from md2latex.ast.nodes import Node
from md2latex.exceptions import FileError, InvalidOptionsError
from md2latex.options.base import BaseParserOptions
from md2latex.utils.encoding import decode_text, read_stream_text

logger = logging.getLogger(__name__)

ParserInput = Union[str, Path, IO[bytes], IO[str], bytes]


class BaseParser(ABC):
    """Abstract base class for parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    Notes
    -----
    :meth:`parse` accepts:

    - str: the source text itself
    - Path: a file to read
    - IO[bytes] or IO[str]: a stream read to the end
    - bytes: raw source, decoded with the configured encoding

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: ParserInput) -> Node:
        """Parse the input into a DOCUMENT node."""
        ...

    @staticmethod
    def _load_text_content(input_data: ParserInput, encoding: str = "utf-8") -> str:
        """Load text from any supported input type.

        Raises
        ------
        FileError
            If a path cannot be read

        """
        if isinstance(input_data, bytes):
            return decode_text(input_data, encoding)
        elif isinstance(input_data, Path):
            try:
                data = input_data.read_bytes()
            except OSError as e:
                raise FileError(f"Cannot read {input_data}: {e}", file_path=str(input_data), original_error=e) from e
            logger.debug("Read %d bytes from %s", len(data), input_data)
            return decode_text(data, encoding)
        elif isinstance(input_data, str):
            return input_data
        else:
            return read_stream_text(input_data, encoding)
