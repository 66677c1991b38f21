#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/renderers/base.py
"""Base classes for node-tree renderers.

This module defines the abstract base class renderers inherit from. The
BaseRenderer provides a consistent interface for turning a parsed
document into text output.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from md2latex.ast.nodes import Node
from md2latex.exceptions import InvalidOptionsError
from md2latex.options.base import BaseRendererOptions
from md2latex.utils.io_utils import write_content


class BaseRenderer(ABC):
    """Abstract base class for renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render_to_string(self, doc: Node) -> str:
        """Render the document tree to a string.

        Parameters
        ----------
        doc : Node
            DOCUMENT node to render

        Returns
        -------
        str
            Rendered document

        """

    def render(self, doc: Node, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render the document tree and write it to ``output``.

        Parameters
        ----------
        doc : Node
            DOCUMENT node to render
        output : str, Path, IO[bytes], or IO[str]
            File path or file-like object

        Raises
        ------
        RenderingError
            If rendering fails
        OutputWriteError
            If a path cannot be written

        """
        self.write_text_output(self.render_to_string(doc), output)

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Write text output to file or IO stream.

        Examples
        --------
        Write to StringIO:
            >>> from io import StringIO
            >>> buffer = StringIO()
            >>> BaseRenderer.write_text_output("\\\\emph{x}", buffer)
            >>> print(buffer.getvalue())
            \\emph{x}

        """
        write_content(text, output)
