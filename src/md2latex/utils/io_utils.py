#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/utils/io_utils.py
"""I/O utilities for handling output destinations.

Output can go to a path, a text stream or a binary stream. Side files
produced next to the main document are created under a root directory,
with any missing parent directories.

"""

from __future__ import annotations

import io
import logging
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Union, cast

from md2latex.exceptions import OutputWriteError

logger = logging.getLogger(__name__)


def _is_binary(output: IO) -> bool:
    if isinstance(output, BytesIO):
        return True
    if isinstance(output, StringIO):
        return False
    if isinstance(output, io.TextIOBase):
        return False
    if isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
        return True
    mode = getattr(output, "mode", "")
    return isinstance(mode, str) and "b" in mode


def write_content(content: Union[str, bytes], output: Union[str, Path, IO[bytes], IO[str]]) -> None:
    """Write content to a path or file-like object.

    Parameters
    ----------
    content : str or bytes
        Content to write; text is encoded as UTF-8 where bytes are needed
    output : str, Path, IO[bytes] or IO[str]
        Destination

    Raises
    ------
    OutputWriteError
        If a path cannot be written
    TypeError
        If ``output`` is neither a path nor writable, or bytes are written
        to a text stream

    """
    if isinstance(output, (str, Path)):
        output_path = Path(output)
        try:
            if isinstance(content, str):
                output_path.write_text(content, encoding="utf-8")
            else:
                output_path.write_bytes(content)
        except OSError as exc:
            raise OutputWriteError(str(output_path), original_error=exc) from exc
        return

    if not hasattr(output, "write"):
        raise TypeError(f"Output must be a path or file-like object, got {type(output)}")

    if _is_binary(output):
        binary_output = cast(IO[bytes], output)
        binary_output.write(content.encode("utf-8") if isinstance(content, str) else content)
    else:
        if isinstance(content, bytes):
            raise TypeError("Cannot write bytes to a text stream")
        cast(IO[str], output).write(content)


def create_file(root_dir: Union[str, Path], relative_path: str, content: Union[str, bytes]) -> Path:
    """Write ``content`` to ``root_dir / relative_path``, creating parent directories.

    Returns
    -------
    Path
        The written file

    Raises
    ------
    OutputWriteError
        If the directory or file cannot be created

    """
    path = Path(root_dir) / relative_path.lstrip("/")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputWriteError(str(path), message=f"create {str(path)!r}: {exc}", original_error=exc) from exc
    write_content(content, path)
    logger.debug("Wrote %s", path)
    return path
