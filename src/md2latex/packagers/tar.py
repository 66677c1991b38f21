#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/packagers/tar.py
"""Output destinations and tar packaging.

A conversion produces the main ``.tex`` file and, optionally, the joined
Markdown source and raw LaTeX side files. The destination decides where
they go:

- ``-`` writes the main LaTeX to standard output;
- ``tar:FILE`` or ``tar:FILE:MAIN`` bundles every output into an
  uncompressed tar archive (``tar:-`` streams it to standard output);
- any other value is a file path for the main LaTeX, with side files
  created next to it under the root directory.

"""

from __future__ import annotations

import tarfile
from dataclasses import dataclass
from io import BytesIO
from typing import IO, Iterable, Literal

from md2latex.exceptions import ValidationError

TAR_PREFIX = "tar:"
STDOUT = "-"
TAR_MEMBER_MODE = 0o666


@dataclass(frozen=True)
class Destination:
    """Parsed output destination.

    Parameters
    ----------
    kind : {"stdout", "file", "tar"}
        Where the main output goes
    path : str or None
        Output file or archive path; ``"-"`` for a tar archive on stdout
    main : str or None
        Name of the main ``.tex`` member inside a tar archive, when given

    """

    kind: Literal["stdout", "file", "tar"]
    path: str | None = None
    main: str | None = None


def parse_destination(value: str) -> Destination:
    """Parse a destination argument.

    Raises
    ------
    ValidationError
        If a ``tar:`` destination has more than one ``:`` separator or no archive path

    Examples
    --------
    >>> parse_destination("-")
    Destination(kind='stdout', path=None, main=None)
    >>> parse_destination("tar:book.tar:main.tex")
    Destination(kind='tar', path='book.tar', main='main.tex')

    """
    if value == STDOUT:
        return Destination("stdout")
    if not value.startswith(TAR_PREFIX):
        return Destination("file", path=value)

    parts = value[len(TAR_PREFIX) :].split(":")
    if len(parts) > 2:
        raise ValidationError(f"invalid DST value: {value!r}", parameter_name="destination", parameter_value=value)
    if not parts[0]:
        raise ValidationError(
            f"tar destination needs an archive path: {value!r}", parameter_name="destination", parameter_value=value
        )
    main = parts[1] if len(parts) == 2 and parts[1] else None
    return Destination("tar", path=parts[0], main=main)


@dataclass(frozen=True)
class OutputFile:
    """One file of the conversion output."""

    name: str
    data: bytes

    @classmethod
    def from_text(cls, name: str, text: str) -> OutputFile:
        return cls(name, text.encode("utf-8"))


def write_tarball(files: Iterable[OutputFile], fileobj: IO[bytes], mtime: float) -> None:
    """Write ``files`` to ``fileobj`` as a tar stream, in the given order.

    Parameters
    ----------
    files : iterable of OutputFile
        Archive members
    fileobj : IO[bytes]
        Binary destination; it does not need to be seekable
    mtime : float
        Modification time stamped on every member

    """
    with tarfile.open(fileobj=fileobj, mode="w|") as tar:
        for output in files:
            info = tarfile.TarInfo(name=output.name)
            info.size = len(output.data)
            info.mode = TAR_MEMBER_MODE
            info.mtime = int(mtime)
            tar.addfile(info, BytesIO(output.data))
