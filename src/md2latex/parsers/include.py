#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/parsers/include.py
"""Include directive expansion for Markdown sources.

A book is usually split over several Markdown files. A line of the form::

    :: chapters/intro.md

placed at the start of the file or right after an empty line is replaced
by the expanded content of the referenced file. Paths starting with ``/``
resolve against the project root directory; any other path resolves against
the directory of the file containing the directive.

"""

from __future__ import annotations

import logging
import os
from io import StringIO
from pathlib import Path
from typing import IO, Union

from md2latex.constants import INCLUDE_DIRECTIVE
from md2latex.exceptions import IncludeError
from md2latex.utils.encoding import decode_text

logger = logging.getLogger(__name__)


def resolve_include(target: str, current_dir: Path, root_dir: Path) -> Path:
    """Resolve an include target relative to the including file.

    Examples
    --------
    >>> resolve_include("/parts/a.md", Path("book/ch1"), Path("book")).as_posix()
    'book/parts/a.md'
    >>> resolve_include("a.md", Path("book/ch1"), Path("book")).as_posix()
    'book/ch1/a.md'

    """
    if target.startswith("/"):
        return root_dir / target.lstrip("/")
    return current_dir / target


class IncludeExpander:
    """Expand include directives recursively into a single text buffer.

    Parameters
    ----------
    root_dir : Path
        Directory that ``/``-prefixed include paths are resolved against
    encoding : str, default "utf-8"
        Encoding used to decode included files

    """

    def __init__(self, root_dir: Path, encoding: str = "utf-8"):
        self.root_dir = root_dir
        self.encoding = encoding
        self.count = 0
        self._stack: list[Path] = []

    def expand(self, path: Path, out: IO[str]) -> None:
        """Write the expanded content of ``path`` to ``out``.

        Raises
        ------
        IncludeError
            If a file cannot be read or includes itself
        """
        self.count += 1
        depth = len(self._stack)
        logger.info("include %s%03d: %s", "--" * depth + " " if depth else "", self.count, path)

        key = Path(os.path.abspath(path))
        if key in self._stack:
            chain = " -> ".join(str(p) for p in [*self._stack, key])
            raise IncludeError(f"include cycle: {chain}", file_path=str(path))

        try:
            text = decode_text(path.read_bytes(), self.encoding)
        except OSError as e:
            raise IncludeError(f"open {path}: {e.strerror or e}", file_path=str(path), original_error=e) from e

        self._stack.append(key)
        try:
            previous = ""
            for number, raw_line in enumerate(text.splitlines(), start=1):
                line = raw_line.strip()
                if line.startswith(INCLUDE_DIRECTIVE) and previous == "":
                    target = line[len(INCLUDE_DIRECTIVE) :].strip()
                    try:
                        self.expand(resolve_include(target, path.parent, self.root_dir), out)
                    except IncludeError as e:
                        raise IncludeError(
                            f"from {path}#{number}: {e.message}", file_path=str(path), original_error=e.original_error
                        ) from e
                    out.write("\n")
                else:
                    out.write(raw_line)
                    out.write("\n")
                previous = raw_line
        finally:
            self._stack.pop()


def expand_includes(path: Union[str, Path], root_dir: Union[str, Path, None] = None, encoding: str = "utf-8") -> str:
    """Read ``path`` and expand its include directives.

    Parameters
    ----------
    path : str or Path
        Markdown file to read
    root_dir : str, Path or None, default None
        Directory for ``/``-prefixed includes; defaults to the directory of ``path``
    encoding : str, default "utf-8"
        Encoding of the source files

    Returns
    -------
    str
        The joined Markdown source

    Raises
    ------
    IncludeError
        If any file in the include tree cannot be read, or on include cycles

    """
    path = Path(path)
    root = Path(root_dir) if root_dir is not None else path.parent
    out = StringIO()
    IncludeExpander(root, encoding=encoding).expand(path, out)
    return out.getvalue()
