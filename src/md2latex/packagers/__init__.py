#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/packagers/__init__.py
"""Output destinations and tar packaging.

Available helpers:
- parse_destination: Interpret the DST argument (``-``, ``tar:...`` or a path)
- write_tarball: Bundle the conversion outputs into a tar stream

"""

from __future__ import annotations

from md2latex.packagers.tar import Destination, OutputFile, parse_destination, write_tarball

__all__ = [
    "Destination",
    "OutputFile",
    "parse_destination",
    "write_tarball",
]
