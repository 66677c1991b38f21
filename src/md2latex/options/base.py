#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/options/base.py
"""Base classes for parser and renderer options.

Options are frozen dataclasses. Each field carries ``help`` metadata that the
command-line interface reuses, and validation happens in ``__post_init__``.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from md2latex.constants import DEFAULT_CREATOR


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> Self:
        """Build an instance from a mapping, ignoring keys that are not fields.

        Dashes in keys are accepted in place of underscores so that
        configuration files can use ``complete-page`` as well as
        ``complete_page``.
        """
        names = {f.name for f in fields(cls) if f.init}
        kwargs = {}
        for key, value in values.items():
            name = str(key).replace("-", "_")
            if name in names:
                kwargs[name] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for renderer options.

    Parameters
    ----------
    creator : str or None, default "md2latex"
        Creator application name written into the PDF metadata of complete
        documents. Set to None to disable creator metadata.

    """

    creator: str | None = field(
        default=DEFAULT_CREATOR,
        metadata={
            "help": "Creator application name for document metadata. Set to None to disable creator metadata.",
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate base renderer options."""
        pass


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for parser options.

    Notes
    -----
    Subclasses should define format-specific parsing options as frozen dataclass fields.

    """

    def __post_init__(self) -> None:
        """Validate base parser options."""
        pass
