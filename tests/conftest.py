"""Pytest configuration and shared fixtures for the md2latex test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from md2latex.options import LatexRendererOptions, MarkdownParserOptions

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "slow: Tests that start subprocesses")


@pytest.fixture
def parser_options() -> MarkdownParserOptions:
    """Default Markdown parser options."""
    return MarkdownParserOptions()


@pytest.fixture
def renderer_options() -> LatexRendererOptions:
    """Default LaTeX renderer options."""
    return LatexRendererOptions()


@pytest.fixture
def book_dir(tmp_path: Path) -> Path:
    """Provide a small multi-file Markdown book.

    Layout::

        main.md            title block, includes chapters/one.md and /parts/two.md
        chapters/one.md    a chapter with a raw LaTeX preamble block
        parts/two.md       a chapter with a footnote

    Returns
    -------
    Path
        Root directory of the book

    """
    (tmp_path / "chapters").mkdir()
    (tmp_path / "parts").mkdir()
    (tmp_path / "main.md").write_text(
        "% My Book\n\nIntro text.\n\n:: chapters/one.md\n\n:: /parts/two.md\n",
        encoding="utf-8",
    )
    (tmp_path / "chapters" / "one.md").write_text(
        "# One\n\nFirst chapter.\n\n<!-- ::preamble\n\\usepackage{tikz}\n-->\n",
        encoding="utf-8",
    )
    (tmp_path / "parts" / "two.md").write_text(
        "# Two\n\nSecond[^n] chapter.\n\n[^n]: A note.\n",
        encoding="utf-8",
    )
    return tmp_path
