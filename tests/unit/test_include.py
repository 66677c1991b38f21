#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for include directive expansion."""

import logging
from pathlib import Path

import pytest

from md2latex.exceptions import FileError, IncludeError
from md2latex.parsers.include import expand_includes, resolve_include


@pytest.mark.unit
class TestResolveInclude:
    """Test include path resolution."""

    def test_relative(self) -> None:
        """Relative targets resolve against the including file."""
        assert resolve_include("a.md", Path("book/ch1"), Path("book")) == Path("book/ch1/a.md")

    def test_root_relative(self) -> None:
        """Slash-prefixed targets resolve against the root."""
        assert resolve_include("/parts/a.md", Path("book/ch1"), Path("book")) == Path("book/parts/a.md")


@pytest.mark.unit
class TestExpandIncludes:
    """Test recursive expansion."""

    def test_no_directives(self, tmp_path: Path) -> None:
        """A file without directives is copied line by line."""
        source = tmp_path / "a.md"
        source.write_text("line 1\nline 2", encoding="utf-8")
        assert expand_includes(source) == "line 1\nline 2\n"

    def test_include_at_start(self, tmp_path: Path) -> None:
        """A directive on the first line is expanded."""
        (tmp_path / "b.md").write_text("included\n", encoding="utf-8")
        source = tmp_path / "a.md"
        source.write_text(":: b.md\nafter\n", encoding="utf-8")
        assert expand_includes(source) == "included\n\nafter\n"

    def test_include_after_blank_line(self, tmp_path: Path) -> None:
        """A directive after an empty line is expanded."""
        (tmp_path / "b.md").write_text("included\n", encoding="utf-8")
        source = tmp_path / "a.md"
        source.write_text("before\n\n:: b.md\n", encoding="utf-8")
        assert expand_includes(source) == "before\n\nincluded\n\n"

    def test_directive_inside_paragraph(self, tmp_path: Path) -> None:
        """A directive right after text is kept verbatim."""
        source = tmp_path / "a.md"
        source.write_text("before\n:: b.md\n", encoding="utf-8")
        assert expand_includes(source) == "before\n:: b.md\n"

    def test_indented_directive(self, tmp_path: Path) -> None:
        """Blanks around the directive are ignored."""
        (tmp_path / "b.md").write_text("included", encoding="utf-8")
        source = tmp_path / "a.md"
        source.write_text("   :: b.md  \n", encoding="utf-8")
        assert expand_includes(source) == "included\n\n"

    def test_nested_and_root_relative(self, book_dir: Path) -> None:
        """Nested includes resolve relative paths and root-relative paths."""
        text = expand_includes(book_dir / "main.md")
        assert "First chapter." in text
        assert "Second[^n] chapter." in text
        assert ":: " not in text
        assert text.index("Intro text.") < text.index("# One") < text.index("# Two")

    def test_root_dir_override(self, tmp_path: Path) -> None:
        """Slash-prefixed targets use the given root directory."""
        (tmp_path / "shared").mkdir()
        (tmp_path / "shared" / "x.md").write_text("shared", encoding="utf-8")
        (tmp_path / "book").mkdir()
        source = tmp_path / "book" / "a.md"
        source.write_text(":: /shared/x.md\n", encoding="utf-8")
        assert expand_includes(source, root_dir=tmp_path) == "shared\n\n"

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing source raises IncludeError, a FileError."""
        with pytest.raises(FileError, match="open"):
            expand_includes(tmp_path / "missing.md")

    def test_missing_include_has_chain(self, tmp_path: Path) -> None:
        """Errors in nested files name the including file and line."""
        source = tmp_path / "a.md"
        source.write_text("x\n\n:: gone.md\n", encoding="utf-8")
        with pytest.raises(IncludeError) as exc_info:
            expand_includes(source)
        message = str(exc_info.value)
        assert message.startswith(f"from {source}#3: open ")
        assert "gone.md" in message
        assert isinstance(exc_info.value.original_error, OSError)

    def test_cycle(self, tmp_path: Path) -> None:
        """Include cycles are reported instead of recursing forever."""
        (tmp_path / "a.md").write_text(":: b.md\n", encoding="utf-8")
        (tmp_path / "b.md").write_text(":: a.md\n", encoding="utf-8")
        with pytest.raises(IncludeError, match="include cycle"):
            expand_includes(tmp_path / "a.md")

    def test_same_file_twice(self, tmp_path: Path) -> None:
        """Including a file twice in sequence is not a cycle."""
        (tmp_path / "b.md").write_text("B", encoding="utf-8")
        (tmp_path / "a.md").write_text(":: b.md\n\n:: b.md\n", encoding="utf-8")
        assert expand_includes(tmp_path / "a.md") == "B\n\n\nB\n\n"

    def test_logs_each_file(self, book_dir: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Every opened file is logged with a running number."""
        with caplog.at_level(logging.INFO, logger="md2latex.parsers.include"):
            expand_includes(book_dir / "main.md")
        messages = [record.getMessage() for record in caplog.records]
        assert len(messages) == 3
        assert messages[0].startswith("include 001: ")
        assert messages[1].startswith("include -- 002: ")

    def test_latin1_source(self, tmp_path: Path) -> None:
        """Files that are not UTF-8 are still read."""
        source = tmp_path / "a.md"
        source.write_bytes("naïve café résumé".encode("latin-1"))
        assert expand_includes(source).startswith("na")
