#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for configuration file discovery and loading."""

import argparse
import json
from pathlib import Path

import pytest

from md2latex.cli.config import (
    discover_config_file,
    find_config_in_parents,
    load_config_file,
    load_config_with_priority,
    merge_configs,
)


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the home directory at an empty temporary directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    return home


@pytest.mark.unit
@pytest.mark.cli
class TestLoadConfigFile:
    """Test loading each supported format."""

    def test_toml(self, tmp_path: Path) -> None:
        """TOML files are loaded."""
        path = tmp_path / ".md2latex.toml"
        path.write_text('joined = "%B%.j.md"\n[latex]\ncomplete_page = true\n', encoding="utf-8")
        assert load_config_file(path) == {"joined": "%B%.j.md", "latex": {"complete_page": True}}

    def test_yaml(self, tmp_path: Path) -> None:
        """YAML files are loaded."""
        path = tmp_path / "conf.yaml"
        path.write_text("latex:\n  toc: true\nlatex_raw_file:\n  - pre:pre.tex\n", encoding="utf-8")
        assert load_config_file(path) == {"latex": {"toc": True}, "latex_raw_file": ["pre:pre.tex"]}

    def test_json(self, tmp_path: Path) -> None:
        """JSON files are loaded."""
        path = tmp_path / "conf.json"
        path.write_text(json.dumps({"markdown": {"tables": False}}), encoding="utf-8")
        assert load_config_file(path) == {"markdown": {"tables": False}}

    def test_empty_yaml(self, tmp_path: Path) -> None:
        """An empty file is an empty configuration."""
        path = tmp_path / "conf.yml"
        path.write_text("", encoding="utf-8")
        assert load_config_file(path) == {}

    def test_pyproject_section(self, tmp_path: Path) -> None:
        """pyproject.toml contributes its [tool.md2latex] table."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n[tool.md2latex.latex]\nauthor = "Me"\n', encoding="utf-8")
        assert load_config_file(path) == {"latex": {"author": "Me"}}

    def test_missing(self, tmp_path: Path) -> None:
        """Missing files are reported."""
        with pytest.raises(argparse.ArgumentTypeError, match="does not exist"):
            load_config_file(tmp_path / "nope.toml")

    def test_directory(self, tmp_path: Path) -> None:
        """Directories are rejected."""
        with pytest.raises(argparse.ArgumentTypeError, match="not a file"):
            load_config_file(tmp_path)

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        """Unknown formats are rejected."""
        path = tmp_path / "conf.ini"
        path.write_text("[latex]\n", encoding="utf-8")
        with pytest.raises(argparse.ArgumentTypeError, match="Unsupported"):
            load_config_file(path)

    def test_invalid_syntax(self, tmp_path: Path) -> None:
        """Parse errors are reported."""
        path = tmp_path / "conf.toml"
        path.write_text("latex = [", encoding="utf-8")
        with pytest.raises(argparse.ArgumentTypeError, match="Invalid config file"):
            load_config_file(path)

    def test_non_mapping_root(self, tmp_path: Path) -> None:
        """The root must be a mapping."""
        path = tmp_path / "conf.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(argparse.ArgumentTypeError, match="mapping"):
            load_config_file(path)


@pytest.mark.unit
@pytest.mark.cli
class TestDiscovery:
    """Test config discovery and priority."""

    def test_find_in_parents(self, tmp_path: Path) -> None:
        """The nearest config file up the tree wins."""
        (tmp_path / ".md2latex.yaml").write_text("{}", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_in_parents(nested) == (tmp_path / ".md2latex.yaml").resolve()

    def test_pyproject_without_section_is_skipped(self, tmp_path: Path) -> None:
        """A pyproject.toml without [tool.md2latex] is not a config file."""
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")
        work = tmp_path / "work"
        work.mkdir()
        assert find_config_in_parents(work) != (tmp_path / "pyproject.toml").resolve()

    def test_pyproject_with_section_is_found(self, tmp_path: Path) -> None:
        """A pyproject.toml with [tool.md2latex] is a config file."""
        (tmp_path / "pyproject.toml").write_text("[tool.md2latex]\njoined = 'x'\n", encoding="utf-8")
        assert find_config_in_parents(tmp_path) == (tmp_path / "pyproject.toml").resolve()

    def test_home_fallback(self, tmp_path: Path, isolated_home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """The home directory is searched last."""
        (isolated_home / ".md2latex.toml").write_text("", encoding="utf-8")
        monkeypatch.setattr("md2latex.cli.config.find_config_in_parents", lambda start_dir=None: None)
        assert discover_config_file(tmp_path) == isolated_home / ".md2latex.toml"

    def test_priority(self, tmp_path: Path) -> None:
        """An explicit path beats the environment variable."""
        explicit = tmp_path / "explicit.json"
        explicit.write_text('{"joined": "a"}', encoding="utf-8")
        env = tmp_path / "env.json"
        env.write_text('{"joined": "b"}', encoding="utf-8")

        assert load_config_with_priority(str(explicit), str(env)) == ({"joined": "a"}, explicit)
        assert load_config_with_priority(None, str(env)) == ({"joined": "b"}, env)

    def test_nothing_found(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without any file the configuration is empty."""
        monkeypatch.setattr("md2latex.cli.config.discover_config_file", lambda: None)
        assert load_config_with_priority() == ({}, None)


@pytest.mark.unit
@pytest.mark.cli
class TestMergeConfigs:
    """Test configuration merging."""

    def test_nested_merge(self) -> None:
        """Nested tables merge; scalars are replaced."""
        base = {"latex": {"toc": True, "author": "A"}, "joined": "x"}
        override = {"latex": {"author": "B"}, "root_dir": "r"}
        assert merge_configs(base, override) == {
            "latex": {"toc": True, "author": "B"},
            "joined": "x",
            "root_dir": "r",
        }
        assert base["latex"]["author"] == "A"
