"""Tests for examplesync.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from examplesync.config import (
    ConfigError,
    DEFAULT_EXCLUDED_DIRS,
    ExampleSyncConfig,
    ProjectLayout,
    load_config,
    load_layout,
)


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, ExampleSyncConfig)
    assert config.root == tmp_path.resolve()
    assert config.manifest == "examples-config.json"
    assert config.sources.dir == "contracts"
    assert config.sources.suffix == ".sol"
    assert config.tests.dir == "test"
    assert config.tests.suffix == ".ts"
    assert config.docs.summary == "docs/SUMMARY.md"
    assert config.exclude_dirs == list(DEFAULT_EXCLUDED_DIRS)


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    (tmp_path / ".examplesync.yml").write_text(
        """
manifest: "registry.json"
sources:
  dir: "src/"
  suffix: "vy"
  definition_pattern: '^\\s*# @title\\s+(\\w+)'
tests:
  dir: "tests"
  suffix: ".py"
docs:
  dir: "book"
  templates_dir: "book/templates"
hygiene:
  license_marker: "License:"
exclude_dirs:
  - ".git"
  - "build"
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path / ".examplesync.yml")
    layout = ProjectLayout.from_config(config)

    assert layout.manifest_path == tmp_path.resolve() / "registry.json"
    assert layout.source_dir == "src"
    assert layout.source_suffix == ".vy"
    assert layout.definition_pattern.pattern == r"^\s*# @title\s+(\w+)"
    assert layout.test_dir == "tests"
    assert layout.test_suffix == ".py"
    assert layout.docs_dir == "book"
    assert layout.summary_path == "book/SUMMARY.md"
    assert layout.templates_dir == tmp_path.resolve() / "book" / "templates"
    assert layout.license_marker == "License:"
    assert layout.exclude_dirs == frozenset({".git", "build"})


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".examplesync.yml").write_text("sources: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_undecodable_file(tmp_path: Path) -> None:
    (tmp_path / ".examplesync.yml").write_bytes(b"sources:\n  dir: \xff\n")
    with pytest.raises(ConfigError, match="not valid UTF-8"):
        load_config(tmp_path)


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".examplesync.yml").write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_definition_pattern_must_capture(tmp_path: Path) -> None:
    (tmp_path / ".examplesync.yml").write_text(
        "sources:\n  definition_pattern: 'contract \\w+'\n", encoding="utf-8"
    )
    with pytest.raises(ConfigError, match="capture"):
        load_layout(tmp_path)


def test_layout_converts_paths(tmp_path: Path) -> None:
    layout = ProjectLayout(root=tmp_path, manifest_path=tmp_path / "examples-config.json")
    assert layout.resolve("contracts/A.sol") == tmp_path / "contracts" / "A.sol"
    assert layout.relative(tmp_path / "test" / "A.ts") == "test/A.ts"
    assert layout.source_root == tmp_path / "contracts"
    assert layout.test_root == tmp_path / "test"
