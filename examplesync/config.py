"""Configuration loading for examplesync (.examplesync.yml)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Pattern, Sequence

import yaml

CONFIG_FILENAME = ".examplesync.yml"

DEFAULT_DEFINITION_PATTERN = r"^\s*contract\s+(\w+)(?:\s+is\s+|\s*\{)"

DEFAULT_EXCLUDED_DIRS = (
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "__pycache__",
    "artifacts",
    "cache",
    "typechain-types",
)


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class SourcesConfig:
    """Where source definitions live and how their type names are declared."""

    dir: str = "contracts"
    suffix: str = ".sol"
    definition_pattern: str = DEFAULT_DEFINITION_PATTERN


@dataclass
class TestsConfig:
    """Where companion test files live."""

    __test__ = False

    dir: str = "test"
    suffix: str = ".ts"


@dataclass
class DocsConfig:
    """Generated documentation locations."""

    dir: str = "docs"
    summary: str = "docs/SUMMARY.md"
    templates_dir: Optional[str] = None


@dataclass
class HygieneConfig:
    """Source hygiene heuristics."""

    license_marker: str = "SPDX-License-Identifier"


@dataclass
class ExampleSyncConfig:
    """Represents the settings defined in .examplesync.yml."""

    root: Path
    manifest: str = "examples-config.json"
    sources: SourcesConfig = field(default_factory=SourcesConfig)
    tests: TestsConfig = field(default_factory=TestsConfig)
    docs: DocsConfig = field(default_factory=DocsConfig)
    hygiene: HygieneConfig = field(default_factory=HygieneConfig)
    exclude_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDED_DIRS))


@dataclass(frozen=True)
class ProjectLayout:
    """Resolved project paths shared by discovery, reconciliation and validation.

    Manifest paths are POSIX strings relative to ``root``; ``resolve`` and
    ``relative`` convert between the two forms.
    """

    root: Path
    manifest_path: Path
    source_dir: str = "contracts"
    source_suffix: str = ".sol"
    test_dir: str = "test"
    test_suffix: str = ".ts"
    docs_dir: str = "docs"
    summary_path: str = "docs/SUMMARY.md"
    license_marker: str = "SPDX-License-Identifier"
    definition_pattern: Pattern[str] = field(
        default_factory=lambda: re.compile(DEFAULT_DEFINITION_PATTERN, re.MULTILINE)
    )
    exclude_dirs: frozenset[str] = frozenset(DEFAULT_EXCLUDED_DIRS)
    templates_dir: Optional[Path] = None

    @classmethod
    def from_config(cls, config: ExampleSyncConfig) -> "ProjectLayout":
        try:
            pattern = re.compile(config.sources.definition_pattern, re.MULTILINE)
        except re.error as exc:
            raise ConfigError(f"Invalid sources.definition_pattern: {exc}") from exc
        if pattern.groups < 1:
            raise ConfigError("sources.definition_pattern must capture the type name")
        return cls(
            root=config.root,
            manifest_path=config.root / config.manifest,
            source_dir=_normalise_dir(config.sources.dir),
            source_suffix=config.sources.suffix,
            test_dir=_normalise_dir(config.tests.dir),
            test_suffix=config.tests.suffix,
            docs_dir=_normalise_dir(config.docs.dir),
            summary_path=_normalise_dir(config.docs.summary),
            license_marker=config.hygiene.license_marker,
            definition_pattern=pattern,
            exclude_dirs=frozenset(config.exclude_dirs),
            templates_dir=config.root / config.docs.templates_dir if config.docs.templates_dir else None,
        )

    @property
    def source_root(self) -> Path:
        return self.root / self.source_dir

    @property
    def test_root(self) -> Path:
        return self.root / self.test_dir

    def resolve(self, relative: str) -> Path:
        return self.root / relative

    def relative(self, path: Path) -> str:
        return path.relative_to(self.root).as_posix()


def load_config(config_path: Path) -> ExampleSyncConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ExampleSyncConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = ExampleSyncConfig(root=root)

    manifest = _as_str(data.get("manifest"))
    if manifest:
        config.manifest = manifest

    sources_data = _as_dict(data.get("sources"))
    if sources_data:
        config.sources = SourcesConfig(
            dir=_as_str(sources_data.get("dir")) or SourcesConfig.dir,
            suffix=_as_suffix(sources_data.get("suffix")) or SourcesConfig.suffix,
            definition_pattern=_as_str(sources_data.get("definition_pattern"))
            or DEFAULT_DEFINITION_PATTERN,
        )

    tests_data = _as_dict(data.get("tests"))
    if tests_data:
        config.tests = TestsConfig(
            dir=_as_str(tests_data.get("dir")) or TestsConfig.dir,
            suffix=_as_suffix(tests_data.get("suffix")) or TestsConfig.suffix,
        )

    docs_data = _as_dict(data.get("docs"))
    if docs_data:
        docs_dir = _as_str(docs_data.get("dir")) or DocsConfig.dir
        summary = _as_str(docs_data.get("summary")) or f"{docs_dir.rstrip('/')}/SUMMARY.md"
        config.docs = DocsConfig(
            dir=docs_dir,
            summary=summary,
            templates_dir=_as_str(docs_data.get("templates_dir")),
        )

    hygiene_data = _as_dict(data.get("hygiene"))
    if hygiene_data:
        marker = _as_str(hygiene_data.get("license_marker"))
        if marker:
            config.hygiene = HygieneConfig(license_marker=marker)

    if "exclude_dirs" in data:
        config.exclude_dirs = _as_str_list(data.get("exclude_dirs"))

    return config


def load_layout(path: Path) -> ProjectLayout:
    """Load configuration for ``path`` and resolve it into a layout."""
    return ProjectLayout.from_config(load_config(path))


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigError(f"{path.name} is not valid UTF-8: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _normalise_dir(value: str) -> str:
    return value.strip().strip("/").replace("\\", "/")


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_suffix(value: Any) -> Optional[str]:
    text = _as_str(value)
    if not text:
        return None
    return text if text.startswith(".") else f".{text}"


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []
