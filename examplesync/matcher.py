"""Locate the companion test (and optional fixture) for a source file."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, List, Optional

from .config import ProjectLayout

FIXTURE_MARKER = ".fixture"


def conventional_candidates(source_path: str, type_name: str, layout: ProjectLayout) -> List[str]:
    """Return the conventional companion locations for ``source_path`` in check order."""
    candidates: List[str] = []
    prefix = f"{layout.source_dir}/"
    if source_path.startswith(prefix):
        mirrored = source_path[len(prefix):]
        stem = mirrored[: -len(layout.source_suffix)] if mirrored.endswith(layout.source_suffix) else mirrored
        candidates.append(f"{layout.test_dir}/{stem}{layout.test_suffix}")
    flat = f"{layout.test_dir}/{type_name}{layout.test_suffix}"
    if flat not in candidates:
        candidates.append(flat)
    return candidates


def search_companion(test_root: Path, filename: str, layout: ProjectLayout) -> Optional[Path]:
    """Depth-first search of ``test_root`` for ``filename``; first match wins.

    Each directory's own files are checked before its subdirectories, and
    subdirectories are visited in sorted order.
    """
    for path in _walk_files(test_root, layout):
        if path.name == filename:
            return path
    return None


def find_companion(source_path: str, type_name: str, layout: ProjectLayout) -> Optional[str]:
    """Return the companion path relative to the project root, or ``None``."""
    for candidate in conventional_candidates(source_path, type_name, layout):
        if layout.resolve(candidate).is_file():
            return candidate

    test_root = layout.test_root
    if not test_root.is_dir():
        return None
    found = search_companion(test_root, f"{type_name}{layout.test_suffix}", layout)
    return layout.relative(found) if found is not None else None


def fixture_path_for(companion_path: str, suffix: str) -> str:
    """``test/Foo.ts`` -> ``test/Foo.fixture.ts``."""
    base = companion_path[: -len(suffix)] if companion_path.endswith(suffix) else companion_path
    return f"{base}{FIXTURE_MARKER}{suffix}"


def find_fixture(companion_path: str, layout: ProjectLayout) -> Optional[str]:
    candidate = fixture_path_for(companion_path, layout.test_suffix)
    return candidate if layout.resolve(candidate).is_file() else None


def _walk_files(root: Path, layout: ProjectLayout) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        dirnames[:] = sorted(name for name in dirnames if name not in layout.exclude_dirs)
        current_dir = Path(dirpath)
        for filename in sorted(filenames):
            yield current_dir / filename


__all__ = [
    "conventional_candidates",
    "find_companion",
    "find_fixture",
    "fixture_path_for",
    "search_companion",
]
