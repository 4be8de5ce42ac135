"""Source discovery and type-name extraction."""

from __future__ import annotations

import os
from pathlib import Path
from typing import AbstractSet, Iterator, Optional, Pattern


def iter_source_files(
    root: Path,
    suffix: str,
    excluded_dirs: AbstractSet[str] = frozenset(),
) -> Iterator[Path]:
    """Yield files under ``root`` ending with ``suffix``.

    Directories are visited top-down in sorted order and symlinked
    directories are not followed, so the walk terminates and is repeatable.
    """
    if not root.exists():
        raise FileNotFoundError(f"Source directory not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Source path is not a directory: {root}")

    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        dirnames[:] = sorted(name for name in dirnames if name not in excluded_dirs)
        current_dir = Path(dirpath)
        for filename in sorted(filenames):
            if filename.endswith(suffix):
                yield current_dir / filename


def extract_type_name(path: Path, pattern: Pattern[str]) -> Optional[str]:
    """Return the first declared type name in ``path`` or ``None``."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    match = pattern.search(content)
    return match.group(1) if match else None


__all__ = ["extract_type_name", "iter_source_files"]
