"""Category classification from source paths."""

from __future__ import annotations

from typing import List, Optional

from .models import Manifest


def classify(source_path: str, source_dir: str) -> Optional[str]:
    """Return the first directory below ``source_dir`` in ``source_path``.

    ``contracts/basic/encrypt/Foo.sol`` -> ``basic``. Files sitting directly
    in the source directory, or outside it, have no category.
    """
    prefix = f"{source_dir.strip('/')}/"
    if not source_path.startswith(prefix):
        return None
    segments = source_path[len(prefix):].split("/")
    if len(segments) < 2 or not segments[0]:
        return None
    return segments[0]


def categories_needing_info(manifest: Manifest) -> List[str]:
    """Category ids whose display name or description is still blank."""
    return [key for key, category in manifest.categories.items() if category.needs_info]


__all__ = ["categories_needing_info", "classify"]
