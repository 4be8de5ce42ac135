"""Default documentation descriptors for newly discovered examples."""

from __future__ import annotations

from .categories import classify
from .config import ProjectLayout
from .models import DocsEntry
from .naming import category_display_name, derive_title

FALLBACK_CATEGORY = "Other"


def docs_output_path(key: str, docs_dir: str) -> str:
    return f"{docs_dir}/{key}.md"


def synthesize_docs_entry(
    key: str, type_name: str, source_path: str, layout: ProjectLayout
) -> DocsEntry:
    """Build the docs descriptor scan writes for an example that has none."""
    category = classify(source_path, layout.source_dir)
    return DocsEntry(
        title=derive_title(type_name),
        description=f"Documentation for {type_name}",
        output_path=docs_output_path(key, layout.docs_dir),
        category_display_name=category_display_name(category) if category else FALLBACK_CATEGORY,
    )


__all__ = ["FALLBACK_CATEGORY", "docs_output_path", "synthesize_docs_entry"]
