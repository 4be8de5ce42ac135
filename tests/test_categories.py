"""Tests for examplesync.categories and examplesync.docs_config."""

from __future__ import annotations

from examplesync.categories import categories_needing_info, classify
from examplesync.docs_config import synthesize_docs_entry
from examplesync.models import Category, Manifest

from tests._fixtures.project_builder import ProjectBuilder


def test_classify_returns_first_segment_below_source_dir() -> None:
    assert classify("contracts/basic/encrypt/Foo.sol", "contracts") == "basic"
    assert classify("contracts/wallets/Foo.sol", "contracts") == "wallets"


def test_classify_without_category_segment() -> None:
    assert classify("contracts/Foo.sol", "contracts") is None
    assert classify("other/basic/Foo.sol", "contracts") is None


def test_categories_needing_info_lists_blank_categories() -> None:
    manifest = Manifest(
        categories={
            "basic": Category(display_name="Basic", description="Starter examples"),
            "advanced": Category(display_name="Advanced", description="  "),
            "wallets": Category(),
        }
    )
    assert categories_needing_info(manifest) == ["advanced", "wallets"]


def test_synthesize_docs_entry(project_builder: ProjectBuilder) -> None:
    entry = synthesize_docs_entry(
        "fhe-counter", "FHECounter", "contracts/deep-dive/FHECounter.sol", project_builder.layout()
    )
    assert entry.title == "FHE Counter"
    assert entry.description == "Documentation for FHECounter"
    assert entry.output_path == "docs/fhe-counter.md"
    assert entry.category_display_name == "Deep Dive"


def test_synthesize_docs_entry_without_category(project_builder: ProjectBuilder) -> None:
    entry = synthesize_docs_entry("counter", "Counter", "contracts/Counter.sol", project_builder.layout())
    assert entry.category_display_name == "Other"
