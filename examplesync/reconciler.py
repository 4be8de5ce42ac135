"""Merge discovered source/companion pairs into the examples manifest."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .categories import categories_needing_info, classify
from .config import ProjectLayout
from .discovery import extract_type_name, iter_source_files
from .docs_config import synthesize_docs_entry
from .logging import get_logger
from .matcher import find_companion, find_fixture
from .models import Category, CategoryMember, Diagnostic, ExampleEntry, Manifest
from .naming import derive_key

logger = get_logger("reconciler")


@dataclass
class ScanReport:
    """Outcome of one reconciliation pass."""

    total_sources: int = 0
    new_keys: List[str] = field(default_factory=list)
    updated_keys: List[str] = field(default_factory=list)
    missing_companions: List[str] = field(default_factory=list)
    needs_description: List[str] = field(default_factory=list)
    categories_needing_info: List[str] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def new_count(self) -> int:
        return len(self.new_keys)

    @property
    def updated_count(self) -> int:
        return len(self.updated_keys)

    @property
    def missing_companion_count(self) -> int:
        return len(self.missing_companions)

    def by_code(self, code: str) -> List[Diagnostic]:
        return [diag for diag in self.diagnostics if diag.code == code]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "counts": {
                "total": self.total_sources,
                "new": self.new_count,
                "updated": self.updated_count,
                "missing_companion": self.missing_companion_count,
            },
            "new": list(self.new_keys),
            "updated": list(self.updated_keys),
            "missing_companion": list(self.missing_companions),
            "needs_description": list(self.needs_description),
            "categories_needing_info": list(self.categories_needing_info),
            "diagnostics": [diag.to_dict() for diag in self.diagnostics],
        }


@dataclass
class ScanResult:
    """Updated manifest plus the report describing how it was produced."""

    manifest: Manifest
    report: ScanReport


def reconcile(
    manifest: Manifest,
    layout: ProjectLayout,
    sources: Optional[Iterable[Path]] = None,
) -> ScanResult:
    """Return an updated copy of ``manifest`` reflecting the files on disk.

    ``manifest`` itself is never modified. Entries whose files disappeared
    are kept; reporting them is left to validation.
    """
    working = manifest.copy()
    report = ScanReport()
    claimed: Dict[str, str] = {}

    if sources is None:
        sources = iter_source_files(layout.source_root, layout.source_suffix, layout.exclude_dirs)

    for path in sources:
        report.total_sources += 1
        source_path = layout.relative(path)

        type_name = extract_type_name(path, layout.definition_pattern)
        if not type_name:
            _emit(report, "warning", "no-type-name",
                  f"Could not extract type name from {source_path}", path=source_path)
            continue

        key = derive_key(type_name)
        companion = find_companion(source_path, type_name, layout)
        if companion is None:
            report.missing_companions.append(source_path)
            _emit(report, "error", "missing-companion",
                  f"No companion found for {type_name} ({source_path})", path=source_path, key=key)
            continue
        fixture = find_fixture(companion, layout)

        owner = working.key_for_source(source_path)
        if owner is not None and owner != key:
            _emit(report, "warning", "path-conflict",
                  f"{source_path} is already tracked as '{owner}', skipping '{key}'",
                  path=source_path, key=key)
            continue

        if key in claimed and claimed[key] != source_path:
            _emit(report, "warning", "key-conflict",
                  f"Key '{key}' from {source_path} was already claimed by {claimed[key]}",
                  path=source_path, key=key)
            continue

        entry = working.examples.get(key)
        if entry is None:
            entry = _add_entry(working, report, key, type_name, source_path, companion, fixture, layout)
        else:
            if entry.source_path != source_path and layout.resolve(entry.source_path).is_file():
                _emit(report, "warning", "key-conflict",
                      f"Key '{key}' from {source_path} is already used by {entry.source_path}",
                      path=source_path, key=key)
                continue
            if _repair_paths(working, entry, source_path, companion, fixture, layout.source_dir):
                report.updated_keys.append(key)
                logger.info("Updated: %s", key)

        claimed[key] = source_path
        if entry.needs_description:
            report.needs_description.append(key)

    report.categories_needing_info = categories_needing_info(working)
    return ScanResult(manifest=working, report=report)


def _add_entry(
    manifest: Manifest,
    report: ScanReport,
    key: str,
    type_name: str,
    source_path: str,
    companion: str,
    fixture: Optional[str],
    layout: ProjectLayout,
) -> ExampleEntry:
    entry = ExampleEntry(
        source_path=source_path,
        companion_path=companion,
        description="",
        fixture_path=fixture,
    )
    manifest.examples[key] = entry
    report.new_keys.append(key)
    logger.info("Added: %s", key)

    category_id = classify(source_path, layout.source_dir)
    if category_id:
        _add_member(
            manifest, category_id, CategoryMember(path=source_path, test=companion, fixture=fixture)
        )

    if key not in manifest.docs:
        manifest.docs[key] = synthesize_docs_entry(key, type_name, source_path, layout)
        logger.info("  generated docs config")
    return entry


def _add_member(manifest: Manifest, category_id: str, member: CategoryMember) -> None:
    category = manifest.categories.get(category_id)
    if category is None:
        category = Category()
        manifest.categories[category_id] = category
        logger.info("  created category: %s", category_id)
    if not category.has_member(member.path):
        category.members.append(member)
        logger.info("  added to category: %s", category_id)


def _repair_paths(
    manifest: Manifest,
    entry: ExampleEntry,
    source_path: str,
    companion: str,
    fixture: Optional[str],
    source_dir: str,
) -> bool:
    previous_source = entry.source_path
    changed = False
    if entry.source_path != source_path:
        entry.source_path = source_path
        changed = True
    if entry.companion_path != companion:
        entry.companion_path = companion
        changed = True
    # A fixture that vanished is left in place for validation to flag.
    if fixture and entry.fixture_path != fixture:
        entry.fixture_path = fixture
        changed = True

    if changed:
        _move_members(manifest, previous_source, source_path, companion, fixture, source_dir)
    return changed


def _move_members(
    manifest: Manifest,
    previous_source: str,
    source_path: str,
    companion: str,
    fixture: Optional[str],
    source_dir: str,
) -> None:
    """Point members at the new paths and rehome them if the category folder changed."""
    target_id = classify(source_path, source_dir)
    displaced: List[CategoryMember] = []
    for category_id, category in manifest.categories.items():
        for member in list(category.members):
            if member.path != previous_source:
                continue
            member.path = source_path
            member.test = companion
            if fixture:
                member.fixture = fixture
            if category_id != target_id:
                category.members.remove(member)
                displaced.append(member)
                logger.info("  removed from category: %s", category_id)
    if target_id:
        for member in displaced:
            _add_member(manifest, target_id, member)


def _emit(
    report: ScanReport,
    level: str,
    code: str,
    message: str,
    *,
    path: Optional[str] = None,
    key: Optional[str] = None,
) -> None:
    report.diagnostics.append(Diagnostic(level=level, code=code, message=message, path=path, key=key))
    if level == "error":
        logger.error(message)
    else:
        logger.warning(message)


__all__ = ["ScanReport", "ScanResult", "reconcile"]
