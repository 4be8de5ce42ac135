"""Pipeline orchestration for scan/validate/docs runs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .config import ProjectLayout, load_layout
from .docs import DocsGenerator, DocsResult
from .logging import get_logger
from .manifest_store import dump_manifest, load_manifest, save_manifest
from .models import Manifest
from .reconciler import ScanReport, reconcile
from .validators import (
    Check,
    ValidationContext,
    ValidationReport,
    default_checks,
    run_checks,
    select_checks,
)


@dataclass
class ScanOutcome:
    """Result of a scan run."""

    manifest_path: Path
    manifest: Manifest
    report: ScanReport
    written: bool
    dry_run: bool

    def to_dict(self) -> Dict[str, Any]:
        payload = self.report.to_dict()
        payload["manifest"] = str(self.manifest_path)
        payload["written"] = self.written
        payload["dry_run"] = self.dry_run
        return payload


class Orchestrator:
    """Loads configuration and manifest fresh for every run and wires the engines together."""

    def __init__(self, checks: Optional[Iterable[Check]] = None) -> None:
        self._checks = list(checks) if checks is not None else None
        self.logger = get_logger("orchestrator")

    def run_scan(self, path: str, *, dry_run: bool = False) -> ScanOutcome:
        """Reconcile the manifest with the files on disk and persist it once at the end."""
        layout = self._load_layout(path)
        self.logger.info("Scanning %s for sources", layout.source_root)

        manifest_path = layout.manifest_path
        manifest = load_manifest(manifest_path)
        previous = manifest_path.read_bytes() if manifest_path.is_file() else None

        result = reconcile(manifest, layout)
        self.logger.debug(
            "Scan found %d sources: %d new, %d updated, %d without companion",
            result.report.total_sources,
            result.report.new_count,
            result.report.updated_count,
            result.report.missing_companion_count,
        )

        serialized = dump_manifest(result.manifest).encode("utf-8")
        written = False
        if serialized != previous and not dry_run:
            save_manifest(result.manifest, manifest_path)
            written = True
            self.logger.info("Manifest written to %s", manifest_path)
        elif dry_run:
            self.logger.info("Dry run: manifest not written")

        return ScanOutcome(
            manifest_path=manifest_path,
            manifest=result.manifest,
            report=result.report,
            written=written,
            dry_run=dry_run,
        )

    def run_validate(self, path: str, *, checks: Sequence[str] = ()) -> ValidationReport:
        """Run the consistency checks; never writes anything."""
        layout = self._load_layout(path)
        manifest = load_manifest(layout.manifest_path)
        selected = select_checks(self._available_checks(), checks)
        self.logger.debug("Running checks: %s", ", ".join(check.name for check in selected))
        report = run_checks(ValidationContext(manifest=manifest, layout=layout), selected)
        self.logger.info(
            "Validation finished with %d error(s) and %d warning(s)",
            len(report.errors),
            len(report.warnings),
        )
        return report

    def run_docs(self, path: str, *, keys: Optional[Sequence[str]] = None) -> DocsResult:
        """Render documentation pages for ``keys`` (all documented examples when empty)."""
        layout = self._load_layout(path)
        manifest = load_manifest(layout.manifest_path)
        selected: Optional[List[str]] = list(keys) if keys else None
        return DocsGenerator(layout).generate(manifest, selected)

    def _available_checks(self) -> List[Check]:
        return list(self._checks) if self._checks is not None else default_checks()

    @staticmethod
    def _load_layout(path: str) -> ProjectLayout:
        root = Path(path).expanduser().resolve()
        if not root.exists():
            raise FileNotFoundError(f"Project path not found: {path}")
        if not root.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {path}")
        return load_layout(root)


__all__ = ["Orchestrator", "ScanOutcome"]
