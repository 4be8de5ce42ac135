"""Referential integrity: every path the manifest names must exist."""

from __future__ import annotations

from ..categories import classify
from .base import CheckResult, ValidationContext


class ReferentialIntegrityCheck:
    """Flags example and category paths that no longer resolve on disk."""

    name = "integrity"

    def run(self, context: ValidationContext) -> CheckResult:
        result = CheckResult()
        layout = context.layout
        manifest = context.manifest

        for key, entry in manifest.examples.items():
            if not layout.resolve(entry.source_path).is_file():
                result.errors.append(f"Missing source: {entry.source_path} ({key})")
            if not layout.resolve(entry.companion_path).is_file():
                result.errors.append(f"Missing companion: {entry.companion_path} ({key})")
            if entry.fixture_path and not layout.resolve(entry.fixture_path).is_file():
                result.errors.append(f"Missing fixture: {entry.fixture_path} ({key})")

        tracked = {entry.source_path for entry in manifest.examples.values()}
        for category_id, category in manifest.categories.items():
            for member in category.members:
                if not layout.resolve(member.path).is_file():
                    result.errors.append(f"Invalid category path: {member.path} ({category_id})")
                if member.test and not layout.resolve(member.test).is_file():
                    result.errors.append(f"Invalid category test path: {member.test} ({category_id})")
                if member.path not in tracked:
                    result.warnings.append(
                        f"Category member not tracked as an example: {member.path} ({category_id})"
                    )
                if classify(member.path, layout.source_dir) != category_id:
                    result.warnings.append(
                        f"Category member filed under the wrong category: {member.path} ({category_id})"
                    )
        return result
