"""Manifest completeness: descriptions, category metadata and docs coverage."""

from __future__ import annotations

from .base import CheckResult, ValidationContext


class CompletenessCheck:
    """Warns about human-authored fields left blank and examples/docs drift."""

    name = "completeness"

    def run(self, context: ValidationContext) -> CheckResult:
        result = CheckResult()
        manifest = context.manifest

        for key, entry in manifest.examples.items():
            if entry.needs_description:
                result.warnings.append(f"Missing description: {key}")

        for category_id, category in manifest.categories.items():
            if category.needs_info:
                result.warnings.append(f"Category needs name/description: {category_id}")

        example_keys = set(manifest.examples)
        doc_keys = set(manifest.docs)
        for key in manifest.docs:
            if key not in example_keys:
                result.warnings.append(f"Orphaned docs entry: {key}")
        for key in manifest.examples:
            if key not in doc_keys:
                result.warnings.append(f"Missing docs entry: {key}")
        return result
