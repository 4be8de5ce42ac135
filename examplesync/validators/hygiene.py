"""Best-effort source hygiene heuristics; findings are always warnings."""

from __future__ import annotations

from pathlib import PurePosixPath

from .base import CheckResult, ValidationContext


class SourceHygieneCheck:
    """Checks license headers and that each file declares a type named after it."""

    name = "hygiene"

    def run(self, context: ValidationContext) -> CheckResult:
        result = CheckResult()
        layout = context.layout

        for entry in context.manifest.examples.values():
            path = layout.resolve(entry.source_path)
            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError):
                # Unreadable or missing sources are reported by the integrity check.
                continue

            if layout.license_marker and layout.license_marker not in content:
                result.warnings.append(f"Missing license header: {entry.source_path}")

            file_name = PurePosixPath(entry.source_path).name
            stem = file_name[: -len(layout.source_suffix)] if file_name.endswith(layout.source_suffix) else file_name
            declared = [match.group(1) for match in layout.definition_pattern.finditer(content)]
            if not declared:
                result.warnings.append(f"No type declaration found: {entry.source_path}")
            elif stem not in declared:
                result.warnings.append(
                    f"Type name mismatch: {file_name} declares {', '.join(declared)}"
                )
        return result
