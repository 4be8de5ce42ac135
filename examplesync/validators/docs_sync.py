"""Documentation sync: generated pages exist and are listed in the summary."""

from __future__ import annotations

from examplesync.docs import SummaryIndex

from .base import CheckResult, ValidationContext


class DocumentationSyncCheck:
    """Warns when docs pages are missing or absent from the table of contents."""

    name = "docs"

    def run(self, context: ValidationContext) -> CheckResult:
        result = CheckResult()
        layout = context.layout
        manifest = context.manifest

        for doc in manifest.docs.values():
            if not layout.resolve(doc.output_path).is_file():
                result.warnings.append(f"Missing doc file: {doc.output_path}")

        summary_file = layout.resolve(layout.summary_path)
        if not summary_file.is_file():
            result.warnings.append(f"Table of contents not found: {layout.summary_path}")
            return result

        summary = SummaryIndex.load(summary_file)
        for doc in manifest.docs.values():
            if not summary.references(doc.output_path, layout.root):
                result.warnings.append(
                    f"Not in table of contents: {doc.title or doc.output_path} ({doc.output_path})"
                )
        return result
