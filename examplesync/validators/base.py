"""Core validation data structures and the check runner."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence

from examplesync.config import ProjectLayout
from examplesync.models import Manifest


@dataclass
class CheckResult:
    """Errors block CI; warnings are advisory."""

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def extend(self, other: "CheckResult") -> None:
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)


@dataclass
class ValidationContext:
    """Read-only inputs shared by every check."""

    manifest: Manifest
    layout: ProjectLayout


class Check(Protocol):
    """Protocol implemented by consistency checks."""

    name: str

    def run(self, context: ValidationContext) -> CheckResult:
        """Inspect the context and return findings without side effects."""


@dataclass
class ValidationReport:
    """Aggregated results of a validation run, keyed by check name."""

    results: Dict[str, CheckResult] = field(default_factory=dict)

    @property
    def errors(self) -> List[str]:
        return [error for result in self.results.values() for error in result.errors]

    @property
    def warnings(self) -> List[str]:
        return [warning for result in self.results.values() for warning in result.warnings]

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": "passed" if self.ok else "failed",
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "checks": {
                name: {"errors": list(result.errors), "warnings": list(result.warnings)}
                for name, result in self.results.items()
            },
        }


def run_checks(
    context: ValidationContext, checks: Optional[Iterable[Check]] = None
) -> ValidationReport:
    """Run ``checks`` (all of them by default) and collect their results."""
    if checks is None:
        from . import default_checks

        checks = default_checks()
    report = ValidationReport()
    for check in checks:
        report.results[check.name] = check.run(context)
    return report


def select_checks(checks: Sequence[Check], names: Sequence[str]) -> List[Check]:
    """Filter ``checks`` down to ``names``; unknown names raise ``ValueError``."""
    if not names:
        return list(checks)
    available = {check.name: check for check in checks}
    unknown = [name for name in names if name not in available]
    if unknown:
        raise ValueError(
            f"Unknown check(s): {', '.join(unknown)}. Available: {', '.join(available)}"
        )
    return [available[name] for name in names]
