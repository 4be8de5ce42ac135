"""Consistency checks run by ``examplesync validate``."""

from typing import List

from .base import (
    Check,
    CheckResult,
    ValidationContext,
    ValidationReport,
    run_checks,
    select_checks,
)
from .completeness import CompletenessCheck
from .docs_sync import DocumentationSyncCheck
from .hygiene import SourceHygieneCheck
from .integrity import ReferentialIntegrityCheck


def default_checks() -> List[Check]:
    return [
        ReferentialIntegrityCheck(),
        CompletenessCheck(),
        SourceHygieneCheck(),
        DocumentationSyncCheck(),
    ]


__all__ = [
    "Check",
    "CheckResult",
    "CompletenessCheck",
    "DocumentationSyncCheck",
    "ReferentialIntegrityCheck",
    "SourceHygieneCheck",
    "ValidationContext",
    "ValidationReport",
    "default_checks",
    "run_checks",
    "select_checks",
]
