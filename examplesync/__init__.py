"""Keeps example sources, companion tests, the examples manifest and docs in sync."""

from .models import Category, CategoryMember, Diagnostic, DocsEntry, ExampleEntry, Manifest
from .naming import derive_key, derive_title
from .reconciler import ScanReport, ScanResult, reconcile

__all__ = [
    "Category",
    "CategoryMember",
    "Diagnostic",
    "DocsEntry",
    "ExampleEntry",
    "Manifest",
    "ScanReport",
    "ScanResult",
    "derive_key",
    "derive_title",
    "reconcile",
]
