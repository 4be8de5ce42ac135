"""Core data models shared across examplesync components."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ExampleEntry:
    """One tracked source/companion file pair."""

    source_path: str
    companion_path: str
    description: str = ""
    fixture_path: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)
    field_order: List[str] = field(default_factory=list, compare=False, repr=False)

    @property
    def needs_description(self) -> bool:
        return not self.description.strip()

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "contract": self.source_path,
            "test": self.companion_path,
            "description": self.description,
        }
        if self.fixture_path:
            payload["testFixture"] = self.fixture_path
        payload.update(self.extra)
        return _in_order(payload, self.field_order)


@dataclass
class CategoryMember:
    """Paths of one example bundled into a category."""

    path: str
    test: str
    fixture: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)
    field_order: List[str] = field(default_factory=list, compare=False, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"path": self.path, "test": self.test}
        if self.fixture:
            payload["fixture"] = self.fixture
        payload.update(self.extra)
        return _in_order(payload, self.field_order)


@dataclass
class Category:
    """Group of examples sharing the first directory under the source root."""

    display_name: str = ""
    description: str = ""
    members: List[CategoryMember] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)
    field_order: List[str] = field(default_factory=list, compare=False, repr=False)

    @property
    def needs_info(self) -> bool:
        return not self.display_name.strip() or not self.description.strip()

    def has_member(self, path: str) -> bool:
        return any(member.path == path for member in self.members)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.display_name,
            "description": self.description,
            "contracts": [member.to_dict() for member in self.members],
        }
        payload.update(self.extra)
        return _in_order(payload, self.field_order)


@dataclass
class DocsEntry:
    """Descriptor for one generated documentation page."""

    title: str
    description: str
    output_path: str
    category_display_name: str
    extra: Dict[str, Any] = field(default_factory=dict)
    field_order: List[str] = field(default_factory=list, compare=False, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "output": self.output_path,
            "category": self.category_display_name,
        }
        payload.update(self.extra)
        return _in_order(payload, self.field_order)


@dataclass
class Manifest:
    """Root aggregate persisted as the examples manifest."""

    examples: Dict[str, ExampleEntry] = field(default_factory=dict)
    categories: Dict[str, Category] = field(default_factory=dict)
    docs: Dict[str, DocsEntry] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)
    field_order: List[str] = field(default_factory=list, compare=False, repr=False)

    def copy(self) -> "Manifest":
        return copy.deepcopy(self)

    def key_for_source(self, source_path: str) -> Optional[str]:
        for key, entry in self.examples.items():
            if entry.source_path == source_path:
                return key
        return None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "examples": {key: entry.to_dict() for key, entry in self.examples.items()},
            "categories": {key: cat.to_dict() for key, cat in self.categories.items()},
            "docs": {key: doc.to_dict() for key, doc in self.docs.items()},
        }
        payload.update(self.extra)
        return _in_order(payload, self.field_order)


@dataclass
class Diagnostic:
    """Structured per-item finding emitted by scan and docs runs."""

    level: str
    code: str
    message: str
    path: Optional[str] = None
    key: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "code": self.code,
            "message": self.message,
            "path": self.path,
            "key": self.key,
        }


def _in_order(payload: Dict[str, Any], order: List[str]) -> Dict[str, Any]:
    """Reorder ``payload`` to follow ``order``; keys it does not name go last."""
    if not order:
        return payload
    ordered = {key: payload[key] for key in order if key in payload}
    for key, value in payload.items():
        ordered.setdefault(key, value)
    return ordered
