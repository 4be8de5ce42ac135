"""Load, validate and atomically persist the examples manifest."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .logging import get_logger
from .models import Category, CategoryMember, DocsEntry, ExampleEntry, Manifest

_SECTIONS = ("examples", "categories", "docs")

logger = get_logger("manifest")


class ManifestError(RuntimeError):
    """Raised when the persisted manifest is present but malformed."""


def load_manifest(path: Path) -> Manifest:
    """Read the manifest at ``path``; a missing file yields an empty manifest."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.warning("%s not found, starting from an empty manifest", path.name)
        return Manifest()
    except UnicodeDecodeError as exc:
        raise ManifestError(f"{path.name} is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise ManifestError(f"Failed to read {path}: {exc}") from exc

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestError(
            f"{path.name} is not valid JSON (line {exc.lineno}, column {exc.colno}): {exc.msg}"
        ) from exc
    return parse_manifest(payload, source=path.name)


def parse_manifest(payload: Any, *, source: str = "manifest") -> Manifest:
    """Build a :class:`Manifest` from decoded JSON, rejecting unexpected shapes."""
    if not isinstance(payload, dict):
        raise ManifestError(f"{source} must contain an object at the root")

    sections: Dict[str, Dict[str, Any]] = {}
    for name in _SECTIONS:
        value = payload.get(name, {})
        if value is None:
            value = {}
        if not isinstance(value, dict):
            raise ManifestError(f"{source}: '{name}' must be an object")
        sections[name] = value

    manifest = Manifest(
        extra={k: v for k, v in payload.items() if k not in _SECTIONS},
        field_order=list(payload),
    )
    for key, raw in sections["examples"].items():
        manifest.examples[key] = _parse_example(key, raw, source)
    for key, raw in sections["categories"].items():
        manifest.categories[key] = _parse_category(key, raw, source)
    for key, raw in sections["docs"].items():
        manifest.docs[key] = _parse_docs(key, raw, source)
    return manifest


def dump_manifest(manifest: Manifest) -> str:
    """Canonical serialization used both for persistence and comparisons."""
    return json.dumps(manifest.to_dict(), indent=2, ensure_ascii=False) + "\n"


def save_manifest(manifest: Manifest, path: Path) -> None:
    """Write the manifest atomically; the previous file survives any failure."""
    data = dump_manifest(manifest)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_fd, tmp_path = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(tmp_fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.remove(tmp_path)
        except OSError:
            pass
        raise
    logger.debug("Wrote manifest to %s", path)


def _parse_example(key: str, raw: Any, source: str) -> ExampleEntry:
    data = _require_object(raw, f"{source}: examples.{key}")
    return ExampleEntry(
        source_path=_require_str(data, "contract", f"{source}: examples.{key}"),
        companion_path=_require_str(data, "test", f"{source}: examples.{key}"),
        fixture_path=_optional_str(data, "testFixture", f"{source}: examples.{key}"),
        description=_optional_str(data, "description", f"{source}: examples.{key}") or "",
        extra=_extras(data, ("contract", "test", "testFixture", "description")),
        field_order=list(data),
    )


def _parse_category(key: str, raw: Any, source: str) -> Category:
    where = f"{source}: categories.{key}"
    data = _require_object(raw, where)
    members_raw = data.get("contracts", [])
    if members_raw is None:
        members_raw = []
    if not isinstance(members_raw, list):
        raise ManifestError(f"{where}.contracts must be a list")
    members = []
    for index, item in enumerate(members_raw):
        member_where = f"{where}.contracts[{index}]"
        member = _require_object(item, member_where)
        members.append(
            CategoryMember(
                path=_require_str(member, "path", member_where),
                test=_optional_str(member, "test", member_where) or "",
                fixture=_optional_str(member, "fixture", member_where),
                extra=_extras(member, ("path", "test", "fixture")),
                field_order=list(member),
            )
        )
    return Category(
        display_name=_optional_str(data, "name", where) or "",
        description=_optional_str(data, "description", where) or "",
        members=members,
        extra=_extras(data, ("name", "description", "contracts")),
        field_order=list(data),
    )


def _parse_docs(key: str, raw: Any, source: str) -> DocsEntry:
    where = f"{source}: docs.{key}"
    data = _require_object(raw, where)
    return DocsEntry(
        title=_optional_str(data, "title", where) or "",
        description=_optional_str(data, "description", where) or "",
        output_path=_require_str(data, "output", where),
        category_display_name=_optional_str(data, "category", where) or "",
        extra=_extras(data, ("title", "description", "output", "category")),
        field_order=list(data),
    )


def _require_object(raw: Any, where: str) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise ManifestError(f"{where} must be an object")
    return raw


def _require_str(data: Mapping[str, Any], name: str, where: str) -> str:
    value = data.get(name)
    if not isinstance(value, str) or not value:
        raise ManifestError(f"{where}.{name} must be a non-empty string")
    return value


def _optional_str(data: Mapping[str, Any], name: str, where: str) -> Optional[str]:
    value = data.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ManifestError(f"{where}.{name} must be a string")
    return value


def _extras(data: Mapping[str, Any], known: tuple[str, ...]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k not in known}


__all__ = [
    "ManifestError",
    "dump_manifest",
    "load_manifest",
    "parse_manifest",
    "save_manifest",
]
