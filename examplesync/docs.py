"""GitBook page rendering and SUMMARY.md maintenance for manifest entries."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Iterable, List, Optional, Set

from jinja2 import Environment, FileSystemLoader

from .config import ProjectLayout
from .logging import get_logger
from .models import Diagnostic, DocsEntry, ExampleEntry, Manifest

_LINK_PATTERN = re.compile(r"\[[^\]]*\]\(([^)\s]+)\)")
_BLOCK_COMMENT_PATTERN = re.compile(r"/\*\*\s*\n\s*\*\s*(.+?)\s*\n")
_NOTICE_PATTERN = re.compile(r"@notice\s+(.+)")

_LANGUAGES = {
    ".sol": "solidity",
    ".ts": "typescript",
    ".js": "javascript",
    ".py": "python",
    ".rs": "rust",
}

PAGE_TEMPLATE = "example.md.j2"

logger = get_logger("docs")


class SummaryIndex:
    """In-memory view of the docs table of contents."""

    def __init__(self, path: Path, text: str) -> None:
        self.path = path
        self.text = text

    @classmethod
    def load(cls, path: Path) -> "SummaryIndex":
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            text = ""
        return cls(path, text)

    def linked_targets(self) -> Set[str]:
        targets: Set[str] = set()
        for match in _LINK_PATTERN.finditer(self.text):
            target = match.group(1).split("#", 1)[0]
            if target.startswith("./"):
                target = target[2:]
            if target:
                targets.add(target)
        return targets

    def target_for(self, output_file: Path) -> str:
        """Link target for ``output_file`` relative to the summary's directory."""
        return Path(os.path.relpath(output_file, self.path.parent)).as_posix()

    def references(self, output_path: str, root: Path) -> bool:
        return self.target_for(root / output_path) in self.linked_targets()

    def add(self, title: str, output_path: str, category: str, root: Path) -> bool:
        """Link ``output_path`` under ``## category``; returns False if already linked."""
        target = self.target_for(root / output_path)
        if target in self.linked_targets():
            return False

        link = f"- [{title}]({target})"
        heading = f"## {category}"
        lines = self.text.splitlines()
        if not lines:
            lines = ["# Summary"]

        heading_index = next(
            (index for index, line in enumerate(lines) if line.strip() == heading), None
        )
        if heading_index is None:
            body = "\n".join(lines).rstrip()
            self.text = f"{body}\n\n{heading}\n\n{link}\n"
            return True

        index = heading_index + 1
        while index < len(lines) and not lines[index].strip():
            index += 1
        if index < len(lines) and not lines[index].startswith("#"):
            while index < len(lines) and lines[index].strip() and not lines[index].startswith("#"):
                index += 1
            lines.insert(index, link)
        else:
            lines[heading_index + 1:heading_index + 1] = ["", link]
        self.text = "\n".join(lines).rstrip() + "\n"
        return True

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(self.text, encoding="utf-8")


@dataclass
class DocsResult:
    """Pages written by a docs run plus per-item failures."""

    written: List[str] = field(default_factory=list)
    summary_updated: bool = False
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return any(diag.level == "error" for diag in self.diagnostics)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "written": list(self.written),
            "summary_updated": self.summary_updated,
            "diagnostics": [diag.to_dict() for diag in self.diagnostics],
        }


class DocsGenerator:
    """Renders one GitBook page per example from a Jinja2 template."""

    def __init__(self, layout: ProjectLayout) -> None:
        self.layout = layout
        self._env = self._create_env(layout.templates_dir)

    def render_page(self, entry: ExampleEntry, docs_entry: DocsEntry) -> str:
        layout = self.layout
        source = layout.resolve(entry.source_path).read_text(encoding="utf-8")
        companion = layout.resolve(entry.companion_path).read_text(encoding="utf-8")
        source_name = PurePosixPath(entry.source_path).name

        description = (
            docs_entry.description.strip()
            or entry.description.strip()
            or extract_description(source)
        )
        tabs = [
            {
                "title": source_name,
                "language": _language_for(source_name),
                "content": source.rstrip("\n"),
            },
            {
                "title": PurePosixPath(entry.companion_path).name,
                "language": _language_for(entry.companion_path),
                "content": companion.rstrip("\n"),
            },
        ]
        template = self._env.get_template(PAGE_TEMPLATE)
        rendered = template.render(
            description=description,
            title=docs_entry.title,
            source_dir=layout.source_dir,
            source_suffix=layout.source_suffix,
            test_dir=layout.test_dir,
            test_suffix=layout.test_suffix,
            tabs=tabs,
        )
        return rendered.rstrip() + "\n"

    def generate(self, manifest: Manifest, keys: Optional[Iterable[str]] = None) -> DocsResult:
        """Write pages for ``keys`` (every documented example by default) and update the summary."""
        layout = self.layout
        result = DocsResult()
        summary = SummaryIndex.load(layout.resolve(layout.summary_path))

        selected = list(keys) if keys is not None else [
            key for key in manifest.examples if key in manifest.docs
        ]
        for key in selected:
            entry = manifest.examples.get(key)
            docs_entry = manifest.docs.get(key)
            if entry is None:
                self._fail(result, "unknown-example", f"Unknown example: {key}", key=key)
                continue
            if docs_entry is None:
                self._fail(result, "missing-docs-entry", f"No docs entry for {key}", key=key)
                continue
            try:
                page = self.render_page(entry, docs_entry)
            except FileNotFoundError as exc:
                missing = Path(exc.filename).as_posix() if exc.filename else str(exc)
                self._fail(result, "missing-file", f"File not found for {key}: {missing}", key=key)
                continue
            except UnicodeDecodeError as exc:
                self._fail(result, "unreadable-file", f"Cannot decode files for {key}: {exc}", key=key)
                continue

            output = layout.resolve(docs_entry.output_path)
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(page, encoding="utf-8")
            result.written.append(docs_entry.output_path)
            logger.info("Documentation generated: %s", docs_entry.output_path)

            if summary.add(
                docs_entry.title or key,
                docs_entry.output_path,
                docs_entry.category_display_name or "Other",
                layout.root,
            ):
                result.summary_updated = True

        if result.summary_updated:
            summary.save()
            logger.info("Updated %s", layout.summary_path)
        return result

    @staticmethod
    def _fail(result: DocsResult, code: str, message: str, *, key: str) -> None:
        result.diagnostics.append(Diagnostic(level="error", code=code, message=message, key=key))
        logger.error(message)

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(Path(__file__).with_name("templates")))
        env = Environment(
            loader=FileSystemLoader(directories),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # GitBook tags share Jinja's block syntax, so templates emit them via a helper.
        env.globals["tag"] = lambda body: "{% " + body + " %}"
        return env


def extract_description(content: str) -> str:
    """First line of the leading ``/** ... */`` block, else the first ``@notice``."""
    comment = _BLOCK_COMMENT_PATTERN.search(content)
    if comment:
        return comment.group(1)
    notice = _NOTICE_PATTERN.search(content)
    return notice.group(1).strip() if notice else ""


def _language_for(path: str) -> str:
    return _LANGUAGES.get(PurePosixPath(path).suffix.lower(), "")


__all__ = ["DocsGenerator", "DocsResult", "SummaryIndex", "extract_description"]
