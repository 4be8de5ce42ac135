"""CLI entrypoints for examplesync commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Sequence

from .config import ConfigError
from .docs import DocsResult
from .logging import configure_logging
from .manifest_store import ManifestError
from .orchestrator import Orchestrator, ScanOutcome
from .validators import ValidationReport

CHECK_NAMES = ("integrity", "completeness", "hygiene", "docs")


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    _add_verbose_option(parser, suppress_default=True)
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print a machine-readable JSON report instead of the text summary.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="examplesync",
        description="Keep example sources, their tests, the examples manifest and docs in agreement.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan_parser = subparsers.add_parser(
        "scan",
        help="Discover sources and companions and update the examples manifest.",
    )
    _add_common_options(scan_parser)
    scan_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would change without writing the manifest.",
    )

    validate_parser = subparsers.add_parser(
        "validate",
        help="Check the manifest against the filesystem and generated docs.",
    )
    _add_common_options(validate_parser)
    validate_parser.add_argument(
        "--check",
        dest="checks",
        action="append",
        choices=CHECK_NAMES,
        default=[],
        help="Run only the named check (repeatable).",
    )

    docs_parser = subparsers.add_parser(
        "docs",
        help="Generate documentation pages and update the summary.",
    )
    _add_common_options(docs_parser)
    docs_parser.add_argument(
        "--key",
        dest="keys",
        action="append",
        default=[],
        help="Example key to document (repeatable, defaults to every documented example).",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for examplesync commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    orchestrator = Orchestrator()
    as_json = bool(getattr(args, "json", False))

    try:
        if args.command == "scan":
            outcome = orchestrator.run_scan(args.path, dry_run=bool(args.dry_run))
            _emit(as_json, outcome.to_dict(), _render_scan(outcome))
        elif args.command == "validate":
            report = orchestrator.run_validate(args.path, checks=args.checks)
            _emit(as_json, report.to_dict(), _render_validation(report))
            if not report.ok:
                parser.exit(1)
        elif args.command == "docs":
            result = orchestrator.run_docs(args.path, keys=args.keys)
            _emit(as_json, result.to_dict(), _render_docs(result))
            if result.failed:
                parser.exit(1)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except ManifestError as exc:
        parser.exit(1, f"examplesync {args.command} failed: {exc}\n")
    except ConfigError as exc:
        parser.exit(1, f"examplesync {args.command} failed: {exc}\n")
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")


def _emit(as_json: bool, payload: Dict[str, Any], text: str) -> None:
    if as_json:
        print(json.dumps(payload, indent=2))
    else:
        print(text)


def _render_scan(outcome: ScanOutcome) -> str:
    report = outcome.report
    lines = [
        "Scan Results",
        f"  Total sources:      {report.total_sources}",
        f"  New examples:       {report.new_count}",
        f"  Updated:            {report.updated_count}",
        f"  Missing companions: {report.missing_companion_count}",
    ]
    conflicts = [diag for diag in report.diagnostics if diag.code.endswith("-conflict")]
    if conflicts:
        lines.append(f"  Conflicts skipped:  {len(conflicts)}")
    lines.extend(_bullets("Missing descriptions", report.needs_description))
    lines.extend(_bullets("Categories needing info", report.categories_needing_info))
    if outcome.dry_run:
        lines.append("Dry run: manifest not written.")
    elif outcome.written:
        lines.append(f"Manifest updated: {outcome.manifest_path}")
    else:
        lines.append("Manifest already up to date.")
    return "\n".join(lines)


def _render_validation(report: ValidationReport) -> str:
    lines = ["Validation Summary"]
    for name, result in report.results.items():
        lines.append(f"  {name}: {len(result.errors)} error(s), {len(result.warnings)} warning(s)")
    lines.extend(_bullets("Errors", report.errors))
    lines.extend(_bullets("Warnings", report.warnings))
    if report.ok and not report.warnings:
        lines.append("Project is consistent.")
    return "\n".join(lines)


def _render_docs(result: DocsResult) -> str:
    lines = [f"Generated {len(result.written)} documentation file(s)"]
    if result.summary_updated:
        lines.append("Summary updated.")
    lines.extend(_bullets("Failures", [diag.message for diag in result.diagnostics]))
    return "\n".join(lines)


def _bullets(title: str, items: Sequence[str]) -> List[str]:
    if not items:
        return []
    return [f"{title}:"] + [f"  - {item}" for item in items]


if __name__ == "__main__":
    main(sys.argv[1:])
