"""CLI parser and exit-code behaviour tests."""

from __future__ import annotations

import json

import pytest

from examplesync.cli import _build_parser, main

from tests._fixtures.project_builder import ProjectBuilder


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "scan"])
    assert args.verbose is True
    assert args.command == "scan"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["validate", "--verbose"])
    assert args.verbose is True
    assert args.command == "validate"


def test_cli_accepts_scan_flags() -> None:
    args = _build_parser().parse_args(["scan", "some/project", "--dry-run", "--json"])
    assert args.path == "some/project"
    assert args.dry_run is True
    assert args.json is True


def test_cli_collects_checks_and_keys() -> None:
    parser = _build_parser()
    args = parser.parse_args(["validate", "--check", "docs", "--check", "integrity"])
    assert args.checks == ["docs", "integrity"]
    args = parser.parse_args(["docs", "--key", "fhe-counter"])
    assert args.keys == ["fhe-counter"]


def test_cli_rejects_unknown_check() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args(["validate", "--check", "spelling"])


def test_scan_exits_zero_with_missing_companions(project_builder: ProjectBuilder, capsys) -> None:
    project_builder.source("contracts/basic/FHECounter.sol", "FHECounter")

    main(["scan", str(project_builder.path()), "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["counts"]["missing_companion"] == 1
    assert payload["written"] is True


def test_validate_exits_non_zero_on_errors(project_builder: ProjectBuilder, capsys) -> None:
    project_builder.source("contracts/basic/FHECounter.sol", "FHECounter")
    project_builder.write_manifest(
        {
            "examples": {
                "fhe-counter": {
                    "contract": "contracts/basic/FHECounter.sol",
                    "test": "test/basic/FHECounter.ts",
                    "description": "Counter",
                }
            },
            "categories": {},
            "docs": {},
        }
    )

    with pytest.raises(SystemExit) as excinfo:
        main(["validate", str(project_builder.path()), "--json"])

    assert excinfo.value.code == 1
    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "failed"
    assert "Missing companion: test/basic/FHECounter.ts (fhe-counter)" in payload["checks"]["integrity"]["errors"]


def test_validate_exits_zero_with_only_warnings(project_builder: ProjectBuilder, capsys) -> None:
    project_builder.pair("contracts/basic/FHECounter.sol", "FHECounter", "test/basic/FHECounter.ts")
    main(["scan", str(project_builder.path())])

    main(["validate", str(project_builder.path())])

    output = capsys.readouterr().out
    assert "Validation Summary" in output
    assert "Missing description: fhe-counter" in output


def test_malformed_manifest_aborts(project_builder: ProjectBuilder, capsys) -> None:
    (project_builder.path() / "examples-config.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["validate", str(project_builder.path())])

    assert excinfo.value.code == 1
    assert "not valid JSON" in capsys.readouterr().err


def test_missing_project_path_aborts(tmp_path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["scan", str(tmp_path / "missing")])
    assert excinfo.value.code == 1
    assert "Project path not found" in capsys.readouterr().err


def test_undecodable_manifest_aborts(project_builder: ProjectBuilder, capsys) -> None:
    (project_builder.path() / "examples-config.json").write_bytes(b'{"examples": {"\xff": {}}}')

    with pytest.raises(SystemExit) as excinfo:
        main(["scan", str(project_builder.path())])

    assert excinfo.value.code == 1
    assert "examplesync scan failed" in capsys.readouterr().err


def test_log_file_receives_records(project_builder: ProjectBuilder, tmp_path) -> None:
    project_builder.pair("contracts/basic/FHECounter.sol", "FHECounter", "test/basic/FHECounter.ts")
    log_file = tmp_path / "logs" / "examplesync.log"

    main(["scan", str(project_builder.path()), "--log-file", str(log_file)])

    content = log_file.read_text(encoding="utf-8")
    assert "examplesync.reconciler: Added: fhe-counter" in content
