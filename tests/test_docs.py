"""Tests for examplesync.docs."""

from __future__ import annotations

from pathlib import Path

from examplesync.docs import DocsGenerator, SummaryIndex, extract_description
from examplesync.models import DocsEntry, ExampleEntry, Manifest

from tests._fixtures.project_builder import ProjectBuilder


def _manifest() -> Manifest:
    return Manifest(
        examples={
            "fhe-counter": ExampleEntry(
                source_path="contracts/basic/FHECounter.sol",
                companion_path="test/basic/FHECounter.ts",
                description="Encrypted counter",
            )
        },
        docs={
            "fhe-counter": DocsEntry(
                title="FHE Counter",
                description="A counter over encrypted integers",
                output_path="docs/fhe-counter.md",
                category_display_name="Basic",
            )
        },
    )


def test_summary_add_creates_heading(tmp_path: Path) -> None:
    summary = SummaryIndex(tmp_path / "docs" / "SUMMARY.md", "")

    assert summary.add("FHE Counter", "docs/fhe-counter.md", "Basic", tmp_path)

    assert summary.text == "# Summary\n\n## Basic\n\n- [FHE Counter](fhe-counter.md)\n"
    assert summary.references("docs/fhe-counter.md", tmp_path)


def test_summary_add_appends_to_existing_heading(tmp_path: Path) -> None:
    text = "# Summary\n\n## Basic\n\n- [Alpha](alpha.md)\n\n## Advanced\n\n- [Gamma](gamma.md)\n"
    summary = SummaryIndex(tmp_path / "docs" / "SUMMARY.md", text)

    summary.add("Beta", "docs/beta.md", "Basic", tmp_path)

    assert summary.text == (
        "# Summary\n\n## Basic\n\n- [Alpha](alpha.md)\n- [Beta](beta.md)\n\n"
        "## Advanced\n\n- [Gamma](gamma.md)\n"
    )


def test_summary_add_skips_linked_pages(tmp_path: Path) -> None:
    text = "## Basic\n\n- [Alpha](./alpha.md#intro)\n"
    summary = SummaryIndex(tmp_path / "docs" / "SUMMARY.md", text)

    assert not summary.add("Alpha", "docs/alpha.md", "Basic", tmp_path)
    assert summary.text == text


def test_extract_description_prefers_block_comment() -> None:
    source = "/**\n * Counts encrypted values.\n */\ncontract A {}\n"
    assert extract_description(source) == "Counts encrypted values."
    assert extract_description("/// @notice Tips in secret\ncontract B {}\n") == "Tips in secret"
    assert extract_description("contract C {}\n") == ""


def test_render_page_contains_tabs(project_builder: ProjectBuilder) -> None:
    project_builder.pair("contracts/basic/FHECounter.sol", "FHECounter", "test/basic/FHECounter.ts")
    manifest = _manifest()

    page = DocsGenerator(project_builder.layout()).render_page(
        manifest.examples["fhe-counter"], manifest.docs["fhe-counter"]
    )

    assert page.startswith("A counter over encrypted integers\n")
    assert '{% hint style="info" %}' in page
    assert '{% tab title="FHECounter.sol" %}' in page
    assert '{% tab title="FHECounter.ts" %}' in page
    assert "```solidity\n// SPDX-License-Identifier" in page
    assert "contract FHECounter {" in page
    assert page.rstrip().endswith("{% endtabs %}")


def test_generate_writes_pages_and_summary(project_builder: ProjectBuilder) -> None:
    project_builder.pair("contracts/basic/FHECounter.sol", "FHECounter", "test/basic/FHECounter.ts")

    result = DocsGenerator(project_builder.layout()).generate(_manifest())

    root = project_builder.path()
    assert result.written == ["docs/fhe-counter.md"]
    assert result.summary_updated
    assert not result.failed
    assert (root / "docs" / "fhe-counter.md").is_file()
    summary = (root / "docs" / "SUMMARY.md").read_text(encoding="utf-8")
    assert "- [FHE Counter](fhe-counter.md)" in summary


def test_generate_reports_missing_files(project_builder: ProjectBuilder) -> None:
    result = DocsGenerator(project_builder.layout()).generate(_manifest(), ["fhe-counter", "nope"])

    assert result.failed
    assert [diag.code for diag in result.diagnostics] == ["missing-file", "unknown-example"]
    assert not (project_builder.path() / "docs" / "SUMMARY.md").exists()


def test_generate_reports_undecodable_sources(project_builder: ProjectBuilder) -> None:
    project_builder.companion("test/basic/FHECounter.ts")
    source = project_builder.path() / "contracts" / "basic" / "FHECounter.sol"
    source.parent.mkdir(parents=True)
    source.write_bytes(b"contract FHECounter {\xff}\n")

    result = DocsGenerator(project_builder.layout()).generate(_manifest())

    assert result.failed
    assert [diag.code for diag in result.diagnostics] == ["unreadable-file"]
    assert result.written == []
