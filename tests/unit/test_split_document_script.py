from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner
import pytest

from scripts.split_document import main as split_main


@pytest.fixture
def note(tmp_path: Path) -> Path:
    p = tmp_path / "note.md"
    p.write_text("---\ntitle: Words\n---\none two three four five six")
    return p


@pytest.mark.unit
def test_prints_chunks(note: Path):
    result = CliRunner().invoke(
        split_main, [str(note), "--chunk-size", "10", "--chunk-overlap", "4"]
    )

    assert result.exit_code == 0, result.output
    assert "--- chunk 0 (7 chars) ---\none two" in result.output
    assert "--- chunk 3 (8 chars) ---\nfive six" in result.output


@pytest.mark.unit
def test_json_output_carries_metadata(note: Path):
    result = CliRunner().invoke(
        split_main,
        [str(note), "--chunk-size", "10", "--chunk-overlap", "4", "--json", "--start-index"],
    )

    assert result.exit_code == 0, result.output
    rows = [json.loads(line) for line in result.output.splitlines()]
    assert [r["content"] for r in rows] == ["one two", "two three", "four five", "five six"]
    assert rows[0]["metadata"]["title"] == "Words"
    assert rows[0]["metadata"]["source"] == str(note)
    assert [r["metadata"]["start_index"] for r in rows] == [0, 4, 14, 19]


@pytest.mark.unit
def test_stats(note: Path):
    result = CliRunner().invoke(
        split_main, [str(note), "--chunk-size", "10", "--chunk-overlap", "4", "--stats"]
    )

    assert result.exit_code == 0, result.output
    assert "1 document(s) -> 4 chunk(s); min 7, max 9" in result.output


@pytest.mark.unit
def test_custom_separators(tmp_path: Path):
    p = tmp_path / "chars.txt"
    p.write_text("AAAAABBBBBCCCCC", encoding="utf-8")

    result = CliRunner().invoke(
        split_main,
        [str(p), "--chunk-size", "5", "--chunk-overlap", "2", "--separator", "", "--json"],
    )

    assert result.exit_code == 0, result.output
    contents = [json.loads(line)["content"] for line in result.output.splitlines()]
    assert contents == ["AAAAA", "AABBB", "BBBBC", "BCCCC", "CCC"]


@pytest.mark.unit
def test_invalid_configuration_is_reported(note: Path):
    result = CliRunner().invoke(
        split_main, [str(note), "--chunk-size", "5", "--chunk-overlap", "5"]
    )

    assert result.exit_code == 1
    assert "chunk_overlap (5) must be smaller than chunk_size (5)" in result.output


@pytest.mark.unit
def test_empty_input_exits_cleanly(tmp_path: Path):
    p = tmp_path / "empty.md"
    p.write_text("")

    result = CliRunner().invoke(split_main, [str(p)])

    assert result.exit_code == 0
    assert "No chunks produced" in result.output
