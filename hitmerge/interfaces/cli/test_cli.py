"""
Tests for the command-line interface.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from .main import app

runner = CliRunner()


def make_hit(object_id: str, typos: int) -> dict[str, Any]:
    return {
        "objectID": object_id,
        "_rankingInfo": {
            "nbTypos": typos,
            "geoDistance": 0,
            "words": 1,
            "filters": 0,
            "nbExactWords": 0,
            "proximityDistance": 0,
            "firstMatchedWord": 0,
        },
    }


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps({"ranking": ["typo", "words", "custom"], "customRanking": ["desc(sales)"]})
    )
    return path


@pytest.fixture
def results_files(tmp_path: Path) -> list[Path]:
    """One bare hit list and one full search response."""
    first = tmp_path / "first.json"
    first.write_text(json.dumps([make_hit("a", 0), make_hit("c", 2)]))
    second = tmp_path / "second.json"
    second.write_text(
        json.dumps(
            {
                "hits": [make_hit("a", 0), make_hit("b", 1)],
                "nbHits": 2,
                "page": 0,
                "nbPages": 1,
                "hitsPerPage": 20,
                "processingTimeMS": 2,
            }
        )
    )
    return [first, second]


def test_formula_command(settings_file: Path) -> None:
    result = runner.invoke(app, ["formula", str(settings_file)])
    assert result.exit_code == 0
    assert "typo" in result.stdout
    assert "sales" in result.stdout
    assert "descending" in result.stdout


def test_formula_invalid_settings(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"ranking": ["typo", "speed"], "customRanking": []}))
    result = runner.invoke(app, ["formula", str(path)])
    assert result.exit_code == 1
    assert "speed" in result.stdout


def test_formula_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["formula", str(tmp_path / "nope.json")])
    assert result.exit_code == 1


def test_merge_to_output(
    settings_file: Path, results_files: list[Path], tmp_path: Path
) -> None:
    """Test merged hits are written in ranking order without duplicates."""
    output = tmp_path / "merged.json"
    result = runner.invoke(
        app,
        ["merge", str(settings_file), *map(str, results_files), "--output", str(output)],
    )
    assert result.exit_code == 0
    merged = json.loads(output.read_text())
    assert [hit["objectID"] for hit in merged] == ["a", "b", "c"]


def test_merge_prints_table(settings_file: Path, results_files: list[Path]) -> None:
    result = runner.invoke(app, ["merge", str(settings_file), *map(str, results_files)])
    assert result.exit_code == 0
    assert "4 in, 3 out" in result.stdout


def test_merge_missing_ranking_info(settings_file: Path, tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text(json.dumps([{"objectID": "x"}]))
    other = tmp_path / "other.json"
    other.write_text(json.dumps([make_hit("y", 0)]))
    result = runner.invoke(app, ["merge", str(settings_file), str(broken), str(other)])
    assert result.exit_code == 1
    assert "ranking information" in result.stdout


def test_search_requires_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    from hitmerge.config import get_settings

    monkeypatch.delenv("HITMERGE_APP_ID", raising=False)
    monkeypatch.delenv("HITMERGE_API_KEY", raising=False)
    get_settings.cache_clear()
    try:
        result = runner.invoke(app, ["search", "drill", "--index", "products"])
    finally:
        get_settings.cache_clear()
    assert result.exit_code == 1
    assert "HITMERGE_APP_ID" in result.stdout


def test_version() -> None:
    from hitmerge import __version__

    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_merge_rejects_non_object_hits(settings_file: Path, tmp_path: Path) -> None:
    """Test a hit list holding non-objects fails cleanly."""
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps(["x"]))
    good = tmp_path / "good.json"
    good.write_text(json.dumps([make_hit("y", 0)]))
    result = runner.invoke(app, ["merge", str(settings_file), str(bad), str(good)])
    assert result.exit_code == 1
    assert "Error" in result.stdout
    assert "JSON object" in result.stdout
