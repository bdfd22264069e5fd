"""Tests for CLI commands."""

import json
from collections.abc import Generator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from gscnews import __version__
from gscnews.config import get_settings

from .main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Point settings at a temporary database with no API key."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("PERPLEXITY_API_KEY", raising=False)
    monkeypatch.setenv("DB_PATH", str(tmp_path / "cli.db"))
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


@pytest.fixture
def articles_file(tmp_path: Path) -> Path:
    """JSON file mixing camelCase and snake_case records."""
    path = tmp_path / "articles.json"
    path.write_text(
        json.dumps(
            [
                {
                    "title": "Container shortage worsens",
                    "slug": "container-shortage",
                    "summary": "Box availability drops.",
                    "content": "Carriers reposition empties.",
                    "publishedAt": "2024-03-01T09:00:00+00:00",
                    "publishedBy": "Staff",
                },
                {
                    "title": "Rail strike averted",
                    "slug": "rail-strike-averted",
                    "summary": "Unions reach agreement.",
                    "content": "Freight moves as normal.",
                    "published_at": "2024-03-03T09:00:00+00:00",
                },
                {"slug": "missing-title"},
            ]
        )
    )
    return path


def test_version() -> None:
    """Test version command."""
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_init_creates_database(isolated_settings: Path) -> None:
    """Test init creates the configured database."""
    result = runner.invoke(app, ["init"])

    assert result.exit_code == 0
    assert (isolated_settings / "cli.db").exists()
    assert "PERPLEXITY_API_KEY not set" in result.output


def test_import_then_search(articles_file: Path) -> None:
    """Test imported articles are searchable."""
    result = runner.invoke(app, ["import-articles", str(articles_file)])

    assert result.exit_code == 0
    assert "Imported 2 article(s)" in result.output
    assert "missing-title" in result.output

    result = runner.invoke(app, ["search", "freight", "--no-ai"])

    assert result.exit_code == 0
    assert "rail-strike-averted" in result.output
    assert "container-shortage" not in result.output


def test_import_skips_non_object_entries(tmp_path: Path) -> None:
    """Test non-object entries are skipped and later records still load."""
    path = tmp_path / "mixed.json"
    path.write_text(
        json.dumps(
            [
                {"title": "Port congestion eases", "slug": "port-congestion", "summary": "s"},
                "oops",
                42,
                {"title": "Rail strike averted", "slug": "rail-strike", "summary": None},
            ]
        )
    )

    result = runner.invoke(app, ["import-articles", str(path)])

    assert result.exit_code == 0
    assert "Imported 2 article(s)" in result.output
    assert "skipped 2" in result.output
    assert "entry 2 is not an object" in result.output

    result = runner.invoke(app, ["search", "rail strike", "--no-ai"])
    assert "rail-strike" in result.output


def test_import_missing_file(tmp_path: Path) -> None:
    """Test import of a missing file fails."""
    result = runner.invoke(app, ["import-articles", str(tmp_path / "nope.json")])
    assert result.exit_code == 1


def test_search_no_results() -> None:
    """Test search on an empty database."""
    result = runner.invoke(app, ["search", "ports", "--no-ai"])

    assert result.exit_code == 0
    assert "No results found" in result.output


def test_search_rejects_bad_limit() -> None:
    """Test out-of-range limit exits with an error."""
    result = runner.invoke(app, ["search", "ports", "--limit", "0"])
    assert result.exit_code == 1


def test_enhance_json_without_key() -> None:
    """Test enhance prints the fallback result without a key."""
    result = runner.invoke(app, ["enhance", "container shortage", "--json"])

    assert result.exit_code == 0
    assert '"enhancedQuery": "container shortage"' in result.output
    assert '"enhancementType": "standard"' in result.output
