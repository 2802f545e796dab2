"""Tests for the command-line entrypoint."""

import json
import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from fmhy_catalog.cli import main
from fmhy_catalog.config import get_settings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Load settings from defaults only, away from the caller's environment and .env file.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
        tmp_path: Pytest temporary directory fixture.

    Yields:
        None while the test runs.
    """
    for name in list(os.environ):
        if name.upper().startswith("FMHY_CATALOG_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def populated_docs(docs_dir: Path, sample_document: str) -> Path:
    """Write the sample document into the docs directory.

    Args:
        docs_dir: Temporary docs directory fixture.
        sample_document: Sample markdown fixture.

    Returns:
        Path to the populated docs directory.
    """
    (docs_dir / "adblockvpnguide.md").write_text(sample_document, encoding="utf-8")
    return docs_dir


def test_parse_to_stdout(populated_docs: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test that parse prints the collection as JSON."""
    exit_code = main(["parse", "--docs-path", str(populated_docs), "--all"])

    assert exit_code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["metadata"]["totalDocuments"] == 1
    assert data["metadata"]["totalItems"] == 6
    assert data["documents"][0]["title"] == "Adblockvpnguide"


def test_parse_default_document_list(populated_docs: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test that the default document list skips files that are not present."""
    (populated_docs / "extra.md").write_text("# ► Extra\n* item", encoding="utf-8")

    exit_code = main(["parse", "--docs-path", str(populated_docs)])

    assert exit_code == 0
    data = json.loads(capsys.readouterr().out)
    assert [doc["filename"] for doc in data["documents"]] == ["adblockvpnguide.md"]


def test_parse_to_file(populated_docs: Path, tmp_path: Path) -> None:
    """Test that parse writes JSON to the output file."""
    output = tmp_path / "catalog.json"

    exit_code = main(["parse", "--docs-path", str(populated_docs), "--all", "--output", str(output)])

    assert exit_code == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["documents"][0]["sections"][0]["title"] == "Ad Blocking"


def test_index_and_search(populated_docs: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test indexing then searching through the CLI."""
    database = tmp_path / "catalog.db"

    assert main(["index", "--docs-path", str(populated_docs), "--all", "--database", str(database)]) == 0
    capsys.readouterr()

    assert main(["search", "Blokada", "--database", str(database)]) == 0

    out = capsys.readouterr().out
    assert "Blokada" in out
    assert "Ad Blocking / Mobile" in out


def test_missing_docs_path(tmp_path: Path) -> None:
    """Test that a missing docs directory exits with an error status."""
    assert main(["parse", "--docs-path", str(tmp_path / "missing")]) == 1


def test_search_with_punctuation(populated_docs: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test that searching with apostrophes and slashes exits cleanly."""
    database = tmp_path / "catalog.db"
    assert main(["index", "--docs-path", str(populated_docs), "--all", "--database", str(database)]) == 0

    assert main(["search", "AdGuard's", "--database", str(database)]) == 0
    assert main(["search", "a/b", "--database", str(database)]) == 0
    assert main(["search", "", "--database", str(database)]) == 0


def test_database_error_exits_with_status(tmp_path: Path) -> None:
    """Test that an unusable database path is reported instead of raising."""
    assert main(["search", "vpn", "--database", str(tmp_path)]) == 1


def test_invalid_log_level(monkeypatch: pytest.MonkeyPatch, populated_docs: Path) -> None:
    """Test that an unknown configured log level exits with an error status."""
    monkeypatch.setenv("FMHY_CATALOG_LOG_LEVEL", "LOUD")
    get_settings.cache_clear()

    assert main(["parse", "--docs-path", str(populated_docs), "--all"]) == 1
