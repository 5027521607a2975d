"""Tests for the local JSON portfolio source."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from src.infrastructure.local_source import LocalJsonPortfolioSource


def _write(path: Path, payload) -> None:
    path.write_text(json.dumps(payload), encoding="utf-8")


@pytest.mark.asyncio
async def test_fetch_document_reads_json(tmp_path: Path):
    _write(tmp_path / "2026-01.json", {"portfolio": []})
    source = LocalJsonPortfolioSource(tmp_path, "2026-01", logger=MagicMock())

    assert await source.fetch_document("2026-01.json") == {"portfolio": []}
    assert await source.fetch_document("2026-02.json") is None


@pytest.mark.asyncio
async def test_fetch_document_treats_invalid_json_as_missing(tmp_path: Path):
    (tmp_path / "2026-01.json").write_text("{not json", encoding="utf-8")
    logger = MagicMock()
    source = LocalJsonPortfolioSource(tmp_path, "2026-01", logger=logger)

    assert await source.fetch_document("2026-01.json") is None
    logger.warning.assert_called_once()


@pytest.mark.asyncio
async def test_list_available_scans_from_tracking_start(tmp_path: Path):
    """Only months from the tracking start through December are listed."""
    for month_id in ("2026-01", "2026-02", "2026-04"):
        _write(tmp_path / f"{month_id}.json", {"portfolio": []})
    source = LocalJsonPortfolioSource(tmp_path, "2026-02", logger=MagicMock())

    months = await source.list_available()

    assert [month.id for month in months] == ["2026-02", "2026-04"]
    assert months[0].label == "February 2026"
