"""Tests for the GitHub contents API portfolio source."""

import asyncio
import base64
import json
from dataclasses import replace
from unittest.mock import MagicMock

import httpx
import pytest

from src.application.ports.portfolio_source import (
    DataSourceAuthError,
    DataSourceError,
)
from src.infrastructure.github_source import GitHubPortfolioSource
from src.infrastructure.settings import PortfolioSourceSettings

SETTINGS = PortfolioSourceSettings(
    source_type="remote",
    github_token="secret",
    github_owner="octo",
    github_repo="finance",
    github_branch="main",
    github_path="data",
)


def _encoded(payload) -> dict:
    raw = base64.b64encode(json.dumps(payload).encode("utf-8")).decode()
    # GitHub wraps base64 content at 60 characters.
    wrapped = "\n".join(raw[i:i + 60] for i in range(0, len(raw), 60))
    return {"encoding": "base64", "content": wrapped}


def _source(handler, settings=SETTINGS) -> GitHubPortfolioSource:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GitHubPortfolioSource(settings, client=client, logger=MagicMock())


@pytest.mark.asyncio
async def test_fetch_document_decodes_content():
    requests = []
    payload = {"portfolio": [{"id": "stocks", "items": []}] * 10}

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=_encoded(payload))

    result = await _source(handler).fetch_document("2026-01.json")

    assert result == payload
    request = requests[0]
    assert request.url.path == "/repos/octo/finance/contents/data/2026-01.json"
    assert request.url.params["ref"] == "main"
    assert request.headers["Authorization"] == "token secret"


@pytest.mark.asyncio
async def test_fetch_document_returns_none_when_not_found():
    source = _source(lambda request: httpx.Response(404))

    assert await source.fetch_document("transfers-2026-01-05.json") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [401, 403])
async def test_fetch_document_raises_on_auth_errors(status):
    source = _source(lambda request: httpx.Response(status))

    with pytest.raises(DataSourceAuthError):
        await source.fetch_document("2026-01.json")


@pytest.mark.asyncio
async def test_fetch_document_raises_on_server_errors():
    source = _source(lambda request: httpx.Response(500))

    with pytest.raises(DataSourceError):
        await source.fetch_document("2026-01.json")


@pytest.mark.asyncio
async def test_fetch_document_wraps_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    with pytest.raises(DataSourceError):
        await _source(handler).fetch_document("2026-01.json")


@pytest.mark.asyncio
async def test_fetch_document_rejects_unexpected_payload():
    source = _source(lambda request: httpx.Response(200, json={"a": 1}))

    with pytest.raises(DataSourceError):
        await source.fetch_document("2026-01.json")


@pytest.mark.asyncio
async def test_unconfigured_source_finds_nothing():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    source = _source(handler, PortfolioSourceSettings(source_type="remote"))

    assert await source.fetch_document("2026-01.json") is None
    assert await source.list_available() == []


@pytest.mark.asyncio
async def test_list_available_filters_month_files():
    listing = [
        {"name": "2026-03.json"},
        {"name": "2026-01.json"},
        {"name": "transfers-2026-01.json"},
        {"name": "categories.json"},
        {"name": "2026-13.json"},
        {"name": "README.md"},
    ]

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/repos/octo/finance/contents/data"
        return httpx.Response(200, json=listing)

    months = await _source(handler).list_available()

    assert [month.id for month in months] == ["2026-01", "2026-03"]
    assert months[1].label == "March 2026"


@pytest.mark.asyncio
async def test_test_connection_reports_invalid_token():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/user":
            return httpx.Response(401)
        return httpx.Response(200, json={})

    check = await _source(handler).test_connection()

    assert check.success is False
    assert check.message == "Invalid token"


@pytest.mark.asyncio
async def test_test_connection_succeeds():
    source = _source(lambda request: httpx.Response(200, json={}))

    check = await source.test_connection()

    assert check.success is True


@pytest.mark.asyncio
async def test_rate_limited_forbidden_is_not_an_auth_error():
    source = _source(
        lambda request: httpx.Response(
            403,
            headers={"x-ratelimit-remaining": "0"},
        )
    )

    with pytest.raises(DataSourceError) as excinfo:
        await source.fetch_document("2026-01.json")

    assert not isinstance(excinfo.value, DataSourceAuthError)
    assert "rate limit" in str(excinfo.value)


@pytest.mark.asyncio
async def test_requests_in_flight_are_capped():
    in_flight = 0
    peak = 0

    async def handler(request: httpx.Request) -> httpx.Response:
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.01)
        in_flight -= 1
        return httpx.Response(404)

    source = _source(handler, replace(SETTINGS, http_concurrency=2))

    async with source.session():
        results = await asyncio.gather(
            *(source.fetch_document(f"{i}.json") for i in range(6))
        )

    assert results == [None] * 6
    assert peak == 2


@pytest.mark.asyncio
async def test_session_reuses_one_client_and_closes_it(monkeypatch):
    clients = []

    def _new_client(self):
        client = httpx.AsyncClient(
            transport=httpx.MockTransport(
                lambda request: httpx.Response(404)
            )
        )
        clients.append(client)
        return client

    monkeypatch.setattr(GitHubPortfolioSource, "_new_client", _new_client)
    source = GitHubPortfolioSource(SETTINGS, logger=MagicMock())

    async with source.session():
        async with source.session():
            await asyncio.gather(
                source.fetch_document("2026-01.json"),
                source.fetch_document("2026-02.json"),
            )
        await source.fetch_document("2026-03.json")
        assert clients[0].is_closed is False

    assert len(clients) == 1
    assert clients[0].is_closed is True


@pytest.mark.asyncio
async def test_injected_client_stays_open_after_session():
    source = _source(lambda request: httpx.Response(404))

    async with source.session():
        await source.fetch_document("2026-01.json")

    assert source._client.is_closed is False
