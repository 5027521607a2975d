"""Portfolio source reading JSON documents through the GitHub contents API."""

import asyncio
import base64
import binascii
from contextlib import asynccontextmanager
from dataclasses import dataclass
import json
import re
from typing import Any, AsyncIterator

import httpx

from src.application.ports.portfolio_source import (
    DataSourceAuthError,
    DataSourceError,
    MonthOption,
    PortfolioSourcePort,
)
from src.domain.services.calendar import month_label
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import PortfolioSourceSettings

GITHUB_API_URL = "https://api.github.com"
_MONTH_FILE = re.compile(r"^(\d{4})-(\d{2})\.json$")


@dataclass(frozen=True)
class ConnectionCheck:
    """Outcome of a connectivity check against the remote source."""

    success: bool
    message: str


@dataclass
class _Session:
    client: httpx.AsyncClient
    limiter: asyncio.Semaphore
    users: int = 0


def _is_rate_limited(response: httpx.Response) -> bool:
    return (
        response.headers.get("x-ratelimit-remaining") == "0"
        or "retry-after" in response.headers
    )


class GitHubPortfolioSource(PortfolioSourcePort):
    """Source backed by files stored in a GitHub repository."""

    def __init__(
        self,
        settings: PortfolioSourceSettings,
        client: httpx.AsyncClient | None = None,
        logger=None,
    ) -> None:
        """Initialize the source.

        Args:
            settings: Remote repository coordinates and token.
            client: Optional HTTP client owned by the caller; a pooled one
                is opened per session when omitted.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._settings = settings
        self._client = client
        self._logger = logger or get_app_logger()
        self._active: _Session | None = None

    async def fetch_document(self, name: str) -> Any | None:
        """Return the decoded JSON document, or None when it does not exist.

        Raises:
            DataSourceAuthError: If GitHub rejects the token.
            DataSourceError: On network failures or unexpected payloads.
        """
        if not self._settings.is_configured:
            return None
        response = await self._get(self._contents_url(name))
        if response.status_code == 404:
            return None
        self._raise_for_status(response, name)
        return self._decode_content(self._json(response, name), name)

    async def list_available(self) -> list[MonthOption]:
        """Return months with a ``YYYY-MM.json`` file in the data directory.

        Raises:
            DataSourceAuthError: If GitHub rejects the token.
            DataSourceError: If the directory cannot be listed.
        """
        if not self._settings.is_configured:
            return []
        directory = self._settings.github_path
        response = await self._get(self._contents_url(directory))
        self._raise_for_status(response, directory or "/")
        files = self._json(response, directory)
        if not isinstance(files, list):
            return []
        available = []
        for entry in files:
            name = entry.get("name", "") if isinstance(entry, dict) else ""
            match = _MONTH_FILE.match(name)
            if not match or not 1 <= int(match.group(2)) <= 12:
                continue
            month_id = name.removesuffix(".json")
            available.append(
                MonthOption(id=month_id, label=month_label(month_id))
            )
        return sorted(available, key=lambda month: month.id)

    async def test_connection(self) -> ConnectionCheck:
        """Check the token and repository access without raising."""
        if not self._settings.is_configured:
            return ConnectionCheck(False, "Configuration incomplete")
        try:
            async with self.session():
                return await self._check_access()
        except DataSourceError as exc:
            return ConnectionCheck(False, str(exc))

    async def _check_access(self) -> ConnectionCheck:
        user = await self._get(f"{GITHUB_API_URL}/user")
        if user.status_code != 200:
            if user.status_code == 401:
                return ConnectionCheck(False, "Invalid token")
            return ConnectionCheck(
                False,
                f"GitHub user API: {user.status_code}",
            )
        repo = await self._get(self._repo_url())
        if repo.status_code != 200:
            if repo.status_code == 404:
                return ConnectionCheck(
                    False,
                    "Repository not found or no access",
                )
            return ConnectionCheck(
                False,
                f"Repository API: {repo.status_code}",
            )
        return ConnectionCheck(True, "Connected successfully")

    def _repo_url(self) -> str:
        return (
            f"{GITHUB_API_URL}/repos/"
            f"{self._settings.github_owner}/{self._settings.github_repo}"
        )

    def _contents_url(self, name: str) -> str:
        base = self._settings.github_path
        path = f"{base}/{name}" if base and name != base else name
        return f"{self._repo_url()}/contents/{path}"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"token {self._settings.github_token}",
            "Accept": "application/vnd.github.v3+json",
        }

    def _new_client(self) -> httpx.AsyncClient:
        limit = self._settings.http_concurrency
        return httpx.AsyncClient(
            timeout=self._settings.http_timeout,
            limits=httpx.Limits(
                max_connections=limit,
                max_keepalive_connections=limit,
            ),
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[None]:
        """Share one pooled client and a request cap across fetches.

        Nested and concurrent sessions join the open one; the client is
        closed when the last of them exits.
        """
        async with self._acquire():
            yield

    @asynccontextmanager
    async def _acquire(self) -> AsyncIterator[_Session]:
        if self._active is None:
            self._active = _Session(
                client=self._client or self._new_client(),
                limiter=asyncio.Semaphore(self._settings.http_concurrency),
            )
        active = self._active
        active.users += 1
        try:
            yield active
        finally:
            active.users -= 1
            if active.users == 0:
                self._active = None
                if active.client is not self._client:
                    await active.client.aclose()

    async def _get(self, url: str) -> httpx.Response:
        params = {"ref": self._settings.github_branch}
        try:
            async with self._acquire() as active, active.limiter:
                return await active.client.get(
                    url,
                    params=params,
                    headers=self._headers(),
                )
        except httpx.HTTPError as exc:
            self._logger.error(f"Remote fetch failed for {url}: {exc}")
            raise DataSourceError(f"Failed to reach GitHub: {exc}") from exc

    def _raise_for_status(self, response: httpx.Response, name: str) -> None:
        status = response.status_code
        if status == 429 or (status == 403 and _is_rate_limited(response)):
            raise DataSourceError(f"GitHub rate limit hit for {name}")
        if status in (401, 403):
            raise DataSourceAuthError(
                f"Auth error: {status} {response.reason_phrase}"
            )
        if status >= 400:
            raise DataSourceError(f"GitHub API error {status} for {name}")

    @staticmethod
    def _json(response: httpx.Response, name: str) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise DataSourceError(
                f"GitHub returned invalid JSON for {name}"
            ) from exc

    @staticmethod
    def _decode_content(payload: Any, name: str) -> Any:
        if (
            not isinstance(payload, dict)
            or payload.get("encoding") != "base64"
            or not payload.get("content")
        ):
            raise DataSourceError(
                f"Unexpected content format from GitHub for {name}"
            )
        try:
            raw = base64.b64decode(payload["content"].replace("\n", ""))
            return json.loads(raw.decode("utf-8"))
        except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
            raise DataSourceError(f"Could not decode {name}: {exc}") from exc


__all__ = ["ConnectionCheck", "GitHubPortfolioSource", "GITHUB_API_URL"]
