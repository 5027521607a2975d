"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path

from src.domain.services.calendar import format_month_id, parse_month_id
from src.infrastructure.logging.logger import get_app_logger
from src.utils.utils import get_project_root

DEFAULT_TRACKING_START = "2026-01"
DEFAULT_HTTP_TIMEOUT = 15.0
DEFAULT_HTTP_CONCURRENCY = 8


@dataclass(frozen=True)
class PortfolioSourceSettings:
    """Settings for selecting and reaching the portfolio data source.

    Attributes:
        source_type: Source identifier (local or remote).
        data_dir: Directory holding the JSON documents for the local source.
        github_token: Token for the GitHub contents API.
        github_owner: Owner of the repository holding the documents.
        github_repo: Repository holding the documents.
        github_branch: Branch to read from.
        github_path: Directory of the documents inside the repository.
        tracking_start: First tracked month in ``YYYY-MM`` form.
        http_timeout: Timeout in seconds for remote requests.
        http_concurrency: Maximum number of remote requests in flight.
    """

    source_type: str = "local"
    data_dir: Path | None = None
    github_token: str = ""
    github_owner: str = ""
    github_repo: str = ""
    github_branch: str = "main"
    github_path: str = "data"
    tracking_start: str = DEFAULT_TRACKING_START
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    http_concurrency: int = DEFAULT_HTTP_CONCURRENCY

    @property
    def is_remote(self) -> bool:
        return self.source_type == "remote"

    @property
    def is_configured(self) -> bool:
        """Return True when the selected source has what it needs."""
        if not self.is_remote:
            return True
        return bool(
            self.github_token and self.github_owner and self.github_repo
        )

    @classmethod
    def from_env(cls) -> "PortfolioSourceSettings":
        """Build settings from environment variables.

        Returns:
            PortfolioSourceSettings: Settings sourced from the environment.
        """
        logger = get_app_logger()
        source_type = (
            os.getenv("PORTFOLIO_SOURCE", "local").strip().lower() or "local"
        )
        raw_dir = os.getenv("PORTFOLIO_DATA_DIR")
        data_dir = cls._normalize_data_dir(raw_dir, logger=logger)
        return cls(
            source_type=source_type,
            data_dir=data_dir,
            github_token=os.getenv("GITHUB_TOKEN", "").strip(),
            github_owner=os.getenv("GITHUB_OWNER", "").strip(),
            github_repo=os.getenv("GITHUB_REPO", "").strip(),
            github_branch=os.getenv("GITHUB_BRANCH", "").strip() or "main",
            github_path=os.getenv("GITHUB_DATA_PATH", "data").strip("/ "),
            tracking_start=cls._normalize_tracking_start(
                os.getenv("PORTFOLIO_TRACKING_START"),
                logger=logger,
            ),
            http_timeout=cls._parse_timeout(
                os.getenv("PORTFOLIO_HTTP_TIMEOUT"),
                logger=logger,
            ),
            http_concurrency=cls._parse_concurrency(
                os.getenv("PORTFOLIO_HTTP_CONCURRENCY"),
                logger=logger,
            ),
        )

    @staticmethod
    def _normalize_data_dir(raw_dir: str | None, logger) -> Path:
        """Resolve the local data directory.

        Args:
            raw_dir: Raw directory from the environment, if set.
            logger: Logger used for warnings.

        Returns:
            Path: Resolved directory, ``<project root>/data`` by default.
        """
        if raw_dir:
            path = Path(raw_dir).expanduser().resolve()
        else:
            path = get_project_root() / "data"
        if not path.exists():
            logger.warning(f"Portfolio data directory not found at {path}")
        return path

    @staticmethod
    def _normalize_tracking_start(raw_value: str | None, logger) -> str:
        if not raw_value:
            return DEFAULT_TRACKING_START
        try:
            year, month = parse_month_id(raw_value.strip())
        except ValueError:
            logger.warning(
                f"Invalid PORTFOLIO_TRACKING_START '{raw_value}'. "
                f"Expected format YYYY-MM."
            )
            return DEFAULT_TRACKING_START
        return format_month_id(year, month)

    @staticmethod
    def _parse_timeout(raw_value: str | None, logger) -> float:
        if not raw_value:
            return DEFAULT_HTTP_TIMEOUT
        try:
            return float(raw_value)
        except ValueError:
            logger.warning(
                f"Invalid PORTFOLIO_HTTP_TIMEOUT '{raw_value}'. "
                f"Using {DEFAULT_HTTP_TIMEOUT} seconds."
            )
            return DEFAULT_HTTP_TIMEOUT

    @staticmethod
    def _parse_concurrency(raw_value: str | None, logger) -> int:
        if not raw_value:
            return DEFAULT_HTTP_CONCURRENCY
        try:
            value = int(raw_value)
        except ValueError:
            value = 0
        if value < 1:
            logger.warning(
                f"Invalid PORTFOLIO_HTTP_CONCURRENCY '{raw_value}'. "
                f"Using {DEFAULT_HTTP_CONCURRENCY} requests."
            )
            return DEFAULT_HTTP_CONCURRENCY
        return value


__all__ = ["PortfolioSourceSettings"]
