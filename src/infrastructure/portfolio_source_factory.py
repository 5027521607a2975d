"""Factory helpers to select the portfolio data source."""

from src.application.ports.portfolio_source import PortfolioSourcePort
from src.infrastructure.github_source import GitHubPortfolioSource
from src.infrastructure.local_source import LocalJsonPortfolioSource
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import PortfolioSourceSettings
from src.utils.utils import get_project_root


def create_portfolio_source(
    settings: PortfolioSourceSettings | None = None,
    logger=None,
) -> PortfolioSourcePort:
    """Return a portfolio source implementation based on configuration.

    Args:
        settings: Optional settings override; read from the environment
            when omitted.
        logger: Optional logger compatible with logging.Logger-like API.

    Returns:
        PortfolioSourcePort: Concrete source implementation.

    Raises:
        ValueError: If the configured source type is unknown.
    """
    resolved_logger = logger or get_app_logger()
    resolved = settings or PortfolioSourceSettings.from_env()

    if resolved.source_type == "local":
        return LocalJsonPortfolioSource(
            resolved.data_dir or get_project_root() / "data",
            tracking_start=resolved.tracking_start,
            logger=resolved_logger,
        )

    if resolved.source_type == "remote":
        if not resolved.is_configured:
            resolved_logger.warning(
                "Remote source selected without GITHUB_TOKEN, GITHUB_OWNER "
                "and GITHUB_REPO; no documents will be found"
            )
        return GitHubPortfolioSource(resolved, logger=resolved_logger)

    raise ValueError(
        "Unsupported portfolio source: "
        f"{resolved.source_type}. Expected local or remote."
    )


__all__ = ["create_portfolio_source"]
