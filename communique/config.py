"""Communique configuration management."""

from pydantic_settings import BaseSettings
from pydantic import Field


class CommuniqueSettings(BaseSettings):
    """Settings loaded from environment variables or .env file."""

    # NationStates API
    api_base_url: str = Field(
        default="https://www.nationstates.net/cgi-bin/api.cgi",
        description="NationStates API endpoint",
    )
    user_agent: str = Field(
        default="communique",
        description="User-Agent sent with every API request; should identify the operator",
    )
    request_timeout: float = Field(default=30.0, description="Per-request timeout in seconds")

    # API rate limit: 50 requests per 30 seconds
    rate_limit_requests: int = Field(default=50, description="Max API requests per window")
    rate_limit_window_seconds: float = Field(default=30.0, description="Rate limit window in seconds")

    # Resolver cache
    cache_ttl_seconds: float = Field(default=900.0, description="How long resolved regions/tags are reused")

    debug: bool = Field(default=False, description="Debug logging")

    model_config = {"env_prefix": "COMMUNIQUE_", "env_file": ".env", "extra": "ignore"}


def load_settings() -> CommuniqueSettings:
    """Load settings from environment."""
    settings = CommuniqueSettings()

    # NationStates asks every script to identify its operator
    import logging
    logger = logging.getLogger("communique.config")
    if settings.user_agent.strip().lower() == "communique":
        logger.warning(
            "No contact details in COMMUNIQUE_USER_AGENT. NationStates may block "
            "scripts that do not identify their operator (e.g. 'communique; nation=testlandia')."
        )

    return settings
