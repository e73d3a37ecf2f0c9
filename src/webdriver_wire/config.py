"""Configuration settings for the WebDriver wire client."""

import logging
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class Settings(BaseSettings):
    """Client configuration from environment variables."""

    # Remote end
    webdriver_url: str = "http://localhost:4444/wd/hub"

    # Timeouts applied by the default HTTP transport
    request_timeout_seconds: float = Field(default=60.0, gt=0)
    connect_timeout_seconds: float = Field(default=10.0, gt=0)

    # Navigation guardrails (comma-separated list, empty = allow all)
    allowed_domains: Optional[str] = None

    # Logging
    log_level: str = "INFO"

    model_config = {"env_prefix": "WEBDRIVER_WIRE_"}

    @property
    def allowed_domain_list(self) -> list[str]:
        """Parse comma-separated domains into list."""
        if not self.allowed_domains:
            return []
        return [d.strip().lower() for d in self.allowed_domains.split(",") if d.strip()]


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for applications using the client.

    Args:
        level: Log level name; defaults to ``settings.log_level``.
    """
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )
    logger.debug(f"Logging configured at {level_name}")


# Global settings instance
settings = Settings()
