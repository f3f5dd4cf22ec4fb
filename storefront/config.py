"""
Configuration settings for the application.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return int(raw)


class Settings:
    """Application settings loaded from environment variables."""

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Relational store
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")
    DB_ECHO: bool = os.getenv("DB_ECHO", "false").lower() == "true"
    DB_CREATE_TABLES: bool = os.getenv("DB_CREATE_TABLES", "true").lower() == "true"

    # Ranking collaborator
    RANKING_API_URL: str = os.getenv("RANKING_API_URL", "http://localhost:3000/rank")
    RANKING_TIMEOUT_SECONDS: float = float(os.getenv("RANKING_TIMEOUT_SECONDS", "10"))

    # Returns (RTO) collaborator
    RTO_API_URL: str = os.getenv("RTO_API_URL", "http://localhost:3001/rto/fetch")
    RTO_TIMEOUT_SECONDS: float = float(os.getenv("RTO_TIMEOUT_SECONDS", "10"))

    # CDN and presentation
    CDN_BASE_URL: str = os.getenv("CDN_BASE_URL", "https://images.meesho.com")
    CURRENCY_SYMBOL: str = os.getenv("CURRENCY_SYMBOL", "₹")

    # Image existence probing
    IMAGE_PROBE_TIMEOUT_SECONDS: float = float(
        os.getenv("IMAGE_PROBE_TIMEOUT_SECONDS", "5")
    )
    IMAGE_PROBE_BATCH_TIMEOUT_SECONDS: float = float(
        os.getenv("IMAGE_PROBE_BATCH_TIMEOUT_SECONDS", "10")
    )
    IMAGE_PROBE_CANCEL_PENDING: bool = (
        os.getenv("IMAGE_PROBE_CANCEL_PENDING", "false").lower() == "true"
    )

    # Placeholder product data; unset means a fresh random stream per process
    SYNTHETIC_SEED: int | None = _optional_int("SYNTHETIC_SEED")

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.
        """
        return self.ENVIRONMENT.lower() == "production"

    def __init__(self):
        logging.basicConfig(level=self.LOG_LEVEL)
        logger.debug(
            "Config initialized with environment=%s, debug=%s, log_level=%s",
            self.ENVIRONMENT,
            self.DEBUG,
            self.LOG_LEVEL,
        )


# Create a global settings instance for import
settings = Settings()
