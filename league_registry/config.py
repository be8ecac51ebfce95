"""
Service configuration.

Everything comes from the environment (or a local .env file).
The Stripe key and the operator API key are secrets and have
no usable defaults.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Settings read once from the environment at import time."""

    # Application
    APP_NAME: str = "League Registration Service"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    # Database
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "postgresql://localhost:5432/league_registry"
    )
    DATABASE_CONNECT_TIMEOUT: int = int(
        os.getenv("DATABASE_CONNECT_TIMEOUT", "10")
    )

    # Payments
    STRIPE_SECRET_KEY: str = os.getenv("STRIPE_SECRET_KEY", "")
    STRIPE_TIMEOUT_SECONDS: int = int(os.getenv("STRIPE_TIMEOUT_SECONDS", "20"))
    STRIPE_MAX_RETRIES: int = int(os.getenv("STRIPE_MAX_RETRIES", "2"))
    CURRENCY: str = os.getenv("CURRENCY", "usd").lower()

    # Operator credential. Empty means operator routes are open,
    # which is only acceptable for local development.
    API_KEY: str = os.getenv("API_KEY", "")

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")


@lru_cache()
def get_settings() -> Settings:
    """
    Shared Settings instance.

    Also a FastAPI dependency, which lets tests substitute
    their own Settings (for example to turn on the API key).
    """
    return Settings()
