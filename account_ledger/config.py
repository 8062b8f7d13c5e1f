"""
Application configuration.

All configuration is loaded from environment variables.
Never hardcode secrets or connection strings in code.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file into environment variables
load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


def _database_url_from_parts() -> str:
    """
    Build a PostgreSQL URL from the individual DB_* variables.

    Deployments of the original service configure the database
    this way, so they keep working without a DATABASE_URL.
    """
    user = os.getenv("DB_USER", "admin")
    password = os.getenv("DB_PASS", "123")
    host = os.getenv("DB_HOSTNAME", "localhost")
    port = os.getenv("DB_PORT", "5432")
    name = os.getenv("DB_NAME", "rinha-db")
    return f"postgresql+psycopg://{user}:{password}@{host}:{port}/{name}"


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self) -> None:
        # Application
        self.APP_NAME: str = "Account Ledger"
        self.APP_VERSION: str = "0.1.0"
        self.DEBUG: bool = _env_bool("DEBUG")
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

        # Server
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", "9999"))

        # Database
        self.DATABASE_URL: str = (
            os.getenv("DATABASE_URL") or _database_url_from_parts()
        )
        # Upper bound on how long a request waits for an account lock
        self.LOCK_TIMEOUT_MS: int = int(os.getenv("LOCK_TIMEOUT_MS", "5000"))
        self.SEED_ON_STARTUP: bool = _env_bool("SEED_ON_STARTUP")

        # Environment
        self.ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    The Settings object is created once and reused for all
    subsequent calls.
    """
    return Settings()
