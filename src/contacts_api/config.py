import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool

load_dotenv()

STORAGE_BACKENDS = ("sql", "memory")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./contacts.db")
    database_echo: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"

    # Storage backend: "sql" (SQLAlchemy) or "memory" (process-local dict)
    storage_backend: str = os.getenv("CONTACTS_STORAGE", "sql").lower()

    # CORS
    cors_allow_origins: str = os.getenv("CORS_ALLOW_ORIGINS", "*")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse the comma separated CORS origins.

        Returns:
            List of allowed origins (``["*"]`` allows all)
        """
        return [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]

    @property
    def safe_database_url(self) -> str:
        """Database URL with the password masked, for logging."""
        return make_url(self.database_url).render_as_string(hide_password=True)

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"CONTACTS_STORAGE must be one of {list(STORAGE_BACKENDS)}, "
                f"got {self.storage_backend!r}"
            )

        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"LOG_LEVEL is not a valid logging level: {self.log_level!r}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_engine(database_url: str | None = None, echo: bool | None = None) -> Engine:
    """Create a SQLAlchemy engine.

    SQLite connections are shared with worker threads, so ``check_same_thread``
    is disabled; in-memory SQLite also needs a single shared connection.

    Args:
        database_url: SQLAlchemy URL. If None, uses settings.
        echo: Echo SQL statements. If None, uses settings.

    Returns:
        A configured Engine
    """
    url = make_url(database_url or settings.database_url)
    options: dict = {
        "echo": settings.database_echo if echo is None else echo,
    }

    if url.get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
    else:
        options["pool_pre_ping"] = True

    return create_engine(url, **options)
