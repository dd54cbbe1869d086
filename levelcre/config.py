"""
Application configuration. Loads from environment variables.
Secrets and sensitive config must never be hardcoded.
"""

import os

from dotenv import load_dotenv

load_dotenv()
from functools import lru_cache

STORAGE_BACKENDS = ("database", "memory")


@lru_cache(maxsize=1)
def get_settings() -> "Settings":
    """Return cached settings instance."""
    return Settings()


class Settings:
    """Application settings loaded from environment."""

    # App
    app_name: str = "Level CRE"
    debug: bool = False

    # Database (postgresql+psycopg for psycopg3; sqlite:// works for local runs and tests)
    database_url: str = "postgresql+psycopg://localhost:5432/levelcre_dev"
    db_connect_timeout: int = 10  # seconds

    # Security
    secret_key: str = ""

    # Storage: "database" (SQLAlchemy) or "memory" (process-local, optionally file-backed)
    storage_backend: str = "database"
    demo_data_path: str = ""  # empty = memory store is not persisted

    def __init__(self) -> None:
        self.app_name = os.getenv("APP_NAME", self.app_name)
        self.debug = os.getenv("DEBUG", "false").lower() == "true"

        default_user = os.getenv("PGUSER") or os.getenv("USER") or "postgres"
        default_url = (
            f"postgresql+psycopg://{default_user}:"
            f"{os.getenv('PGPASSWORD', '')}@"
            f"{os.getenv('PGHOST', 'localhost')}:"
            f"{os.getenv('PGPORT', '5432')}/"
            f"{os.getenv('PGDATABASE', 'levelcre_dev')}"
        )
        raw_url = os.getenv("DATABASE_URL", default_url)
        # Ensure psycopg3 driver if URL uses generic postgresql://
        if raw_url.startswith("postgresql://") and not raw_url.startswith("postgresql+psycopg"):
            raw_url = raw_url.replace("postgresql://", "postgresql+psycopg://", 1)
        self.database_url = raw_url
        self.db_connect_timeout = int(os.getenv("DB_CONNECT_TIMEOUT", str(self.db_connect_timeout)))

        self.secret_key = os.getenv("SECRET_KEY", "")

        backend = os.getenv("STORAGE_BACKEND", self.storage_backend).strip().lower()
        if backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}; got {backend!r}"
            )
        self.storage_backend = backend
        self.demo_data_path = os.getenv("DEMO_DATA_PATH", "").strip()

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")
