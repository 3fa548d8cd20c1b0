"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Store credentials come from environment variables or .env (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - database_url override wins over the POSTGRES_* parts when set

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults for every non-secret setting: only user/password/database are required
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    # HTTP
    http_host: str = "0.0.0.0"
    http_port: int = 8080
    http_read_timeout: float = 5.0
    http_write_timeout: float = 10.0
    http_idle_timeout: float = 60.0
    cors_origins: list[str] = ["*"]

    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str | None = None
    postgres_password: str | None = None
    postgres_db: str | None = None
    postgres_sslmode: str = "disable"
    postgres_pool_max_conns: int = 10
    postgres_pool_max_conn_lifetime: float = 3600.0
    postgres_pool_max_conn_idle_time: float = 300.0

    # Full URL override (tests, local sqlite)
    database_url: str | None = None
    database_create_schema: bool = False

    # Surface NotFound as 404 instead of the generic 500
    not_found_as_404: bool = False

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str | None) -> str | None:
        """Plain postgresql:// URLs need the asyncpg driver suffix."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level {v!r}")
        return v

    @model_validator(mode="after")
    def require_store_credentials(self) -> "Settings":
        """Without a URL override the POSTGRES_* credentials are mandatory."""
        if self.database_url:
            return self
        missing = [
            name for name in ("postgres_user", "postgres_password", "postgres_db")
            if not getattr(self, name)
        ]
        if missing:
            raise ValueError(f"missing required settings: {', '.join(missing)}")
        return self

    @property
    def resolved_database_url(self) -> str:
        """SQLAlchemy URL for the store, built from parts unless overridden."""
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+asyncpg",
            username=self.postgres_user,
            password=self.postgres_password,
            host=self.postgres_host,
            port=self.postgres_port,
            database=self.postgres_db,
        ).render_as_string(hide_password=False)


@lru_cache
def get_settings() -> Settings:
    return Settings()
