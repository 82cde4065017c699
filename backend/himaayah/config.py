"""
Application configuration from environment variables.
Loads .env from the backend directory so secrets are found regardless of cwd.
"""
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

DEFAULT_SECRET_KEY = "change-me-in-production"

# .env next to backend/ (parent of himaayah/); load explicitly so it is used even when run from repo root
_BACKEND_DIR = Path(__file__).resolve().parent.parent
_ENV_FILE = _BACKEND_DIR / ".env"

if _ENV_FILE.exists():
    from dotenv import load_dotenv
    load_dotenv(_ENV_FILE, override=False)


class Settings(BaseSettings):
    """Load and validate config from env."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Database: sqlite for local runs and tests; DB_HOST/DB_USER/DB_PASS/DB_NAME switch to PostgreSQL.
    database_url: str = "sqlite:///./himaayah_dev.db"
    db_host: str = ""
    db_port: int | None = None
    db_user: str = ""
    db_pass: str = ""
    db_name: str = "himaayah"
    # Pool bound: at most this many live connections; further requests wait up to db_pool_timeout_seconds.
    db_connection_limit: int = 10
    db_pool_timeout_seconds: int = 30

    # Environment: set ENV=production in production; used to enforce JWT_SECRET.
    env: str = ""

    # JWT. Tokens are not revocable; they stay valid until exp.
    secret_key: str = Field(default=DEFAULT_SECRET_KEY, validation_alias=AliasChoices("JWT_SECRET", "SECRET_KEY"))
    jwt_algorithm: str = "HS256"
    jwt_expire_hours: int = 8

    port: int = 4000

    # CORS: comma-separated origins
    cors_origins: str = "*"

    debug: bool = False

    @field_validator("db_connection_limit")
    @classmethod
    def _positive_pool(cls, v: int) -> int:
        if v < 1:
            raise ValueError("DB_CONNECTION_LIMIT must be at least 1")
        return v

    @property
    def sqlalchemy_url(self) -> str | URL:
        """PostgreSQL URL when DB_HOST is set, otherwise DATABASE_URL as given."""
        if not self.db_host.strip():
            return self.database_url
        return URL.create(
            "postgresql+psycopg2",
            username=self.db_user or None,
            password=self.db_pass or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )


settings = Settings()
