"""Vela configuration.

Values come from the process environment first. The one dotenv file that is
consulted after that is, in order of preference:

- the path in ``VELA_ENV_FILE`` (relative paths resolve against the project)
- ``config/.env.dev`` for local development
- ``config/.env`` for containers

The resulting ``Settings`` instance is built once at process start and handed
to ``create_app``; request handlers and services never call ``get_settings``
themselves.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_project_root() -> Path:
    """Directory holding config/ or pyproject.toml, else the working dir."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / "pyproject.toml").is_file():
            return parent

    return Path.cwd()


def _resolve_env_file_path() -> Path | None:
    env_file_path = os.environ.get("VELA_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = _find_project_root() / "config"
    for candidate in (config_dir / ".env.dev", config_dir / ".env"):
        if candidate.exists():
            return candidate

    return None


class Settings(BaseSettings):
    """Typed view of the environment.

    Only the two JWT secrets are mandatory; everything else has a default
    that works for local development against PostgreSQL.
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Token signing keys, one per token kind; startup fails without them
    jwt_access_secret: SecretStr
    jwt_refresh_secret: SecretStr

    # Application
    app_name: str = "Vela"
    environment: Literal["development", "production", "test"] = "production"

    # Tokens
    jwt_access_token_expire_minutes: int = 15
    jwt_refresh_token_expire_days: int = 7

    # Password hashing
    password_hash_rounds: int = 12

    # Database: DATABASE_URL wins over the POSTGRES_* components
    database_url: str | None = None
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: SecretStr = SecretStr("")
    postgres_db: str = "vela"
    database_echo: bool = False

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 5050
    api_cors_origins: str = ""  # Empty = no CORS allowed
    api_docs_enabled: bool = True

    # Logging
    log_level: str = "INFO"

    @field_validator("api_cors_origins", mode="before")
    @classmethod
    def _validate_cors_origins(cls, v: Any) -> str:
        """Accept a list as well as the comma-separated form."""
        if isinstance(v, list):
            return ",".join(v)
        return str(v) if v else ""

    @field_validator("jwt_access_secret", "jwt_refresh_secret")
    @classmethod
    def _validate_secret_not_empty(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value():
            msg = "JWT secrets must not be empty"
            raise ValueError(msg)
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def sqlalchemy_database_url(self) -> str:
        """Database URL handed to the async engine."""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+asyncpg://{self.postgres_user}:"
            f"{self.postgres_password.get_secret_value()}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins(self) -> list[str]:
        """Allowed origins; empty disables CORS."""
        return [o.strip() for o in self.api_cors_origins.split(",") if o.strip()]

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache()
def get_settings() -> Settings:
    """Read the settings once per process.

    Raises pydantic.ValidationError when a JWT secret is missing.
    """
    return Settings()  # type: ignore[call-arg]


def clear_settings_cache() -> None:
    """Forget the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
