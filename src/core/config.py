"""Client configuration.

Centralizes environment variables (pydantic-settings) so that controllers,
authentication providers and the CLI read the same values:
- base URI and credentials are set once, when a client is constructed;
- nothing in the request path mutates them afterwards.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

import typer
from dotenv import set_key
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SDK_VERSION = "1.0.0"
DEFAULT_BASE_URI = "https://api.messagemedia.com"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def get_user_config_dir() -> Path:
    """Per-user configuration directory, as resolved by click for the platform."""

    return Path(typer.get_app_dir("messagemedia"))


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def write_user_env_vars(values: dict[str, str | None], *, env_path: Path | None = None) -> Path:
    """Write or update variables in the user's global .env file.

    Existing keys not in `values` are kept; `None` values are skipped.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)
    if not env_path.exists():
        env_path.write_text("# MessageMedia client config (.env)\n", encoding="utf-8")

    for key, value in values.items():
        if value is not None:
            set_key(env_path, key, value, quote_mode="never")
    return env_path


class AppSettings(BaseSettings):
    """Process-wide client configuration.

    Values come from `MESSAGEMEDIA_*` environment variables, the user `.env` and
    the project `.env`, in that order of precedence.
    """

    model_config = SettingsConfigDict(
        env_prefix="MESSAGEMEDIA_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
        frozen=True,
    )

    base_uri: str = Field(
        default=DEFAULT_BASE_URI,
        min_length=8,
        description="Base URI of the Messages API.",
    )

    basic_auth_user_name: str | None = Field(
        default=None,
        description="API key used for Basic authentication.",
    )
    basic_auth_password: str | None = Field(
        default=None,
        description="API secret used for Basic authentication.",
    )
    hmac_auth_user_name: str | None = Field(
        default=None,
        description="API key used for HMAC request signing.",
    )
    hmac_auth_password: str | None = Field(
        default=None,
        description="API secret used for HMAC request signing.",
    )
    use_hmac_authentication: bool = Field(
        default=False,
        description="Sign requests with HMAC-SHA1 instead of sending Basic credentials.",
    )

    http_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default=f"messagemedia-messages-python-sdk-{SDK_VERSION}",
        min_length=1,
        description="User-Agent sent with every request.",
    )

    max_workers: int = Field(
        default=4,
        ge=1,
        le=64,
        description="Size of the worker pool used by blocking and submitted calls.",
    )
    log_level: LogLevel = Field(
        default=LogLevel.WARNING,
        description="Log level used by the CLI.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value
