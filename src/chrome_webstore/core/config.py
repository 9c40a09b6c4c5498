"""Client configuration.

Centralizes environment variables (pydantic-settings) so the request builder,
the transport and the CLI read the same defaults.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "chrome-webstore"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "chrome-webstore"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "chrome-webstore"
    return Path.home() / ".config" / "chrome-webstore"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Central client settings.

    Per-call `RequestOptions` (proxy, headers, timeout) take precedence over
    the transport defaults defined here.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHROME_WEBSTORE_",
        extra="ignore",
        case_sensitive=False,
        # Project .env first, then the user-wide one.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
        ),
        min_length=1,
        description="User-Agent sent to the store.",
    )
    base_url: str = Field(
        default="https://chrome.google.com",
        min_length=8,
        description="Origin of the store's internal endpoints.",
    )
    default_locale: str = Field(
        default="en",
        min_length=2,
        description="Locale used when an operation does not specify one.",
    )
    default_country: str = Field(
        default="US",
        min_length=2,
        max_length=2,
        description="Country code sent as `gl`.",
    )
    api_version: str | None = Field(
        default=None,
        description="Overrides the built-in store API version (`pv`).",
    )
    proxy_url: str | None = Field(
        default=None,
        description="Proxy URL used when a call does not pass its own.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level used by the CLI.",
    )
