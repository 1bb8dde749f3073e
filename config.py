"""
config.py

Responsibility: Loads process-level settings (HTTP timeout, client
identification, logging, public IP sources) from DDNS_* environment
variables or a .env file.
Does NOT: parse per-provider settings (see providers/) or the domain list.
get_settings() is called once at startup by the embedding application (the
scheduler or CLI that drives updates), which passes the result to
Fetcher.from_settings() and configure_logging().
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__version__ = "0.1.0"

DEFAULT_USER_AGENT = f"ddns-publicip/{__version__}"


class Settings(BaseSettings):
    """
    Runtime settings shared by the Fetcher and the provider adapters.

    Every field can be overridden with an environment variable of the same
    name prefixed by ``DDNS_``, e.g. ``DDNS_HTTP_TIMEOUT=5``. List fields are
    given as JSON, e.g. ``DDNS_PUBLIC_IP_SOURCES='["ipify", "ident"]'``.
    """

    model_config = SettingsConfigDict(
        env_prefix="DDNS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Default deadline in seconds for every outbound HTTP call
    http_timeout: float = Field(default=10.0, gt=0)

    # Value of the User-Agent header sent to providers and echo sources
    user_agent: str = DEFAULT_USER_AGENT

    # Root log level name ("DEBUG", "INFO", ...)
    log_level: str = "INFO"

    # Optional file receiving a copy of every log line
    log_file: str | None = None

    # Names of echo sources to rotate through; empty means all built-in ones
    public_ip_sources: list[str] = Field(default_factory=list)

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {value!r}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Returns the process-wide Settings, loaded once on first use."""
    return Settings()
