"""
Configuration - reads all settings from environment variables.
Uses python-dotenv for local dev. Nothing is required: every setting has a
default that talks to the public registry directly.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _invalid(key: str, value: str, expected: str) -> EnvironmentError:
    return EnvironmentError(
        f"Invalid value for {key}: {value!r} (expected {expected})\n"
        f"Fix it in your environment or .env file."
    )


def _get_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise _invalid(key, raw, "an integer")


def _get_float(key: str, default: float) -> float:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise _invalid(key, raw, "a number")


def _get_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise _invalid(key, raw, "true/false")


def _get_log_level(key: str, default: str) -> str:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().upper()
    if value not in LOG_LEVELS:
        raise _invalid(key, raw, "one of " + "/".join(LOG_LEVELS))
    return value


@dataclass(frozen=True)
class Config:
    # Server
    port: int = 5000
    app_env: str = "development"
    log_level: str = "INFO"

    # Remote registry
    registry_base_url: str = "https://prelive.elections.am/Register"
    request_timeout_seconds: float = 20.0
    proxy_url: Optional[str] = None  # Residential proxy to get past IP blocking
    use_proxy: bool = False

    # Token cache
    token_ttl_seconds: float = 300.0
    token_max_attempts: int = 3
    token_retry_base_delay_seconds: float = 2.0

    # Pagination
    max_pages: int = 3
    page_delay_seconds: float = 0.5

    @property
    def is_development(self) -> bool:
        return self.app_env.lower() == "development"

    @property
    def effective_proxy(self) -> Optional[str]:
        if self.use_proxy and self.proxy_url:
            return self.proxy_url
        return None

    @classmethod
    def from_env(cls) -> "Config":
        proxy_url = os.getenv("PROXY_URL") or None

        return cls(
            port=_get_int("PORT", 5000),
            app_env=os.getenv("APP_ENV", "development"),
            log_level=_get_log_level("LOG_LEVEL", "INFO"),
            registry_base_url=os.getenv(
                "REGISTRY_BASE_URL", "https://prelive.elections.am/Register"
            ),
            request_timeout_seconds=_get_float("REQUEST_TIMEOUT_SECONDS", 20.0),
            proxy_url=proxy_url,
            use_proxy=_get_bool("USE_PROXY", proxy_url is not None),
            token_ttl_seconds=_get_float("TOKEN_CACHE_TTL_SECONDS", 300.0),
            token_max_attempts=_get_int("TOKEN_MAX_ATTEMPTS", 3),
            token_retry_base_delay_seconds=_get_float("TOKEN_RETRY_BASE_DELAY_SECONDS", 2.0),
            max_pages=_get_int("MAX_PAGES", 3),
            page_delay_seconds=_get_float("PAGE_DELAY_SECONDS", 0.5),
        )
