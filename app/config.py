"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, TypeVar

from app.domain.mobile_post import MAX_PAGE_LIMIT
from db.config import load_env_files

_TRUE_VALUES = {"1", "true", "yes", "on"}

T = TypeVar("T", int, float)


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _raw_env(name: str) -> str | None:
    _load_env_once()
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _get_bool_env(name: str, default: bool) -> bool:
    raw = _raw_env(name)
    return default if raw is None else raw.lower() in _TRUE_VALUES


def _get_number_env(name: str, default: T, cast: Callable[[str], T]) -> T:
    raw = _raw_env(name)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class ListingSettings:
    """
    Defaults applied to list requests that omit paging parameters.
    """

    default_limit: int = 20


@dataclass(frozen=True)
class ImportSettings:
    """
    Runtime settings for bulk imports.
    """

    max_irregularities: int = 1000
    log_irregularities: bool = True


@dataclass(frozen=True)
class MobilePostFeedSettings:
    """
    Upstream open-data feed used when an import is triggered without rows.
    """

    enabled: bool = True
    url: str | None = None


@dataclass(frozen=True)
class ExternalHTTPSettings:
    """
    HTTP behaviour for the feed connector.
    """

    timeout_seconds: float = 15.0
    max_retries: int = 3
    backoff_initial_seconds: float = 0.5
    backoff_multiplier: float = 2.0
    rate_limit_per_second: float = 5.0


@lru_cache(maxsize=1)
def get_listing_settings() -> ListingSettings:
    return ListingSettings(
        default_limit=min(MAX_PAGE_LIMIT, max(1, _get_number_env("MOBILE_POST_DEFAULT_LIMIT", 20, int))),
    )


@lru_cache(maxsize=1)
def get_import_settings() -> ImportSettings:
    return ImportSettings(
        max_irregularities=max(1, _get_number_env("MOBILE_POST_IMPORT_MAX_IRREGULARITIES", 1000, int)),
        log_irregularities=_get_bool_env("MOBILE_POST_IMPORT_LOG_IRREGULARITIES", True),
    )


@lru_cache(maxsize=1)
def get_feed_settings() -> MobilePostFeedSettings:
    return MobilePostFeedSettings(
        enabled=_get_bool_env("MOBILE_POST_FEED_ENABLED", True),
        url=_raw_env("MOBILE_POST_FEED_URL"),
    )


@lru_cache(maxsize=1)
def get_external_http_settings() -> ExternalHTTPSettings:
    """
    Return connector HTTP settings from environment variables.
    """

    return ExternalHTTPSettings(
        timeout_seconds=max(1.0, _get_number_env("EXTERNAL_HTTP_TIMEOUT_SECONDS", 15.0, float)),
        max_retries=max(0, _get_number_env("EXTERNAL_HTTP_MAX_RETRIES", 3, int)),
        backoff_initial_seconds=max(0.1, _get_number_env("EXTERNAL_HTTP_BACKOFF_INITIAL_SECONDS", 0.5, float)),
        backoff_multiplier=max(1.0, _get_number_env("EXTERNAL_HTTP_BACKOFF_MULTIPLIER", 2.0, float)),
        rate_limit_per_second=max(0.1, _get_number_env("EXTERNAL_HTTP_RATE_LIMIT_PER_SECOND", 5.0, float)),
    )
