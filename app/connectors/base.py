"""
app/connectors/base.py

Batch source contract and shared HTTP mechanics for remote feeds.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Protocol

import requests

from app.config import ExternalHTTPSettings
from app.exceptions import BatchSourceError

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


class BatchSource(Protocol):
    """
    Supplies an ordered, finite sequence of loosely typed import rows.
    """

    name: str

    def fetch_rows(self) -> list[Any]: ...


class HTTPConnector(ABC):
    """
    Remote batch source with timeout, retry, exponential backoff and a
    minimum interval between outbound requests.
    """

    def __init__(
        self,
        *,
        name: str,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        self.name = name
        self._session = session or requests.Session()
        self._timeout_seconds = http_settings.timeout_seconds
        self._max_retries = http_settings.max_retries
        self._backoff_initial_seconds = http_settings.backoff_initial_seconds
        self._backoff_multiplier = http_settings.backoff_multiplier
        if http_settings.rate_limit_per_second > 0:
            self._min_interval_seconds = 1.0 / http_settings.rate_limit_per_second
        else:
            self._min_interval_seconds = 0.0
        self._last_request_at = 0.0

    @abstractmethod
    def fetch_rows(self) -> list[Any]:
        """
        Fetch the feed and return its raw rows in source order.
        """

    def _get_json(self, url: str, *, params: dict[str, Any] | None = None) -> Any:
        response = self._send("GET", url, params=params)
        try:
            return response.json()
        except ValueError as exc:
            raise BatchSourceError(f"{self.name}: response was not valid JSON.") from exc

    def _send(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
    ) -> requests.Response:
        last_error: Exception | None = None

        for attempt in range(self._max_retries + 1):
            self._throttle()
            try:
                response = self._session.request(
                    method=method,
                    url=url,
                    params=params,
                    headers={"Accept": "application/json"},
                    timeout=self._timeout_seconds,
                )
                if response.status_code in RETRYABLE_STATUS_CODES:
                    raise requests.HTTPError(
                        f"Retryable HTTP status code: {response.status_code}",
                        response=response,
                    )
                response.raise_for_status()
                return response
            except requests.HTTPError as exc:
                last_error = exc
                status_code = exc.response.status_code if exc.response is not None else None
                if status_code not in RETRYABLE_STATUS_CODES:
                    logger.error(
                        "Feed request failed source=%s status=%s url=%s error=%s",
                        self.name,
                        status_code,
                        url,
                        exc,
                    )
                    raise BatchSourceError(f"{self.name}: feed request was rejected.") from exc
            except (requests.Timeout, requests.ConnectionError) as exc:
                last_error = exc

            if attempt == self._max_retries:
                break

            wait_seconds = self._backoff_initial_seconds * (self._backoff_multiplier**attempt)
            logger.warning(
                "Feed request retry source=%s attempt=%s/%s wait_seconds=%.2f url=%s",
                self.name,
                attempt + 1,
                self._max_retries,
                wait_seconds,
                url,
            )
            time.sleep(wait_seconds)

        logger.error(
            "Feed request exhausted retries source=%s url=%s error=%s",
            self.name,
            url,
            last_error,
        )
        raise BatchSourceError(f"{self.name}: feed request failed after retries.") from last_error

    def _throttle(self) -> None:
        if self._min_interval_seconds <= 0:
            return

        remaining = self._min_interval_seconds - (time.monotonic() - self._last_request_at)
        if remaining > 0:
            time.sleep(remaining)
        self._last_request_at = time.monotonic()
