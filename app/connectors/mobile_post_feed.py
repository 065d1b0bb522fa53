"""
app/connectors/mobile_post_feed.py

Batch sources for mobile post imports: the upstream open-data feed over HTTP
and a local JSON file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import requests

from app.config import ExternalHTTPSettings, MobilePostFeedSettings
from app.connectors.base import HTTPConnector
from app.exceptions import BatchSourceError

logger = logging.getLogger(__name__)

# Envelope keys under which feeds commonly nest their row list.
_ROW_CONTAINER_KEYS: tuple[str, ...] = ("data", "records", "items")


def extract_rows(payload: Any, *, source: str) -> list[Any]:
    """
    Return the row list from a decoded feed document.

    Accepts a top-level array or an object holding the array under one of
    ``data``, ``records`` or ``items``.
    """

    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in _ROW_CONTAINER_KEYS:
            rows = payload.get(key)
            if isinstance(rows, list):
                return rows
    raise BatchSourceError(f"{source}: feed document does not contain a row list.")


class MobilePostFeedConnector(HTTPConnector):
    """
    Reads the configured open-data feed.
    """

    def __init__(
        self,
        *,
        settings: MobilePostFeedSettings,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(name="mobile_post_feed", http_settings=http_settings, session=session)
        if not settings.url:
            raise ValueError("MOBILE_POST_FEED_URL is not configured.")
        self._url = settings.url

    def fetch_rows(self) -> list[Any]:
        payload = self._get_json(self._url)
        rows = extract_rows(payload, source=self.name)
        logger.info("Fetched mobile post feed url=%s rows=%d", self._url, len(rows))
        return rows


class JsonFileBatchSource:
    """
    Reads rows from a JSON file on disk.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self.name = f"file:{self._path.name}"

    def fetch_rows(self) -> list[Any]:
        try:
            text = self._path.read_text(encoding="utf-8-sig")
        except OSError as exc:
            raise BatchSourceError(f"{self.name}: file could not be read.") from exc
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise BatchSourceError(f"{self.name}: file is not valid JSON.") from exc
        return extract_rows(payload, source=self.name)
