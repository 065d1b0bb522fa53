from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import requests

from app.config import ExternalHTTPSettings, MobilePostFeedSettings
from app.connectors.mobile_post_feed import JsonFileBatchSource, MobilePostFeedConnector, extract_rows
from app.exceptions import BatchSourceError

FEED_URL = "https://feeds.example.test/mobile-posts.json"


class _FakeResponse:
    def __init__(self, status_code: int, payload: Any = None, text: str | None = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self._text = text

    def json(self) -> Any:
        if self._text is not None:
            return json.loads(self._text)
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}", response=self)


class _FakeSession:
    def __init__(self, responses: list[Any]) -> None:
        self._responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def request(self, **kwargs: Any) -> _FakeResponse:
        self.calls.append(kwargs)
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _connector(session: _FakeSession, *, max_retries: int = 2) -> MobilePostFeedConnector:
    return MobilePostFeedConnector(
        settings=MobilePostFeedSettings(enabled=True, url=FEED_URL),
        http_settings=ExternalHTTPSettings(
            timeout_seconds=1.0,
            max_retries=max_retries,
            backoff_initial_seconds=0.0,
            backoff_multiplier=1.0,
            rate_limit_per_second=0.0,
        ),
        session=session,  # type: ignore[arg-type]
    )


def test_extract_rows_accepts_list_and_wrapped_documents() -> None:
    assert extract_rows([{"a": 1}], source="test") == [{"a": 1}]
    assert extract_rows({"data": [{"a": 1}]}, source="test") == [{"a": 1}]
    assert extract_rows({"records": []}, source="test") == []


def test_extract_rows_rejects_documents_without_rows() -> None:
    with pytest.raises(BatchSourceError):
        extract_rows({"data": "nope"}, source="test")


def test_fetch_rows_returns_feed_rows() -> None:
    session = _FakeSession([_FakeResponse(200, {"data": [{"mobileCode": "MO1"}]})])

    rows = _connector(session).fetch_rows()

    assert rows == [{"mobileCode": "MO1"}]
    assert session.calls[0]["url"] == FEED_URL
    assert session.calls[0]["method"] == "GET"


def test_retries_transient_failures() -> None:
    session = _FakeSession(
        [
            _FakeResponse(503),
            requests.ConnectionError("reset"),
            _FakeResponse(200, [{"mobileCode": "MO2"}]),
        ]
    )

    rows = _connector(session).fetch_rows()

    assert rows == [{"mobileCode": "MO2"}]
    assert len(session.calls) == 3


def test_gives_up_after_retries() -> None:
    session = _FakeSession([_FakeResponse(500), _FakeResponse(502)])

    with pytest.raises(BatchSourceError):
        _connector(session, max_retries=1).fetch_rows()
    assert len(session.calls) == 2


def test_client_errors_are_not_retried() -> None:
    session = _FakeSession([_FakeResponse(404)])

    with pytest.raises(BatchSourceError):
        _connector(session).fetch_rows()
    assert len(session.calls) == 1


def test_invalid_json_is_a_source_error() -> None:
    session = _FakeSession([_FakeResponse(200, text="<html>")])

    with pytest.raises(BatchSourceError):
        _connector(session).fetch_rows()


def test_connector_requires_url() -> None:
    with pytest.raises(ValueError):
        MobilePostFeedConnector(
            settings=MobilePostFeedSettings(enabled=True, url=None),
            http_settings=ExternalHTTPSettings(),
        )


def test_json_file_source(tmp_path: Path) -> None:
    path = tmp_path / "mobile_posts.json"
    path.write_text(json.dumps({"items": [{"nameEN": "Mobile Post Office No. 1"}]}), encoding="utf-8")

    source = JsonFileBatchSource(path)

    assert source.name == "file:mobile_posts.json"
    assert source.fetch_rows() == [{"nameEN": "Mobile Post Office No. 1"}]


def test_json_file_source_errors(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")

    with pytest.raises(BatchSourceError):
        JsonFileBatchSource(broken).fetch_rows()
    with pytest.raises(BatchSourceError):
        JsonFileBatchSource(tmp_path / "missing.json").fetch_rows()
