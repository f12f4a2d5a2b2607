from __future__ import annotations

import json
from datetime import date
from typing import Any

import pytest
import requests

from movie_sync.config import SourceSettings
from movie_sync.errors import FetchError, SnapshotUnavailableError, ValidationError
from movie_sync.models import Unavailable
from movie_sync.sources import HttpSnapshotSource

BASE_URL = "https://popular-movies-data.example.test/"


class _DummyResponse:
    def __init__(self, status_code: int = 200, content: bytes = b"[]") -> None:
        self.status_code = status_code
        self.content = content

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class _RecordingGet:
    def __init__(self, response: _DummyResponse | requests.Response | Exception) -> None:
        self.response = response
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def __call__(self, url: str, **kwargs: Any) -> _DummyResponse:
        self.calls.append((url, kwargs))
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def _source(timeout_seconds: float = 1.0) -> HttpSnapshotSource:
    return HttpSnapshotSource(
        SourceSettings(base_url=BASE_URL, timeout_seconds=timeout_seconds)
    )


def _install(monkeypatch: pytest.MonkeyPatch, response: _DummyResponse | requests.Response | Exception) -> _RecordingGet:
    fake = _RecordingGet(response)
    monkeypatch.setattr("requests.get", fake)
    return fake


def _movie_payload(imdb_id: str) -> dict[str, Any]:
    return {
        "title": f"Title {imdb_id}",
        "imdb_id": imdb_id,
        "poster_url": f"https://img/{imdb_id}.jpg",
        "tmdb_id": 7,
        "genres": ["Comedy"],
    }


def test_fetch_day_builds_dated_url_with_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    body = json.dumps([_movie_payload("tt1"), _movie_payload("tt2")]).encode("utf-8")
    fake = _install(monkeypatch, _DummyResponse(200, body))

    movies = _source(timeout_seconds=1.5).fetch_day(date(2025, 1, 8))

    assert [movie.imdb_id for movie in movies] == ["tt1", "tt2"]
    assert movies[0].extra == {"tmdb_id": 7, "genres": ["Comedy"]}
    url, kwargs = fake.calls[0]
    assert url == "https://popular-movies-data.example.test/movies-20250108.json"
    assert kwargs["timeout"] == 1.5


def test_not_found_is_an_empty_day(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _DummyResponse(404, b"Not Found"))

    assert _source().fetch_day(date(2025, 1, 8)) == []


def test_other_failure_status_is_unavailable(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _DummyResponse(503, b"busy"))

    result = _source().fetch_day(date(2025, 1, 8))

    assert isinstance(result, Unavailable)
    assert result.day == date(2025, 1, 8)
    assert result.status_code == 503
    assert result.url.endswith("/movies-20250108.json")


def test_unparseable_body_is_treated_as_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _DummyResponse(200, b"not-json"))

    assert _source().fetch_day(date(2025, 1, 8)) == []


def test_schema_violation_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _DummyResponse(200, b'[{"bad": "data"}]'))

    with pytest.raises(ValidationError):
        _source().fetch_day(date(2025, 1, 8))


def test_non_array_payload_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _DummyResponse(200, b'{"movies": []}'))

    with pytest.raises(ValidationError, match="JSON array"):
        _source().fetch_day(date(2025, 1, 8))


@pytest.mark.parametrize(
    "error",
    [requests.Timeout("timed out"), requests.ConnectionError("network error")],
)
def test_transport_failure_raises_fetch_error(
    monkeypatch: pytest.MonkeyPatch,
    error: Exception,
) -> None:
    _install(monkeypatch, error)

    with pytest.raises(FetchError, match="movies-20250108.json"):
        _source().fetch_day(date(2025, 1, 8))


def test_fetch_latest_uses_undated_url(monkeypatch: pytest.MonkeyPatch) -> None:
    body = json.dumps([_movie_payload("tt9")]).encode("utf-8")
    fake = _install(monkeypatch, _DummyResponse(200, body))

    movies = _source().fetch_latest()

    assert [movie.imdb_id for movie in movies] == ["tt9"]
    assert fake.calls[0][0] == "https://popular-movies-data.example.test/movies.json"


def test_fetch_latest_raises_on_failure_status(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _DummyResponse(404, b""))

    with pytest.raises(SnapshotUnavailableError, match="404"):
        _source().fetch_latest()


def test_fetch_latest_rejects_unparseable_body(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _DummyResponse(200, b"<html>"))

    with pytest.raises(ValidationError):
        _source().fetch_latest()



@pytest.mark.parametrize("status_code", [300, 304])
def test_unredirected_3xx_is_unavailable_not_empty(
    monkeypatch: pytest.MonkeyPatch,
    status_code: int,
) -> None:
    response = requests.Response()
    response.status_code = status_code
    response._content = b""
    _install(monkeypatch, response)

    result = _source().fetch_day(date(2025, 1, 8))

    assert isinstance(result, Unavailable)
    assert result.status_code == status_code


def test_fetch_latest_raises_unavailable_on_3xx(monkeypatch: pytest.MonkeyPatch) -> None:
    response = requests.Response()
    response.status_code = 304
    response._content = b""
    _install(monkeypatch, response)

    with pytest.raises(SnapshotUnavailableError, match="304"):
        _source().fetch_latest()
