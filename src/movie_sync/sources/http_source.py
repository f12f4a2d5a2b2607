from __future__ import annotations

import json
import logging
from datetime import date
from typing import Any

import requests

from movie_sync.config import SourceSettings
from movie_sync.errors import FetchError, SnapshotUnavailableError, ValidationError
from movie_sync.models import Movie, Unavailable, parse_movies
from movie_sync.utils.datetime_utils import format_day
from movie_sync.utils.url_utils import build_latest_url, build_snapshot_url

from .base import SnapshotSource

logger = logging.getLogger(__name__)

_NOT_FOUND = 404
_HEADERS = {"User-Agent": "movie-sync/0.1 (+https://github.com/)"}


class HttpSnapshotSource(SnapshotSource):
    def __init__(self, settings: SourceSettings) -> None:
        self.base_url = settings.base_url
        self.timeout_seconds = settings.timeout_seconds

    def fetch_day(self, day: date) -> list[Movie] | Unavailable:
        url = build_snapshot_url(self.base_url, day)
        response = self._get(url)

        if response.status_code == _NOT_FOUND:
            logger.info("No snapshot published for %s", format_day(day))
            return []
        if not _is_success(response.status_code):
            return Unavailable(day=day, url=url, status_code=response.status_code)

        try:
            payload = _decode_json(response)
        except ValueError as exc:
            logger.warning("Snapshot body for %s is not valid JSON; treating as empty: %s", url, exc)
            return []

        return parse_movies(payload)

    def fetch_latest(self) -> list[Movie]:
        url = build_latest_url(self.base_url)
        response = self._get(url)
        if not _is_success(response.status_code):
            raise SnapshotUnavailableError(url, response.status_code)

        try:
            payload = _decode_json(response)
        except ValueError as exc:
            raise ValidationError(f"{url} did not return valid JSON: {exc}") from exc
        return parse_movies(payload)

    def _get(self, url: str) -> requests.Response:
        logger.debug("GET %s (timeout=%ss)", url, self.timeout_seconds)
        try:
            return requests.get(url, timeout=self.timeout_seconds, headers=_HEADERS)
        except requests.RequestException as exc:
            raise FetchError(url, str(exc)) from exc


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def _decode_json(response: requests.Response) -> Any:
    return json.loads(response.content)
