from __future__ import annotations

import json
import logging
from datetime import date, timedelta

from movie_sync.errors import ValidationError
from movie_sync.models import Movie, parse_movies
from movie_sync.utils.datetime_utils import format_day, parse_day

from .base import BlobStore

logger = logging.getLogger(__name__)

CHECKPOINT_KEY = "last_synced.txt"
COLLECTION_KEY = "movies.json"


class CheckpointStore:
    """Persists the last fully processed calendar day as YYYY-MM-DD text."""

    def __init__(self, blobs: BlobStore, *, epoch: date, key: str = CHECKPOINT_KEY) -> None:
        self.blobs = blobs
        self.epoch = epoch
        self.key = key

    def read(self) -> date:
        raw = self.blobs.get(self.key)
        if raw is None:
            initial = self.epoch - timedelta(days=1)
            logger.info("No checkpoint found; initializing %s to %s", self.key, format_day(initial))
            self.write(initial)
            return initial

        text = raw.decode("utf-8", errors="replace")
        try:
            return parse_day(text)
        except ValueError as exc:
            raise ValidationError(f"{self.key} does not hold a YYYY-MM-DD date: {text!r}") from exc

    def write(self, day: date) -> None:
        self.blobs.put(self.key, format_day(day).encode("utf-8"))


class CollectionStore:
    """Persists the whole deduplicated movie collection as one JSON array."""

    def __init__(self, blobs: BlobStore, *, key: str = COLLECTION_KEY) -> None:
        self.blobs = blobs
        self.key = key

    def read(self) -> list[Movie]:
        raw = self.blobs.get(self.key)
        if raw is None:
            logger.info("No collection found; initializing %s as empty", self.key)
            self.write([])
            return []

        try:
            payload = json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ValidationError(f"{self.key} is not valid JSON: {exc}") from exc
        return parse_movies(payload)

    def write(self, movies: list[Movie]) -> None:
        payload = [movie.to_dict() for movie in movies]
        self.blobs.put(self.key, json.dumps(payload, ensure_ascii=False).encode("utf-8"))
