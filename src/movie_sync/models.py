from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from movie_sync.errors import ValidationError

REQUIRED_FIELDS = ("title", "imdb_id", "poster_url")


@dataclass(slots=True)
class Movie:
    title: str
    imdb_id: str
    poster_url: str
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, value: Any) -> Movie:
        if not isinstance(value, dict):
            raise ValidationError(f"Movie entry must be an object, got: {type(value).__name__}")

        for name in REQUIRED_FIELDS:
            if not isinstance(value.get(name), str):
                raise ValidationError(f"Movie entry field '{name}' must be a string")

        extra = {key: item for key, item in value.items() if key not in REQUIRED_FIELDS}
        return cls(
            title=value["title"],
            imdb_id=value["imdb_id"],
            poster_url=value["poster_url"],
            extra=extra,
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "title": self.title,
            "imdb_id": self.imdb_id,
            "poster_url": self.poster_url,
        }
        payload.update(self.extra)
        return payload


def parse_movies(payload: Any) -> list[Movie]:
    """Validate a decoded JSON document as an array of movie entries."""
    if not isinstance(payload, list):
        raise ValidationError(f"Expected a JSON array of movies, got: {type(payload).__name__}")
    return [Movie.from_dict(item) for item in payload]


@dataclass(slots=True, frozen=True)
class Unavailable:
    """A day whose snapshot could not be confirmed (non-404 failure status)."""

    day: date
    url: str
    status_code: int
