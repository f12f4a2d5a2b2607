from __future__ import annotations

from functools import reduce
from typing import Iterable

from movie_sync.models import Movie


def merge(existing: list[Movie], incoming: Movie) -> list[Movie]:
    """Return a new collection with incoming appended unless its imdb_id is already present.

    The first movie seen for an imdb_id wins; later duplicates are dropped
    rather than updating the stored entry. ``existing`` is never mutated.
    """
    if any(movie.imdb_id == incoming.imdb_id for movie in existing):
        return list(existing)
    return [*existing, incoming]


def merge_all(existing: list[Movie], incoming: Iterable[Movie]) -> list[Movie]:
    return reduce(merge, incoming, list(existing))
