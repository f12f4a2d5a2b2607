from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from movie_sync.models import Movie, Unavailable


class SnapshotSource(ABC):
    @abstractmethod
    def fetch_day(self, day: date) -> list[Movie] | Unavailable:
        """Fetch the snapshot published for a day.

        Returns an empty list when no snapshot exists for the day, and
        Unavailable when the day could not be confirmed either way.
        """

    @abstractmethod
    def fetch_latest(self) -> list[Movie]:
        """Fetch the most recently published snapshot."""
