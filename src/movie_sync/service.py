from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Callable

from movie_sync.errors import InvalidCheckpointError
from movie_sync.merge import merge_all
from movie_sync.models import Movie, Unavailable
from movie_sync.sources import SnapshotSource
from movie_sync.store import CheckpointStore, CollectionStore
from movie_sync.utils.datetime_utils import format_day, utc_now, utc_today

logger = logging.getLogger(__name__)

DEFAULT_MAX_DAYS_PER_RUN = 7


@dataclass(slots=True)
class SyncReport:
    checkpoint_before: date
    checkpoint_after: date
    processed_days: list[date] = field(default_factory=list)
    unavailable_days: list[date] = field(default_factory=list)
    movies_added: int = 0
    collection_writes: int = 0

    @property
    def pending_days(self) -> int:
        return len(self.processed_days) + len(self.unavailable_days)


def compute_pending_window(
    checkpoint: date,
    today: date,
    *,
    max_days: int = DEFAULT_MAX_DAYS_PER_RUN,
) -> list[date]:
    """Days after checkpoint up to min(checkpoint + max_days, yesterday), ascending."""
    yesterday = today - timedelta(days=1)
    if checkpoint > yesterday:
        raise InvalidCheckpointError(
            f"Invalid last sync date {format_day(checkpoint)}: "
            f"later than yesterday ({format_day(yesterday)})"
        )

    last = min(checkpoint + timedelta(days=max_days), yesterday)
    return [checkpoint + timedelta(days=offset) for offset in range(1, (last - checkpoint).days + 1)]


class MovieSyncService:
    """Advances the checkpoint day by day, merging each day's snapshot into the collection.

    Callers must not run two synchronizations against the same stores at
    once; the stores provide no isolation between concurrent runs.
    """

    def __init__(
        self,
        *,
        source: SnapshotSource,
        checkpoint_store: CheckpointStore,
        collection_store: CollectionStore,
        max_days_per_run: int = DEFAULT_MAX_DAYS_PER_RUN,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.source = source
        self.checkpoint_store = checkpoint_store
        self.collection_store = collection_store
        self.max_days_per_run = max_days_per_run
        self.clock = clock

    def synchronize(self, now: datetime | None = None) -> SyncReport:
        checkpoint = self.checkpoint_store.read()
        movies = self.collection_store.read()

        today = utc_today(now or self.clock())
        window = compute_pending_window(checkpoint, today, max_days=self.max_days_per_run)
        report = SyncReport(checkpoint_before=checkpoint, checkpoint_after=checkpoint)

        if not window:
            logger.info("Checkpoint %s is current; nothing to sync", format_day(checkpoint))
            return report

        logger.info(
            "Syncing %d day(s): %s .. %s",
            len(window),
            format_day(window[0]),
            format_day(window[-1]),
        )

        advancing = True
        for day in window:
            result = self.source.fetch_day(day)

            if isinstance(result, Unavailable):
                logger.warning(
                    "Snapshot for %s unavailable (status %d); checkpoint held at %s",
                    format_day(day),
                    result.status_code,
                    format_day(report.checkpoint_after),
                )
                report.unavailable_days.append(day)
                advancing = False
                continue

            movies = self._merge_day(day, movies, result, report)

            if advancing:
                self.checkpoint_store.write(day)
                report.checkpoint_after = day
            report.processed_days.append(day)

        logger.info(
            "Sync complete | checkpoint=%s processed=%d unavailable=%d added=%d total=%d",
            format_day(report.checkpoint_after),
            len(report.processed_days),
            len(report.unavailable_days),
            report.movies_added,
            len(movies),
        )
        return report

    def read_collection(self) -> list[Movie]:
        return self.collection_store.read()

    def read_checkpoint(self) -> date:
        return self.checkpoint_store.read()

    def _merge_day(
        self,
        day: date,
        movies: list[Movie],
        fetched: list[Movie],
        report: SyncReport,
    ) -> list[Movie]:
        merged = merge_all(movies, fetched)
        added = len(merged) - len(movies)
        logger.info(
            "Day %s: fetched=%d new=%d",
            format_day(day),
            len(fetched),
            added,
        )

        if added > 0:
            self.collection_store.write(merged)
            report.movies_added += added
            report.collection_writes += 1
        return merged
