from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime

from movie_sync.config import AppConfig, ConfigError, load_config
from movie_sync.errors import MovieSyncError
from movie_sync.logging_config import setup_logging
from movie_sync.models import Movie
from movie_sync.service import MovieSyncService
from movie_sync.sources import HttpSnapshotSource
from movie_sync.store import (
    BlobStore,
    CheckpointStore,
    CollectionStore,
    FilesystemBlobStore,
    InMemoryBlobStore,
)
from movie_sync.utils.datetime_utils import format_day, parse_datetime_utc

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="movie-sync",
        description="Merge daily popular-movie snapshots into a deduplicated collection.",
    )
    parser.add_argument(
        "-c",
        "--config",
        default="config.yaml",
        help="Path to config YAML file (default: config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        help="Override config log level (e.g. INFO, DEBUG)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    sync = subparsers.add_parser("sync", help="Process pending daily snapshots once")
    sync.add_argument(
        "--now",
        help="Treat this ISO timestamp as the current time (default: wall clock)",
    )
    subparsers.add_parser("show", help="Print the stored movie collection as JSON")
    subparsers.add_parser("status", help="Print the checkpoint and collection size")
    subparsers.add_parser("latest", help="Fetch and print the latest remote snapshot")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        app_config = load_config(args.config)
        service = _build_service(app_config)
    except ConfigError as exc:
        print(f"Config error: {exc}", file=sys.stderr)
        return 2

    log_level = args.log_level or app_config.log_level
    setup_logging(log_level)

    try:
        if args.command == "sync":
            return _run_sync(service, parser, now_raw=args.now)
        if args.command == "show":
            _print_movies(service.read_collection())
            return 0
        if args.command == "status":
            checkpoint = service.read_checkpoint()
            movies = service.read_collection()
            print(f"last_synced: {format_day(checkpoint)}")
            print(f"movies: {len(movies)}")
            return 0
        if args.command == "latest":
            _print_movies(service.source.fetch_latest())
            return 0
    except MovieSyncError as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 1

    parser.error(f"unknown command: {args.command}")
    return 2


def _build_blob_store(app_config: AppConfig) -> BlobStore:
    if app_config.storage.type == "memory":
        return InMemoryBlobStore()
    if app_config.storage.type == "filesystem":
        return FilesystemBlobStore(app_config.storage.path)
    raise ConfigError(f"Unsupported storage type: {app_config.storage.type}")


def _build_service(app_config: AppConfig) -> MovieSyncService:
    blobs = _build_blob_store(app_config)
    return MovieSyncService(
        source=HttpSnapshotSource(app_config.source),
        checkpoint_store=CheckpointStore(blobs, epoch=app_config.sync.epoch_date),
        collection_store=CollectionStore(blobs),
        max_days_per_run=app_config.sync.max_days_per_run,
    )


def _run_sync(
    service: MovieSyncService,
    parser: argparse.ArgumentParser,
    *,
    now_raw: str | None,
) -> int:
    now: datetime | None = None
    if now_raw:
        now = parse_datetime_utc(now_raw)
        if now is None:
            parser.error(f"--now is not a valid timestamp: {now_raw}")

    report = service.synchronize(now)
    logger.info(
        "Run complete | last_synced=%s->%s pending=%d unavailable=%d added=%d writes=%d",
        format_day(report.checkpoint_before),
        format_day(report.checkpoint_after),
        report.pending_days,
        len(report.unavailable_days),
        report.movies_added,
        report.collection_writes,
    )
    return 0


def _print_movies(movies: list[Movie]) -> None:
    print(json.dumps([movie.to_dict() for movie in movies], indent=2, ensure_ascii=False))


if __name__ == "__main__":
    raise SystemExit(main())
