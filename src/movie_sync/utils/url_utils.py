from __future__ import annotations

from datetime import date

LATEST_SNAPSHOT_PATH = "movies.json"


def normalize_base_url(url: str) -> str:
    return (url or "").strip().rstrip("/")


def build_snapshot_url(base_url: str, day: date) -> str:
    return f"{normalize_base_url(base_url)}/movies-{day:%Y%m%d}.json"


def build_latest_url(base_url: str) -> str:
    return f"{normalize_base_url(base_url)}/{LATEST_SNAPSHOT_PATH}"
