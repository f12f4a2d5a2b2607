from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from movie_sync.utils.datetime_utils import parse_date

DEFAULT_BASE_URL = "https://popular-movies-data.stevenlu.com"
DEFAULT_EPOCH_DATE = date(2019, 12, 2)
SOURCE_TYPES = {"http"}
SOURCE_KEYS = {"type", "base_url", "timeout_seconds"}
STORAGE_TYPES = {"filesystem", "memory"}


class ConfigError(ValueError):
    """Raised when configuration is invalid."""


@dataclass(slots=True)
class SourceSettings:
    type: str = "http"
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 1.0


@dataclass(slots=True)
class StorageSettings:
    type: str = "filesystem"
    path: str = "data"


@dataclass(slots=True)
class SyncSettings:
    epoch_date: date = DEFAULT_EPOCH_DATE
    max_days_per_run: int = 7


@dataclass(slots=True)
class AppConfig:
    source: SourceSettings = field(default_factory=SourceSettings)
    storage: StorageSettings = field(default_factory=StorageSettings)
    sync: SyncSettings = field(default_factory=SyncSettings)
    log_level: str = "INFO"


def _as_mapping(value: Any, *, field_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{field_name} must be a mapping")
    return value


def _as_int(value: Any, *, field_name: str, minimum: int | None = None) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{field_name} must be an integer")

    try:
        parsed = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{field_name} must be an integer") from exc

    if minimum is not None and parsed < minimum:
        raise ConfigError(f"{field_name} must be >= {minimum}")
    return parsed


def _as_positive_float(value: Any, *, field_name: str) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"{field_name} must be a number")

    try:
        parsed = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{field_name} must be a number") from exc

    if parsed <= 0:
        raise ConfigError(f"{field_name} must be > 0")
    return parsed


def _as_date(value: Any, *, field_name: str) -> date:
    parsed = parse_date(value)
    if parsed is None:
        raise ConfigError(f"{field_name} must be a date (YYYY-MM-DD)")
    return parsed


def _resolve_relative_path(config_path: Path, raw_path: str) -> str:
    candidate = Path(raw_path).expanduser()
    if candidate.is_absolute():
        return str(candidate)
    return str((config_path.parent / candidate).resolve())


def load_config(path: str | Path) -> AppConfig:
    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as handle:
        parsed = yaml.safe_load(handle) or {}

    if not isinstance(parsed, dict):
        raise ConfigError("Config root must be a mapping")

    raw_source = _as_mapping(parsed.get("source"), field_name="source")
    unknown_keys = sorted(str(key) for key in raw_source if key not in SOURCE_KEYS)
    if unknown_keys:
        raise ConfigError(f"Unknown source settings: {', '.join(unknown_keys)}")

    source_type = str(raw_source.get("type", "http")).strip() or "http"
    if source_type not in SOURCE_TYPES:
        raise ConfigError(f"Unsupported source type: {source_type}")

    base_url = str(raw_source.get("base_url", DEFAULT_BASE_URL)).strip()
    if not base_url.startswith(("http://", "https://")):
        raise ConfigError("source.base_url must be an http(s) URL")

    source_settings = SourceSettings(
        type=source_type,
        base_url=base_url,
        timeout_seconds=_as_positive_float(
            raw_source.get("timeout_seconds", 1.0),
            field_name="source.timeout_seconds",
        ),
    )

    raw_storage = _as_mapping(parsed.get("storage"), field_name="storage")
    storage_type = str(raw_storage.get("type", "filesystem")).strip() or "filesystem"
    if storage_type not in STORAGE_TYPES:
        raise ConfigError(f"Unsupported storage type: {storage_type}")

    storage_path = str(raw_storage.get("path", "data")).strip() or "data"
    storage_settings = StorageSettings(
        type=storage_type,
        path=_resolve_relative_path(config_path, storage_path),
    )

    raw_sync = _as_mapping(parsed.get("sync"), field_name="sync")
    sync_settings = SyncSettings(
        epoch_date=_as_date(
            raw_sync.get("epoch_date", DEFAULT_EPOCH_DATE),
            field_name="sync.epoch_date",
        ),
        max_days_per_run=_as_int(
            raw_sync.get("max_days_per_run", 7),
            field_name="sync.max_days_per_run",
            minimum=1,
        ),
    )

    return AppConfig(
        source=source_settings,
        storage=storage_settings,
        sync=sync_settings,
        log_level=str(parsed.get("log_level", "INFO")).upper(),
    )
