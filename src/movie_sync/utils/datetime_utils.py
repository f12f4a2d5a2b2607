from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Any

from dateutil import parser

DAY_FORMAT = "%Y-%m-%d"
_DAY_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_today(now: datetime) -> date:
    return to_utc(now).date()


def parse_datetime_utc(value: Any) -> datetime | None:
    if value is None:
        return None

    if isinstance(value, datetime):
        return to_utc(value)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            return to_utc(parser.parse(value))
        except (ValueError, TypeError, OverflowError):
            return None

    return None


def parse_date(value: Any) -> date | None:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    parsed = parse_datetime_utc(value)
    return parsed.date() if parsed else None


def parse_day(value: str) -> date:
    """Parse a strict YYYY-MM-DD calendar day."""
    text = value.strip()
    if not _DAY_PATTERN.fullmatch(text):
        raise ValueError(f"expected YYYY-MM-DD, got {text!r}")
    return date.fromisoformat(text)


def format_day(value: date) -> str:
    return value.strftime(DAY_FORMAT)
