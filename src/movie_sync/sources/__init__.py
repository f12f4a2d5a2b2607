"""Snapshot source implementations."""

from .base import SnapshotSource
from .http_source import HttpSnapshotSource

__all__ = ["HttpSnapshotSource", "SnapshotSource"]
