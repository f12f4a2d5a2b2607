from __future__ import annotations

from abc import ABC, abstractmethod


class BlobStore(ABC):
    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Return the blob stored under key, or None when absent."""

    @abstractmethod
    def put(self, key: str, data: bytes) -> None:
        """Replace the blob stored under key."""
