from __future__ import annotations


class MovieSyncError(Exception):
    """Base class for synchronization failures."""


class StoreError(MovieSyncError):
    """Raised when a blob cannot be read or written."""


class ValidationError(MovieSyncError):
    """Raised when persisted or fetched content violates the movie schema."""


class FetchError(MovieSyncError):
    """Raised on transport failures (timeouts, connection errors)."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"Failed to fetch {url}: {message}")
        self.url = url


class InvalidCheckpointError(MovieSyncError):
    """Raised when the stored checkpoint is later than yesterday."""


class SnapshotUnavailableError(MovieSyncError):
    """Raised when the latest snapshot responds with a non-success status."""

    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(f"Failed to fetch movies: {status_code} {url}")
        self.url = url
        self.status_code = status_code
