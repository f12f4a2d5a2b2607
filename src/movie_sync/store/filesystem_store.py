from __future__ import annotations

import os
import tempfile
from pathlib import Path

from movie_sync.errors import StoreError

from .base import BlobStore


class FilesystemBlobStore(BlobStore):
    """Stores each key as a file under a root directory."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def get(self, key: str) -> bytes | None:
        path = self._path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StoreError(f"failed to read {path}: {exc}") from exc

    def put(self, key: str, data: bytes) -> None:
        path = self._path_for(key)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as handle:
                    handle.write(data)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StoreError(f"failed to write {path}: {exc}") from exc

    def _path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in {".", ".."}:
            raise StoreError(f"invalid blob key: {key!r}")
        return self.root / key
