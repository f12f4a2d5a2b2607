"""Blob stores and the checkpoint/collection state stores built on them."""

from .base import BlobStore
from .filesystem_store import FilesystemBlobStore
from .memory_store import InMemoryBlobStore
from .state_store import CHECKPOINT_KEY, COLLECTION_KEY, CheckpointStore, CollectionStore

__all__ = [
    "BlobStore",
    "CHECKPOINT_KEY",
    "COLLECTION_KEY",
    "CheckpointStore",
    "CollectionStore",
    "FilesystemBlobStore",
    "InMemoryBlobStore",
]
