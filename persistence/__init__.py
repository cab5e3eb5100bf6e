from __future__ import annotations

from .disk_store import FilesystemStorage
from .interfaces import (
    DecodeError,
    Document,
    DocumentStorage,
    Entry,
    StorageError,
    StorageIOError,
    StorageResult,
    ValidationError,
)
from .memory_store import InMemoryStorage
from .merge_patch import merge_patch
from .repositories import AsyncDocumentStorage
from .slug import is_valid_slug

__all__ = [
    "AsyncDocumentStorage",
    "DecodeError",
    "Document",
    "DocumentStorage",
    "Entry",
    "FilesystemStorage",
    "InMemoryStorage",
    "StorageError",
    "StorageIOError",
    "StorageResult",
    "ValidationError",
    "is_valid_slug",
    "merge_patch",
]
