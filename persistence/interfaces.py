from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel

from json_store import dumps_document

from .merge_patch import merge_patch
from .slug import is_valid_slug

logger = logging.getLogger(__name__)

T = TypeVar("T")

Document = dict[str, Any]


class StorageError(Exception):
    """Base class for every failure reported by a storage backend."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StorageError):
    """Invalid namespace/key slug or non-object document. Raised before any I/O."""


class StorageIOError(StorageError):
    """Directory creation, file read/write or removal failed."""


class DecodeError(StorageError):
    """Stored content is not UTF-8 JSON object text."""


@dataclass(frozen=True)
class StorageResult(Generic[T]):
    """
    Explicit success-or-error outcome of a storage operation.

    A successful result may still carry ``None`` (e.g. "entry does not exist").
    """

    value: T | None = None
    error: StorageError | None = None

    @classmethod
    def success(cls, value: T | None = None) -> "StorageResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: StorageError) -> "StorageResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok

    def unwrap(self) -> T | None:
        if self.error is not None:
            raise self.error
        return self.value


class Entry(BaseModel):
    key: str
    document: Document


def require_slug(value: Any, what: str) -> str:
    if not is_valid_slug(value):
        raise ValidationError(f"Invalid {what}: {value!r}")
    return value


def require_document(value: Any) -> Document:
    if not isinstance(value, dict):
        raise ValidationError("Value is not an object.")
    return value


def encode_document(doc: Document) -> bytes:
    """Serialize ``doc`` to strict JSON, or raise ValidationError if it can't be."""
    try:
        return dumps_document(doc)
    except ValueError as e:
        raise ValidationError(f"Value is not JSON serializable: {e}") from e


class DocumentStorage:
    """
    Storage contract shared by all backends.

    Backends implement the primitive hooks (``_get``, ``_get_all_keys``, ``_set``,
    ``_delete``, ``_namespace_exists``, ``_remove_namespace``) and signal failure by
    raising StorageError subclasses. The public methods never raise: they return a
    StorageResult. ``get_all_entries``, ``update`` and ``delete_namespace`` are
    implemented here once, on top of the public primitives.
    """

    # -- backend hooks ---------------------------------------------------------

    def _get(self, ns: str, key: str) -> Document | None:
        raise NotImplementedError

    def _get_all_keys(self, ns: str) -> list[str]:
        raise NotImplementedError

    def _set(self, ns: str, key: str, doc: Document) -> None:
        raise NotImplementedError

    def _delete(self, ns: str, key: str) -> Document | None:
        raise NotImplementedError

    def _namespace_exists(self, ns: str) -> bool:
        raise NotImplementedError

    def _remove_namespace(self, ns: str) -> None:
        raise NotImplementedError

    # -- primitives --------------------------------------------------------------

    def get(self, ns: str, key: str) -> StorageResult[Document]:
        return self._call(self._get, ns, key)

    def get_all_keys(self, ns: str) -> StorageResult[list[str]]:
        return self._call(self._get_all_keys, ns)

    def set(self, ns: str, key: str, doc: Document) -> StorageResult[bool]:
        def _set_checked() -> bool:
            self._set(ns, key, require_document(doc))
            return True

        return self._call(_set_checked)

    def delete(self, ns: str, key: str) -> StorageResult[Document]:
        return self._call(self._delete, ns, key)

    # -- derived operations ------------------------------------------------------

    def get_all_entries(self, ns: str) -> StorageResult[list[Entry]]:
        keys = self.get_all_keys(ns)
        if not keys.ok:
            return StorageResult.failure(keys.error)

        entries: list[Entry] = []
        for key in keys.value or []:
            got = self.get(ns, key)
            if not got.ok:
                return StorageResult.failure(got.error)
            # Removed between listing and fetching.
            if got.value is None:
                continue
            entries.append(Entry(key=key, document=got.value))
        return StorageResult.success(entries)

    def update(self, ns: str, key: str, patch: Document) -> StorageResult[Document]:
        """
        Merge-patch the stored document and return the value it had *before* the patch.

        Read-then-write without locking: a concurrent writer between the two steps
        loses its change.
        """
        if not isinstance(patch, dict):
            return StorageResult.failure(ValidationError("Value is not an object."))

        current = self.get(ns, key)
        if not current.ok or current.value is None:
            return current

        try:
            merged = merge_patch(current.value, patch)
        except RecursionError:
            return StorageResult.failure(ValidationError("Document is nested too deeply."))

        stored = self.set(ns, key, merged)
        if not stored.ok:
            return StorageResult.failure(stored.error)
        return StorageResult.success(current.value)

    def delete_namespace(self, ns: str) -> StorageResult[list[Entry]]:
        exists = self._call(self._namespace_exists, ns)
        if not exists.ok:
            return StorageResult.failure(exists.error)
        if not exists.value:
            return StorageResult.success(None)

        # Collect everything first; nothing is removed if collection fails.
        entries = self.get_all_entries(ns)
        if not entries.ok:
            return entries

        removed = self._call(self._remove_namespace, ns)
        if not removed.ok:
            return StorageResult.failure(removed.error)
        return entries

    # -- helpers -----------------------------------------------------------------

    @staticmethod
    def _call(fn: Callable[..., T], *args: Any) -> StorageResult[T]:
        try:
            return StorageResult.success(fn(*args))
        except StorageError as e:
            return StorageResult.failure(e)
        except OSError as e:
            logger.warning("Storage I/O failure in %s: %r", getattr(fn, "__name__", fn), e)
            return StorageResult.failure(StorageIOError(str(e)))
