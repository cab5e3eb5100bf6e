from __future__ import annotations

import logging
import shutil
from pathlib import Path

from json_store import atomic_write_bytes, loads_document

from .interfaces import DecodeError, Document, DocumentStorage, StorageIOError, encode_document, require_slug
from .slug import is_valid_slug

logger = logging.getLogger(__name__)


class FilesystemStorage(DocumentStorage):
    """
    Stores each document as one JSON file: ``<root>/<namespace>/<key>``.

    - Namespace directories are created on first write and removed with their last entry.
    - Writes go through a temp file + rename, so a reader never sees a half-written document.
    - Corrupt files are reported as DecodeError and left on disk.
    """

    def __init__(self, root: Path):
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def _namespace_path(self, ns: str) -> Path:
        return self._root / require_slug(ns, "namespace")

    def _entry_path(self, ns: str, key: str) -> Path:
        ns_path = self._namespace_path(ns)
        return ns_path / require_slug(key, "key")

    def _read(self, path: Path) -> Document | None:
        if not path.is_file():
            return None
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            # Removed after the is_file() check.
            return None
        except OSError as e:
            raise StorageIOError("Failed to open file.") from e
        try:
            return loads_document(raw)
        except ValueError as e:
            logger.warning("Failed to decode %s: %s", path, e)
            raise DecodeError(str(e)) from e

    def _get(self, ns: str, key: str) -> Document | None:
        return self._read(self._entry_path(ns, key))

    def _get_all_keys(self, ns: str) -> list[str]:
        ns_path = self._namespace_path(ns)
        if not ns_path.is_dir():
            return []
        return [p.name for p in ns_path.iterdir() if p.is_file() and is_valid_slug(p.name)]

    def _set(self, ns: str, key: str, doc: Document) -> None:
        path = self._entry_path(ns, key)
        payload = encode_document(doc)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning("Failed to create namespace directory %s: %r", path.parent, e)
            raise StorageIOError("Failed to create namespace directory.") from e
        try:
            atomic_write_bytes(path, payload)
        except OSError as e:
            logger.warning("Failed to write %s: %r", path, e)
            raise StorageIOError("Failed to write file.") from e
        logger.debug("Stored %s/%s (%d bytes)", ns, key, len(payload))

    def _delete(self, ns: str, key: str) -> Document | None:
        path = self._entry_path(ns, key)
        doc = self._read(path)
        if doc is None:
            return None

        try:
            path.unlink()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Failed to remove %s: %r", path, e)
            raise StorageIOError("Failed to remove file.") from e
        logger.debug("Deleted %s/%s", ns, key)

        parent = path.parent
        try:
            if parent.is_dir() and not any(parent.iterdir()):
                parent.rmdir()
        except OSError as e:
            logger.debug("Left namespace directory %s in place: %r", parent, e)
        return doc

    def _namespace_exists(self, ns: str) -> bool:
        return self._namespace_path(ns).is_dir()

    def _remove_namespace(self, ns: str) -> None:
        ns_path = self._namespace_path(ns)
        try:
            shutil.rmtree(ns_path)
        except OSError as e:
            logger.warning("Failed to remove namespace %s: %r", ns_path, e)
            raise StorageIOError("Failed to remove namespace directory.") from e
        logger.debug("Deleted namespace %s", ns)
