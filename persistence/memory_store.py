from __future__ import annotations

import threading

from json_store import loads_document

from .interfaces import Document, DocumentStorage, encode_document, require_slug


class InMemoryStorage(DocumentStorage):
    """
    Dict-backed storage with the same contract as FilesystemStorage.

    Useful for tests and for callers that don't need persistence. Documents are
    kept as encoded JSON, so they go through the same serialization checks as on
    disk and callers never share state with the store.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._namespaces: dict[str, dict[str, bytes]] = {}

    def _get(self, ns: str, key: str) -> Document | None:
        require_slug(ns, "namespace")
        require_slug(key, "key")
        with self._lock:
            raw = self._namespaces.get(ns, {}).get(key)
        return loads_document(raw) if raw is not None else None

    def _get_all_keys(self, ns: str) -> list[str]:
        require_slug(ns, "namespace")
        with self._lock:
            return list(self._namespaces.get(ns, {}))

    def _set(self, ns: str, key: str, doc: Document) -> None:
        require_slug(ns, "namespace")
        require_slug(key, "key")
        payload = encode_document(doc)
        with self._lock:
            self._namespaces.setdefault(ns, {})[key] = payload

    def _delete(self, ns: str, key: str) -> Document | None:
        require_slug(ns, "namespace")
        require_slug(key, "key")
        with self._lock:
            entries = self._namespaces.get(ns)
            if entries is None:
                return None
            raw = entries.pop(key, None)
            if not entries:
                self._namespaces.pop(ns, None)
        return loads_document(raw) if raw is not None else None

    def _namespace_exists(self, ns: str) -> bool:
        require_slug(ns, "namespace")
        with self._lock:
            return ns in self._namespaces

    def _remove_namespace(self, ns: str) -> None:
        require_slug(ns, "namespace")
        with self._lock:
            self._namespaces.pop(ns, None)
