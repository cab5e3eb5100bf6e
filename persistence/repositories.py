from __future__ import annotations

import asyncio

from .interfaces import Document, DocumentStorage, Entry, StorageResult


class AsyncDocumentStorage:
    """
    Async wrapper around a blocking DocumentStorage.
    Uses asyncio.to_thread to avoid blocking the event loop on file I/O.
    """

    def __init__(self, storage: DocumentStorage) -> None:
        self._storage = storage

    @property
    def storage(self) -> DocumentStorage:
        return self._storage

    async def get(self, ns: str, key: str) -> StorageResult[Document]:
        return await asyncio.to_thread(self._storage.get, ns, key)

    async def get_all_keys(self, ns: str) -> StorageResult[list[str]]:
        return await asyncio.to_thread(self._storage.get_all_keys, ns)

    async def get_all_entries(self, ns: str) -> StorageResult[list[Entry]]:
        return await asyncio.to_thread(self._storage.get_all_entries, ns)

    async def set(self, ns: str, key: str, doc: Document) -> StorageResult[bool]:
        return await asyncio.to_thread(self._storage.set, ns, key, doc)

    async def update(self, ns: str, key: str, patch: Document) -> StorageResult[Document]:
        return await asyncio.to_thread(self._storage.update, ns, key, patch)

    async def delete(self, ns: str, key: str) -> StorageResult[Document]:
        return await asyncio.to_thread(self._storage.delete, ns, key)

    async def delete_namespace(self, ns: str) -> StorageResult[list[Entry]]:
        return await asyncio.to_thread(self._storage.delete_namespace, ns)
