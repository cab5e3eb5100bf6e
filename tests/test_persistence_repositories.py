from __future__ import annotations

import asyncio

from persistence import AsyncDocumentStorage, FilesystemStorage


def test_async_document_storage_roundtrip(storage_root):
    async def _run():
        repo = AsyncDocumentStorage(FilesystemStorage(storage_root))

        # set + get
        assert (await repo.set("notes", "n1", {"title": "first", "tags": ["a"]})).value is True
        got = await repo.get("notes", "n1")
        assert got.ok
        assert got.value == {"title": "first", "tags": ["a"]}

        # listing
        await repo.set("notes", "n2", {"title": "second"})
        assert sorted((await repo.get_all_keys("notes")).value) == ["n1", "n2"]
        entries = (await repo.get_all_entries("notes")).value
        assert {e.key for e in entries} == {"n1", "n2"}

        # update returns the previous document
        prev = await repo.update("notes", "n1", {"tags": None, "done": True})
        assert prev.value == {"title": "first", "tags": ["a"]}
        assert (await repo.get("notes", "n1")).value == {"title": "first", "done": True}

        # delete + delete namespace
        removed = await repo.delete("notes", "n2")
        assert removed.value == {"title": "second"}
        dropped = await repo.delete_namespace("notes")
        assert [e.key for e in dropped.value] == ["n1"]
        assert not (storage_root / "notes").exists()

    asyncio.run(_run())


def test_async_document_storage_concurrent_keys(storage_root):
    async def _run():
        repo = AsyncDocumentStorage(FilesystemStorage(storage_root))
        results = await asyncio.gather(*(repo.set("bulk", f"k{i}", {"i": i}) for i in range(20)))
        assert all(r.ok for r in results)
        keys = (await repo.get_all_keys("bulk")).value
        assert sorted(keys) == sorted(f"k{i}" for i in range(20))

    asyncio.run(_run())
