from __future__ import annotations

import logging
import uuid
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from json_store import loads_document
from persistence.interfaces import Entry, StorageError, ValidationError
from persistence.merge_patch import merge_patch
from persistence.repositories import AsyncDocumentStorage

router = APIRouter(tags=["storage"])
logger = logging.getLogger(__name__)

ENTRY_MISSING = "Entry does not exist."
NAMESPACE_MISSING = "Namespace does not exist."
NOT_AN_OBJECT = "Value is not an object."


class BadBody(Exception):
    pass


def _storage(request: Request) -> AsyncDocumentStorage:
    return request.app.state.storage


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _storage_error(error: StorageError | None, *, op: str) -> JSONResponse:
    if isinstance(error, ValidationError):
        return _error(error.message, 400)
    message = error.message if error is not None else "Unknown storage error."
    logger.warning("%s failed: %s", op, message)
    return _error(message, 500)


def _entries_doc(entries: list[Entry]) -> dict[str, Any]:
    return {e.key: e.document for e in entries}


async def _read_object(request: Request) -> dict[str, Any]:
    raw = await request.body()
    try:
        return loads_document(raw)
    except ValueError as e:
        raise BadBody(NOT_AN_OBJECT) from e


@router.get("/")
async def index() -> JSONResponse:
    return JSONResponse({})


@router.get("/{namespace}")
async def list_entries(namespace: str, request: Request) -> JSONResponse:
    result = await _storage(request).get_all_entries(namespace)
    if not result.ok:
        return _storage_error(result.error, op="list")
    return JSONResponse(_entries_doc(result.value or []))


@router.post("/{namespace}")
async def insert_entry(namespace: str, request: Request) -> JSONResponse:
    try:
        doc = await _read_object(request)
    except BadBody as e:
        return _error(str(e), 400)

    key = str(uuid.uuid4())
    result = await _storage(request).set(namespace, key, doc)
    if not result.ok:
        return _storage_error(result.error, op="insert")
    logger.info("Inserted %s/%s", namespace, key)
    return JSONResponse({"key": key}, status_code=201)


@router.get("/{namespace}/{key}")
async def get_entry(namespace: str, key: str, request: Request) -> JSONResponse:
    result = await _storage(request).get(namespace, key)
    if not result.ok:
        return _storage_error(result.error, op="get")
    if result.value is None:
        return _error(ENTRY_MISSING, 404)
    return JSONResponse(result.value)


@router.post("/{namespace}/{key}")
async def set_entry(namespace: str, key: str, request: Request) -> JSONResponse:
    try:
        doc = await _read_object(request)
    except BadBody as e:
        return _error(str(e), 400)

    result = await _storage(request).set(namespace, key, doc)
    if not result.ok:
        return _storage_error(result.error, op="set")
    return JSONResponse(doc, status_code=201)


@router.patch("/{namespace}/{key}")
async def update_entry(namespace: str, key: str, request: Request) -> JSONResponse:
    """Merge-patch an entry. Responds 200 (not 201) with the document as stored."""
    try:
        patch = await _read_object(request)
    except BadBody as e:
        return _error(str(e), 400)

    result = await _storage(request).update(namespace, key, patch)
    if not result.ok:
        return _storage_error(result.error, op="update")
    if result.value is None:
        return _error(ENTRY_MISSING, 404)
    # Storage hands back the pre-patch snapshot; respond with what was written.
    return JSONResponse(merge_patch(result.value, patch))


@router.delete("/{namespace}")
async def delete_namespace(namespace: str, request: Request) -> JSONResponse:
    """Drop a namespace. Responds 200 (not 201) with the removed entries keyed by name."""
    result = await _storage(request).delete_namespace(namespace)
    if not result.ok:
        return _storage_error(result.error, op="delete namespace")
    if result.value is None:
        return _error(NAMESPACE_MISSING, 404)
    logger.info("Deleted namespace %s (%d entries)", namespace, len(result.value))
    return JSONResponse(_entries_doc(result.value))


@router.delete("/{namespace}/{key}")
async def delete_entry(namespace: str, key: str, request: Request) -> JSONResponse:
    """Remove one entry. Responds 200 (not 201) with the removed document."""
    result = await _storage(request).delete(namespace, key)
    if not result.ok:
        return _storage_error(result.error, op="delete")
    if result.value is None:
        return _error(ENTRY_MISSING, 404)
    return JSONResponse(result.value)
