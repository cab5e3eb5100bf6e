from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON.")


def dumps_document(doc: dict[str, Any]) -> bytes:
    """
    Serialize a document to compact UTF-8 JSON.

    Raises ValueError for anything strict JSON can't hold: NaN/Infinity, values of
    non-JSON types, circular references and nesting too deep to encode.
    """
    try:
        text = json.dumps(doc, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError, RecursionError) as e:
        raise ValueError(str(e) or type(e).__name__) from e
    return text.encode("utf-8")


def loads_document(raw: bytes) -> dict[str, Any]:
    """
    Decode UTF-8 JSON text that must hold a single object.

    Raises ValueError (UnicodeDecodeError / JSONDecodeError included) with the
    codec's diagnostic when the content is not an object. NaN/Infinity literals
    and nesting too deep to decode are rejected the same way.
    """
    try:
        value = json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)
    except RecursionError as e:
        raise ValueError("Document is nested too deeply.") from e
    if not isinstance(value, dict):
        raise ValueError(f"Expected a JSON object, got {type(value).__name__}.")
    return value


def atomic_write_bytes(path: Path, payload: bytes) -> None:
    """
    Atomically write bytes to disk by writing to a temp file then replacing.

    The temp file lives next to the target, is hidden (leading dot) and uniquely
    named so concurrent writers never share it.
    """
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
