from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    # Storage
    root: Path
    create_root: bool

    # Server
    host: str
    port: int

    # Logging
    log_level: str


def get_settings() -> Settings:
    root = Path(os.getenv("KVDOCS_ROOT", "") or Path.cwd() / "data")
    create_root = _env_bool("KVDOCS_CREATE_ROOT", False)

    host = os.getenv("KVDOCS_HOST", "localhost").strip() or "localhost"
    port = _env_int("KVDOCS_PORT", 8080)

    log_level = (os.getenv("KVDOCS_LOG_LEVEL", "INFO").strip() or "INFO").upper()

    return Settings(
        root=root,
        create_root=create_root,
        host=host,
        port=port,
        log_level=log_level,
    )
