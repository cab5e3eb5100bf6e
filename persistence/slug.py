"""Slug validation for namespace and key path segments."""

from __future__ import annotations

import re
from typing import Any

MAX_SLUG_LENGTH = 255

# First char may not be "." so ".", ".." and hidden/temp files are never slugs.
_SLUG_RE = re.compile(r"[A-Za-z0-9_-][A-Za-z0-9._-]*")


def is_valid_slug(value: Any) -> bool:
    """Return True if ``value`` is safe to use as one filesystem path segment."""
    if not isinstance(value, str):
        return False
    if not value or len(value) > MAX_SLUG_LENGTH:
        return False
    if value in (".", ".."):
        return False
    if "/" in value or "\\" in value or "\0" in value:
        return False
    return _SLUG_RE.fullmatch(value) is not None
