from __future__ import annotations

import copy
from typing import Any, Mapping


def merge_patch(base: Mapping[str, Any], patch: Mapping[str, Any]) -> dict[str, Any]:
    """
    Apply ``patch`` onto ``base`` and return a new document.

    - null in the patch removes the field
    - object onto object merges recursively
    - anything else (arrays included) replaces the field wholesale

    Neither argument is mutated.
    """
    result = copy.deepcopy(dict(base))
    for field, value in patch.items():
        if value is None:
            result.pop(field, None)
        elif isinstance(value, Mapping) and isinstance(result.get(field), Mapping):
            result[field] = merge_patch(result[field], value)
        else:
            result[field] = copy.deepcopy(value)
    return result
