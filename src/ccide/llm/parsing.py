from __future__ import annotations

from typing import Any


def first_set(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def as_token_count(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, str):
        try:
            return max(int(value.strip()), 0)
        except ValueError:
            return 0
    return 0


def optional_str(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    return ""
