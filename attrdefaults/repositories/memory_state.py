"""In-process state store, one instance per user session."""

from __future__ import annotations

import copy
from typing import Any, Optional


class MemoryStateStore:
    """Dict-backed store. Values are deep-copied in and out."""

    def __init__(self, initial: Optional[dict[str, dict[str, Any]]] = None) -> None:
        self._data: dict[str, dict[str, Any]] = copy.deepcopy(initial or {})

    def get(self, key: str) -> Optional[dict[str, Any]]:
        value = self._data.get(key)
        return copy.deepcopy(value) if value is not None else None

    def set(self, key: str, value: dict[str, Any]) -> None:
        self._data[key] = copy.deepcopy(dict(value))

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def keys(self) -> list[str]:
        return list(self._data)
