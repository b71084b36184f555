"""
State store adapters.

Each store exposes ``get(key)`` (``None`` when nothing was stored),
``set(key, value)`` and ``delete(key)``. Services depend on that contract
rather than on a concrete backend.
"""

from .memory_state import MemoryStateStore
from .state_repository import SQLStateStore, StateRepository

__all__ = ["MemoryStateStore", "SQLStateStore", "StateRepository"]
