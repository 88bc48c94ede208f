"""Key-value store contract used to persist watchlist state."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class StoreAdapter(ABC):
    """Durable string store keyed by string.

    Implementations may raise from either method; the session treats a failed
    ``load`` as an absent value and a failed ``save`` as a warning.
    """

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """Return the value stored under ``key`` or ``None``."""

    @abstractmethod
    def save(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""


class InMemoryStore(StoreAdapter):
    """Process-local store, mostly useful for tests and development."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def save(self, key: str, value: str) -> None:
        self._values[key] = value

    def keys(self) -> list[str]:
        return sorted(self._values)
