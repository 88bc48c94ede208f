"""Exceptions raised by the watchlist state container."""
from __future__ import annotations


class WatchlistError(Exception):
    """Base class for watchlist errors."""


class MissingIdentifier(WatchlistError, ValueError):
    """An item was added without an ``id``."""


class NotFound(WatchlistError, KeyError):
    """An operation targeted an item that is not in the watchlist."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "Item not found"


class InvalidAction(WatchlistError, TypeError):
    """The reducer received an action it does not understand."""


class StoreAccessFailure(WatchlistError):
    """Reading from or writing to a store adapter failed."""
