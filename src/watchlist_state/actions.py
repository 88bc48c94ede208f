"""Intents understood by the watchlist reducer."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from .models import Item


@dataclass(slots=True, frozen=True)
class Action:
    """Base class for every watchlist action."""

    type: ClassVar[str] = "ACTION"


@dataclass(slots=True, frozen=True)
class SetItems(Action):
    type: ClassVar[str] = "SET_ITEMS"

    items: tuple[Item, ...] = ()


@dataclass(slots=True, frozen=True)
class AddItem(Action):
    type: ClassVar[str] = "ADD_ITEM"

    item: Item


@dataclass(slots=True, frozen=True)
class UpdateItem(Action):
    type: ClassVar[str] = "UPDATE_ITEM"

    id: str
    payload: Mapping[str, Any] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class RemoveItem(Action):
    type: ClassVar[str] = "REMOVE_ITEM"

    id: str


@dataclass(slots=True, frozen=True)
class EmptyWatchlist(Action):
    type: ClassVar[str] = "EMPTY_WATCHLIST"


@dataclass(slots=True, frozen=True)
class ClearMetadata(Action):
    type: ClassVar[str] = "CLEAR_WATCHLIST_META"


@dataclass(slots=True, frozen=True)
class SetMetadata(Action):
    type: ClassVar[str] = "SET_WATCHLIST_META"

    payload: Mapping[str, Any] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class UpdateMetadata(Action):
    type: ClassVar[str] = "UPDATE_WATCHLIST_META"

    payload: Mapping[str, Any] = field(default_factory=dict)
