"""Callback and subscription hooks fired by a watchlist session."""
from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ..models import Item, WatchlistState

logger = logging.getLogger(__name__)

Listener = Callable[[WatchlistState], None]


@dataclass(slots=True)
class WatchlistCallbacks:
    """Optional per-operation callbacks. Return values are ignored."""

    on_set_items: Optional[Callable[[Sequence[Any]], None]] = None
    on_item_add: Optional[Callable[[Item], None]] = None
    on_item_update: Optional[Callable[[Mapping[str, Any]], None]] = None
    on_item_remove: Optional[Callable[[str], None]] = None

    def set_items(self, items: Sequence[Any]) -> None:
        if self.on_set_items is not None:
            self.on_set_items(items)

    def item_added(self, item: Item) -> None:
        if self.on_item_add is not None:
            self.on_item_add(item)

    def item_updated(self, payload: Mapping[str, Any]) -> None:
        if self.on_item_update is not None:
            self.on_item_update(payload)

    def item_removed(self, item_id: str) -> None:
        if self.on_item_remove is not None:
            self.on_item_remove(item_id)


class Subscribers:
    """Listeners notified with the new state after each transition."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a function that unregisters it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self, state: WatchlistState) -> None:
        for listener in list(self._listeners):
            listener(state)

    def __len__(self) -> int:
        return len(self._listeners)


def logging_listener(state: WatchlistState) -> None:
    """Listener that logs a one-line summary of each new state."""

    logger.debug(
        "Watchlist %s now tracks %s unique items (%s total)",
        state.id,
        state.total_unique_items,
        state.total_items,
    )
