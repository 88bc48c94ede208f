"""State transitions for a watchlist.

``reduce`` is a pure function: it never mutates the state it receives and
always returns a complete state rebuilt from ``EMPTY_STATE``. The derived
fields (``item_total``, ``total_items``, ``total_unique_items`` and
``is_empty``) are recomputed by the aggregate calculator on every items
transition and cannot be set any other way.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Iterable

from ..actions import (
    Action,
    AddItem,
    ClearMetadata,
    EmptyWatchlist,
    RemoveItem,
    SetItems,
    SetMetadata,
    UpdateItem,
    UpdateMetadata,
)
from ..errors import InvalidAction
from ..models import EMPTY_STATE, Item, WatchlistState
from . import aggregates

logger = logging.getLogger(__name__)


def generate_state(state: WatchlistState, items: Iterable[Item]) -> WatchlistState:
    """Merge ``state`` over the empty template and recompute every derived field."""

    items = tuple(items)
    return replace(
        EMPTY_STATE,
        id=state.id,
        metadata=dict(state.metadata),
        items=aggregates.item_totals(items),
        total_items=aggregates.total_items(items),
        total_unique_items=aggregates.total_unique_items(items),
        is_empty=aggregates.is_empty(items),
    )


def with_default_quantity(item: Item) -> Item:
    """Return ``item`` with its quantity defaulted to 1 when falsy."""

    if item.quantity:
        return item
    return replace(item, quantity=1)


def _set_items(state: WatchlistState, action: SetItems) -> WatchlistState:
    return generate_state(state, (with_default_quantity(item) for item in action.items))


def _add_item(state: WatchlistState, action: AddItem) -> WatchlistState:
    return generate_state(state, (*state.items, action.item))


def _update_item(state: WatchlistState, action: UpdateItem) -> WatchlistState:
    items = [item.merged(action.payload) if item.id == action.id else item for item in state.items]
    return generate_state(state, items)


def _remove_item(state: WatchlistState, action: RemoveItem) -> WatchlistState:
    return generate_state(state, (item for item in state.items if item.id != action.id))


def _empty_watchlist(state: WatchlistState, action: EmptyWatchlist) -> WatchlistState:
    # The watchlist's own id and metadata are discarded along with the items.
    return replace(EMPTY_STATE, metadata={})


def _clear_metadata(state: WatchlistState, action: ClearMetadata) -> WatchlistState:
    return replace(state, metadata={})


def _set_metadata(state: WatchlistState, action: SetMetadata) -> WatchlistState:
    return replace(state, metadata=dict(action.payload))


def _update_metadata(state: WatchlistState, action: UpdateMetadata) -> WatchlistState:
    return replace(state, metadata={**state.metadata, **action.payload})


_HANDLERS: dict[type[Action], Callable[[WatchlistState, Action], WatchlistState]] = {
    SetItems: _set_items,
    AddItem: _add_item,
    UpdateItem: _update_item,
    RemoveItem: _remove_item,
    EmptyWatchlist: _empty_watchlist,
    ClearMetadata: _clear_metadata,
    SetMetadata: _set_metadata,
    UpdateMetadata: _update_metadata,
}


def reduce(state: WatchlistState, action: Action) -> WatchlistState:
    """Return the state that results from applying ``action`` to ``state``."""

    handler = _HANDLERS.get(type(action))
    if handler is None:
        raise InvalidAction(f"Unsupported watchlist action: {action!r}")

    new_state = handler(state, action)
    logger.debug("Applied %s to watchlist %s", action.type, state.id)
    return new_state
