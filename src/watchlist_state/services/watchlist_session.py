"""Stateful owner of one watchlist, bridging reducer transitions to a store."""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any, Callable, Iterable, Optional, Union

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
from ..config import DEFAULT_CONFIG, AppConfig
from ..errors import MissingIdentifier, NotFound
from ..identifiers import create_watchlist_identifier
from ..models import Item, WatchlistState
from ..notifications.base import Listener, Subscribers, WatchlistCallbacks
from ..storage.base import StoreAdapter
from . import reducer

logger = logging.getLogger(__name__)

ItemLike = Union[Item, Mapping[str, Any]]


def _coerce_item(item: ItemLike) -> Item:
    if isinstance(item, Item):
        return item
    return Item.from_dict(item)


class WatchlistSession:
    """Owns a single ``WatchlistState`` and keeps the store in step with it.

    Every operation builds an action, runs it through the reducer, replaces
    the in-memory state, writes the new state through to the store and then
    fires the matching callback. Store failures are logged and never undo an
    in-memory transition.
    """

    def __init__(
        self,
        watchlist_id: Optional[str] = None,
        default_items: Iterable[ItemLike] = (),
        metadata: Optional[Mapping[str, Any]] = None,
        store: Optional[StoreAdapter] = None,
        callbacks: Optional[WatchlistCallbacks] = None,
        config: AppConfig = DEFAULT_CONFIG,
    ) -> None:
        self._id = watchlist_id or create_watchlist_identifier(config.identifier_length)
        self._key = config.storage.key_for(watchlist_id)
        self._store = store
        self._callbacks = callbacks or WatchlistCallbacks()
        self._subscribers = Subscribers()

        if store is None:
            logger.debug("No store configured for watchlist %s; persistence disabled", self._id)

        self._state = self._load_state() or self._default_state(default_items, metadata)
        self._persist()

    @property
    def id(self) -> str:
        return self._id

    @property
    def key(self) -> str:
        return self._key

    @property
    def state(self) -> WatchlistState:
        return self._state

    @property
    def items(self) -> tuple[Item, ...]:
        return self._state.items

    @property
    def metadata(self) -> dict[str, Any]:
        return dict(self._state.metadata)

    @property
    def total_items(self) -> int:
        return self._state.total_items

    @property
    def total_unique_items(self) -> int:
        return self._state.total_unique_items

    @property
    def is_empty(self) -> bool:
        return self._state.is_empty

    def to_dict(self) -> dict[str, Any]:
        return self._state.to_dict()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with the new state after every transition."""

        return self._subscribers.subscribe(listener)

    def set_items(self, items: Iterable[ItemLike]) -> None:
        requested = list(items)
        self._dispatch(SetItems(tuple(_coerce_item(item) for item in requested)))
        self._callbacks.set_items(requested)

    def add_item(self, item: ItemLike, quantity: int = 1) -> None:
        """Add ``item`` or, if its id is already tracked, increase its quantity."""

        item_id = item.id if isinstance(item, Item) else item.get("id")
        if not item_id:
            raise MissingIdentifier("You must provide an `id` for items")
        new_item = _coerce_item(item)

        current = self.get_item(item_id)
        if current is None:
            added = replace(new_item, quantity=quantity)
            self._dispatch(AddItem(added))
            self._callbacks.item_added(added)
            return

        # Only the fields the caller supplied are merged over the stored item.
        if isinstance(item, Item):
            fields = item.to_dict(include_total=False)
        else:
            fields = {key: value for key, value in item.items() if key not in ("itemTotal", "item_total")}
        payload = {**fields, "quantity": current.quantity + quantity}
        self._dispatch(UpdateItem(item_id, payload))
        self._callbacks.item_updated(payload)

    def update_item(self, item_id: str, payload: Mapping[str, Any]) -> None:
        if not item_id or not payload:
            return

        self._dispatch(UpdateItem(item_id, dict(payload)))
        self._callbacks.item_updated(payload)

    def update_item_quantity(self, item_id: str, quantity: int) -> None:
        """Set the quantity of an item; zero or less removes it."""

        if quantity <= 0:
            self._callbacks.item_removed(item_id)
            self._dispatch(RemoveItem(item_id))
            return

        current = self.get_item(item_id)
        if current is None:
            raise NotFound(f"No such item to update: {item_id}")

        payload = {**current.to_dict(include_total=False), "quantity": quantity}
        self._dispatch(UpdateItem(item_id, payload))
        self._callbacks.item_updated(payload)

    def remove_item(self, item_id: str) -> None:
        if not item_id:
            return

        self._dispatch(RemoveItem(item_id))
        self._callbacks.item_removed(item_id)

    def empty_watchlist(self) -> None:
        self._dispatch(EmptyWatchlist())

    def get_item(self, item_id: str) -> Optional[Item]:
        return next((item for item in self._state.items if item.id == item_id), None)

    def in_watchlist(self, item_id: str) -> bool:
        return any(item.id == item_id for item in self._state.items)

    def clear_metadata(self) -> None:
        self._dispatch(ClearMetadata())

    def set_metadata(self, payload: Mapping[str, Any]) -> None:
        if not payload:
            return
        self._dispatch(SetMetadata(dict(payload)))

    def update_metadata(self, payload: Mapping[str, Any]) -> None:
        if not payload:
            return
        self._dispatch(UpdateMetadata(dict(payload)))

    def _dispatch(self, action: Action) -> None:
        self._state = reducer.reduce(self._state, action)
        self._persist()
        self._subscribers.notify(self._state)

    def _default_state(
        self,
        default_items: Iterable[ItemLike],
        metadata: Optional[Mapping[str, Any]],
    ) -> WatchlistState:
        seed = WatchlistState(id=self._id, metadata=dict(metadata or {}))
        items = (reducer.with_default_quantity(_coerce_item(item)) for item in default_items)
        return reducer.generate_state(seed, items)

    def _load_state(self) -> Optional[WatchlistState]:
        if self._store is None:
            return None

        try:
            raw = self._store.load(self._key)
        except Exception as exc:  # noqa: BLE001 - adapters are caller supplied
            logger.warning("Failed to load watchlist %s: %s", self._key, exc)
            return None
        if not raw:
            return None

        try:
            loaded = WatchlistState.from_dict(json.loads(raw))
            state = reducer.generate_state(loaded, loaded.items)
        except (TypeError, ValueError) as exc:
            logger.warning("Ignoring unreadable watchlist %s: %s", self._key, exc)
            return None

        logger.debug("Loaded watchlist %s with %s items", self._key, len(state.items))
        return state

    def _persist(self) -> None:
        if self._store is None:
            return

        try:
            self._store.save(self._key, json.dumps(self._state.to_dict()))
        except Exception as exc:  # noqa: BLE001 - adapters are caller supplied
            logger.warning("Failed to save watchlist %s: %s", self._key, exc)
