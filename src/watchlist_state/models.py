"""Domain models used throughout the watchlist state container."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

_ITEM_FIELDS = ("id", "price", "quantity")
_DERIVED_ITEM_FIELDS = ("itemTotal", "item_total")


@dataclass(slots=True, frozen=True)
class Item:
    """A single tracked entry in a watchlist."""

    id: str
    price: float = 0
    quantity: int = 1
    item_total: float = 0
    extra: dict[str, Any] = field(default_factory=dict)
    """Free-form fields supplied by the caller, kept verbatim."""

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Item:
        extra = {
            key: value
            for key, value in payload.items()
            if key not in _ITEM_FIELDS and key not in _DERIVED_ITEM_FIELDS
        }
        return cls(
            id=payload.get("id"),
            price=payload.get("price", 0),
            quantity=payload.get("quantity", 1),
            item_total=payload.get("itemTotal", 0),
            extra=extra,
        )

    def to_dict(self, include_total: bool = True) -> dict[str, Any]:
        data: dict[str, Any] = {**self.extra, "id": self.id, "price": self.price, "quantity": self.quantity}
        if include_total:
            data["itemTotal"] = self.item_total
        return data

    def merged(self, payload: Mapping[str, Any]) -> Item:
        """Return a copy with ``payload`` shallow-merged over this item.

        ``id`` is the identity key and is never overwritten. ``itemTotal`` is
        derived, so any value in ``payload`` is dropped.
        """

        extra = dict(self.extra)
        price = self.price
        quantity = self.quantity
        for key, value in payload.items():
            if key == "id" or key in _DERIVED_ITEM_FIELDS:
                continue
            if key == "price":
                price = value
            elif key == "quantity":
                quantity = value
            else:
                extra[key] = value
        return Item(id=self.id, price=price, quantity=quantity, item_total=self.item_total, extra=extra)


@dataclass(slots=True, frozen=True)
class WatchlistState:
    """Complete state of one watchlist, as persisted to the store."""

    id: Optional[str] = None
    items: tuple[Item, ...] = ()
    is_empty: bool = True
    total_items: int = 0
    total_unique_items: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> WatchlistState:
        """Build a state from its persisted JSON layout.

        Raises ``ValueError`` when the payload does not have the expected shape.
        """

        if not isinstance(payload, Mapping):
            raise ValueError("Persisted watchlist must be a JSON object")
        raw_items = payload.get("items") or []
        if not isinstance(raw_items, list) or not all(isinstance(item, Mapping) for item in raw_items):
            raise ValueError("Persisted watchlist items must be a list of objects")
        metadata = payload.get("metadata") or {}
        if not isinstance(metadata, Mapping):
            raise ValueError("Persisted watchlist metadata must be a JSON object")
        return cls(
            id=payload.get("id"),
            items=tuple(Item.from_dict(item) for item in raw_items),
            is_empty=bool(payload.get("isEmpty", True)),
            total_items=payload.get("totalItems", 0),
            total_unique_items=payload.get("totalUniqueItems", 0),
            metadata=dict(metadata),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "items": [item.to_dict() for item in self.items],
            "isEmpty": self.is_empty,
            "totalItems": self.total_items,
            "totalUniqueItems": self.total_unique_items,
            "metadata": dict(self.metadata),
        }


EMPTY_STATE = WatchlistState()
"""Canonical empty watchlist every transition is rebuilt from."""
