"""Pure functions deriving watchlist totals from a sequence of items."""
from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from ..models import Item


def item_totals(items: Iterable[Item]) -> tuple[Item, ...]:
    """Return copies of ``items`` with ``item_total = price * quantity``."""

    return tuple(replace(item, item_total=item.price * item.quantity) for item in items)


def total_items(items: Iterable[Item]) -> int:
    return sum(item.quantity for item in items)


def total_unique_items(items: Sequence[Item]) -> int:
    return len(items)


def is_empty(items: Sequence[Item]) -> bool:
    return total_unique_items(items) == 0
