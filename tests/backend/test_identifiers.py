from __future__ import annotations

import string

import pytest

from watchlist_state.identifiers import create_watchlist_identifier


def test_default_length_is_twelve() -> None:
    assert len(create_watchlist_identifier()) == 12


@pytest.mark.parametrize("length", [1, 5, 20])
def test_custom_length(length: int) -> None:
    assert len(create_watchlist_identifier(length)) == length


def test_uses_lowercase_base36_alphabet() -> None:
    identifier = create_watchlist_identifier(200)

    assert set(identifier) <= set(string.digits + string.ascii_lowercase)


def test_successive_identifiers_differ() -> None:
    assert create_watchlist_identifier() != create_watchlist_identifier()


def test_negative_length_rejected() -> None:
    with pytest.raises(ValueError):
        create_watchlist_identifier(-1)
