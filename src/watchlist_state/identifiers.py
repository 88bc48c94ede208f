"""Short random identifiers for watchlist instances."""
from __future__ import annotations

import random
import string

ALPHABET = string.digits + string.ascii_lowercase
DEFAULT_IDENTIFIER_LENGTH = 12


def create_watchlist_identifier(length: int = DEFAULT_IDENTIFIER_LENGTH) -> str:
    """Return a lowercase base-36 identifier of exactly ``length`` characters.

    Not suitable for security purposes; collisions are left to the caller.
    """

    if length < 0:
        raise ValueError("Identifier length must not be negative")
    return "".join(random.choices(ALPHABET, k=length))
