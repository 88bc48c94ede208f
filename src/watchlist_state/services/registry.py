"""Process-wide registry of open watchlist sessions."""
from __future__ import annotations

import logging
import threading
from typing import Any, Optional

from ..config import DEFAULT_CONFIG, AppConfig
from ..notifications.base import logging_listener
from ..storage.base import StoreAdapter
from .watchlist_session import WatchlistSession

logger = logging.getLogger(__name__)


class WatchlistRegistry:
    """Hands out one ``WatchlistSession`` per watchlist id.

    Sessions are opened explicitly and stay registered until ``close`` or
    ``clear`` is called; every session shares the registry's store.
    """

    def __init__(self, store: Optional[StoreAdapter] = None, config: AppConfig = DEFAULT_CONFIG) -> None:
        self._store = store
        self._config = config
        self._sessions: dict[str, WatchlistSession] = {}
        self._lock = threading.Lock()

    @property
    def lock(self) -> threading.Lock:
        """Lock serialising access to the registered sessions."""

        return self._lock

    def open(self, watchlist_id: str, **kwargs: Any) -> WatchlistSession:
        """Return the session for ``watchlist_id``, creating it on first use.

        ``kwargs`` (``default_items``, ``metadata``, ``callbacks``) only apply
        when the session is created.
        """

        with self._lock:
            session = self._sessions.get(watchlist_id)
            if session is None:
                session = WatchlistSession(
                    watchlist_id=watchlist_id,
                    store=self._store,
                    config=self._config,
                    **kwargs,
                )
                session.subscribe(logging_listener)
                self._sessions[watchlist_id] = session
                logger.info("Opened watchlist %s", watchlist_id)
            return session

    def get(self, watchlist_id: str) -> Optional[WatchlistSession]:
        with self._lock:
            return self._sessions.get(watchlist_id)

    def close(self, watchlist_id: str) -> None:
        with self._lock:
            if self._sessions.pop(watchlist_id, None) is not None:
                logger.info("Closed watchlist %s", watchlist_id)

    def ids(self) -> list[str]:
        with self._lock:
            return list(self._sessions)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()
