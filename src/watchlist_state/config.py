"""Configuration settings for the watchlist state container."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional

from .identifiers import DEFAULT_IDENTIFIER_LENGTH


@dataclass(slots=True)
class StorageConfig:
    """Settings controlling where watchlist state is persisted."""

    key_prefix: str = "watchlist-"
    """Prefix for the store key of a watchlist with an explicit id."""

    default_key: str = "watchlist"
    """Shared store key used by every watchlist created without an id."""

    backend: Literal["memory", "file", "http"] = "file"
    """Store adapter built by the web entry point."""

    http_base_url: Optional[str] = None
    """Base URL of the key-value service used by the ``http`` backend."""

    http_timeout_seconds: int = 10

    def key_for(self, watchlist_id: Optional[str]) -> str:
        """Return the store key for an explicitly supplied id, or the shared key."""

        if watchlist_id:
            return f"{self.key_prefix}{watchlist_id}"
        return self.default_key


@dataclass(slots=True)
class AppConfig:
    """Top-level configuration for the application."""

    environment: Literal["development", "production"] = "development"
    data_directory: Path = field(default_factory=lambda: Path("data"))
    identifier_length: int = DEFAULT_IDENTIFIER_LENGTH
    storage: StorageConfig = field(default_factory=StorageConfig)

    def ensure_data_directories(self) -> None:
        """Create data directories required by the file store."""

        (self.data_directory / "watchlists").mkdir(parents=True, exist_ok=True)


DEFAULT_CONFIG = AppConfig()
