"""Store adapter backed by a remote key-value HTTP service."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

import requests

from ..errors import StoreAccessFailure
from .base import StoreAdapter


@dataclass(slots=True)
class HttpKeyValueStore(StoreAdapter):
    """Reads and writes string blobs with ``GET``/``PUT {base_url}/{key}``.

    A ``404`` response is treated as an absent key. Any other HTTP or
    transport error is raised as ``StoreAccessFailure`` so the session can
    degrade to in-memory operation.
    """

    base_url: str
    timeout: int = 10

    def url_for(self, key: str) -> str:
        return f"{self.base_url.rstrip('/')}/{quote(key, safe='')}"

    def load(self, key: str) -> Optional[str]:
        try:
            response = requests.get(self.url_for(key), timeout=self.timeout)
            if response.status_code == 404:
                return None
            response.raise_for_status()
        except requests.RequestException as exc:
            raise StoreAccessFailure(f"Could not load {key!r}: {exc}") from exc
        return response.text

    def save(self, key: str, value: str) -> None:
        try:
            response = requests.put(
                self.url_for(key),
                data=value.encode("utf-8"),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise StoreAccessFailure(f"Could not save {key!r}: {exc}") from exc
