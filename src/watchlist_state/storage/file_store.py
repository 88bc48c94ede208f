"""JSON file storage for persisted watchlists."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..errors import StoreAccessFailure
from .base import StoreAdapter


class JsonFileStore(StoreAdapter):
    """Persists each key as a ``<key>.json`` file under ``base_path``."""

    def __init__(self, base_path: Path) -> None:
        self._base_path = base_path
        self._base_path.mkdir(parents=True, exist_ok=True)

    def _file_for(self, key: str) -> Path:
        safe_key = key.replace("/", "_").replace("\\", "_")
        return self._base_path / f"{safe_key}.json"

    def file_path_for(self, key: str) -> Path:
        """Public accessor for the file backing ``key``."""

        return self._file_for(key)

    def load(self, key: str) -> Optional[str]:
        file_path = self._file_for(key)
        if not file_path.exists():
            return None
        try:
            return file_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StoreAccessFailure(f"Could not read {file_path}: {exc}") from exc

    def save(self, key: str, value: str) -> None:
        file_path = self._file_for(key)
        tmp_path = file_path.with_suffix(".json.tmp")
        try:
            tmp_path.write_text(value, encoding="utf-8")
            tmp_path.replace(file_path)
        except OSError as exc:
            raise StoreAccessFailure(f"Could not write {file_path}: {exc}") from exc

    def list_keys(self) -> list[str]:
        """List the keys currently stored on disk."""

        return sorted(path.stem for path in self._base_path.glob("*.json"))
