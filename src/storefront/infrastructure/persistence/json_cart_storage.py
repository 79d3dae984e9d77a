"""JSON-file-backed implementation of CartStorage.

Plays the part of a browser's local storage: one file per profile holding
a flat JSON object of string keys to string values.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from storefront.domain.exceptions import PersistenceError
from storefront.domain.repository.cart_storage import CartStorage


class JsonFileCartStorage(CartStorage):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    # --- CartStorage interface ------------------------------------------------

    def read(self, key: str) -> str | None:
        if not self._file_path.exists():
            return None
        value = self._load_raw().get(key)
        if value is not None and not isinstance(value, str):
            raise PersistenceError(f"Value under '{key}' is not a string")
        return value

    def write(self, key: str, value: str) -> None:
        try:
            entries = self._load_raw() if self._file_path.exists() else {}
        except PersistenceError:
            # An unreadable store is overwritten rather than left blocking saves.
            entries = {}
        entries[key] = value
        self._persist_raw(entries)

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict[str, object]:
        try:
            entries = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Cannot read {self._file_path}: {exc}") from exc
        if not isinstance(entries, dict):
            raise PersistenceError(f"{self._file_path} does not hold a JSON object")
        return entries

    def _persist_raw(self, entries: dict[str, object]) -> None:
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._file_path.parent, prefix=".cart-", suffix=".json"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(entries, indent=2) + "\n")
            os.replace(tmp_name, self._file_path)
        except OSError as exc:
            raise PersistenceError(f"Cannot write {self._file_path}: {exc}") from exc
