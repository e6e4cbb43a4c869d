"""File helpers shared by the JSON repositories.

Each repository owns one ``JsonFile``: a list of records kept in a
single file.  Writes go to a temp file in the same directory which then
replaces the original, so a crash never leaves a half-written file.
Read-modify-write sequences hold ``lock``.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path

from greenmarket.infrastructure.persistence.errors import StorageError


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self.path = file_path
        self.lock = threading.RLock()
        self._ensure_file()

    def load(self) -> list[dict]:
        with self.lock:
            try:
                return json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                raise StorageError(f"Cannot read {self.path}: {exc}") from exc

    def persist(self, rows: list[dict]) -> None:
        with self.lock:
            try:
                fd, tmp_name = tempfile.mkstemp(
                    dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
                )
                with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                    tmp.write(json.dumps(rows, indent=2) + "\n")
                os.replace(tmp_name, self.path)
            except OSError as exc:
                raise StorageError(f"Cannot write {self.path}: {exc}") from exc

    def upsert(self, row: dict) -> None:
        """Replace the record with the same id, or append it."""
        with self.lock:
            rows = self.load()
            for i, existing in enumerate(rows):
                if existing["id"] == row["id"]:
                    rows[i] = row
                    break
            else:
                rows.append(row)
            self.persist(rows)

    def swap(self, row: dict, expected_version: int) -> bool:
        """Upsert ``row`` only if the stored record is still at ``expected_version``.

        ``row`` carries the new version. Returns False, writing nothing,
        when another writer got there first.
        """
        with self.lock:
            rows = self.load()
            for i, existing in enumerate(rows):
                if existing["id"] != row["id"]:
                    continue
                if existing.get("version", 0) != expected_version:
                    return False
                rows[i] = row
                break
            else:
                rows.append(row)
            self.persist(rows)
            return True

    def _ensure_file(self) -> None:
        try:
            if not self.path.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot create {self.path}: {exc}") from exc
