"""Shared file helpers for the JSON-file-backed repositories."""

from __future__ import annotations

import json
from pathlib import Path

from studio30.domain.exceptions import PersistenceError


class JsonFile:
    """A JSON array of records stored in one file."""

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    def load(self) -> list[dict]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Cannot read {self._file_path}: {exc}") from exc

    def persist(self, records: list[dict]) -> None:
        """Replace the file contents in one step.

        The records go to a sibling temp file first, which then replaces
        the real one, so a reader never sees a half-written array.
        """
        tmp_path = self._file_path.with_name(self._file_path.name + ".tmp")
        try:
            tmp_path.write_text(
                json.dumps(records, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
            )
            tmp_path.replace(self._file_path)
        except OSError as exc:
            tmp_path.unlink(missing_ok=True)
            raise PersistenceError(f"Cannot write {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
