"""Calculation history persisted to a local JSON file.

The file holds one object keyed by HISTORY_KEY. It is read once when the
store loads and rewritten on every change. A file that cannot be parsed is
dropped as a whole, never partially recovered.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from core.config import settings
from models.form import FormState, HistoryEntry
from models.trade import CalculationResults

logger = logging.getLogger(__name__)

_entries_adapter = TypeAdapter(list[HistoryEntry])


class HistoryStore:
    def __init__(
        self,
        path: str | Path | None = None,
        limit: int | None = None,
        key: str | None = None,
    ):
        self.path = Path(settings.HISTORY_FILE if path is None else path)
        self.limit = settings.HISTORY_LIMIT if limit is None else limit
        self.key = settings.HISTORY_KEY if key is None else key
        self._entries: list[HistoryEntry] = []

    def load(self) -> list[HistoryEntry]:
        if not self.path.exists():
            self._entries = []
            return self.entries()

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(raw, dict):
                raise ValueError("history file is not a JSON object")
            entries = _entries_adapter.validate_python(raw.get(self.key, []))
        except (OSError, ValueError, ValidationError) as exc:
            logger.warning("Discarding unreadable history in %s: %s", self.path, exc)
            entries = []

        self._entries = entries[: self.limit]
        logger.info("Loaded %d history entries from %s", len(self._entries), self.path)
        return self.entries()

    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def add(self, entry: HistoryEntry) -> HistoryEntry:
        """Store newest first, dropping the oldest beyond the limit."""
        self._entries = [entry, *self._entries][: self.limit]
        self._save()
        return entry

    def record(self, state: FormState, results: CalculationResults) -> HistoryEntry | None:
        """Archive a calculation. Only positive lot sizes are kept."""
        if results.final_lot_size <= 0:
            return None
        return self.add(HistoryEntry(inputs=state, results=results))

    def clear(self) -> None:
        self._entries = []
        self._save()

    def _save(self) -> None:
        payload = {
            self.key: _entries_adapter.dump_python(self._entries, mode="json"),
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, indent=2)
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
