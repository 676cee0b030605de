"""History of successful removals — most recent first, capped at five.

The whole list is stored as one JSON string under a fixed key. Stored data
that cannot be parsed is treated as an empty history; it is never surfaced.
"""

from __future__ import annotations

import json
import logging
import random
import string
import time

from pydantic import TypeAdapter, ValidationError

from vanish.history.kv import KeyValueStore
from vanish.models.history import HistoryEntry

logger = logging.getLogger(__name__)

HISTORY_KEY = "vanish-history"
HISTORY_LIMIT = 5

_ID_ALPHABET = string.digits + string.ascii_lowercase
_entries_adapter = TypeAdapter(list[HistoryEntry])


def new_entry_id() -> str:
    """Random 9-character base-36 identifier."""
    return "".join(random.choices(_ID_ALPHABET, k=9))


def now_ms() -> int:
    return int(time.time() * 1000)


def make_entry(original_image: str, processed_image: str, timestamp: int | None = None) -> HistoryEntry:
    return HistoryEntry(
        id=new_entry_id(),
        original_image=original_image,
        processed_image=processed_image,
        timestamp=now_ms() if timestamp is None else timestamp,
    )


def prepend_capped(
    entries: tuple[HistoryEntry, ...] | list[HistoryEntry],
    entry: HistoryEntry,
    limit: int = HISTORY_LIMIT,
) -> tuple[HistoryEntry, ...]:
    """New entry first; anything past ``limit`` is dropped."""
    return (entry, *entries)[:limit]


class HistoryStore:
    """Read once, then read-modify-write on every append."""

    def __init__(self, kv: KeyValueStore, key: str = HISTORY_KEY) -> None:
        self.kv = kv
        self.key = key
        self._entries: tuple[HistoryEntry, ...] | None = None

    def entries(self) -> tuple[HistoryEntry, ...]:
        if self._entries is None:
            self._entries = self._load()
        return self._entries

    def get(self, entry_id: str) -> HistoryEntry | None:
        for entry in self.entries():
            if entry.id == entry_id:
                return entry
        return None

    def append(self, entry: HistoryEntry) -> tuple[HistoryEntry, ...]:
        """Record a new entry and persist; returns the resulting list.

        A failed write leaves the history as it was and is only logged.
        """
        updated = prepend_capped(self.entries(), entry)
        payload = json.dumps([e.model_dump(by_alias=True) for e in updated], ensure_ascii=False)
        try:
            self.kv.set(self.key, payload)
        except OSError as e:
            logger.warning("Could not save history entry %s: %s", entry.id, e)
            return self.entries()
        self._entries = updated
        logger.info("Recorded history entry %s (%d stored)", entry.id, len(updated))
        return updated

    def _load(self) -> tuple[HistoryEntry, ...]:
        raw = self.kv.get(self.key)
        if not raw:
            return ()
        try:
            entries = _entries_adapter.validate_json(raw)
        except ValidationError as e:
            logger.debug("Discarding unreadable history: %s", e)
            return ()
        return tuple(entries[:HISTORY_LIMIT])
