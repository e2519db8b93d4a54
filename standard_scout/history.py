"""Recent-analysis history."""

import json
import logging
import threading
from collections import deque
from pathlib import Path
from typing import Iterable, Optional, Protocol

from .models import AnalysisReport, HistoryEntry


logger = logging.getLogger(__name__)

HISTORY_CAPACITY = 10


class HistoryStore(Protocol):
    def load(self) -> list[HistoryEntry]: ...

    def save(self, entries: list[HistoryEntry]) -> None: ...


class JSONHistoryStore:
    """Persist history entries as a JSON list on disk."""

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> list[HistoryEntry]:
        if not self.path.exists():
            return []

        try:
            with open(self.path) as f:
                raw = json.load(f)
            return [HistoryEntry.from_dict(item) for item in raw]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Ignoring unreadable history file %s: %s", self.path, e)
            return []

    def save(self, entries: list[HistoryEntry]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump([entry.to_dict() for entry in entries], f, indent=2)
        except OSError as e:
            logger.warning("Could not save history to %s: %s", self.path, e)


class HistoryLog:
    """Bounded, most-recent-first log of completed analyses.

    Appends are serialized; each one prepends and drops whatever falls past
    ``capacity``, then hands the new state to the store, if any.
    """

    def __init__(
        self,
        entries: Iterable[HistoryEntry] = (),
        capacity: int = HISTORY_CAPACITY,
        store: Optional[HistoryStore] = None,
    ):
        self.capacity = capacity
        self.store = store
        self._entries: deque[HistoryEntry] = deque(list(entries)[:capacity], maxlen=capacity)
        self._lock = threading.Lock()

    @classmethod
    def load(cls, store: HistoryStore, capacity: int = HISTORY_CAPACITY) -> "HistoryLog":
        return cls(store.load(), capacity=capacity, store=store)

    def record(self, report: AnalysisReport) -> HistoryEntry:
        entry = HistoryEntry.from_report(report)
        self.append(entry)
        return entry

    def append(self, entry: HistoryEntry) -> None:
        with self._lock:
            self._entries.appendleft(entry)
            if self.store is not None:
                self.store.save(list(self._entries))

    def entries(self) -> list[HistoryEntry]:
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
