"""Persistent high-score table stored as a plain text file."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Union

MAX_ENTRIES = 100

_pending = {"score": 0}


def set_pending_score(score: int) -> None:
    """Remember the score of the game that just ended."""
    _pending["score"] = score


def pending_score() -> int:
    return _pending["score"]


@dataclass(frozen=True)
class HighscoreEntry:
    initials: str
    score: int


class HighscoreManager:
    """A thread-safe table of the best scores, kept in ``path``."""

    def __init__(self, path: Union[str, Path] = "highscores.txt") -> None:
        self.path = Path(path)
        self._entries: list[HighscoreEntry] = []
        self._lock = threading.Lock()
        if not self.path.exists():
            self.path.write_text("", encoding="utf-8")

    def load(self) -> None:
        """Replace the table with the file's contents, skipping malformed lines."""
        entries = []
        for line in self.path.read_text(encoding="utf-8").splitlines():
            fields = line.split()
            if len(fields) < 2:
                continue
            try:
                entries.append(HighscoreEntry(fields[0], int(fields[1])))
            except ValueError:
                continue
        with self._lock:
            self._entries = sorted(entries, key=lambda e: e.score, reverse=True)

    def add_entry(self, entry: HighscoreEntry) -> None:
        """Insert ``entry``, keep the best entries and write the table out."""
        with self._lock:
            self._entries.append(entry)
            self._entries.sort(key=lambda e: e.score, reverse=True)
            del self._entries[MAX_ENTRIES:]
            self._write()

    def top(self, n: int = 10) -> list[HighscoreEntry]:
        with self._lock:
            return self._entries[: max(n, 0)]

    def save(self) -> None:
        with self._lock:
            self._write()

    def _write(self) -> None:
        text = "".join(f"{e.initials:<3} {e.score}\n" for e in self._entries)
        self.path.write_text(text, encoding="utf-8")