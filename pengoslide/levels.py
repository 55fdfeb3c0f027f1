"""Steps through a fixed list of level files."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from pengoslide.grid import LevelData

log = logging.getLogger(__name__)


class LevelManager:
    """Loads levels one after another into a grid view."""

    def __init__(self, level_files: Iterable[str], loader: Callable[[str], LevelData]) -> None:
        self.level_files = list(level_files)
        self.loader = loader
        self._index = 0

    @property
    def current_index(self) -> int:
        """How many levels have been loaded since the last reset."""
        return self._index

    def load_next_level(self, view) -> bool:
        """Load the next level into ``view``; False when none is left or it is empty."""
        if self._index >= len(self.level_files):
            return False
        name = self.level_files[self._index]
        level = self.loader(name)
        if level.width == 0 or level.height == 0:
            log.error("[LevelManager] Failed to load level: %s", name)
            return False
        view.clear_level()
        view.load_level(level)
        self._index += 1
        return True

    def reset(self) -> None:
        self._index = 0