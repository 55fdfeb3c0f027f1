"""Score and lives bookkeeping."""

from __future__ import annotations

from typing import Any, Callable

from pengoslide.world import GameEvent, Subject

ENEMY_KILL_POINTS = 400
STARTING_LIVES = 4


class Score(Subject):
    """A running, never-decreasing point total."""

    def __init__(self) -> None:
        super().__init__()
        self.score = 0

    def add_points(self, amount: int) -> None:
        """Add ``amount``; zero or negative amounts are ignored."""
        if amount > 0:
            self.score += amount

    def reset(self) -> None:
        self.score = 0


class Lives:
    """A life counter that tells observers of changes and of game over."""

    def __init__(self, lives: int = STARTING_LIVES) -> None:
        self.lives = lives
        self._game_over = False
        self._lives_observers: list[Callable[[int], None]] = []
        self._game_over_observers: list[Callable[[], None]] = []

    @property
    def game_over(self) -> bool:
        return self._game_over

    def lose_life(self) -> None:
        """Take one life; game-over observers fire once when none are left."""
        if self._game_over:
            return
        self.lives = max(0, self.lives - 1)
        for callback in self._lives_observers:
            callback(self.lives)
        if self.lives == 0:
            self._game_over = True
            for callback in self._game_over_observers:
                callback()

    def add_observer(self, callback: Callable[[int], None]) -> None:
        self._lives_observers.append(callback)

    def add_game_over_observer(self, callback: Callable[[], None]) -> None:
        self._game_over_observers.append(callback)

    def reset(self, lives: int = STARTING_LIVES) -> None:
        self.lives = lives
        self._game_over = False


class ScoreObserver:
    """Awards points to a score whenever an observed enemy dies."""

    def __init__(self, score: Score) -> None:
        self.score = score

    def on_notify(self, subject: Any, event: GameEvent) -> None:
        if event is GameEvent.ENEMY_DIED and subject is not None:
            self.score.add_points(ENEMY_KILL_POINTS)