"""Runs the game's screens and switches between them on request."""

from __future__ import annotations

import logging
import random
from typing import Callable, Iterable, Optional

from pengoslide.grid import LevelData
from pengoslide.gridview import GridView
from pengoslide.highscores import HighscoreManager, pending_score
from pengoslide.singleplayer import DEFAULT_LEVEL_FILES, SinglePlayerState
from pengoslide.sound import SilentSoundSystem, SoundSystem
from pengoslide.states import GameState, HighScoreState, MainMenuState, StateTransition
from pengoslide.world import Entity, Vec3

log = logging.getLogger(__name__)

GRID_TILE_SIZE = 32
GRID_OFFSET = Vec3(-16.0, 30.0, 0.0)


class GameStateManager:
    """Holds the active screen and replaces it when it asks for a transition."""

    def __init__(
        self,
        highscores: HighscoreManager,
        level_loader: Callable[[str], LevelData],
        sound_system: Optional[SoundSystem] = None,
        level_files: Iterable[str] = DEFAULT_LEVEL_FILES,
        rng: Optional[random.Random] = None,
        scene: Optional[list[Entity]] = None,
    ) -> None:
        self.highscores = highscores
        self.level_loader = level_loader
        self.sound_system = sound_system if sound_system is not None else SilentSoundSystem()
        self.level_files = tuple(level_files)
        self.rng = rng
        self.scene: list[Entity] = scene if scene is not None else []
        self._current: Optional[GameState] = None

    @property
    def current_state(self) -> Optional[GameState]:
        return self._current

    def start(self) -> None:
        """Begin at the main menu, using the manager's initial scene."""
        self._current = MainMenuState(self.scene, self.highscores)
        self._current.on_enter()

    def update(self, dt: float) -> None:
        state = self._current
        if state is None:
            return
        state.update(dt)
        transition = state.requested_transition
        if transition is StateTransition.NONE:
            return

        next_state = self._create_state(transition)
        if next_state is None:
            log.warning("No screen available for %s", transition.name)
            state.clear_transition_request()
            return

        state.on_exit()
        self._current = next_state
        next_state.on_enter()

    def render(self) -> list[str]:
        return self._current.render() if self._current is not None else []

    def _create_state(self, transition: StateTransition) -> Optional[GameState]:
        if transition is StateTransition.TO_MAIN_MENU:
            return MainMenuState([], self.highscores)
        if transition is StateTransition.TO_SINGLE_PLAYER:
            view = GridView(GRID_TILE_SIZE, GRID_OFFSET, rng=self.rng)
            return SinglePlayerState(
                [], view, self.highscores, self.level_loader, self.sound_system, self.level_files
            )
        if transition is StateTransition.TO_HIGH_SCORE:
            view_only = isinstance(self._current, MainMenuState)
            return HighScoreState(pending_score(), self.highscores, view_only)
        return None