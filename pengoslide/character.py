"""Character component with a small state machine."""

from __future__ import annotations

import logging
from typing import Optional

from pengoslide.world import Subject

log = logging.getLogger(__name__)


class CharacterState:
    """A state a character can be in; it tracks how long it has been active."""

    name = "Base"

    def __init__(self) -> None:
        self.active = False
        self.elapsed = 0.0

    def on_enter(self, character: "Character") -> None:
        self.active = True
        self.elapsed = 0.0
        log.debug("Entering %s State", self.name)

    def update(self, character: "Character", dt: float) -> None:
        if self.active:
            self.elapsed += dt

    def on_exit(self, character: "Character") -> None:
        self.active = False
        log.debug("Exiting %s State", self.name)


class IdleState(CharacterState):
    name = "Idle"


class RunningState(CharacterState):
    name = "Running"


class PushingState(CharacterState):
    name = "Pushing"


class Character(Subject):
    """Runs the current state each frame and tracks whether the owner moved."""

    def __init__(self, state: Optional[CharacterState] = None) -> None:
        super().__init__()
        self.moving = False
        self._state: Optional[CharacterState] = state if state is not None else IdleState()
        self._state.on_enter(self)

    @property
    def state(self) -> Optional[CharacterState]:
        return self._state

    def update(self, dt: float) -> None:
        """Advance the current state; the moving flag lasts a single frame."""
        if self._state is not None:
            self._state.update(self, dt)
        self.moving = False

    def set_state(self, state: Optional[CharacterState]) -> None:
        if self._state is not None:
            self._state.on_exit(self)
        self._state = state
        if self._state is not None:
            self._state.on_enter(self)