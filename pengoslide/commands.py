"""Input commands bound to keys and buttons."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from pengoslide.actors import Player
from pengoslide.character import Character
from pengoslide.world import Entity, Vec3

log = logging.getLogger(__name__)

DEFAULT_MOVE_SPEED = 50.0
FRAME_TIME = 1.0 / 60.0


def default_frame_time() -> float:
    return FRAME_TIME


class Command(ABC):
    """Something that happens when an input fires."""

    @abstractmethod
    def execute(self) -> None: ...


class MoveCommand(Command):
    """Steers a player on the grid, or moves any other entity freely."""

    def __init__(
        self,
        owner: Optional[Entity],
        speed: float = DEFAULT_MOVE_SPEED,
        direction: Vec3 = Vec3(),
        delta_time: Callable[[], float] = default_frame_time,
    ) -> None:
        self.owner = owner
        self.speed = speed
        self.direction = direction
        self.delta_time = delta_time

    def execute(self) -> None:
        owner = self.owner
        if owner is None:
            log.warning("MoveCommand executed but owner is null!")
            return

        player = owner.get_component(Player)
        if player is not None:
            dx = dy = 0
            if abs(self.direction.x) > 0.5:
                dx = 1 if self.direction.x > 0.0 else -1
            elif abs(self.direction.y) > 0.5:
                dy = 1 if self.direction.y > 0.0 else -1
            player.set_desired_direction(dx, dy)
        else:
            owner.position = owner.position + self.direction * (self.speed * self.delta_time())

        character = owner.get_component(Character)
        if character is not None:
            character.moving = True


class AttackCommand(Command):
    """An attack with a range and damage; it has no effect on the world."""

    def __init__(self, owner: Optional[Entity], attack_range: float, damage: float) -> None:
        self.owner = owner
        self.attack_range = attack_range
        self.damage = damage

    def execute(self) -> None:
        if self.owner is None:
            return


class SoundCommand(Command):
    """Toggles muting of the sound system."""

    def __init__(self, owner: Optional[Entity], sound_id: int, volume: float, sound_system: Any) -> None:
        self.owner = owner
        self.sound_id = sound_id
        self.volume = volume
        self.sound_system = sound_system

    def execute(self) -> None:
        log.info("F2 pressed -> toggling mute")
        self.sound_system.toggle_mute()


class SkipLevelCommand(Command):
    """Jumps straight to the next level."""

    def __init__(self, manager: Any, view: Any) -> None:
        self.manager = manager
        self.view = view

    def execute(self) -> None:
        if not self.manager.load_next_level(self.view):
            log.info("No more levels to load!")


class LambdaCommand(Command):
    """Runs an arbitrary callable."""

    def __init__(self, func: Optional[Callable[[], Any]]) -> None:
        self.func = func

    def execute(self) -> None:
        if self.func is not None:
            self.func()