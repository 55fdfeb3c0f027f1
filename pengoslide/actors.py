"""Grid-walking actors: roaming enemies and the player-controlled penguin."""

from __future__ import annotations

import logging
import random
from enum import Enum, auto
from typing import Any, Optional

from pengoslide.character import Character
from pengoslide.grid import GridLogic, TileType
from pengoslide.world import Entity, GameEvent, Subject, Vec3

log = logging.getLogger(__name__)

DEFAULT_DEATH_DELAY = 3.0


class Direction(Enum):
    """A step on the grid, valued by its (dx, dy) offset."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)
    NONE = (0, 0)

    @property
    def offset(self) -> tuple[int, int]:
        return self.value


_ROAM_DIRECTIONS = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


class EnemyState(Enum):
    ROAMING = auto()
    BEING_PUSHED = auto()
    DEAD = auto()


def _set_character_moving(owner: Entity, moving: bool) -> None:
    character = owner.get_component(Character)
    if character is not None:
        character.moving = moving


class EnemyAI(Subject):
    """An enemy that wanders cell by cell, breaking walls it bumps into."""

    def __init__(
        self,
        owner: Entity,
        logic: GridLogic,
        view: Any,
        tile_size: float,
        move_speed: float,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__()
        self.owner = owner
        self.logic = logic
        self.view = view
        self.tile_size = tile_size
        self.move_speed = move_speed
        self.rng = rng if rng is not None else random.Random()
        self.state = EnemyState.ROAMING
        self.moving = False
        self.target = Vec3()
        self.move_direction = Vec3()
        self.push_direction = Vec3()
        self.push_speed = 0.0
        self.direction = Direction.NONE
        self._pick_new_direction()
        self.spawn_position = owner.position

    @property
    def _half_tile(self) -> Vec3:
        return Vec3.splat(self.tile_size / 2.0)

    def reset_to_spawn(self) -> None:
        self.owner.position = self.spawn_position
        self._finish_move()
        self._pick_new_direction()
        self.state = EnemyState.ROAMING

    def fixed_update(self, dt: float) -> None:
        if self.state is EnemyState.ROAMING:
            if self.moving:
                self._move_towards_target(dt)
            else:
                self._attempt_step()
        elif self.state is EnemyState.BEING_PUSHED:
            self._handle_pushed_movement(dt)

    def die(self) -> None:
        """Kill the enemy once: notify observers, remove it and hatch a replacement."""
        if self.state is EnemyState.DEAD:
            return
        self.state = EnemyState.DEAD
        self.notify(GameEvent.ENEMY_DIED)
        self.owner.mark_for_destroy()
        if self.view is not None:
            self.view.hatch_next_egg()

    def set_pushed(self, direction: Vec3, speed: float) -> None:
        self.state = EnemyState.BEING_PUSHED
        self.push_direction = direction
        self.push_speed = speed

    def is_out_of_bounds(self) -> bool:
        x, y = self.logic.world_to_grid(self.owner.position)
        return not self.logic.model.in_bounds(x, y)

    def _move_towards_target(self, dt: float) -> None:
        position = self.owner.position
        new_position = position + self.move_direction * (self.move_speed * dt)
        before = self.target - position
        after = self.target - new_position
        if before.dot(after) <= 0.0:
            self.owner.position = self.target
            self._finish_move()
        else:
            self.owner.position = new_position

    def _attempt_step(self) -> None:
        curr_x, curr_y = self.logic.world_to_grid(self.owner.position - self._half_tile)
        self._pick_new_direction()
        dx, dy = self.direction.offset
        next_x, next_y = curr_x + dx, curr_y + dy

        if not self.logic.model.in_bounds(next_x, next_y):
            return

        tile = self.view.tile_type_at(next_x, next_y)
        if tile is TileType.WALL:
            self._handle_wall_push(next_x, next_y)
            return
        if tile is TileType.ENEMY:
            return

        self._start_move_to(next_x, next_y)

    def _handle_wall_push(self, wall_x: int, wall_y: int) -> None:
        dx, dy = self.direction.offset
        pushed, _ = self.logic.slide_or_break_at(self.logic.grid_to_world(wall_x, wall_y), dx, dy)
        if pushed:
            self.view.on_wall_broken(wall_x, wall_y)
            self._start_move_to(wall_x, wall_y)

    def _handle_pushed_movement(self, dt: float) -> None:
        new_position = self.owner.position + self.push_direction * (self.push_speed * dt)
        self.owner.position = new_position
        x, y = self.logic.world_to_grid(new_position)
        if self.logic.model.is_wall(x, y) or self.is_out_of_bounds():
            self.die()

    def _start_move_to(self, gx: int, gy: int) -> None:
        center = self.logic.grid_to_world(gx, gy) + self._half_tile
        self.target = center
        self.move_direction = (center - self.owner.position).normalized()
        self.moving = True
        _set_character_moving(self.owner, True)

    def _finish_move(self) -> None:
        self.moving = False
        self.move_direction = Vec3()
        _set_character_moving(self.owner, False)

    def _pick_new_direction(self) -> None:
        self.direction = self.rng.choice(list(_ROAM_DIRECTIONS))


class Player:
    """The penguin: steps one cell per request and pushes or breaks walls."""

    def __init__(self, owner: Entity, logic: GridLogic, view: Any, tile_size: float, move_speed: float) -> None:
        self.owner = owner
        self.logic = logic
        self.view = view
        self.tile_size = tile_size
        self.move_speed = move_speed
        self.moving = False
        self.target = Vec3()
        self.move_direction = Vec3()
        self.pending = (0, 0)
        self.alive = True
        self.death_timer = 0.0

        gx, gy = logic.world_to_grid(owner.position - self._half_tile)
        center = logic.grid_to_world(gx, gy) + self._half_tile
        owner.position = center
        self.spawn_position = center
        self.listener = PlayerCollisionListener(self)

    @property
    def _half_tile(self) -> Vec3:
        return Vec3.splat(self.tile_size / 2.0)

    def set_desired_direction(self, dx: int, dy: int) -> None:
        """Queue a step; ignored while a step is in progress or for (0, 0)."""
        if not self.moving and (dx != 0 or dy != 0):
            self.pending = (dx, dy)

    def update(self, dt: float) -> None:
        if self.moving:
            self._move_towards_target(dt)
            return
        if self.pending == (0, 0):
            return
        self._attempt_step()

    def die(self, delay: float = DEFAULT_DEATH_DELAY) -> None:
        if not self.alive:
            return
        self.alive = False
        self.death_timer = delay

    def reset_to_start(self) -> None:
        self.alive = True
        self.death_timer = 0.0
        self.moving = False
        self.pending = (0, 0)
        self.move_direction = Vec3()
        self.owner.position = self.spawn_position

    def _move_towards_target(self, dt: float) -> None:
        position = self.owner.position
        new_position = position + self.move_direction * (self.move_speed * dt)
        before = self.target - position
        after = self.target - new_position
        if before.dot(after) <= 0.0:
            self.owner.position = self.target
            self._finish_move()
        else:
            self.owner.position = new_position

    def _attempt_step(self) -> None:
        curr_x, curr_y = self.logic.world_to_grid(self.owner.position - self._half_tile)
        dx, dy = self.pending
        next_x, next_y = curr_x + dx, curr_y + dy

        if not self.logic.model.in_bounds(next_x, next_y):
            log.debug("[Player] blocked: outside grid")
            self.pending = (0, 0)
            return

        if self.view.tile_type_at(next_x, next_y) is TileType.WALL:
            self._handle_wall_push(next_x, next_y)
            return

        self._start_move_to(next_x, next_y)

    def _handle_wall_push(self, wall_x: int, wall_y: int) -> None:
        dx, dy = self.pending
        pushed, destination = self.logic.slide_or_break_at(self.logic.grid_to_world(wall_x, wall_y), dx, dy)
        if not pushed:
            self.pending = (0, 0)
            return
        if destination is None:
            self.view.on_wall_broken(wall_x, wall_y)
        else:
            self.view.on_wall_pushed(wall_x, wall_y, *destination)
        self._start_move_to(wall_x, wall_y)

    def _start_move_to(self, gx: int, gy: int) -> None:
        center = self.logic.grid_to_world(gx, gy) + self._half_tile
        self.target = center
        self.move_direction = (center - self.owner.position).normalized()
        self.moving = True
        _set_character_moving(self.owner, True)
        self.pending = (0, 0)

    def _finish_move(self) -> None:
        self.moving = False
        self.move_direction = Vec3()
        _set_character_moving(self.owner, False)


class PlayerCollisionListener:
    """Kills its player when a watched subject reports the player died."""

    def __init__(self, player: Player) -> None:
        self.player = player
        self.subjects: list[Any] = []

    def on_notify(self, subject: Any, event: GameEvent) -> None:
        if event is GameEvent.SUBJECT_ATTACHED:
            self.subjects.append(subject)
        elif event is GameEvent.PLAYER_DIED:
            self.player.die(DEFAULT_DEATH_DELAY)