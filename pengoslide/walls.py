"""Ice walls that slide when pushed, and how they shove enemies along."""

from __future__ import annotations

from enum import Enum, auto
from typing import Any, Optional

from pengoslide.actors import EnemyAI
from pengoslide.world import AABB, Entity, Vec3

SLIDE_SPEED = 300.0
PUSHED_ENEMY_SPEED = 300.0
BREAK_DURATION = 3.0


class WallState(Enum):
    IDLE = auto()
    BEING_BROKEN = auto()
    SLIDING = auto()
    BROKEN = auto()


class Wall:
    """A wall block on the grid that can slide to a new cell or be broken."""

    def __init__(self, owner: Entity, view: Any, grid_x: int, grid_y: int) -> None:
        self.owner = owner
        self.view = view
        self.grid_x = grid_x
        self.grid_y = grid_y
        self.state = WallState.IDLE
        self.push_direction = (0, 0)
        self.has_egg = False
        self.breaker: Optional[Entity] = None
        self.break_timer = 0.0
        self.destroy_after_slide = False

    def set_grid_position(self, x: int, y: int) -> None:
        self.grid_x = x
        self.grid_y = y

    def set_breaker(self, breaker: Entity) -> None:
        self.breaker = breaker
        self.state = WallState.BEING_BROKEN
        self.break_timer = 0.0

    def fixed_update(self, dt: float) -> None:
        if self.state is WallState.BEING_BROKEN:
            self._advance_breaking(dt)
        elif self.state is WallState.SLIDING:
            self._advance_sliding(dt)

    def _advance_breaking(self, dt: float) -> None:
        if self.breaker is None:
            return
        self.break_timer += dt
        if self.break_timer >= BREAK_DURATION:
            self.destroy_after_slide = True
            self.state = WallState.BROKEN

    def _advance_sliding(self, dt: float) -> None:
        view = self.view
        if view is None or self.owner.size is None:
            return

        current = self.owner.position
        target = view.logic.grid_to_world(self.grid_x, self.grid_y) + Vec3.splat(view.tile_size / 2.0)
        direction = (target - current).normalized()
        step = SLIDE_SPEED * dt

        wall_box = self.owner.box().moved(direction.x * step, direction.y * step)
        EnemyPushSystem(view).handle_enemy_push(direction, step, wall_box)

        if (target - current).length() <= step:
            self.owner.position = target
            self.state = WallState.IDLE
            view.model.set_wall(self.grid_x, self.grid_y)
            if self.destroy_after_slide:
                view.on_wall_broken(self.grid_x, self.grid_y)
                self.destroy_after_slide = False
        else:
            self.owner.position = current + direction * step


class EnemyPushSystem:
    """Moves or crushes enemies caught in front of a sliding wall."""

    def __init__(self, view: Any) -> None:
        self.view = view

    def handle_enemy_push(self, direction: Vec3, distance: float, wall_box: AABB) -> None:
        enemies = self.view.spawned_enemies()
        walls = self.view.spawned_walls()

        for enemy in enemies:
            if enemy is None or enemy.marked_for_destroy or enemy.size is None:
                continue
            enemy_box = enemy.box()
            if not wall_box.intersects(enemy_box):
                continue

            new_position = enemy.position + direction * distance
            gx, gy = self.view.logic.world_to_grid(new_position)
            out_of_bounds = not self.view.model.in_bounds(gx, gy)

            ai = enemy.get_component(EnemyAI)
            if out_of_bounds or self._hits_wall(enemy_box, direction, distance, walls):
                if ai is not None:
                    ai.die()
                continue

            enemy.position = new_position
            if ai is not None:
                ai.set_pushed(direction, PUSHED_ENEMY_SPEED)

    @staticmethod
    def _hits_wall(enemy_box: AABB, direction: Vec3, distance: float, walls: list) -> bool:
        moved = enemy_box.moved(direction.x * distance, direction.y * distance)
        return any(
            moved.intersects(wall.box())
            for wall in walls
            if wall is not None and not wall.marked_for_destroy and wall.size is not None
        )