"""The playing field: spawns walls, eggs, players and enemies from level data."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from pengoslide.actors import EnemyAI, Player
from pengoslide.character import Character
from pengoslide.grid import GridLogic, GridModel, LevelData, TileType
from pengoslide.scoring import Score
from pengoslide.walls import Wall, WallState
from pengoslide.world import Entity, Vec3

PLAYER_SPEED = 150.0
ENEMY_SPEED = 75.0
INITIAL_EGGS = 4
CLEARED_WIDTH = 600
CLEARED_HEIGHT = 800


@dataclass
class Egg:
    """An enemy egg hidden inside the wall at a grid cell."""

    grid_x: int
    grid_y: int


class GridView:
    """Owns the grid model and every object spawned on it."""

    def __init__(self, tile_size: int, offset: Vec3 = Vec3(), rng: Optional[random.Random] = None) -> None:
        self.tile_size = tile_size
        self.offset = offset
        self.model = GridModel()
        self.logic = GridLogic(self.model, tile_size, offset)
        self.score = Score()
        self.rng = rng if rng is not None else random.Random()
        self.scene: list[Entity] = []
        self._walls: list[Entity] = []
        self._players: list[Entity] = []
        self._enemies: list[Entity] = []

    def _center(self, x: int, y: int) -> Vec3:
        return self.logic.grid_to_world(x, y) + Vec3.splat(self.tile_size / 2.0)

    def _add_to_scene(self, entity: Entity) -> Entity:
        self.scene.append(entity)
        return entity

    def _live_eggs(self) -> list[Entity]:
        return [e for e in self.scene if e.tag == "egg" and not e.marked_for_destroy]

    def clear_level(self) -> None:
        """Destroy everything spawned and reset the grid to an empty field."""
        for entity in (*self._walls, *self._enemies, *self._players, *self._live_eggs()):
            entity.mark_for_destroy()
        self._walls.clear()
        self._enemies.clear()
        self._players.clear()
        self.model.initialize(CLEARED_WIDTH, CLEARED_HEIGHT)

    def load_level(self, level: LevelData) -> None:
        """Replace the field with ``level`` and hatch the first eggs."""
        self.clear_level()
        self.model.initialize_from_level(level)

        egg_cells = {(t.x, t.y) for t in level.tiles if t.type is TileType.EGG}
        for x, y in sorted(self.model.walls):
            self._create_wall_at(x, y, (x, y) in egg_cells)

        for tile in level.tiles:
            if tile.type is TileType.PLAYER:
                self._players.append(self._create_player_at(tile.x, tile.y))
            elif tile.type is TileType.ENEMY:
                self._create_enemy_at(tile.x, tile.y)

        self.hatch_initial_eggs(INITIAL_EGGS)

    def _create_wall_at(self, x: int, y: int, has_egg: bool) -> Entity:
        position = self._center(x, y)
        wall = Entity(position, tag="wall", size=self.tile_size)
        component = wall.add_component(Wall(wall, self, x, y))
        if has_egg:
            component.has_egg = True
            egg = Entity(position, tag="egg")
            egg.add_component(Egg(x, y))
            self._add_to_scene(egg)
        self._walls.append(wall)
        return self._add_to_scene(wall)

    def _create_player_at(self, x: int, y: int) -> Entity:
        player = Entity(self._center(x, y), tag="player", size=self.tile_size)
        player.add_component(Player(player, self.logic, self, float(self.tile_size), PLAYER_SPEED))
        player.add_component(Character())
        return self._add_to_scene(player)

    def _create_enemy_at(self, x: int, y: int) -> Entity:
        enemy = Entity(self._center(x, y), tag="enemy", size=self.tile_size)
        enemy.add_component(Character())
        enemy.add_component(EnemyAI(enemy, self.logic, self, float(self.tile_size), ENEMY_SPEED, rng=self.rng))
        self._enemies.append(enemy)
        return self._add_to_scene(enemy)

    def on_wall_pushed(self, old_x: int, old_y: int, new_x: int, new_y: int) -> None:
        """Move the wall at the old cell to the new one and start it sliding."""
        self.model.clear_wall(old_x, old_y)
        self.model.set_wall(new_x, new_y)
        for entity in self._walls:
            wall = entity.get_component(Wall)
            if wall is not None and (wall.grid_x, wall.grid_y) == (old_x, old_y):
                wall.set_grid_position(new_x, new_y)
                wall.state = WallState.SLIDING
                wall.push_direction = (new_x - old_x, new_y - old_y)
                return

    def on_wall_broken(self, x: int, y: int) -> None:
        """Remove the wall at (x, y) from the grid and the scene."""
        if not self.model.in_bounds(x, y):
            return
        self.model.clear_wall(x, y)
        for entity in self._walls:
            wall = entity.get_component(Wall)
            if wall is not None and (wall.grid_x, wall.grid_y) == (x, y):
                entity.mark_for_destroy()
                self._walls.remove(entity)
                return

    def spawned_players(self) -> list[Entity]:
        return [p for p in self._players if not p.marked_for_destroy]

    def spawned_enemies(self) -> list[Entity]:
        return [e for e in self._enemies if not e.marked_for_destroy]

    def spawned_walls(self) -> list[Entity]:
        return [w for w in self._walls if not w.marked_for_destroy]

    def has_enemies_remaining(self) -> bool:
        return any(not e.marked_for_destroy for e in self._enemies)

    def hatch_egg(self, egg: Entity) -> Entity:
        """Replace ``egg`` with an enemy on its cell."""
        component = egg.get_component(Egg)
        if component is None:
            raise ValueError(f"entity {egg.tag!r} is not an egg")
        egg.mark_for_destroy()
        return self._create_enemy_at(component.grid_x, component.grid_y)

    def hatch_initial_eggs(self, count: int) -> None:
        """Hatch up to ``count`` eggs picked at random."""
        eggs = self._live_eggs()
        self.rng.shuffle(eggs)
        for egg in eggs[: max(count, 0)]:
            self.hatch_egg(egg)

    def hatch_next_egg(self) -> None:
        eggs = self._live_eggs()
        if eggs:
            self.hatch_egg(eggs[0])

    def tile_type_at(self, x: int, y: int) -> TileType:
        """What occupies cell (x, y): a wall, an enemy, a player or nothing."""
        if not self.model.in_bounds(x, y):
            return TileType.EMPTY
        if self.model.is_wall(x, y):
            return TileType.WALL
        half = Vec3.splat(self.tile_size / 2.0)
        for enemy in self.spawned_enemies():
            if self.logic.world_to_grid(enemy.position - half) == (x, y):
                return TileType.ENEMY
        for player in self._players:
            if self.logic.world_to_grid(player.position - half) == (x, y):
                return TileType.PLAYER
        return TileType.EMPTY