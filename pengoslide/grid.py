"""The wall grid and its mapping between world space and grid cells."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from pengoslide.world import Vec3


class TileType(Enum):
    EMPTY = auto()
    WALL = auto()
    EGG = auto()
    PLAYER = auto()
    ENEMY = auto()


class SlideResult(Enum):
    MOVED = auto()
    BROKEN = auto()
    NONE = auto()


@dataclass(frozen=True)
class LevelTile:
    x: int
    y: int
    type: TileType


@dataclass
class LevelData:
    width: int = 0
    height: int = 0
    tiles: list[LevelTile] = field(default_factory=list)


class GridModel:
    """Which cells of a width x height grid hold a wall."""

    def __init__(self, width: Optional[int] = None, height: Optional[int] = None) -> None:
        self.width = 0
        self.height = 0
        self._walls: set[tuple[int, int]] = set()
        if width is not None or height is not None:
            self.initialize(width or 0, height or 0)

    @property
    def walls(self) -> frozenset[tuple[int, int]]:
        return frozenset(self._walls)

    def initialize(self, width: int, height: int) -> None:
        """Resize to an empty grid; both sides must be positive."""
        if width <= 0 or height <= 0:
            raise ValueError("GridModel: invalid dimensions")
        self.width = width
        self.height = height
        self._walls = set()

    def initialize_from_level(self, level: LevelData) -> None:
        self.initialize(level.width, level.height)
        for tile in level.tiles:
            if tile.type is TileType.WALL:
                self.set_wall(tile.x, tile.y)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_wall(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and (x, y) in self._walls

    def set_wall(self, x: int, y: int) -> None:
        if self.in_bounds(x, y):
            self._walls.add((x, y))

    def clear_wall(self, x: int, y: int) -> None:
        self._walls.discard((x, y))

    def slide_or_break(self, x: int, y: int, dx: int, dy: int) -> SlideResult:
        """Push the wall at (x, y): it slides until blocked, or breaks if it cannot move."""
        if not self.is_wall(x, y):
            return SlideResult.NONE

        next_x, next_y = x + dx, y + dy
        if not self.in_bounds(next_x, next_y) or self.is_wall(next_x, next_y):
            self.clear_wall(x, y)
            return SlideResult.BROKEN

        slide_x, slide_y = next_x, next_y
        while self.in_bounds(slide_x + dx, slide_y + dy) and not self.is_wall(slide_x + dx, slide_y + dy):
            slide_x += dx
            slide_y += dy

        self.clear_wall(x, y)
        self.set_wall(slide_x, slide_y)
        return SlideResult.MOVED


class GridLogic:
    """Converts between world positions and cells of a :class:`GridModel`."""

    def __init__(self, model: GridModel, tile_size: int, offset: Vec3 = Vec3()) -> None:
        self.model = model
        self.tile_size = tile_size
        self.offset = offset

    def world_to_grid(self, position: Vec3) -> tuple[int, int]:
        """Cell containing the tile whose top-left corner is at ``position``."""
        half = 0.5 * self.tile_size
        local_x = position.x + half - self.offset.x
        local_y = position.y + half - self.offset.y
        return math.floor(local_x / self.tile_size), math.floor(local_y / self.tile_size)

    def grid_to_world(self, x: int, y: int) -> Vec3:
        """Top-left corner of cell (x, y) in world space."""
        return Vec3(
            self.offset.x + x * self.tile_size,
            self.offset.y + y * self.tile_size,
            self.offset.z,
        )

    def is_wall_at(self, top_left: Vec3) -> bool:
        return self.model.is_wall(*self.world_to_grid(top_left))

    def slide_or_break_at(self, top_left: Vec3, dx: int, dy: int) -> tuple[bool, Optional[tuple[int, int]]]:
        """Push the wall at ``top_left``.

        Returns whether the wall moved or broke, and the cell it slid to
        (``None`` when it broke or nothing was there).
        """
        gx, gy = self.world_to_grid(top_left)
        result = self.model.slide_or_break(gx, gy, dx, dy)

        if result is SlideResult.MOVED:
            scan_x, scan_y = gx + dx, gy + dy
            while self.model.in_bounds(scan_x, scan_y):
                if self.model.is_wall(scan_x, scan_y):
                    return True, (scan_x, scan_y)
                scan_x += dx
                scan_y += dy

        return result in (SlideResult.MOVED, SlideResult.BROKEN), None