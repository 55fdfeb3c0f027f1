"""Shared game-world primitives: vectors, boxes, events, entities and the round manager."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Any, Iterable, Optional, Protocol, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Vec3:
    """An immutable three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def splat(cls, value: float) -> "Vec3":
        """Vector with every component set to ``value``."""
        return cls(value, value, value)

    def __add__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> "Vec3":
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> "Vec3":
        return Vec3(-self.x, -self.y, -self.z)

    def dot(self, other: "Vec3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> "Vec3":
        """Unit vector in the same direction; the zero vector stays zero."""
        size = self.length()
        if size == 0.0:
            return Vec3()
        return self * (1.0 / size)


@dataclass(frozen=True)
class AABB:
    """Axis-aligned box given by its centre and full extents."""

    center_x: float
    center_y: float
    width: float
    height: float

    def intersects(self, other: "AABB") -> bool:
        """True when the boxes overlap; boxes that only touch do not."""
        return (
            abs(self.center_x - other.center_x) * 2 < self.width + other.width
            and abs(self.center_y - other.center_y) * 2 < self.height + other.height
        )

    def moved(self, dx: float, dy: float) -> "AABB":
        return replace(self, center_x=self.center_x + dx, center_y=self.center_y + dy)


class GameEvent(Enum):
    SUBJECT_ATTACHED = auto()
    PLAYER_DIED = auto()
    ENEMY_DIED = auto()
    PLAY = auto()


class Observer(Protocol):
    def on_notify(self, subject: Any, event: GameEvent) -> None: ...


class Subject:
    """Something observers can watch for game events."""

    def __init__(self) -> None:
        self._observers: list[Observer] = []

    @property
    def observers(self) -> tuple[Observer, ...]:
        return tuple(self._observers)

    def attach_observer(self, observer: Observer) -> None:
        """Attach ``observer`` and tell it that it was attached."""
        if observer not in self._observers:
            self._observers.append(observer)
        observer.on_notify(self, GameEvent.SUBJECT_ATTACHED)

    def notify(self, event: GameEvent) -> None:
        for observer in list(self._observers):
            observer.on_notify(self, event)


class Entity:
    """A positioned object in the scene holding a set of components."""

    def __init__(self, position: Vec3 = Vec3(), tag: str = "", size: Optional[float] = None) -> None:
        self.position = position
        self.tag = tag
        self.size = size
        self._components: list[Any] = []
        self._destroyed = False

    @property
    def components(self) -> tuple[Any, ...]:
        return tuple(self._components)

    @property
    def marked_for_destroy(self) -> bool:
        return self._destroyed

    def add_component(self, component: T) -> T:
        self._components.append(component)
        return component

    def get_component(self, kind: type[T]) -> Optional[T]:
        return next((c for c in self._components if isinstance(c, kind)), None)

    def mark_for_destroy(self) -> None:
        self._destroyed = True

    def box(self) -> AABB:
        """The square collision box centred on the entity."""
        if self.size is None:
            raise ValueError(f"entity {self.tag!r} has no collision size")
        return AABB(self.position.x, self.position.y, self.size, self.size)


def _present(items: Iterable[Optional[T]]) -> Iterable[T]:
    return (item for item in items if item is not None)


class GameManager:
    """Keeps the players and enemies of a round so they can be reset together."""

    def __init__(self) -> None:
        self.players: list[Any] = []
        self.enemies: list[Any] = []

    def register_player(self, player: Any) -> None:
        self.players.append(player)

    def register_enemy(self, enemy: Any) -> None:
        self.enemies.append(enemy)

    def unregister_enemies(self) -> None:
        self.enemies.clear()

    def unregister_players(self) -> None:
        self.players.clear()

    def reset_round(self) -> None:
        for player in _present(self.players):
            player.reset_to_start()
        for enemy in _present(self.enemies):
            enemy.reset_to_spawn()