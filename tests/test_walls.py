import pytest

from pengoslide.actors import EnemyAI, EnemyState
from pengoslide.grid import GridLogic, GridModel
from pengoslide.walls import EnemyPushSystem, Wall, WallState
from pengoslide.world import AABB, Entity, Vec3

TILE = 32


class FakeView:
    def __init__(self, width, height):
        self.model = GridModel(width, height)
        self.logic = GridLogic(self.model, TILE, Vec3())
        self.tile_size = TILE
        self.enemies = []
        self.walls = []
        self.broken = []
        self.hatched = 0

    def center(self, x, y):
        return self.logic.grid_to_world(x, y) + Vec3.splat(TILE / 2)

    def spawned_enemies(self):
        return [e for e in self.enemies if not e.marked_for_destroy]

    def spawned_walls(self):
        return [w for w in self.walls if not w.marked_for_destroy]

    def on_wall_broken(self, x, y):
        self.broken.append((x, y))
        self.model.clear_wall(x, y)

    def tile_type_at(self, x, y):
        raise AssertionError("not expected")

    def hatch_next_egg(self):
        self.hatched += 1


def make_enemy(view, x, y):
    owner = Entity(view.center(x, y), tag="enemy", size=TILE)
    ai = owner.add_component(EnemyAI(owner, view.logic, view, TILE, 75.0))
    view.enemies.append(owner)
    return owner, ai


def make_wall(view, x, y):
    owner = Entity(view.center(x, y), tag="wall", size=TILE)
    wall = owner.add_component(Wall(owner, view, x, y))
    view.walls.append(owner)
    view.model.set_wall(x, y)
    return owner, wall


def test_set_grid_position():
    view = FakeView(5, 3)
    owner, wall = make_wall(view, 1, 1)
    wall.set_grid_position(3, 2)
    assert (wall.grid_x, wall.grid_y) == (3, 2)


def test_breaking_takes_break_duration():
    view = FakeView(5, 3)
    owner, wall = make_wall(view, 1, 1)
    wall.set_breaker(Entity())
    assert wall.state is WallState.BEING_BROKEN
    wall.fixed_update(1.0)
    wall.fixed_update(1.0)
    assert wall.state is WallState.BEING_BROKEN
    wall.fixed_update(1.0)
    assert wall.state is WallState.BROKEN
    assert wall.destroy_after_slide


def test_breaking_without_breaker_does_nothing():
    view = FakeView(5, 3)
    owner, wall = make_wall(view, 1, 1)
    wall.set_breaker(Entity())
    wall.breaker = None
    wall.fixed_update(5.0)
    assert wall.state is WallState.BEING_BROKEN
    assert wall.break_timer == 0.0


def test_idle_wall_stays_put():
    view = FakeView(5, 3)
    owner, wall = make_wall(view, 1, 1)
    wall.fixed_update(1.0)
    assert owner.position == view.center(1, 1)
    assert wall.state is WallState.IDLE


def test_sliding_wall_arrives_and_sets_model():
    view = FakeView(5, 3)
    owner, wall = make_wall(view, 1, 1)
    view.model.clear_wall(1, 1)
    wall.set_grid_position(3, 1)
    wall.state = WallState.SLIDING
    wall.fixed_update(0.01)
    assert wall.state is WallState.SLIDING
    assert view.center(1, 1).x < owner.position.x < view.center(3, 1).x
    wall.fixed_update(1.0)
    assert owner.position == view.center(3, 1)
    assert wall.state is WallState.IDLE
    assert view.model.is_wall(3, 1)
    assert view.broken == []


def test_sliding_wall_marked_to_break_is_destroyed_on_arrival():
    view = FakeView(5, 3)
    owner, wall = make_wall(view, 1, 1)
    wall.set_grid_position(3, 1)
    wall.state = WallState.SLIDING
    wall.destroy_after_slide = True
    wall.fixed_update(1.0)
    assert view.broken == [(3, 1)]
    assert not view.model.is_wall(3, 1)
    assert not wall.destroy_after_slide


def test_push_moves_enemy_in_bounds():
    view = FakeView(5, 3)
    enemy, ai = make_enemy(view, 2, 1)
    direction = Vec3(1.0, 0.0, 0.0)
    start = enemy.position
    wall_box = AABB(view.center(1, 1).x + 10.0, view.center(1, 1).y, TILE, TILE)
    EnemyPushSystem(view).handle_enemy_push(direction, 10.0, wall_box)
    assert enemy.position == start + direction * 10.0
    assert ai.state is EnemyState.BEING_PUSHED
    assert ai.push_speed == 300.0
    assert ai.push_direction == direction


def test_push_out_of_bounds_kills_enemy():
    view = FakeView(3, 3)
    enemy, ai = make_enemy(view, 2, 1)
    start = enemy.position
    wall_box = AABB(view.center(1, 1).x + 10.0, view.center(1, 1).y, TILE, TILE)
    EnemyPushSystem(view).handle_enemy_push(Vec3(1.0, 0.0, 0.0), 10.0, wall_box)
    assert ai.state is EnemyState.DEAD
    assert enemy.marked_for_destroy
    assert enemy.position == start
    assert view.hatched == 1


def test_push_into_wall_kills_enemy():
    view = FakeView(5, 3)
    make_wall(view, 3, 1)
    enemy, ai = make_enemy(view, 2, 1)
    wall_box = AABB(view.center(1, 1).x + 10.0, view.center(1, 1).y, TILE, TILE)
    EnemyPushSystem(view).handle_enemy_push(Vec3(1.0, 0.0, 0.0), 10.0, wall_box)
    assert ai.state is EnemyState.DEAD


def test_enemy_not_touched_by_wall_is_ignored():
    view = FakeView(5, 3)
    enemy, ai = make_enemy(view, 4, 2)
    start = enemy.position
    wall_box = AABB(view.center(0, 0).x, view.center(0, 0).y, TILE, TILE)
    EnemyPushSystem(view).handle_enemy_push(Vec3(1.0, 0.0, 0.0), 10.0, wall_box)
    assert enemy.position == start
    assert ai.state is EnemyState.ROAMING


def test_destroyed_enemy_is_skipped():
    view = FakeView(5, 3)
    enemy, ai = make_enemy(view, 2, 1)
    enemy.mark_for_destroy()
    start = enemy.position
    wall_box = AABB(view.center(1, 1).x + 10.0, view.center(1, 1).y, TILE, TILE)
    EnemyPushSystem(view).handle_enemy_push(Vec3(1.0, 0.0, 0.0), 10.0, wall_box)
    assert enemy.position == start
    assert ai.state is EnemyState.ROAMING


def test_sliding_wall_pushes_enemy_ahead():
    view = FakeView(6, 3)
    owner, wall = make_wall(view, 1, 1)
    view.walls.remove(owner)
    enemy, ai = make_enemy(view, 2, 1)
    start = enemy.position
    wall.set_grid_position(4, 1)
    wall.state = WallState.SLIDING
    wall.fixed_update(0.05)
    assert enemy.position.x > start.x
    assert ai.state is EnemyState.BEING_PUSHED
    assert wall.state is WallState.SLIDING
    assert owner.position.x == pytest.approx(view.center(1, 1).x + 15.0)