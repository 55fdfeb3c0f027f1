import math

import pytest

from pengoslide.world import AABB, Entity, GameEvent, GameManager, Subject, Vec3


class Recorder:
    def __init__(self):
        self.seen = []

    def on_notify(self, subject, event):
        self.seen.append((subject, event))


def test_vector_add_sub_round_trip():
    a = Vec3(1.5, -2.0, 3.0)
    b = Vec3(0.25, 4.0, -1.0)
    assert (a + b) - b == a


def test_vector_scalar_multiplication_commutes():
    v = Vec3(1.0, 2.0, 3.0)
    assert v * 2.0 == 2.0 * v
    assert -v == v * -1.0


def test_dot_with_self_is_length_squared():
    v = Vec3(3.0, -7.0, 2.5)
    assert math.isclose(v.dot(v), v.length() ** 2)


def test_normalized_has_unit_length_and_same_direction():
    v = Vec3(10.0, -4.0, 0.5)
    unit = v.normalized()
    assert math.isclose(unit.length(), 1.0)
    rebuilt = unit * v.length()
    assert math.isclose(rebuilt.x, v.x)
    assert math.isclose(rebuilt.y, v.y)
    assert math.isclose(rebuilt.z, v.z)


def test_normalized_zero_vector_stays_zero():
    assert Vec3().normalized() == Vec3()


def test_splat():
    assert Vec3.splat(16.0) == Vec3(16.0, 16.0, 16.0)


def test_touching_boxes_do_not_intersect():
    a = AABB(0.0, 0.0, 32.0, 32.0)
    b = AABB(32.0, 0.0, 32.0, 32.0)
    assert not a.intersects(b)
    assert a.intersects(b.moved(-1.0, 0.0))


def test_box_intersection_is_symmetric():
    a = AABB(0.0, 0.0, 10.0, 10.0)
    b = AABB(4.0, 4.0, 10.0, 10.0)
    assert a.intersects(b) and b.intersects(a)


def test_moved_round_trip():
    box = AABB(5.0, 6.0, 2.0, 3.0)
    assert box.moved(7.0, -2.0).moved(-7.0, 2.0) == box


def test_subject_announces_attachment_then_events():
    subject = Subject()
    rec = Recorder()
    subject.attach_observer(rec)
    subject.notify(GameEvent.ENEMY_DIED)
    assert rec.seen == [(subject, GameEvent.SUBJECT_ATTACHED), (subject, GameEvent.ENEMY_DIED)]


def test_subject_attaches_observer_once():
    subject = Subject()
    rec = Recorder()
    subject.attach_observer(rec)
    subject.attach_observer(rec)
    assert subject.observers == (rec,)


def test_entity_component_lookup():
    entity = Entity()
    rec = entity.add_component(Recorder())
    assert entity.get_component(Recorder) is rec
    assert entity.get_component(GameManager) is None


def test_entity_mark_for_destroy():
    entity = Entity(tag="enemy")
    assert entity.marked_for_destroy is False
    entity.mark_for_destroy()
    assert entity.marked_for_destroy is True


def test_entity_box_follows_position():
    entity = Entity(Vec3(40.0, 50.0, 0.0), size=32.0)
    box = entity.box()
    assert (box.center_x, box.center_y) == (40.0, 50.0)
    assert (box.width, box.height) == (32.0, 32.0)


def test_entity_without_size_has_no_box():
    with pytest.raises(ValueError):
        Entity().box()


class FakeActor:
    def __init__(self):
        self.resets = 0

    def reset_to_start(self):
        self.resets += 1

    def reset_to_spawn(self):
        self.resets += 1


def test_reset_round_resets_everyone_and_skips_none():
    manager = GameManager()
    player, enemy = FakeActor(), FakeActor()
    manager.register_player(player)
    manager.register_player(None)
    manager.register_enemy(enemy)
    manager.register_enemy(None)
    manager.reset_round()
    assert (player.resets, enemy.resets) == (1, 1)


def test_unregister_stops_resets():
    manager = GameManager()
    player, enemy = FakeActor(), FakeActor()
    manager.register_player(player)
    manager.register_enemy(enemy)
    manager.unregister_players()
    manager.unregister_enemies()
    manager.reset_round()
    assert (player.resets, enemy.resets) == (0, 0)
    assert manager.players == [] and manager.enemies == []