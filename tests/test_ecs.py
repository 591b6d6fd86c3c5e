from asteroid_field.ecs import World
from asteroid_field.components import Position, Velocity, AsteroidTag


def test_spawn_and_query_in_creation_order():
    world = World()
    first = world.spawn(Position(1, 1), Velocity(0, 0))
    world.spawn(Position(2, 2))
    third = world.spawn(Position(3, 3), Velocity(1, 0))

    rows = list(world.query(Position, Velocity))
    assert [row[0] for row in rows] == [first, third]
    assert rows[1][1].x == 3


def test_destroy_hides_entity_until_flush_removes_it():
    world = World()
    rock = world.spawn(Position(), AsteroidTag())
    world.destroy(rock)

    assert not world.is_alive(rock)
    assert world.count(AsteroidTag) == 0
    assert world.get(rock, Position) is not None

    assert world.flush() == 1
    assert world.get(rock, Position) is None
    assert len(world) == 0


def test_clear_never_reuses_ids():
    world = World()
    old = world.spawn(Position())
    world.clear()
    new = world.spawn(Position())
    assert new != old
    assert not world.is_alive(old)
    assert len(world) == 1


def test_query_missing_component_type_yields_nothing():
    world = World()
    world.spawn(Position())
    assert list(world.query(Position, Velocity)) == []
    assert list(world.query()) == []
