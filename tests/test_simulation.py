import dataclasses
import random

import pytest

from asteroid_field.asteroids import create_asteroid
from asteroid_field.components import (
    AsteroidBody, AsteroidTag, ParticleTag, Position, ProjectileTag, Velocity
)
from asteroid_field.config import GameConfig
from asteroid_field.controls import ControlState
from asteroid_field.projectiles import spawn_projectile
from asteroid_field.simulation import (
    advance_time, create_state, new_game, restart, snapshot, tick
)
from asteroid_field.snapshot import Phase
from asteroid_field.spawner import spawn_asteroid


def crash(state):
    """Drop a stationary asteroid onto the ship and run one tick."""
    ship_pos = state.world.get(state.ship_id, Position)
    create_asteroid(state.world, ship_pos.x, ship_pos.y, 0, 0, radius=40.0)
    tick(state)


def test_new_session_defaults(config):
    state = create_state(config, rng=random.Random(9))
    snap = snapshot(state)

    assert snap.phase is Phase.PLAYING
    assert snap.score == 0
    assert snap.lives == 3
    assert (snap.ship.x, snap.ship.y) == (400.0, 300.0)
    # Two asteroids right away, two more on timers
    assert len(snap.asteroids) == 2

    advance_time(state, 1200)
    assert state.world.count(AsteroidTag) == 3


def test_thrust_moves_ship_along_heading(empty_state):
    tick(empty_state, ControlState(forward=True))
    snap = snapshot(empty_state)
    assert snap.ship.x == pytest.approx(403.0)
    assert snap.ship.y == pytest.approx(300.0)


def test_fired_projectile_moves_on_the_same_tick(empty_state):
    tick(empty_state, ControlState(fire=True))
    snap = snapshot(empty_state)
    assert len(snap.projectiles) == 1
    assert snap.projectiles[0].x == pytest.approx(434.5)
    assert snap.projectiles[0].y == pytest.approx(300.0)


def test_five_hits_destroy_a_radius_fifty_asteroid(empty_state):
    world = empty_state.world
    rock = create_asteroid(world, 200, 200, 0, 0, radius=50.0)
    body = world.get(rock, AsteroidBody)

    for hit in range(1, 5):
        # Resting against the shrinking edge
        spawn_projectile(world, 202 + body.remaining_radius, 200, 0, 0)
        tick(empty_state)
        assert body.damage == hit * 10
        assert world.is_alive(rock)
        assert empty_state.score == 0

    spawn_projectile(world, 202 + body.remaining_radius, 200, 0, 0)
    tick(empty_state)
    assert not world.is_alive(rock)
    assert world.count(AsteroidTag) == 0
    assert empty_state.score == 5
    assert empty_state.asteroids_destroyed == 1


def test_battered_asteroid_is_a_smaller_target(empty_state):
    world = empty_state.world
    rock = create_asteroid(world, 200, 200, 0, 0, radius=50.0, damage=40.0)

    # Inside the nominal radius but outside the remaining one
    shot = spawn_projectile(world, 245, 200, 0, 0)
    tick(empty_state)
    assert world.is_alive(rock)
    assert world.is_alive(shot)
    assert world.get(rock, AsteroidBody).damage == 40.0

    spawn_projectile(world, 212, 200, 0, 0)
    tick(empty_state)
    assert not world.is_alive(rock)
    assert empty_state.score == 5


def test_small_asteroid_scores_floor_of_radius(empty_state):
    world = empty_state.world
    rock = create_asteroid(world, 200, 200, 0, 0, radius=35.0)
    for _ in range(4):
        spawn_projectile(world, 200, 200, 0, 0)
        tick(empty_state)
    assert not world.is_alive(rock)
    assert empty_state.score == 3


def test_ship_collides_with_remaining_radius_only(empty_state):
    world = empty_state.world
    # Nose at (430, 300): 30 units from the asteroid centre
    create_asteroid(world, 460, 300, 0, 0, radius=50.0, damage=40.0)
    tick(empty_state)
    assert not snapshot(empty_state).ship.wrecked

    create_asteroid(world, 460, 300, 0, 0, radius=50.0)
    tick(empty_state)
    assert snapshot(empty_state).ship.wrecked


def test_crash_reaches_game_over_after_delay(empty_state):
    crash(empty_state)
    snap = snapshot(empty_state)
    assert snap.ship.wrecked
    assert len(snap.particles) == 8
    assert snap.phase is Phase.PLAYING

    advance_time(empty_state, 399)
    assert empty_state.phase is Phase.PLAYING
    advance_time(empty_state, 1)
    assert empty_state.phase is Phase.GAME_OVER


def test_crash_happens_only_once(empty_state):
    crash(empty_state)
    for _ in range(5):
        tick(empty_state)
    assert empty_state.world.count(ParticleTag) == 8


def test_restart_from_game_over_resets_everything(config):
    config = dataclasses.replace(config, seed_spawn_delays_ms=())
    state = create_state(config, rng=random.Random(2))
    state.score = 17
    spawn_projectile(state.world, 100, 100, 1, 0)
    crash(state)
    advance_time(state, 400)
    assert state.phase is Phase.GAME_OVER

    tick(state, ControlState(restart=True))
    snap = snapshot(state)
    assert snap.phase is Phase.PLAYING
    assert snap.score == 0
    assert snap.asteroids == ()
    assert snap.projectiles == ()
    assert snap.particles == ()
    assert (snap.ship.x, snap.ship.y) == (400.0, 300.0)
    assert not snap.ship.wrecked
    vel = state.world.get(state.ship_id, Velocity)
    assert (vel.x, vel.y) == (0.0, 0.0)


def test_restart_is_ignored_while_playing(empty_state):
    empty_state.score = 4
    assert restart(empty_state) is False
    tick(empty_state, ControlState(restart=True))
    assert empty_state.score == 4


def test_new_game_cancels_pending_game_over(empty_state):
    crash(empty_state)
    new_game(empty_state, seed_asteroids=False)
    advance_time(empty_state, 1000)
    assert empty_state.phase is Phase.PLAYING
    assert not snapshot(empty_state).ship.wrecked


def test_pause_freezes_the_field(empty_state):
    world = empty_state.world
    rock = create_asteroid(world, 100, 100, 1, 1, radius=40.0)

    tick(empty_state, ControlState(toggle_pause=True))
    assert empty_state.phase is Phase.PAUSED
    for _ in range(10):
        tick(empty_state, ControlState(forward=True, fire=True))
    pos = world.get(rock, Position)
    assert (pos.x, pos.y) == (100, 100)
    assert world.count(ProjectileTag) == 0

    tick(empty_state, ControlState(toggle_pause=True))
    assert empty_state.phase is Phase.PLAYING
    assert (pos.x, pos.y) == (101, 101)


def test_focus_changes_pause_and_resume(empty_state):
    tick(empty_state, ControlState(focus=False))
    assert empty_state.phase is Phase.PAUSED
    tick(empty_state, ControlState(focus=True))
    assert empty_state.phase is Phase.PLAYING


def test_spawn_timer_only_spawns_while_playing(empty_state):
    advance_time(empty_state, 2500)
    assert empty_state.world.count(AsteroidTag) == 1

    tick(empty_state, ControlState(toggle_pause=True))
    advance_time(empty_state, 5000)
    assert empty_state.world.count(AsteroidTag) == 1
    assert empty_state.spawn_task.active

    tick(empty_state, ControlState(toggle_pause=True))
    advance_time(empty_state, 2500)
    assert empty_state.world.count(AsteroidTag) == 2


def test_long_stall_spawns_a_single_asteroid(empty_state):
    advance_time(empty_state, 60000)
    assert empty_state.world.count(AsteroidTag) == 1


def test_game_over_can_arrive_while_paused(empty_state):
    crash(empty_state)
    tick(empty_state, ControlState(toggle_pause=True))
    assert empty_state.phase is Phase.PAUSED
    advance_time(empty_state, 400)
    assert empty_state.phase is Phase.GAME_OVER

    tick(empty_state, ControlState(toggle_pause=True))
    assert empty_state.phase is Phase.GAME_OVER


def test_field_drifts_without_collisions_after_game_over(empty_state):
    crash(empty_state)
    advance_time(empty_state, 400)
    world = empty_state.world

    rock = create_asteroid(world, 200, 200, 1, 0, radius=50.0)
    shot = spawn_projectile(world, 201, 200, 0, 0)
    tick(empty_state, ControlState(fire=True, forward=True))

    assert world.get(rock, Position).x == 201
    assert world.get(rock, AsteroidBody).damage == 0
    assert world.is_alive(shot)
    assert world.count(ProjectileTag) == 1


def test_offscreen_projectile_is_pruned(empty_state):
    spawn_projectile(empty_state.world, 799, 300, 5, 0)
    tick(empty_state)
    assert empty_state.world.count(ProjectileTag) == 0


def test_asteroid_leaving_the_field_is_pruned(empty_state):
    world = empty_state.world
    # Edge at x=-31 after one tick: just fully outside
    gone = create_asteroid(world, -30, 100, -1, 0, radius=30.0)
    # Still touching the bottom edge after one tick
    kept = create_asteroid(world, 100, 629, 0, 1, radius=30.0)

    tick(empty_state)
    assert not world.is_alive(gone)
    assert world.get(gone, Position) is None
    assert world.is_alive(kept)
    assert world.count(AsteroidTag) == 1


def test_fresh_asteroid_survives_its_first_tick(config):
    for pattern in ('aimed', 'cardinal'):
        state = create_state(
            dataclasses.replace(config, spawn_pattern=pattern),
            rng=random.Random(4), seed_asteroids=False
        )
        for _ in range(50):
            spawn_asteroid(state.world, state.config, state.rng)
        tick(state)
        assert state.world.count(AsteroidTag) == 50


def test_long_session_stays_bounded(config):
    state = create_state(config, rng=random.Random(77))
    largest = 0
    for frame in range(6000):
        advance_time(state, 1000 / 60)
        tick(state, ControlState(
            turn_right=frame % 3 == 0,
            forward=frame % 50 < 10,
            fire=frame % 10 == 0,
        ))
        ship_pos = state.world.get(state.ship_id, Position)
        assert 0.0 <= ship_pos.x <= config.width
        assert 0.0 <= ship_pos.y <= config.height
        largest = max(largest, len(state.world))
    assert largest < 400


def test_snapshot_is_immutable(empty_state):
    snap = snapshot(empty_state)
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.score = 99
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.ship.x = 0.0
