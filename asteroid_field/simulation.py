"""
Simulation Loop
================
The per-tick update and the Playing / Paused / GameOver state machine.

All session state lives in one ``SimulationState`` that the host passes
to ``tick`` every frame and to ``advance_time`` whenever wall-clock time
has passed. Nothing here touches the terminal.

Tick order: session events -> ship input -> motion -> collisions ->
pruning -> score -> entity cleanup.
"""

from dataclasses import dataclass, field
from typing import List, Optional
import logging
import random

from .ecs import World
from .components import (
    Position, Heading, CircleCollider, Fade, ShipState,
    AsteroidBody, ProjectileTag, ParticleTag
)
from .config import GameConfig, SHIP_CORE_RADIUS
from .controls import ControlState
from .scheduler import Scheduler, ScheduledTask
from .ship import (
    create_ship, ship_control_system, ship_wrap_system, ship_vertices
)
from .asteroids import shrink_system, visible_radius
from .projectiles import fire_projectile, projectile_hit_system
from .particles import spawn_explosion, particle_fade_system
from .spawner import spawn_asteroid
from .systems import movement_system, prune_system, ship_collision_system
from .snapshot import (
    Phase, Snapshot, ShipView, AsteroidView, ProjectileView, ParticleView
)


logger = logging.getLogger(__name__)

STARTING_LIVES = 3


@dataclass
class SimulationState:
    """Central game state container. Passed through every operation."""
    config: GameConfig
    world: World = field(default_factory=World)
    scheduler: Scheduler = field(default_factory=Scheduler)
    rng: random.Random = field(default_factory=random.Random)

    phase: Phase = Phase.PLAYING
    score: int = 0
    lives: int = STARTING_LIVES
    ship_id: Optional[int] = None
    asteroids_destroyed: int = 0

    spawn_task: Optional[ScheduledTask] = None
    game_over_task: Optional[ScheduledTask] = None
    seed_tasks: List[ScheduledTask] = field(default_factory=list)


# =============================================================================
# SESSION LIFECYCLE
# =============================================================================

def create_state(config: Optional[GameConfig] = None,
                 rng: Optional[random.Random] = None,
                 seed_asteroids: bool = True) -> SimulationState:
    """
    Build a ready-to-play session.

    Starts the periodic spawn timer and the first game. With
    ``seed_asteroids=False`` the opening burst is skipped, which gives
    tests an empty field to set up by hand.
    """
    config = (config or GameConfig()).validate()
    state = SimulationState(config=config, rng=rng or random.Random())
    state.spawn_task = state.scheduler.call_every(
        config.spawn_interval_ms, lambda: _timed_spawn(state), name='spawn'
    )
    new_game(state, seed_asteroids=seed_asteroids)
    return state


def new_game(state: SimulationState, seed_asteroids: bool = True) -> None:
    """Reset the session: empty field, fresh ship, score 0, playing."""
    _cancel_session_timers(state)

    state.world.clear()
    center_x, center_y = state.config.center
    state.ship_id = create_ship(state.world, center_x, center_y)
    state.score = 0
    state.lives = STARTING_LIVES
    state.asteroids_destroyed = 0
    state.phase = Phase.PLAYING

    if seed_asteroids:
        _seed_field(state)

    logger.info('new game started on %gx%g field',
                state.config.width, state.config.height)


def _seed_field(state: SimulationState) -> None:
    """Opening burst: immediate spawns now, the rest staggered by timers."""
    for delay in state.config.seed_spawn_delays_ms:
        if delay <= 0:
            spawn_asteroid(state.world, state.config, state.rng)
        else:
            state.seed_tasks.append(state.scheduler.call_later(
                delay, lambda: _timed_spawn(state), name='seed-spawn'
            ))


def _cancel_session_timers(state: SimulationState) -> None:
    """Cancel one-shot timers that belong to the current game only."""
    if state.game_over_task is not None:
        state.game_over_task.cancel()
        state.game_over_task = None
    for task in state.seed_tasks:
        task.cancel()
    state.seed_tasks = []


def _timed_spawn(state: SimulationState) -> None:
    """Timer callback: spawn unless the game is paused or over."""
    if state.phase is not Phase.PLAYING:
        return
    spawn_asteroid(state.world, state.config, state.rng)


def advance_time(state: SimulationState, elapsed_ms: float) -> int:
    """Feed wall-clock time to the timers. Returns callbacks fired."""
    return state.scheduler.advance(elapsed_ms)


# =============================================================================
# STATE MACHINE
# =============================================================================

def toggle_pause(state: SimulationState) -> Phase:
    """Playing <-> Paused. Ignored after game over."""
    if state.phase is Phase.PLAYING:
        _set_phase(state, Phase.PAUSED)
    elif state.phase is Phase.PAUSED:
        _set_phase(state, Phase.PLAYING)
    return state.phase


def focus_lost(state: SimulationState) -> Phase:
    """Auto-pause when the window loses focus."""
    if state.phase is Phase.PLAYING:
        _set_phase(state, Phase.PAUSED)
    return state.phase


def focus_gained(state: SimulationState) -> Phase:
    """Resume when focus comes back."""
    if state.phase is Phase.PAUSED:
        _set_phase(state, Phase.PLAYING)
    return state.phase


def restart(state: SimulationState) -> bool:
    """Start over from the game-over screen. Returns True if restarted."""
    if state.phase is not Phase.GAME_OVER:
        return False
    new_game(state)
    return True


def crash_ship(state: SimulationState) -> None:
    """
    Wreck the ship: debris burst now, game over after a short delay so
    the explosion can play out first.
    """
    ship_id = state.ship_id
    ship = state.world.get(ship_id, ShipState) if ship_id is not None else None
    pos = state.world.get(ship_id, Position) if ship_id is not None else None
    if ship is None or pos is None or ship.wrecked:
        return

    ship.wrecked = True
    ship.thrusting = False
    spawn_explosion(
        state.world, pos.x, pos.y, state.config.ship_explosion,
        fade=state.config.particle_fade, rng=state.rng
    )
    logger.info('ship destroyed at (%.1f, %.1f), score %d',
                pos.x, pos.y, state.score)

    if state.game_over_task is not None:
        state.game_over_task.cancel()
    state.game_over_task = state.scheduler.call_later(
        state.config.game_over_delay_ms,
        lambda: _enter_game_over(state),
        name='game-over'
    )


def _enter_game_over(state: SimulationState) -> None:
    state.game_over_task = None
    _set_phase(state, Phase.GAME_OVER)
    logger.info('game over, final score %d', state.score)


def _set_phase(state: SimulationState, phase: Phase) -> None:
    if phase is not state.phase:
        logger.debug('phase %s -> %s', state.phase.value, phase.value)
        state.phase = phase


# =============================================================================
# TICK
# =============================================================================

def _handle_session_events(state: SimulationState, controls: ControlState) -> None:
    if controls.focus is False:
        focus_lost(state)
    elif controls.focus is True:
        focus_gained(state)

    if controls.toggle_pause:
        toggle_pause(state)

    if controls.restart:
        restart(state)


def tick(state: SimulationState,
         controls: Optional[ControlState] = None) -> SimulationState:
    """
    Advance the simulation by one frame.

    While paused only session events (unpause, focus) are processed and
    every entity stays exactly where it is. After game over the field
    keeps drifting but nothing collides and input is ignored.
    """
    controls = controls or ControlState()
    _handle_session_events(state, controls)

    if state.phase is Phase.PAUSED:
        return state

    world = state.world
    config = state.config
    playing = state.phase is Phase.PLAYING

    # Input -> ship
    if playing:
        ship_control_system(world, controls, config)
        if controls.fire and state.ship_id is not None:
            fire_projectile(world, state.ship_id, config)

    # Motion
    movement_system(world)
    ship_wrap_system(world, config.width, config.height)
    particle_fade_system(world)
    shrink_system(world)

    # Collisions
    if playing:
        events = projectile_hit_system(world, config, state.rng)
        for event in events:
            if event['type'] == 'asteroid_destroyed':
                state.score += event['points']
                state.asteroids_destroyed += 1

        if ship_collision_system(world, state.ship_id) is not None:
            crash_ship(state)

    # Lifecycle
    prune_system(world, config.width, config.height)
    world.flush()
    return state


# =============================================================================
# RENDER OUTPUT
# =============================================================================

def snapshot(state: SimulationState) -> Snapshot:
    """Immutable view of the current frame for a renderer."""
    world = state.world
    hit_damage = state.config.hit_damage

    ship_view = None
    if state.ship_id is not None and world.is_alive(state.ship_id):
        pos = world.get(state.ship_id, Position)
        heading = world.get(state.ship_id, Heading)
        ship = world.get(state.ship_id, ShipState)
        ship_view = ShipView(
            x=pos.x, y=pos.y,
            rotation=heading.rotation,
            hull=tuple(ship_vertices(pos, heading)),
            core_radius=SHIP_CORE_RADIUS,
            thrusting=ship.thrusting,
            wrecked=ship.wrecked,
        )

    asteroids = tuple(
        AsteroidView(
            x=pos.x, y=pos.y,
            radius=body.radius,
            damage=body.damage,
            remaining_radius=body.remaining_radius,
            visible_radius=visible_radius(body, hit_damage),
            damage_percent=body.damage_percent,
            damage_band=body.damage_band,
        )
        for _, pos, body in world.query(Position, AsteroidBody)
    )
    projectiles = tuple(
        ProjectileView(pos.x, pos.y, col.radius)
        for _, pos, col, _ in world.query(Position, CircleCollider, ProjectileTag)
    )
    particles = tuple(
        ParticleView(pos.x, pos.y, col.radius, fade.alpha)
        for _, pos, col, fade, _ in world.query(
            Position, CircleCollider, Fade, ParticleTag
        )
    )

    return Snapshot(
        width=state.config.width,
        height=state.config.height,
        phase=state.phase,
        score=state.score,
        lives=state.lives,
        ship=ship_view,
        asteroids=asteroids,
        projectiles=projectiles,
        particles=particles,
    )
