"""
Projectile System
==================
Projectile lifecycle: fired from the ship nose, moved by the movement
system, consumed on asteroid impact or pruned off-screen.
"""

import logging
import math
import random
from typing import List, Optional

from .ecs import World
from .components import (
    Position, Velocity, CircleCollider, Heading, ShipState,
    AsteroidBody, ProjectileTag
)
from .config import GameConfig
from .asteroids import apply_hit, asteroid_score
from .collision import circles_collide
from .particles import spawn_explosion


logger = logging.getLogger(__name__)


def spawn_projectile(
    world: World,
    x: float, y: float,
    vx: float, vy: float,
    radius: float = 3.0
) -> int:
    """Spawn a single projectile entity."""
    return world.spawn(
        Position(x, y),
        Velocity(vx, vy),
        CircleCollider(radius),
        ProjectileTag(),
    )


def fire_projectile(world: World, ship_id: int,
                    config: GameConfig) -> Optional[int]:
    """
    Fire one projectile from the ship's nose along its heading.

    Returns the new projectile ID, or None if the ship cannot fire.
    """
    pos = world.get(ship_id, Position)
    heading = world.get(ship_id, Heading)
    ship = world.get(ship_id, ShipState)
    if pos is None or heading is None or (ship is not None and ship.wrecked):
        return None

    cos = math.cos(heading.rotation)
    sin = math.sin(heading.rotation)
    return spawn_projectile(
        world,
        pos.x + cos * config.muzzle_offset,
        pos.y + sin * config.muzzle_offset,
        cos * config.projectile_speed,
        sin * config.projectile_speed,
        radius=config.projectile_radius,
    )


def projectile_hit_system(world: World, config: GameConfig,
                          rng=random) -> List[dict]:
    """
    Resolve projectile-asteroid impacts.

    Each asteroid takes at most one projectile per tick. The projectile
    is consumed, the asteroid gains one hit of damage and a spark burst
    goes off at the impact point. An asteroid whose damage reaches its
    nominal radius is destroyed in the same call. Impacts are measured
    against the remaining radius, so a battered asteroid is a smaller
    target.

    Returns a list of event dicts: ``asteroid_hit`` for every impact and
    ``asteroid_destroyed`` (with ``points``) for every kill.
    """
    events = []

    for asteroid_id, a_pos, body in world.query(Position, AsteroidBody):
        for proj_id, p_pos, p_col, _ in world.query(
            Position, CircleCollider, ProjectileTag
        ):
            if not circles_collide(p_pos, p_col.radius,
                                   a_pos, body.remaining_radius):
                continue

            world.destroy(proj_id)
            spawn_explosion(
                world, p_pos.x, p_pos.y, config.hit_explosion,
                fade=config.particle_fade, rng=rng
            )

            destroyed = apply_hit(body, config.hit_damage)
            events.append({
                'type': 'asteroid_hit',
                'entity': asteroid_id,
                'damage': body.damage,
                'x': p_pos.x,
                'y': p_pos.y,
            })

            if destroyed:
                world.destroy(asteroid_id)
                points = asteroid_score(body.radius)
                logger.debug(
                    'asteroid %d destroyed after %d hits (radius %.1f, +%d)',
                    asteroid_id, body.hits, body.radius, points
                )
                events.append({
                    'type': 'asteroid_destroyed',
                    'entity': asteroid_id,
                    'radius': body.radius,
                    'points': points,
                    'x': a_pos.x,
                    'y': a_pos.y,
                })
            break  # One hit per asteroid per tick

    return events
