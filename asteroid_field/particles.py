"""
Particle System
================
Explosion debris: spawned in bursts, drifts with friction and fades out.
Particles never collide with anything.
"""

import random
from typing import List

from .ecs import World
from .components import (
    Position, Velocity, Friction, CircleCollider, Fade, ParticleTag
)
from .config import ExplosionSpec, FRICTION, PARTICLE_FADE


def spawn_particle(
    world: World,
    x: float, y: float,
    vx: float, vy: float,
    radius: float = 3.0,
    friction: float = FRICTION,
    fade: float = PARTICLE_FADE
) -> int:
    """Spawn a single particle entity."""
    return world.spawn(
        Position(x, y),
        Velocity(vx, vy),
        Friction(friction),
        CircleCollider(radius),
        Fade(alpha=1.0, rate=fade),
        ParticleTag(),
    )


def spawn_explosion(
    world: World,
    x: float, y: float,
    spec: ExplosionSpec,
    fade: float = PARTICLE_FADE,
    rng=random
) -> List[int]:
    """
    Spawn a burst of particles at one point.

    Speeds are the product of two uniform draws, so most debris stays
    close to the impact and a few pieces fly far.
    """
    spawned = []
    for _ in range(spec.count):
        vx = (rng.random() - 0.5) * rng.random() * spec.spread_x
        vy = (rng.random() - 0.5) * rng.random() * spec.spread_y
        spawned.append(spawn_particle(
            world, x, y, vx, vy,
            radius=rng.random() * spec.max_radius,
            fade=fade
        ))
    return spawned


def particle_fade_system(world: World) -> int:
    """
    Drain particle opacity and destroy fully faded particles.

    Returns the number destroyed this tick.
    """
    expired = 0
    for entity_id, fade in world.query(Fade):
        fade.alpha = max(0.0, fade.alpha - fade.rate)
        if fade.alpha <= 0:
            world.destroy(entity_id)
            expired += 1
    return expired
