"""
Asteroid Module
================
Asteroid creation, damage application and the shrink tween.
"""

import math

from .ecs import World
from .components import (
    Position, Velocity, CircleCollider, AsteroidBody, AsteroidTag
)
from .config import HIT_DAMAGE, SCORE_DIVISOR, SHRINK_EASING


def create_asteroid(
    world: World,
    x: float, y: float,
    vx: float, vy: float,
    radius: float,
    damage: float = 0.0
) -> int:
    """Create an asteroid entity."""
    return world.spawn(
        Position(x, y),
        Velocity(vx, vy),
        CircleCollider(radius),
        AsteroidBody(radius=radius, damage=damage,
                     display_radius=radius - damage),
        AsteroidTag(),
    )


def asteroid_score(radius: float) -> int:
    """Points for destroying an asteroid of the given nominal radius."""
    return math.floor(radius / SCORE_DIVISOR)


def apply_hit(body: AsteroidBody, damage: float) -> bool:
    """
    Add damage to an asteroid. Returns True if this hit destroyed it.

    Damage only ever grows; a negative amount is ignored.
    """
    if damage > 0:
        body.damage += damage
    body.hits += 1
    return body.destroyed


def visible_radius(body: AsteroidBody, hit_damage: float = HIT_DAMAGE) -> float:
    """
    Radius to draw: the eased size, but never thinner than one hit's
    worth so a nearly dead asteroid stays visible.
    """
    if body.display_radius < hit_damage * 2:
        return float(hit_damage)
    return body.display_radius


def shrink_system(world: World, easing: float = SHRINK_EASING) -> None:
    """Ease each asteroid's display radius toward its remaining radius."""
    for entity_id, body in world.query(AsteroidBody):
        target = max(0.0, body.remaining_radius)
        gap = target - body.display_radius
        if abs(gap) < 0.05:
            body.display_radius = target
        else:
            body.display_radius += gap * easing
