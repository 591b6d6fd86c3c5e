"""
Simulation Systems
===================
Functions that operate on every entity holding the components they
query. Each one is called once per tick by the simulation loop.
"""

from typing import Optional

from .ecs import World
from .components import (
    Position, Velocity, Friction, CircleCollider, Heading,
    ShipState, AsteroidBody, AsteroidTag, ProjectileTag
)
from .collision import circle_triangle_collide
from .geometry import is_outside
from .ship import ship_vertices


# =============================================================================
# PHYSICS SYSTEMS
# =============================================================================

def movement_system(world: World) -> None:
    """
    Integrate positions: ``position += velocity`` once per tick.

    Entities with a Friction component lose speed before moving. The
    step is fixed; there is no delta-time scaling.
    """
    for entity_id, pos, vel in world.query(Position, Velocity):
        friction = world.get(entity_id, Friction)
        if friction:
            vel.x *= friction.value
            vel.y *= friction.value

        pos.x += vel.x
        pos.y += vel.y


def prune_system(world: World, width: float, height: float) -> int:
    """
    Destroy asteroids and projectiles that have left the playfield.

    An entity is gone once its whole circle is outside the box; entities
    sitting exactly on the border (as fresh asteroids do) survive.
    Returns the number pruned.
    """
    pruned = 0
    for tag in (AsteroidTag, ProjectileTag):
        for entity_id, pos, col, _ in world.query(Position, CircleCollider, tag):
            if is_outside(pos.x, pos.y, col.radius, width, height):
                world.destroy(entity_id)
                pruned += 1
    return pruned


# =============================================================================
# COLLISION SYSTEMS
# =============================================================================

def ship_collision_system(world: World, ship_id: Optional[int]) -> Optional[int]:
    """
    Test the ship hull against every asteroid.

    Asteroids collide with their remaining radius, so a battered
    asteroid is easier to slip past. A wrecked ship no longer collides.
    Returns the ID of the first asteroid touching the hull, or None.
    """
    if ship_id is None:
        return None

    ship = world.get(ship_id, ShipState)
    pos = world.get(ship_id, Position)
    heading = world.get(ship_id, Heading)
    if ship is None or pos is None or heading is None or ship.wrecked:
        return None

    hull = ship_vertices(pos, heading)
    for asteroid_id, a_pos, body in world.query(Position, AsteroidBody):
        if circle_triangle_collide(a_pos, body.remaining_radius, hull):
            return asteroid_id
    return None
