"""
Ship Module
============
Ship entity creation, hull geometry and control.
"""

from typing import List
import math

from .ecs import World
from .components import (
    Position, Velocity, Heading, CircleCollider, ShipState, ShipTag
)
from .config import GameConfig, SHIP_HULL, SHIP_CORE_RADIUS
from .controls import ControlState
from .geometry import Vector2, transform_shape, wrap_coordinate


def create_ship(world: World, x: float, y: float) -> int:
    """Create the ship at rest, nose pointing along +x."""
    return world.spawn(
        Position(x, y),
        Velocity(0.0, 0.0),
        Heading(0.0),
        CircleCollider(SHIP_CORE_RADIUS),
        ShipState(),
        ShipTag(),
    )


def ship_vertices(pos: Position, heading: Heading) -> List[Vector2]:
    """Hull triangle in world space: nose, then the two rear corners."""
    return transform_shape(SHIP_HULL, heading.rotation, pos.x, pos.y)


def ship_control_system(world: World, controls: ControlState,
                        config: GameConfig) -> None:
    """
    Apply held controls to the ship.

    Thrust overwrites the velocity with full speed along the heading;
    without thrust the velocity decays by friction. Turning right wins
    when both turn keys are held. A wrecked ship ignores the controls
    but keeps slowing down.
    """
    for entity_id, vel, heading, ship in world.query(
        Velocity, Heading, ShipState
    ):
        thrust = controls.forward and not ship.wrecked
        ship.thrusting = thrust
        if thrust:
            vel.x = math.cos(heading.rotation) * config.ship_speed
            vel.y = math.sin(heading.rotation) * config.ship_speed
        else:
            vel.x *= config.friction
            vel.y *= config.friction

        if ship.wrecked:
            continue
        if controls.turn_right:
            heading.rotation += config.rotational_speed
        elif controls.turn_left:
            heading.rotation -= config.rotational_speed


def ship_wrap_system(world: World, width: float, height: float) -> None:
    """Wrap the ship around the playfield edges (toroidal topology)."""
    for entity_id, pos, _ in world.query(Position, ShipTag):
        pos.x = wrap_coordinate(pos.x, width)
        pos.y = wrap_coordinate(pos.y, height)
