"""
Asteroid Spawner
=================
Places new asteroids just outside the playfield, heading inward.

Two spawn patterns:

* ``aimed``: any point along an edge, flying straight at the centre
  of the playfield at unit speed.
* ``cardinal``: one of the four edges, flying perpendicular to it at
  unit speed with a random sideways drift.
"""

import logging
import random
from typing import Callable, Dict, Tuple

from .ecs import World
from .config import GameConfig
from .asteroids import create_asteroid
from .geometry import Vector2, from_angle, heading_to


logger = logging.getLogger(__name__)

# Edge -> (inward unit direction)
CARDINAL_EDGES: Dict[str, Tuple[float, float]] = {
    'left': (1.0, 0.0),
    'right': (-1.0, 0.0),
    'top': (0.0, 1.0),
    'bottom': (0.0, -1.0),
}

SpawnResult = Tuple[float, float, float, float]  # x, y, vx, vy


def random_radius(config: GameConfig, rng=random) -> float:
    """Radius drawn uniformly from the configured range."""
    low = config.min_asteroid_radius
    high = config.max_asteroid_radius
    return rng.random() * (high - low) + low


def aimed_spawn(config: GameConfig, radius: float, rng=random) -> SpawnResult:
    """Edge position with a unit velocity pointed at the playfield centre."""
    width, height = config.width, config.height
    center_x, center_y = config.center

    x_rand = rng.random() * width
    y_rand = rng.random() * height

    if rng.random() < 0.5:
        x = -radius if rng.random() < 0.5 else width + radius
        y = y_rand
    else:
        x = x_rand
        y = -radius if rng.random() < 0.5 else height + radius

    direction = from_angle(heading_to(Vector2(x, y), Vector2(center_x, center_y)))
    return x, y, direction.x, direction.y


def cardinal_spawn(config: GameConfig, radius: float, rng=random) -> SpawnResult:
    """Position on a random edge moving straight inward plus sideways drift."""
    width, height = config.width, config.height
    drift = rng.uniform(-config.cardinal_drift, config.cardinal_drift)
    edge = rng.choice(list(CARDINAL_EDGES))
    dir_x, dir_y = CARDINAL_EDGES[edge]

    if edge == 'left':
        x, y = -radius, rng.random() * height
    elif edge == 'right':
        x, y = width + radius, rng.random() * height
    elif edge == 'top':
        x, y = rng.random() * width, -radius
    else:
        x, y = rng.random() * width, height + radius

    # Drift runs along the edge, i.e. on the axis the edge does not face
    if dir_x != 0:
        return x, y, dir_x, drift
    return x, y, drift, dir_y


SPAWN_PATTERNS: Dict[str, Callable[..., SpawnResult]] = {
    'aimed': aimed_spawn,
    'cardinal': cardinal_spawn,
}


def spawn_asteroid(world: World, config: GameConfig, rng=random) -> int:
    """Spawn one asteroid using the configured pattern. Returns its ID."""
    radius = random_radius(config, rng)
    pattern = SPAWN_PATTERNS[config.spawn_pattern]
    x, y, vx, vy = pattern(config, radius, rng)

    entity_id = create_asteroid(world, x, y, vx, vy, radius)
    logger.debug(
        'spawned asteroid %d r=%.1f at (%.1f, %.1f) v=(%.2f, %.2f)',
        entity_id, radius, x, y, vx, vy
    )
    return entity_id
