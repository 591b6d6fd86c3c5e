"""
Game Tuning
============
Every gameplay constant in one place, bundled into a frozen
``GameConfig`` that is handed to the simulation.
"""

from dataclasses import dataclass, field, replace
from typing import Tuple


# =============================================================================
# PLAYFIELD
# =============================================================================

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600

# =============================================================================
# SHIP
# =============================================================================

SHIP_SPEED = 3.0
ROTATIONAL_SPEED = 0.05  # radians per tick
FRICTION = 0.995

# Hull triangle in local space, nose pointing along +x
SHIP_HULL: Tuple[Tuple[float, float], ...] = (
    (30.0, 0.0),
    (-10.0, 10.0),
    (-10.0, -10.0),
)
SHIP_CORE_RADIUS = 5.0

# =============================================================================
# PROJECTILES
# =============================================================================

PROJECTILE_SPEED = 3.5
PROJECTILE_RADIUS = 3.0
MUZZLE_OFFSET = 31.0  # spawn distance ahead of the ship centre

# =============================================================================
# ASTEROIDS
# =============================================================================

HIT_DAMAGE = 10
MIN_ASTEROID_RADIUS = 30.0
MAX_ASTEROID_RADIUS = 70.0
SCORE_DIVISOR = 10
SHRINK_EASING = 0.2  # fraction of the gap closed per tick by the shrink tween

# =============================================================================
# SPAWNING & TIMERS
# =============================================================================

SPAWN_PATTERNS = ('aimed', 'cardinal')
SPAWN_INTERVAL_MS = 2500.0
SEED_SPAWN_DELAYS_MS: Tuple[float, ...] = (0.0, 0.0, 1200.0, 2400.0)
CARDINAL_DRIFT = 0.5
GAME_OVER_DELAY_MS = 400.0

# =============================================================================
# PARTICLES
# =============================================================================

PARTICLE_FADE = 0.01  # alpha lost per tick


@dataclass(frozen=True)
class ExplosionSpec:
    """Shape of a cosmetic particle burst."""
    count: int = 8
    max_radius: float = 3.0
    spread_x: float = 8.0
    spread_y: float = 6.0


HIT_EXPLOSION = ExplosionSpec(count=8, max_radius=3.0)
SHIP_EXPLOSION = ExplosionSpec(count=8, max_radius=5.0)


@dataclass(frozen=True)
class GameConfig:
    """Tuning for one simulation instance."""
    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT

    ship_speed: float = SHIP_SPEED
    rotational_speed: float = ROTATIONAL_SPEED
    friction: float = FRICTION

    projectile_speed: float = PROJECTILE_SPEED
    projectile_radius: float = PROJECTILE_RADIUS
    muzzle_offset: float = MUZZLE_OFFSET

    hit_damage: int = HIT_DAMAGE
    min_asteroid_radius: float = MIN_ASTEROID_RADIUS
    max_asteroid_radius: float = MAX_ASTEROID_RADIUS

    spawn_pattern: str = 'aimed'
    spawn_interval_ms: float = SPAWN_INTERVAL_MS
    seed_spawn_delays_ms: Tuple[float, ...] = SEED_SPAWN_DELAYS_MS
    cardinal_drift: float = CARDINAL_DRIFT
    game_over_delay_ms: float = GAME_OVER_DELAY_MS

    particle_fade: float = PARTICLE_FADE
    hit_explosion: ExplosionSpec = field(default=HIT_EXPLOSION)
    ship_explosion: ExplosionSpec = field(default=SHIP_EXPLOSION)

    @property
    def center(self) -> Tuple[float, float]:
        return (self.width / 2, self.height / 2)

    def with_size(self, width: float, height: float) -> 'GameConfig':
        """Copy of this config for a different playfield size."""
        return replace(self, width=float(width), height=float(height))

    def validate(self) -> 'GameConfig':
        """Raise ValueError on settings the simulation cannot run with."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f'playfield must be positive, got {self.width}x{self.height}'
            )
        if self.min_asteroid_radius <= 0:
            raise ValueError('min_asteroid_radius must be positive')
        if self.min_asteroid_radius > self.max_asteroid_radius:
            raise ValueError(
                'min_asteroid_radius must not exceed max_asteroid_radius'
            )
        if self.hit_damage <= 0:
            raise ValueError('hit_damage must be positive')
        if self.spawn_interval_ms <= 0:
            raise ValueError('spawn_interval_ms must be positive')
        if self.game_over_delay_ms < 0:
            raise ValueError('game_over_delay_ms must not be negative')
        if any(delay < 0 for delay in self.seed_spawn_delays_ms):
            raise ValueError('seed_spawn_delays_ms must not be negative')
        if self.spawn_pattern not in SPAWN_PATTERNS:
            raise ValueError(
                f'unknown spawn_pattern {self.spawn_pattern!r}, '
                f'expected one of {SPAWN_PATTERNS}'
            )
        return self
