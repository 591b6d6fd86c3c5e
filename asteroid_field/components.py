"""
Component Definitions
======================
Plain dataclasses. Behaviour lives in the systems; the only logic here
is derived read-only values on the asteroid body.
"""

from dataclasses import dataclass
import math


# =============================================================================
# PHYSICS COMPONENTS
# =============================================================================

@dataclass
class Position:
    """World position in playfield units."""
    x: float = 0.0
    y: float = 0.0


@dataclass
class Velocity:
    """Displacement per tick."""
    x: float = 0.0
    y: float = 0.0


@dataclass
class Friction:
    """Velocity multiplier applied each tick."""
    value: float = 0.995


@dataclass
class CircleCollider:
    """Circular hitbox / visual radius."""
    radius: float = 1.0


@dataclass
class Heading:
    """Facing angle in radians. Never normalised."""
    rotation: float = 0.0


# =============================================================================
# GAMEPLAY COMPONENTS
# =============================================================================

@dataclass
class ShipState:
    """Per-session ship flags."""
    thrusting: bool = False
    wrecked: bool = False


@dataclass
class AsteroidBody:
    """
    Damage bookkeeping for an asteroid.

    ``radius`` is the nominal size and never changes; ``damage`` only
    grows. ``display_radius`` is the eased visual size used by renderers.
    """
    radius: float = 50.0
    damage: float = 0.0
    display_radius: float = 50.0
    hits: int = 0

    @property
    def remaining_radius(self) -> float:
        return self.radius - self.damage

    @property
    def destroyed(self) -> bool:
        return self.damage >= self.radius

    @property
    def damage_percent(self) -> int:
        """Health left, 100 when intact down to 0 (or below) when destroyed."""
        return 100 - math.floor((self.damage / self.radius) * 100)

    @property
    def damage_band(self) -> int:
        """Colour bucket: 0 intact, 1 scratched, 2 cracked, 3 crumbling."""
        percent = self.damage_percent
        if percent >= 100:
            return 0
        if percent > 60:
            return 1
        if percent > 30:
            return 2
        return 3


@dataclass
class Fade:
    """Opacity that drains every tick; entity dies at zero."""
    alpha: float = 1.0
    rate: float = 0.01


# =============================================================================
# TAG COMPONENTS (used for queries)
# =============================================================================

@dataclass
class ShipTag:
    """Marks the player ship."""
    pass


@dataclass
class AsteroidTag:
    """Marks an asteroid."""
    pass


@dataclass
class ProjectileTag:
    """Marks a player projectile."""
    pass


@dataclass
class ParticleTag:
    """Marks cosmetic explosion debris."""
    pass
