"""
Render Snapshot
================
Immutable per-frame view of the simulation for renderers. Nothing in
here refers back to live components, so a renderer cannot mutate the
game by accident.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .geometry import Vector2


class Phase(Enum):
    """Game session states."""
    PLAYING = 'playing'
    PAUSED = 'paused'
    GAME_OVER = 'game_over'


@dataclass(frozen=True)
class ShipView:
    x: float
    y: float
    rotation: float
    hull: Tuple[Vector2, ...]
    core_radius: float
    thrusting: bool
    wrecked: bool


@dataclass(frozen=True)
class AsteroidView:
    x: float
    y: float
    radius: float
    damage: float
    remaining_radius: float
    visible_radius: float
    damage_percent: int
    damage_band: int


@dataclass(frozen=True)
class ProjectileView:
    x: float
    y: float
    radius: float


@dataclass(frozen=True)
class ParticleView:
    x: float
    y: float
    radius: float
    alpha: float


@dataclass(frozen=True)
class Snapshot:
    """Everything a renderer needs for one frame."""
    width: float
    height: float
    phase: Phase
    score: int
    lives: int
    ship: Optional[ShipView]
    asteroids: Tuple[AsteroidView, ...] = ()
    projectiles: Tuple[ProjectileView, ...] = ()
    particles: Tuple[ParticleView, ...] = ()

    @property
    def paused(self) -> bool:
        return self.phase is Phase.PAUSED

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER
