"""
Geometry Helpers
=================
Point arithmetic, distances, rotation and segment projection.

Anything with ``.x`` and ``.y`` attributes is accepted as a point, so the
Position/Velocity components can be passed straight in.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import math


@dataclass(frozen=True)
class Vector2:
    """Immutable 2D point or direction."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: 'Vector2') -> 'Vector2':
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Vector2') -> 'Vector2':
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> 'Vector2':
        return Vector2(self.x * scalar, self.y * scalar)

    def length(self) -> float:
        return math.hypot(self.x, self.y)


def distance(a, b) -> float:
    """Euclidean distance between two points."""
    return math.hypot(a.x - b.x, a.y - b.y)


def from_angle(angle: float, magnitude: float = 1.0) -> Vector2:
    """Direction vector for an angle in radians."""
    return Vector2(math.cos(angle) * magnitude, math.sin(angle) * magnitude)


def heading_to(origin, target) -> float:
    """Angle in radians pointing from origin toward target."""
    return math.atan2(target.y - origin.y, target.x - origin.x)


def rotate_point(local_x: float, local_y: float, angle: float,
                 origin_x: float = 0.0, origin_y: float = 0.0) -> Vector2:
    """Rotate a local-space point by angle and translate it to origin."""
    cos = math.cos(angle)
    sin = math.sin(angle)
    return Vector2(
        origin_x + cos * local_x - sin * local_y,
        origin_y + sin * local_x + cos * local_y,
    )


def transform_shape(points: Sequence[Tuple[float, float]], angle: float,
                    origin_x: float, origin_y: float) -> List[Vector2]:
    """Rotate and translate a list of local-space points."""
    return [rotate_point(px, py, angle, origin_x, origin_y) for px, py in points]


def closest_point_on_segment(point, start, end) -> Optional[Vector2]:
    """
    Nearest point to ``point`` on the segment start..end.

    Uses the scalar projection of (point - start) onto the segment,
    clamped to [0, 1]. Returns None for a zero-length segment.
    """
    dx = end.x - start.x
    dy = end.y - start.y
    length_sq = dx * dx + dy * dy
    if length_sq == 0.0:
        return None

    t = ((point.x - start.x) * dx + (point.y - start.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return Vector2(start.x + t * dx, start.y + t * dy)


def wrap_coordinate(value: float, size: float) -> float:
    """
    Wrap a coordinate into [0, size].

    An exact ``size`` stays put, so a ship resting on the right edge is
    not flipped to 0 every frame.
    """
    if 0.0 <= value <= size:
        return value
    # Float modulo may round up to exactly size, which is still in range
    return value % size


def is_outside(x: float, y: float, radius: float,
               width: float, height: float) -> bool:
    """True once a circle is entirely outside the [0, width]x[0, height] box."""
    return (
        x + radius < 0 or
        x - radius > width or
        y + radius < 0 or
        y - radius > height
    )
