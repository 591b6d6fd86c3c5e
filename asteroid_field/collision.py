"""
Collision Tests
================
Circle-circle and circle-triangle intersection.

Circles are described by a centre point (anything with ``.x``/``.y``)
and a radius; triangles by three points.
"""

from typing import Sequence

from .geometry import closest_point_on_segment, distance


def circles_collide(center_a, radius_a: float, center_b, radius_b: float) -> bool:
    """Touching or overlapping circles collide."""
    return distance(center_a, center_b) <= radius_a + radius_b


def circle_triangle_collide(center, radius: float, triangle: Sequence) -> bool:
    """
    True if any triangle edge comes within ``radius`` of ``center``.

    Only the edges are tested: a small circle sitting wholly inside a
    large triangle does not register. The ship hull is small next to
    any asteroid, so in play an asteroid overlapping the hull always
    crosses an edge first.

    Zero-length edges are skipped.
    """
    for i in range(3):
        start = triangle[i]
        end = triangle[(i + 1) % 3]

        closest = closest_point_on_segment(center, start, end)
        if closest is None:
            continue

        if distance(closest, center) <= radius:
            return True

    return False
