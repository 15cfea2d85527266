"""Measurements on polygon soups: volume, surface area, bounds."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from yapcsg.geom import Vec3, cross, dot, sub
from yapcsg.polygon import Polygon


def volume(polygons: Iterable[Polygon], signed: bool = False) -> float:
    """
    Volume enclosed by a closed, outward-wound polygon soup.

    Uses the divergence theorem over the fan triangulation of every
    polygon: each triangle ``(p0, p1, p2)`` contributes
    ``dot(p0, cross(p1-p0, p2-p0)) / 6``.  T-junctions left behind by
    BSP splitting do not affect the sum as long as the surface covers the
    boundary exactly once.

    With ``signed=True`` an inside-out soup gives a negative volume;
    otherwise the absolute value is returned.
    """
    total = 0.0
    for poly in polygons:
        for v0, v1, v2 in poly.triangles():
            p0 = v0.position
            total += dot(p0, cross(sub(v1.position, p0), sub(v2.position, p0))) / 6.0
    return total if signed else abs(total)


def surface_area(polygons: Iterable[Polygon]) -> float:
    return sum(poly.area() for poly in polygons)


def bounding_box(polygons: Iterable[Polygon]) -> Optional[Tuple[Vec3, Vec3]]:
    """``(min_corner, max_corner)`` of all vertices, or ``None`` if empty."""
    mins = [float('inf')] * 3
    maxs = [float('-inf')] * 3
    seen = False
    for poly in polygons:
        for v in poly.vertices:
            seen = True
            for i in range(3):
                mins[i] = min(mins[i], v.position[i])
                maxs[i] = max(maxs[i], v.position[i])
    if not seen:
        return None
    return (mins[0], mins[1], mins[2]), (maxs[0], maxs[1], maxs[2])


__all__ = ['volume', 'surface_area', 'bounding_box']
