## primitive solids as polygon soups for yapCSG

"""Primitive solids returned as outward-wound polygon soups.

Every primitive carries per-vertex normals and a single material tag so
the results can be fed straight into :func:`yapcsg.boolean.combine`.
"""

from __future__ import annotations

import math
from typing import Hashable, List, Sequence

from yapcsg.errors import InvalidInputError
from yapcsg.geom import add, cross, mag, normalize, scale3, sub, vec3
from yapcsg.polygon import Polygon
from yapcsg.vertex import Vertex

## corner i of a box uses bit 0 for x, bit 1 for y and bit 2 for z;
## each face lists its corners counter-clockwise seen from outside
_BOX_FACES = (
    ((0, 4, 6, 2), (-1.0, 0.0, 0.0)),
    ((1, 3, 7, 5), (1.0, 0.0, 0.0)),
    ((0, 1, 5, 4), (0.0, -1.0, 0.0)),
    ((2, 6, 7, 3), (0.0, 1.0, 0.0)),
    ((0, 2, 3, 1), (0.0, 0.0, -1.0)),
    ((4, 5, 7, 6), (0.0, 0.0, 1.0)),
)

_FACE_UVS = ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0))


def box(min_corner: Sequence[float], max_corner: Sequence[float],
        material: Hashable = 0) -> List[Polygon]:
    """Axis-aligned box spanning ``min_corner`` to ``max_corner``."""
    lo = vec3(min_corner)
    hi = vec3(max_corner)
    if any(hi[i] <= lo[i] for i in range(3)):
        raise InvalidInputError(f'box corners {lo} and {hi} do not span a volume')

    def corner(i):
        return (hi[0] if i & 1 else lo[0],
                hi[1] if i & 2 else lo[1],
                hi[2] if i & 4 else lo[2])

    polygons = []
    for indices, normal in _BOX_FACES:
        polygons.append(Polygon([Vertex(corner(i), normal, uv)
                                 for i, uv in zip(indices, _FACE_UVS)], material))
    return polygons


def cube(center: Sequence[float] = (0.0, 0.0, 0.0), size=1.0,
         material: Hashable = 0) -> List[Polygon]:
    """Box of edge length ``size`` (scalar or per-axis) centred on ``center``."""
    c = vec3(center)
    if isinstance(size, (int, float)):
        half = (size / 2.0,) * 3
    else:
        half = scale3(vec3(size), 0.5)
    return box(sub(c, half), add(c, half), material)


def sphere(center: Sequence[float] = (0.0, 0.0, 0.0), radius: float = 1.0,
           slices: int = 16, stacks: int = 8,
           material: Hashable = 0) -> List[Polygon]:
    """UV sphere; the poles are triangles, everything else is a quad."""
    if radius <= 0 or slices < 3 or stacks < 2:
        raise InvalidInputError('sphere needs radius > 0, slices >= 3 and stacks >= 2')
    c = vec3(center)

    def vertex(u, v):
        theta = u * math.pi * 2.0
        phi = v * math.pi
        d = (math.cos(theta) * math.sin(phi),
             math.cos(phi),
             math.sin(theta) * math.sin(phi))
        return Vertex(add(c, scale3(d, radius)), d, (u, v))

    polygons = []
    for i in range(slices):
        for j in range(stacks):
            verts = [vertex(i / slices, j / stacks)]
            if j > 0:
                verts.append(vertex((i + 1) / slices, j / stacks))
            if j < stacks - 1:
                verts.append(vertex((i + 1) / slices, (j + 1) / stacks))
            verts.append(vertex(i / slices, (j + 1) / stacks))
            polygons.append(Polygon(verts, material))
    return polygons


def cylinder(start: Sequence[float] = (0.0, -1.0, 0.0),
             end: Sequence[float] = (0.0, 1.0, 0.0),
             radius: float = 1.0, slices: int = 16,
             material: Hashable = 0) -> List[Polygon]:
    """Capped cylinder along the segment ``start`` -> ``end``."""
    s = vec3(start)
    e = vec3(end)
    ray = sub(e, s)
    if mag(ray) == 0.0 or radius <= 0 or slices < 3:
        raise InvalidInputError('cylinder needs distinct ends, radius > 0 and slices >= 3')

    axis_z = normalize(ray)
    seed = (1.0, 0.0, 0.0) if abs(axis_z[1]) > 0.5 else (0.0, 1.0, 0.0)
    axis_x = normalize(cross(seed, axis_z))
    axis_y = normalize(cross(axis_x, axis_z))
    bottom = Vertex(s, scale3(axis_z, -1.0))
    top = Vertex(e, axis_z)

    def point(stack, fraction, normal_blend):
        angle = fraction * math.pi * 2.0
        out = add(scale3(axis_x, math.cos(angle)), scale3(axis_y, math.sin(angle)))
        pos = add(add(s, scale3(ray, stack)), scale3(out, radius))
        normal = add(scale3(out, 1.0 - abs(normal_blend)), scale3(axis_z, normal_blend))
        return Vertex(pos, normal)

    polygons = []
    for i in range(slices):
        t0 = i / slices
        t1 = (i + 1) / slices
        polygons.append(Polygon([bottom, point(0, t0, -1), point(0, t1, -1)], material))
        polygons.append(Polygon([point(0, t1, 0), point(0, t0, 0),
                                 point(1, t0, 0), point(1, t1, 0)], material))
        polygons.append(Polygon([top, point(1, t1, 1), point(1, t0, 1)], material))
    return polygons


__all__ = ['box', 'cube', 'sphere', 'cylinder']
