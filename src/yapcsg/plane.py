## oriented planes and polygon splitting for yapCSG
## Copyright (c) 2020 yapCSG contributors

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""Oriented planes and the polygon splitting primitive.

A plane is stored as ``(normal, w)`` with ``dot(normal, p) == w`` for every
point ``p`` on it.  Planes built with :meth:`Plane.from_points` keep the raw
cross product as their normal, so the normal length is twice the area of
the defining triangle.  Signed distances, and therefore the epsilon band
used for classification, scale with that length.
"""

from __future__ import annotations

import enum
from typing import List, Sequence, Tuple

from yapcsg.config import DEFAULT_EPSILON
from yapcsg.geom import Vec3, cross, dot, mag, negate, sub, vec3


class Side(enum.Enum):
    """Where a point or polygon lies relative to a plane."""

    COPLANAR = 'coplanar'
    FRONT = 'front'
    BACK = 'back'
    SPANNING = 'spanning'

    @classmethod
    def combine(cls, has_front: bool, has_back: bool) -> 'Side':
        if has_front and has_back:
            return cls.SPANNING
        if has_front:
            return cls.FRONT
        if has_back:
            return cls.BACK
        return cls.COPLANAR


class Plane:
    """Infinite oriented plane; ``normal`` need not be unit length."""

    __slots__ = ('normal', 'w')

    def __init__(self, normal: Sequence[float] = (0.0, 0.0, 0.0), w: float = 0.0):
        self.normal: Vec3 = vec3(normal)
        self.w = float(w)

    @classmethod
    def from_points(cls, a: Sequence[float], b: Sequence[float],
                    c: Sequence[float]) -> 'Plane':
        """Plane through ``a``, ``b``, ``c``; counter-clockwise is front facing.

        Collinear or coincident points give an invalid plane (zero normal)
        rather than an exception; check :meth:`is_valid`.
        """
        a = vec3(a)
        n = cross(sub(vec3(b), a), sub(vec3(c), a))
        return cls(n, dot(n, a))

    def __repr__(self):
        return f'Plane({self.normal}, {self.w})'

    def clone(self) -> 'Plane':
        return Plane(self.normal, self.w)

    def is_valid(self) -> bool:
        return mag(self.normal) > 0.0

    def flip(self) -> None:
        """Reverse the plane's facing in place."""
        self.normal = negate(self.normal)
        self.w = -self.w

    def distance(self, p: Sequence[float]) -> float:
        """Signed distance scaled by ``|normal|``; positive in front."""
        return dot(self.normal, p) - self.w

    def classify_point(self, p: Sequence[float],
                       epsilon: float = DEFAULT_EPSILON) -> Side:
        t = self.distance(p)
        if t < -epsilon:
            return Side.BACK
        if t > epsilon:
            return Side.FRONT
        return Side.COPLANAR

    def classify_polygon(self, polygon, epsilon: float = DEFAULT_EPSILON
                         ) -> Tuple[Side, List[Side]]:
        """Return the polygon's overall side and each vertex's side."""
        types = [self.classify_point(v.position, epsilon) for v in polygon.vertices]
        has_front = Side.FRONT in types
        has_back = Side.BACK in types
        return Side.combine(has_front, has_back), types

    def split_polygon(self, polygon, coplanar_front: list, coplanar_back: list,
                      front: list, back: list,
                      epsilon: float = DEFAULT_EPSILON) -> None:
        """Sort ``polygon`` into the four output lists, splitting if needed.

        Coplanar polygons go to ``coplanar_front`` when they face the same
        way as this plane and to ``coplanar_back`` otherwise.  Polygons
        wholly on one side are appended unchanged.  A spanning polygon is
        cut into a front piece and a back piece that share the new edge
        exactly; a piece left with fewer than three vertices is dropped.
        The output lists may alias one another.
        """
        polygon_type, types = self.classify_polygon(polygon, epsilon)

        if polygon_type is Side.COPLANAR:
            if dot(self.normal, polygon.plane.normal) > 0:
                coplanar_front.append(polygon)
            else:
                coplanar_back.append(polygon)
        elif polygon_type is Side.FRONT:
            front.append(polygon)
        elif polygon_type is Side.BACK:
            back.append(polygon)
        else:
            f = []
            b = []
            vertices = polygon.vertices
            count = len(vertices)
            for i in range(count):
                j = (i + 1) % count
                ti, tj = types[i], types[j]
                vi, vj = vertices[i], vertices[j]
                if ti is not Side.BACK:
                    f.append(vi)
                if ti is not Side.FRONT:
                    b.append(vi)
                if {ti, tj} == {Side.FRONT, Side.BACK}:
                    t = (self.w - dot(self.normal, vi.position)) / \
                        dot(self.normal, sub(vj.position, vi.position))
                    v = vi.mix(vj, t)
                    f.append(v)
                    b.append(v)
            if len(f) >= 3:
                front.append(polygon.derive(f))
            if len(b) >= 3:
                back.append(polygon.derive(b))

    def transform(self, matrix) -> None:
        """Re-express the plane in place in the frame ``matrix`` maps into.

        The homogeneous plane vector ``(normal, -w)`` transforms by the
        inverse-transpose of the point transform.
        """
        inv = matrix.inverse()
        pi = (self.normal[0], self.normal[1], self.normal[2], -self.w)
        out = [sum(inv.get(r, c) * pi[r] for r in range(4)) for c in range(4)]
        self.normal = (out[0], out[1], out[2])
        self.w = -out[3]


__all__ = ['Plane', 'Side']
