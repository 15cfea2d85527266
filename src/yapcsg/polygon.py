## planar polygons for yapCSG
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

from __future__ import annotations

from typing import Hashable, Iterable, Iterator, List, Tuple

from yapcsg.errors import InvalidInputError
from yapcsg.geom import Vec3, add, cross, mag, sub
from yapcsg.plane import Plane
from yapcsg.vertex import Vertex


class Polygon:
    """Closed loop of three or more coplanar vertices with a material tag.

    The plane comes from the first three vertices, or from the first
    non-collinear fan triangle ``(v0, vi, vi+1)`` when those three lie on
    one line.  Polygons are mutable only through :meth:`flip`, which the
    BSP tree uses while inverting.
    """

    __slots__ = ('vertices', 'material', 'plane')

    def __init__(self, vertices: Iterable[Vertex], material: Hashable = 0):
        vertices = [v if isinstance(v, Vertex) else Vertex(v) for v in vertices]
        if len(vertices) < 3:
            raise InvalidInputError(
                f'a polygon needs at least 3 vertices, got {len(vertices)}',
                details={'vertex_count': len(vertices)})
        self.vertices: List[Vertex] = vertices
        self.material = material
        self.plane = _fan_plane(vertices)

    def __repr__(self):
        pts = ', '.join(str(v.position) for v in self.vertices)
        return f'Polygon([{pts}], material={self.material!r})'

    def __len__(self):
        return len(self.vertices)

    def derive(self, vertices: Iterable[Vertex]) -> 'Polygon':
        """New polygon over ``vertices`` carrying this polygon's material."""
        return Polygon(vertices, self.material)

    def clone(self) -> 'Polygon':
        return Polygon(list(self.vertices), self.material)

    def flip(self) -> None:
        self.vertices = [v.flipped() for v in reversed(self.vertices)]
        self.plane.flip()

    def is_degenerate(self) -> bool:
        return not self.plane.is_valid()

    def positions(self) -> List[Vec3]:
        return [v.position for v in self.vertices]

    def triangles(self) -> Iterator[Tuple[Vertex, Vertex, Vertex]]:
        """Fan triangulation; polygons produced by splitting stay convex."""
        anchor = self.vertices[0]
        for i in range(1, len(self.vertices) - 1):
            yield anchor, self.vertices[i], self.vertices[i + 1]

    def area(self) -> float:
        total = (0.0, 0.0, 0.0)
        p0 = self.vertices[0].position
        for _, v1, v2 in self.triangles():
            total = add(total, cross(sub(v1.position, p0), sub(v2.position, p0)))
        return 0.5 * mag(total)

    def transformed(self, matrix, normal_matrix=None) -> 'Polygon':
        if normal_matrix is None and any(v.normal is not None for v in self.vertices):
            normal_matrix = matrix.inverse().transpose()
        return Polygon([v.transformed(matrix, normal_matrix) for v in self.vertices],
                       self.material)


def _fan_plane(vertices: List[Vertex]) -> Plane:
    anchor = vertices[0].position
    plane = Plane.from_points(anchor, vertices[1].position, vertices[2].position)
    for i in range(2, len(vertices) - 1):
        if plane.is_valid():
            break
        plane = Plane.from_points(anchor, vertices[i].position,
                                  vertices[i + 1].position)
    return plane


def clone_polygons(polygons: Iterable[Polygon]) -> List[Polygon]:
    return [p.clone() for p in polygons]


__all__ = ['Polygon', 'clone_polygons']
