## vertex value type for yapCSG polygons
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

from dataclasses import dataclass
from typing import Optional

from yapcsg.geom import Vec2, Vec3, lerp, negate, normalize, vec2, vec3


@dataclass(frozen=True)
class Vertex:
    """Immutable polygon corner: a position plus optional normal and UV.

    Vertices are never shared between polygons in any meaningful sense;
    since they are frozen, "copying" one is just reusing the value.
    """

    position: Vec3
    normal: Optional[Vec3] = None
    uv: Optional[Vec2] = None

    def __post_init__(self):
        object.__setattr__(self, 'position', vec3(self.position))
        if self.normal is not None:
            object.__setattr__(self, 'normal', vec3(self.normal))
        if self.uv is not None:
            object.__setattr__(self, 'uv', vec2(self.uv))

    def mix(self, other: 'Vertex', t: float) -> 'Vertex':
        return mix(self, other, t)

    def flipped(self) -> 'Vertex':
        """Same corner with its normal reversed (used when winding flips)."""
        if self.normal is None:
            return self
        return Vertex(self.position, negate(self.normal), self.uv)

    def transformed(self, matrix, normal_matrix=None) -> 'Vertex':
        """Return this vertex under ``matrix``.

        Normals go through ``normal_matrix`` (the inverse-transpose of
        ``matrix``) and are renormalized; pass it in when transforming many
        vertices to avoid recomputing the inverse each time.
        """
        position = matrix.point(self.position)
        normal = self.normal
        if normal is not None:
            if normal_matrix is None:
                normal_matrix = matrix.inverse().transpose()
            normal = normalize(normal_matrix.direction(normal))
        return Vertex(position, normal, self.uv)


def mix(a: Vertex, b: Vertex, t: float) -> Vertex:
    """Interpolate every attribute of ``a`` toward ``b`` by ``t``.

    An attribute present on only one of the two endpoints cannot be
    interpolated and is dropped from the result.
    """

    normal = None
    if a.normal is not None and b.normal is not None:
        normal = lerp(a.normal, b.normal, t)
    uv = None
    if a.uv is not None and b.uv is not None:
        uv = lerp(a.uv, b.uv, t)
    return Vertex(lerp(a.position, b.position, t), normal, uv)


__all__ = ['Vertex', 'mix']
