## small 3-vector toolkit for yapCSG
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

"""Vector helpers shared by the CSG core.

Points and directions are plain ``(x, y, z)`` float tuples; texture
coordinates are ``(u, v)`` tuples.  Everything here is a pure function,
which keeps vertices and polygons free to treat their coordinates as
immutable values.
"""

from __future__ import annotations

import math
from typing import Sequence, Tuple

Vec3 = Tuple[float, float, float]
Vec2 = Tuple[float, float]

## tolerance used for "is this number effectively zero" checks that are
## unrelated to plane classification (see yapcsg.config for that one)
epsilon = 1e-12


def isgoodnum(n) -> bool:
    return (not isinstance(n, bool)) and isinstance(n, (int, float)) \
        and math.isfinite(n)


def vec3(v: Sequence[float]) -> Vec3:
    """Coerce ``v`` to an ``(x, y, z)`` float tuple."""

    if len(v) < 3:
        raise ValueError('value must have at least three components')
    return float(v[0]), float(v[1]), float(v[2])


def vec2(v: Sequence[float]) -> Vec2:
    if len(v) < 2:
        raise ValueError('value must have at least two components')
    return float(v[0]), float(v[1])


def add(a: Vec3, b: Vec3) -> Vec3:
    return a[0] + b[0], a[1] + b[1], a[2] + b[2]


def sub(a: Vec3, b: Vec3) -> Vec3:
    return a[0] - b[0], a[1] - b[1], a[2] - b[2]


def scale3(a: Vec3, c: float) -> Vec3:
    return a[0] * c, a[1] * c, a[2] * c


def negate(a: Vec3) -> Vec3:
    return -a[0], -a[1], -a[2]


def dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: Vec3, b: Vec3) -> Vec3:
    return (a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0])


def mag(a: Vec3) -> float:
    return math.sqrt(dot(a, a))


def normalize(a: Vec3) -> Vec3:
    """Unit vector along ``a``; the zero vector is returned unchanged."""

    m = mag(a)
    if m <= epsilon:
        return a
    return a[0] / m, a[1] / m, a[2] / m


def lerp(a: Sequence[float], b: Sequence[float], t: float) -> tuple:
    """Componentwise ``a + t*(b-a)`` for tuples of any (equal) length."""

    return tuple(x + (y - x) * t for x, y in zip(a, b))


__all__ = [
    'Vec2',
    'Vec3',
    'epsilon',
    'isgoodnum',
    'vec2',
    'vec3',
    'add',
    'sub',
    'scale3',
    'negate',
    'dot',
    'cross',
    'mag',
    'normalize',
    'lerp',
]
