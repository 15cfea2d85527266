## 4x4 homogeneous transformation matrices for yapCSG
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

from math import cos, sin, radians

import numpy as np

import yapcsg.geom as geom

## A matrix is a list of four row vectors.  Points are treated as
## column vectors with an implied w=1, directions with an implied w=0,
## so M.point(p) computes Mp.  Meshes arriving from a host application
## carry their local->world transform as one of these; the inverse of
## the reference mesh's transform takes boolean results back into its
## local frame.


class Matrix:
    """4x4 transformation matrix for homogeneous 3D coordinates"""

    def __init__(self, a=None):
        self.m = [[1.0, 0.0, 0.0, 0.0],
                  [0.0, 1.0, 0.0, 0.0],
                  [0.0, 0.0, 1.0, 0.0],
                  [0.0, 0.0, 0.0, 1.0]]

        if a is None:
            return
        if isinstance(a, Matrix):
            self.m = [list(row) for row in a.m]
            return
        if isinstance(a, np.ndarray):
            a = a.tolist()
        if not isinstance(a, (tuple, list)):
            raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))
        if len(a) == 16:
            a = [a[0:4], a[4:8], a[8:12], a[12:16]]
        if len(a) != 4 or any(len(row) != 4 for row in a):
            raise ValueError('matrix initializer must be 4x4 or 16 elements: {}'.format(a))
        for i in range(4):
            for j in range(4):
                x = a[i][j]
                if not geom.isgoodnum(x):
                    raise ValueError('bad element in matrix initialization: {}'.format(x))
                self.m[i][j] = float(x)

    def __repr__(self):
        return "Matrix({},{},{},{})".format(*self.m)

    def __eq__(self, other):
        return isinstance(other, Matrix) and self.m == other.m

    def get(self, i, j):
        if i < 0 or i > 3 or j < 0 or j > 3:
            raise ValueError('bad index passed to get: {},{}'.format(i, j))
        return self.m[i][j]

    def getrow(self, i):
        return list(self.m[i])

    def getcol(self, j):
        return [self.m[0][j], self.m[1][j], self.m[2][j], self.m[3][j]]

    def transpose(self):
        return Matrix([self.getcol(j) for j in range(4)])

    def inverse(self):
        """Numeric inverse; raises ``ValueError`` for a singular matrix."""
        try:
            inv = np.linalg.inv(np.asarray(self.m, dtype=float))
        except np.linalg.LinAlgError as exc:
            raise ValueError('matrix is not invertible') from exc
        return Matrix(inv)

    def isidentity(self, tol=1e-12):
        return all(abs(self.m[i][j] - (1.0 if i == j else 0.0)) <= tol
                   for i in range(4) for j in range(4))

    # matrix multiply.  If x is a matrix, compute MX.  If x is a
    # 4-vector, compute Mx.  If x is a scalar, compute xM.
    def mul(self, x):
        if isinstance(x, Matrix):
            return Matrix([[sum(self.m[i][k] * x.m[k][j] for k in range(4))
                            for j in range(4)] for i in range(4)])
        if isinstance(x, (tuple, list)) and len(x) == 4:
            return [sum(self.m[i][k] * x[k] for k in range(4)) for i in range(4)]
        if geom.isgoodnum(x):
            return Matrix([[v * x for v in row] for row in self.m])
        raise ValueError('bad thing passed to mul(): {}'.format(x))

    def point(self, p):
        """Transform the point ``p`` (w=1), returning an ``(x, y, z)`` tuple."""
        x, y, z, w = self.mul([p[0], p[1], p[2], 1.0])
        if abs(w) > geom.epsilon and w != 1.0:
            return x / w, y / w, z / w
        return x, y, z

    def direction(self, d):
        """Transform the direction ``d`` (w=0), returning an ``(x, y, z)`` tuple."""
        x, y, z, _ = self.mul([d[0], d[1], d[2], 0.0])
        return x, y, z


def Translation(delta, inverse=False):
    dx, dy, dz = geom.vec3(delta)
    if inverse:
        dx, dy, dz = -dx, -dy, -dz
    return Matrix([[1, 0, 0, dx],
                   [0, 1, 0, dy],
                   [0, 0, 1, dz],
                   [0, 0, 0, 1]])


# return the arbitrary-axis rotation matrix, angle in degrees
def Rotation(axis, angle, inverse=False):
    u = geom.vec3(axis)
    m = geom.mag(u)
    if m < geom.epsilon:
        raise ValueError('zero-length rotation axis not allowed')
    ux, uy, uz = geom.scale3(u, 1.0 / m)

    if inverse:
        angle = -angle
    rad = radians(angle % 360.0)
    cang = cos(rad)
    cmin = 1.0 - cang
    sang = sin(rad)

    return Matrix([[cang + ux*ux*cmin, ux*uy*cmin - uz*sang, ux*uz*cmin + uy*sang, 0],
                   [uy*ux*cmin + uz*sang, cang + uy*uy*cmin, uy*uz*cmin - ux*sang, 0],
                   [uz*ux*cmin - uy*sang, uz*uy*cmin + ux*sang, cang + uz*uz*cmin, 0],
                   [0, 0, 0, 1]])


def Scale(x, y=None, z=None, inverse=False):
    if isinstance(x, (tuple, list)):
        sx, sy, sz = geom.vec3(x)
    elif geom.isgoodnum(x):
        sx = sy = sz = float(x)
        if y is not None and z is not None:
            sy, sz = float(y), float(z)
    else:
        raise ValueError('bad scaling values passed to Scale')

    if sx == 0.0 or sy == 0.0 or sz == 0.0:
        raise ValueError('zero scale factors are not allowed')
    if inverse:
        sx, sy, sz = 1.0 / sx, 1.0 / sy, 1.0 / sz

    return Matrix([[sx, 0, 0, 0],
                   [0, sy, 0, 0],
                   [0, 0, sz, 0],
                   [0, 0, 0, 1]])


def normal_matrix(m):
    """Inverse-transpose of ``m``, used to carry surface normals."""
    return m.inverse().transpose()


__all__ = ['Matrix', 'Translation', 'Rotation', 'Scale', 'normal_matrix']
