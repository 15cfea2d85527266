import math

import numpy as np
import pytest

from yapcsg.xform import Matrix, Rotation, Scale, Translation, normal_matrix
## unit tests for yapCSG xform.py


class TestXform:
    """unit tests for yapCSG matrix operations"""

    def test_matrix(self):
        foo = Matrix([1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15, 16])
        bar = Matrix([[1, 0, 0, 1], [0, 1, 0, 1], [0, 0, 1, 1], [0, 0, 0, 1]])
        baz = [1, 2, 3, 1]
        I = Matrix()
        assert I.isidentity()
        assert I.mul(bar).m == bar.m
        assert I.mul(foo).m == foo.m
        assert foo.mul(bar).m == [[1, 2, 3, 10], [5, 6, 7, 26], [9, 10, 11, 42], [13, 14, 15, 58]]
        assert foo.mul(baz) == [18, 46, 74, 102]
        assert foo.mul(10.0).m[3] == [130.0, 140.0, 150.0, 160.0]
        assert foo.transpose().getrow(0) == [1.0, 5.0, 9.0, 13.0]
        assert foo.getcol(3) == [4.0, 8.0, 12.0, 16.0]
        assert foo.get(2, 1) == 10.0

    def test_construction_errors(self):
        with pytest.raises(ValueError):
            Matrix([1, 2, 3])
        with pytest.raises(ValueError):
            Matrix([[1, 0, 0, 0]] * 3)
        with pytest.raises(ValueError):
            Matrix([float('nan')] + [0.0] * 15)
        with pytest.raises(ValueError):
            Matrix('identity')
        with pytest.raises(ValueError):
            Matrix().get(4, 0)

    def test_copy_and_numpy(self):
        t = Translation((1, 2, 3))
        assert Matrix(t) == t
        assert Matrix(t) is not t
        assert Matrix(np.eye(4)).isidentity()

    def test_translation(self):
        t = Translation((1, 2, 3))
        assert t.point((0, 0, 0)) == (1.0, 2.0, 3.0)
        assert t.direction((1, 0, 0)) == (1.0, 0.0, 0.0)
        assert Translation((1, 2, 3), inverse=True).mul(t).isidentity()

    def test_rotation(self):
        r = Rotation((0, 0, 1), 90)
        assert r.point((1, 0, 0)) == pytest.approx((0.0, 1.0, 0.0), abs=1e-12)
        back = Rotation((0, 0, 5), 90, inverse=True)
        assert back.mul(r).isidentity(tol=1e-12)
        with pytest.raises(ValueError):
            Rotation((0, 0, 0), 45)

    def test_rotation_preserves_length(self):
        r = Rotation((1, 2, 3), 37)
        p = r.point((3, -1, 2))
        assert math.sqrt(sum(c * c for c in p)) == pytest.approx(math.sqrt(14.0))

    def test_scale(self):
        s = Scale(2)
        assert s.point((1, 1, 1)) == (2.0, 2.0, 2.0)
        assert Scale(1, 2, 3).point((1, 1, 1)) == (1.0, 2.0, 3.0)
        assert Scale((2, 4, 8), inverse=True).point((2, 4, 8)) == (1.0, 1.0, 1.0)
        with pytest.raises(ValueError):
            Scale(0)
        with pytest.raises(ValueError):
            Scale('big')

    def test_inverse(self):
        m = Translation((1, -2, 3)).mul(Rotation((1, 1, 0), 30)).mul(Scale(2, 3, 4))
        assert m.mul(m.inverse()).isidentity(tol=1e-9)
        with pytest.raises(ValueError):
            Matrix([[1, 0, 0, 0], [0, 0, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1]]).inverse()

    def test_normal_matrix_keeps_normals_perpendicular(self):
        m = Scale(1, 4, 1)
        tangent = (1.0, 1.0, 0.0)
        normal = (1.0, -1.0, 0.0)
        t2 = m.direction(tangent)
        n2 = normal_matrix(m).direction(normal)
        assert sum(a * b for a, b in zip(t2, n2)) == pytest.approx(0.0, abs=1e-12)
