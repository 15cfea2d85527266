import io
import struct

import pytest

from yapcsg.analysis import surface_area, volume
from yapcsg.io.stl import read_stl, write_stl
from yapcsg.polygon import Polygon
from yapcsg.primitives import box


def _triangle():
    return [Polygon([(0, 0, 0), (1, 0, 0), (0, 1, 0)])]


def test_write_stl_binary(tmp_path):
    path = tmp_path / 'tri.stl'
    write_stl(_triangle(), path, binary=True, name='test')

    data = path.read_bytes()
    assert len(data) == 80 + 4 + 50  # header + count + one triangle
    assert data[0:4] == b'test'
    count = struct.unpack('<I', data[80:84])[0]
    assert count == 1
    normal = struct.unpack('<3f', data[84:96])
    assert normal == (0.0, 0.0, 1.0)


def test_write_stl_ascii():
    buf = io.StringIO()
    write_stl(_triangle(), buf, binary=False, name='ascii_test')

    text = buf.getvalue()
    assert 'solid ascii_test' in text
    assert 'facet normal' in text
    assert 'vertex' in text
    assert text.strip().endswith('endsolid ascii_test')


def test_quads_are_fan_triangulated():
    buf = io.BytesIO()
    write_stl(box((0, 0, 0), (1, 1, 1)), buf)
    count = struct.unpack('<I', buf.getvalue()[80:84])[0]
    assert count == 12


# ---------------------------------------------------------------------------
# STL Import Tests
# ---------------------------------------------------------------------------


def test_read_stl_binary_roundtrip(tmp_path):
    path = tmp_path / 'cube.stl'
    write_stl(box((0, 0, 0), (1, 1, 1)), path)

    polygons = read_stl(path, material='imported')
    assert len(polygons) == 12
    assert all(len(p.vertices) == 3 for p in polygons)
    assert all(p.material == 'imported' for p in polygons)
    assert volume(polygons, signed=True) == pytest.approx(1.0)
    assert surface_area(polygons) == pytest.approx(6.0)


def test_read_stl_ascii_roundtrip(tmp_path):
    path = tmp_path / 'cube_ascii.stl'
    write_stl(box((0, 0, 0), (2, 1, 1)), path, binary=False)

    polygons = read_stl(path)
    assert len(polygons) == 12
    assert volume(polygons, signed=True) == pytest.approx(2.0)


def test_read_stl_from_streams():
    raw = io.BytesIO()
    write_stl(_triangle(), raw)
    raw.seek(0)
    assert len(read_stl(raw)) == 1

    text = io.StringIO()
    write_stl(_triangle(), text, binary=False)
    text.seek(0)
    (tri,) = read_stl(text)
    assert tri.vertices[1].position == (1.0, 0.0, 0.0)


def test_binary_header_starting_with_solid(tmp_path):
    path = tmp_path / 'solid_header.stl'
    write_stl(_triangle(), path, name='solid but binary')
    assert len(read_stl(path)) == 1


def test_truncated_binary_keeps_complete_facets():
    buf = io.BytesIO()
    write_stl(box((0, 0, 0), (1, 1, 1)), buf)
    data = buf.getvalue()[:84 + 50 * 5 + 20]
    assert len(read_stl(io.BytesIO(data))) == 5


def test_empty_file_gives_empty_soup(tmp_path):
    path = tmp_path / 'empty.stl'
    path.write_bytes(b'')
    assert read_stl(path) == []
