"""STL import and export for polygon soups."""

from __future__ import annotations

import logging
import re
import struct
from typing import Hashable, Iterable, List, Tuple

from yapcsg.geom import Vec3, cross, normalize, sub
from yapcsg.polygon import Polygon
from yapcsg.vertex import Vertex

logger = logging.getLogger(__name__)

_HEADER_SIZE = 80
_FACET = struct.Struct('<12fH')

_FLOAT = r'([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)'
_FACET_RE = re.compile(
    r'facet\s+normal\s+' + r'\s+'.join([_FLOAT] * 3) + r'\s+'
    r'outer\s+loop\s+'
    + r'\s+'.join([r'vertex\s+' + r'\s+'.join([_FLOAT] * 3)] * 3) +
    r'\s+endloop\s+endfacet',
    re.IGNORECASE,
)

Facet = Tuple[Vec3, Vec3, Vec3, Vec3]


def _facets(polygons: Iterable[Polygon]) -> List[Facet]:
    facets = []
    for poly in polygons:
        for v0, v1, v2 in poly.triangles():
            p0, p1, p2 = v0.position, v1.position, v2.position
            n = normalize(cross(sub(p1, p0), sub(p2, p0)))
            facets.append((n, p0, p1, p2))
    return facets


def write_stl(polygons: Iterable[Polygon], path_or_file, *, binary: bool = True,
              name: str = 'yapCSG') -> None:
    """Write ``polygons`` to STL, fan-triangulating as needed.

    ``path_or_file`` can be a filesystem path or an open stream (binary
    for ``binary=True``, text otherwise).
    """
    facets = _facets(polygons)
    if hasattr(path_or_file, 'write'):
        _write(facets, path_or_file, binary, name)
        return
    mode = 'wb' if binary else 'w'
    encoding = None if binary else 'ascii'
    with open(path_or_file, mode, encoding=encoding) as stream:
        _write(facets, stream, binary, name)


def _write(facets: List[Facet], stream, binary: bool, name: str) -> None:
    if binary:
        header = name[:_HEADER_SIZE].encode('ascii', errors='replace')
        stream.write(header.ljust(_HEADER_SIZE, b' '))
        stream.write(struct.pack('<I', len(facets)))
        for n, p0, p1, p2 in facets:
            stream.write(_FACET.pack(*n, *p0, *p1, *p2, 0))
        return

    print(f'solid {name}', file=stream)
    for n, p0, p1, p2 in facets:
        print(f'  facet normal {n[0]:.6e} {n[1]:.6e} {n[2]:.6e}', file=stream)
        print('    outer loop', file=stream)
        for p in (p0, p1, p2):
            print(f'      vertex {p[0]:.6e} {p[1]:.6e} {p[2]:.6e}', file=stream)
        print('    endloop', file=stream)
        print('  endfacet', file=stream)
    print(f'endsolid {name}', file=stream)


def _is_binary_stl(data: bytes) -> bool:
    """Binary STL: 80-byte header, uint32 count, 50 bytes per facet.

    Some binary writers start the header with ``solid`` too, so a
    ``solid`` prefix only means ASCII when the size does not match the
    binary layout or facet keywords follow.
    """
    if len(data) < 84:
        return False
    head = data[:80].decode('ascii', errors='ignore').strip().lower()
    count = struct.unpack('<I', data[80:84])[0]
    if not head.startswith('solid'):
        return True
    if len(data) != 84 + count * 50:
        return False
    return not (b'facet' in data[84:200] or b'vertex' in data[84:200])


def _parse_binary(data: bytes) -> List[Facet]:
    count = struct.unpack('<I', data[80:84])[0]
    facets = []
    offset = 84
    for _ in range(count):
        if offset + 50 > len(data):
            logger.warning('binary STL truncated after %d of %d facets',
                           len(facets), count)
            break
        vals = _FACET.unpack(data[offset:offset + 50])
        facets.append((vals[0:3], vals[3:6], vals[6:9], vals[9:12]))
        offset += 50
    return facets


def _parse_ascii(text: str) -> List[Facet]:
    facets = []
    for match in _FACET_RE.finditer(text):
        vals = [float(g) for g in match.groups()]
        facets.append((tuple(vals[0:3]), tuple(vals[3:6]),
                       tuple(vals[6:9]), tuple(vals[9:12])))
    return facets


def read_stl(path_or_file, *, material: Hashable = 0) -> List[Polygon]:
    """Read an STL file into a soup of triangle polygons.

    Facet normals are not stored on the vertices; polygon orientation
    comes from vertex order, as STL requires.
    """
    if hasattr(path_or_file, 'read'):
        data = path_or_file.read()
        if isinstance(data, str):
            data = data.encode('utf-8')
    else:
        with open(path_or_file, 'rb') as f:
            data = f.read()

    if _is_binary_stl(data):
        facets = _parse_binary(data)
    else:
        facets = _parse_ascii(data.decode('utf-8', errors='replace'))

    polygons = [Polygon([Vertex(p0), Vertex(p1), Vertex(p2)], material)
                for _, p0, p1, p2 in facets]
    logger.debug('read %d facets from STL', len(polygons))
    return polygons


__all__ = ['write_stl', 'read_stl']
