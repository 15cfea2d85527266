"""Conversion between indexed triangle meshes and polygon soups.

A :class:`Mesh` is the buffer layout host applications hand around:
vertex positions, optional per-vertex normals and texture coordinates,
triangle indices, and a per-face material tag.  The CSG core works on
polygon soups expressed in one shared frame, so conversion applies each
mesh's local->world transform on the way in and the inverse of a chosen
reference transform on the way out.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, List, Optional, Tuple

import numpy as np

from yapcsg.boolean import Operation, combine
from yapcsg.config import DEFAULT_EPSILON
from yapcsg.errors import InvalidInputError
from yapcsg.polygon import Polygon
from yapcsg.vertex import Vertex
from yapcsg.xform import Matrix

try:
    import trimesh
except ImportError:  # pragma: no cover - optional dependency
    trimesh = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)

_WELD_DIGITS = 9


@dataclass
class Mesh:
    """Indexed triangle mesh.

    ``vertices`` is ``(N, 3)`` float, ``faces`` is ``(M, 3)`` int,
    ``normals`` and ``uvs`` are optional ``(N, 3)`` / ``(N, 2)`` arrays and
    ``materials`` an optional length ``M`` array of material tags.
    """

    vertices: np.ndarray
    faces: np.ndarray
    normals: Optional[np.ndarray] = None
    uvs: Optional[np.ndarray] = None
    materials: Optional[np.ndarray] = None

    def __post_init__(self):
        self.vertices = _as_array(self.vertices, float, 3, 'vertices')
        self.faces = _as_array(self.faces, np.int64, 3, 'faces')
        n = len(self.vertices)
        if self.faces.size and (self.faces.min() < 0 or self.faces.max() >= n):
            raise InvalidInputError('face index out of range',
                                    details={'vertex_count': n})
        if self.normals is not None:
            self.normals = _as_array(self.normals, float, 3, 'normals')
            if len(self.normals) != n:
                raise InvalidInputError('normals must match vertices in length')
        if self.uvs is not None:
            self.uvs = _as_array(self.uvs, float, 2, 'uvs')
            if len(self.uvs) != n:
                raise InvalidInputError('uvs must match vertices in length')
        if self.materials is not None:
            self.materials = _tag_array(self.materials)
            if self.materials.shape != (len(self.faces),):
                raise InvalidInputError('materials must have one entry per face')

    @property
    def is_empty(self) -> bool:
        return len(self.faces) == 0

    def submeshes(self) -> Dict[Hashable, np.ndarray]:
        """Face index arrays keyed by material, in first-seen order."""
        if self.materials is None:
            return {0: self.faces}
        groups: Dict[Hashable, List[int]] = {}
        for idx, tag in enumerate(self.materials.tolist()):
            groups.setdefault(tag, []).append(idx)
        return {tag: self.faces[np.asarray(rows, dtype=np.int64)]
                for tag, rows in groups.items()}


def _tag_array(tags) -> np.ndarray:
    """Material tags as an array that hands back the original values.

    numpy coerces mixed tags such as ``0`` and ``'steel'`` to one string
    dtype, so anything but a single tag type is stored as objects.
    """
    if isinstance(tags, np.ndarray):
        return tags
    tags = list(tags)
    if len({type(t) for t in tags}) <= 1 and all(np.isscalar(t) for t in tags):
        return np.asarray(tags)
    arr = np.empty(len(tags), dtype=object)
    for i, tag in enumerate(tags):
        arr[i] = tag
    return arr


def _as_array(data, dtype, width: int, name: str) -> np.ndarray:
    arr = np.asarray(data, dtype=dtype)
    if arr.size == 0:
        return arr.reshape((0, width))
    if arr.ndim != 2 or arr.shape[1] != width:
        raise InvalidInputError(f'{name} must have shape (n, {width}), got {arr.shape}',
                                details={'field': name, 'shape': arr.shape})
    if dtype is float and not np.all(np.isfinite(arr)):
        raise InvalidInputError(f'{name} contains non-finite values',
                                details={'field': name})
    return arr


def mesh_to_polygons(mesh: Mesh, transform: Optional[Matrix] = None) -> List[Polygon]:
    """One triangle polygon per face, optionally moved by ``transform``."""
    normal_matrix = None
    if transform is not None and mesh.normals is not None:
        normal_matrix = transform.inverse().transpose()

    tags = mesh.materials.tolist() if mesh.materials is not None else None
    polygons = []
    for fidx, face in enumerate(mesh.faces.tolist()):
        corners = []
        for i in face:
            normal = tuple(mesh.normals[i]) if mesh.normals is not None else None
            uv = tuple(mesh.uvs[i]) if mesh.uvs is not None else None
            vert = Vertex(tuple(mesh.vertices[i]), normal, uv)
            if transform is not None:
                vert = vert.transformed(transform, normal_matrix)
            corners.append(vert)
        material = tags[fidx] if tags is not None else 0
        polygons.append(Polygon(corners, material))
    return polygons


def _weld_key(v: Vertex) -> Tuple:
    key = tuple(round(c, _WELD_DIGITS) for c in v.position)
    if v.normal is not None:
        key += tuple(round(c, _WELD_DIGITS) for c in v.normal)
    if v.uv is not None:
        key += tuple(round(c, _WELD_DIGITS) for c in v.uv)
    return key


def polygons_to_mesh(polygons: Iterable[Polygon],
                     transform: Optional[Matrix] = None) -> Mesh:
    """Fan-triangulate ``polygons`` into an indexed :class:`Mesh`.

    Vertices identical in position, normal and UV are welded.  Faces are
    grouped by material tag in order of first appearance.  Normals and
    UVs are emitted only when every vertex has them.
    """
    polygons = list(polygons)
    if transform is not None:
        normal_matrix = transform.inverse().transpose()
        polygons = [p.transformed(transform, normal_matrix) for p in polygons]

    all_verts = [v for p in polygons for v in p.vertices]
    with_normals = bool(all_verts) and all(v.normal is not None for v in all_verts)
    with_uvs = bool(all_verts) and all(v.uv is not None for v in all_verts)

    index: Dict[Tuple, int] = {}
    positions, normals, uvs = [], [], []
    grouped: Dict[Hashable, List[List[int]]] = {}

    for poly in polygons:
        rows = grouped.setdefault(poly.material, [])
        for tri in poly.triangles():
            face = []
            for v in tri:
                key = _weld_key(v)
                idx = index.get(key)
                if idx is None:
                    idx = len(positions)
                    index[key] = idx
                    positions.append(v.position)
                    if with_normals:
                        normals.append(v.normal)
                    if with_uvs:
                        uvs.append(v.uv)
                face.append(idx)
            rows.append(face)

    faces, materials = [], []
    for tag, rows in grouped.items():
        faces.extend(rows)
        materials.extend([tag] * len(rows))

    return Mesh(
        vertices=np.asarray(positions, dtype=float).reshape((-1, 3)),
        faces=np.asarray(faces, dtype=np.int64).reshape((-1, 3)),
        normals=np.asarray(normals, dtype=float) if with_normals else None,
        uvs=np.asarray(uvs, dtype=float) if with_uvs else None,
        materials=_tag_array(materials) if materials else None,
    )


def combine_meshes(operation, mesh_a: Mesh, mesh_b: Mesh, *,
                   transform_a: Optional[Matrix] = None,
                   transform_b: Optional[Matrix] = None,
                   epsilon: float = DEFAULT_EPSILON) -> Mesh:
    """Boolean of two meshes, returned in the local frame of ``mesh_a``.

    ``transform_a``/``transform_b`` are the local->world transforms of the
    operands; the result is mapped back through the inverse of
    ``transform_a``.
    """
    op = Operation.parse(operation)
    soup_a = mesh_to_polygons(mesh_a, transform_a)
    soup_b = mesh_to_polygons(mesh_b, transform_b)
    result = combine(op, soup_a, soup_b, epsilon)
    back = transform_a.inverse() if transform_a is not None else None
    out = polygons_to_mesh(result, back)
    logger.debug('%s of meshes: %d + %d faces -> %d faces',
                 op.value, len(mesh_a.faces), len(mesh_b.faces), len(out.faces))
    return out


def to_trimesh(mesh: Mesh) -> 'trimesh.Trimesh':
    """Convert to a ``trimesh.Trimesh`` (requires the optional extra)."""
    if trimesh is None:  # pragma: no cover - optional dependency
        raise RuntimeError('trimesh is not installed; install yapCSG[trimesh]')
    kwargs = {}
    if mesh.normals is not None:
        kwargs['vertex_normals'] = mesh.normals
    return trimesh.Trimesh(vertices=mesh.vertices, faces=mesh.faces,
                           process=False, **kwargs)


def from_trimesh(tm: 'trimesh.Trimesh', material: Hashable = 0) -> Mesh:
    if trimesh is None:  # pragma: no cover - optional dependency
        raise RuntimeError('trimesh is not installed; install yapCSG[trimesh]')
    faces = np.asarray(tm.faces, dtype=np.int64)
    return Mesh(vertices=np.asarray(tm.vertices, dtype=float),
                faces=faces,
                materials=_tag_array([material] * len(faces)) if len(faces) else None)


__all__ = [
    'Mesh',
    'mesh_to_polygons',
    'polygons_to_mesh',
    'combine_meshes',
    'to_trimesh',
    'from_trimesh',
]
