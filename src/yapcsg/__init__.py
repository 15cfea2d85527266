# -*- coding: utf-8 -*-
"""yapCSG: constructive solid geometry on polygon soups using BSP trees."""

from importlib.metadata import PackageNotFoundError, version

from yapcsg.boolean import (
    Operation,
    combine,
    intersect_polygons,
    subtract_polygons,
    union_polygons,
)
from yapcsg.bsp import BspNode
from yapcsg.config import DEFAULT_EPSILON, CsgConfig
from yapcsg.errors import ConfigError, CsgError, InvalidInputError
from yapcsg.plane import Plane, Side
from yapcsg.polygon import Polygon
from yapcsg.vertex import Vertex

try:
    __version__ = version("yapCSG")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

__all__ = [
    'BspNode',
    'ConfigError',
    'CsgConfig',
    'CsgError',
    'DEFAULT_EPSILON',
    'InvalidInputError',
    'Operation',
    'Plane',
    'Polygon',
    'Side',
    'Vertex',
    'combine',
    'intersect_polygons',
    'subtract_polygons',
    'union_polygons',
]
