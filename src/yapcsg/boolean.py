"""Boolean operations on polygon soups via BSP trees.

The tree-level functions :func:`union`, :func:`subtract` and
:func:`intersect` run fixed sequences of clip/invert/build steps on two
trees and leave the result in the first one.  Both trees are consumed.
:func:`combine` is the entry point for polygon soups: it validates the
inputs, copies them into fresh trees and returns the flattened result.
"""

from __future__ import annotations

import enum
import logging
from typing import Iterable, List, Union

from yapcsg.bsp import BspNode
from yapcsg.config import DEFAULT_EPSILON, check_epsilon
from yapcsg.errors import InvalidInputError
from yapcsg.polygon import Polygon

logger = logging.getLogger(__name__)


class Operation(enum.Enum):
    UNION = 'union'
    SUBTRACTION = 'subtraction'
    INTERSECTION = 'intersection'

    @classmethod
    def parse(cls, value: Union['Operation', str]) -> 'Operation':
        """Accept an :class:`Operation` or one of its common spellings."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            op = _ALIASES.get(value.strip().lower())
            if op is not None:
                return op
        raise InvalidInputError(f'unsupported boolean operation {value!r}',
                                details={'operation': value})


_ALIASES = {
    'union': Operation.UNION,
    'add': Operation.UNION,
    'subtraction': Operation.SUBTRACTION,
    'subtract': Operation.SUBTRACTION,
    'difference': Operation.SUBTRACTION,
    'intersection': Operation.INTERSECTION,
    'intersect': Operation.INTERSECTION,
}


def _check_distinct(a: BspNode, b: BspNode) -> None:
    if a is b:
        raise ValueError('boolean operands must be distinct trees; clone one of them')


def union(a: BspNode, b: BspNode) -> BspNode:
    """Leave the union of ``a`` and ``b`` in ``a`` and return it."""
    _check_distinct(a, b)
    a.clip_to(b)
    b.clip_to(a)
    b.invert()
    b.clip_to(a)
    b.invert()
    a.build(b.all_polygons())
    return a


def subtract(a: BspNode, b: BspNode) -> BspNode:
    """Leave ``a`` minus ``b`` in ``a`` and return it."""
    _check_distinct(a, b)
    a.invert()
    a.clip_to(b)
    b.clip_to(a)
    b.invert()
    b.clip_to(a)
    b.invert()
    a.build(b.all_polygons())
    a.invert()
    return a


def intersect(a: BspNode, b: BspNode) -> BspNode:
    """Leave the intersection of ``a`` and ``b`` in ``a`` and return it."""
    _check_distinct(a, b)
    a.invert()
    b.clip_to(a)
    b.invert()
    a.clip_to(b)
    b.clip_to(a)
    a.build(b.all_polygons())
    a.invert()
    return a


_TREE_OPS = {
    Operation.UNION: union,
    Operation.SUBTRACTION: subtract,
    Operation.INTERSECTION: intersect,
}


def _prepare(polygons: Iterable[Polygon], label: str) -> List[Polygon]:
    if polygons is None:
        raise InvalidInputError(f'polygon soup {label} is missing', details={'operand': label})
    soup = list(polygons)
    if not soup:
        raise InvalidInputError(f'polygon soup {label} is empty', details={'operand': label})
    for poly in soup:
        if not isinstance(poly, Polygon):
            raise InvalidInputError(f'polygon soup {label} contains {type(poly).__name__}',
                                    details={'operand': label})
    usable = [p.clone() for p in soup if not p.is_degenerate()]
    if not usable:
        raise InvalidInputError(f'polygon soup {label} has only degenerate polygons',
                                details={'operand': label, 'count': len(soup)})
    if len(usable) != len(soup):
        logger.debug('dropped %d degenerate polygon(s) from operand %s',
                     len(soup) - len(usable), label)
    return usable


def combine(operation: Union[Operation, str], polygons_a: Iterable[Polygon],
            polygons_b: Iterable[Polygon],
            epsilon: float = DEFAULT_EPSILON) -> List[Polygon]:
    """Run ``operation`` on two polygon soups and return the result soup.

    The inputs are copied, never modified, so the same soup may be passed
    as both operands.  Raises :class:`InvalidInputError` for an unknown
    operation or for an operand that is empty or entirely degenerate.
    The result is deterministic for a given input order and ``epsilon``.
    """
    op = Operation.parse(operation)
    epsilon = check_epsilon(epsilon)
    soup_a = _prepare(polygons_a, 'A')
    soup_b = _prepare(polygons_b, 'B')

    a = BspNode(soup_a, epsilon=epsilon)
    b = BspNode(soup_b, epsilon=epsilon)
    result = _TREE_OPS[op](a, b).all_polygons()
    logger.debug('%s: %d + %d polygons -> %d polygons',
                 op.value, len(soup_a), len(soup_b), len(result))
    return result


def union_polygons(polygons_a, polygons_b, epsilon=DEFAULT_EPSILON):
    return combine(Operation.UNION, polygons_a, polygons_b, epsilon)


def subtract_polygons(polygons_a, polygons_b, epsilon=DEFAULT_EPSILON):
    return combine(Operation.SUBTRACTION, polygons_a, polygons_b, epsilon)


def intersect_polygons(polygons_a, polygons_b, epsilon=DEFAULT_EPSILON):
    return combine(Operation.INTERSECTION, polygons_a, polygons_b, epsilon)


__all__ = [
    'Operation',
    'union',
    'subtract',
    'intersect',
    'combine',
    'union_polygons',
    'subtract_polygons',
    'intersect_polygons',
]
