## binary space partitioning trees for yapCSG
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

"""BSP trees over polygon soups.

====================
OVERVIEW
====================

A :class:`BspNode` holds a splitting plane, the polygons lying in that
plane, and optional front and back subtrees.  It is not a leafy tree:
every node carries geometry.  Solid space is behind the planes, so a
polygon that falls off the back of the tree (a back side with no
subtree) is inside the solid and one that falls off the front is
outside it.

The pivot for each node is the plane of the first usable polygon handed
to it, so tree shape depends on input order and no balancing is
attempted.  Degenerate polygons (every fan triangle collinear) carry
no plane and are dropped while building.

Trees are mutated in place by :meth:`BspNode.build`,
:meth:`BspNode.invert` and :meth:`BspNode.clip_to`.  A tree has a single
owner; combine trees that share no polygons (see
:func:`yapcsg.polygon.clone_polygons`).

All traversals use explicit stacks rather than recursion, visiting a
node, then its front subtree, then its back subtree.  Unbalanced trees
can be as deep as the polygon count.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional

from yapcsg.config import DEFAULT_EPSILON, check_epsilon
from yapcsg.plane import Plane
from yapcsg.polygon import Polygon

logger = logging.getLogger(__name__)


class BspNode:
    """One node of a BSP tree, and by extension the tree rooted there."""

    __slots__ = ('plane', 'front', 'back', 'polygons', 'epsilon')

    def __init__(self, polygons: Optional[Iterable[Polygon]] = None, *,
                 epsilon: float = DEFAULT_EPSILON):
        self.epsilon = check_epsilon(epsilon)
        self.plane: Optional[Plane] = None
        self.front: Optional[BspNode] = None
        self.back: Optional[BspNode] = None
        self.polygons: List[Polygon] = []
        if polygons:
            self.build(polygons)

    def __repr__(self):
        return (f'BspNode(plane={self.plane!r}, polygons={len(self.polygons)}, '
                f'front={self.front is not None}, back={self.back is not None})')

    def is_empty(self) -> bool:
        return self.plane is None

    def _child(self) -> 'BspNode':
        return BspNode(epsilon=self.epsilon)

    def nodes(self) -> Iterator['BspNode']:
        """Yield every node: self, then the front subtree, then the back."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.back is not None:
                stack.append(node.back)
            if node.front is not None:
                stack.append(node.front)

    def build(self, polygons: Iterable[Polygon]) -> None:
        """Insert ``polygons`` into the tree rooted at this node.

        Degenerate polygons, including degenerate split fragments, are
        dropped before they reach a node, so a child is only created for
        fragments that can supply its plane.
        """
        polys = list(polygons)
        usable = [p for p in polys if not p.is_degenerate()]
        skipped = len(polys) - len(usable)
        stack = [(self, usable)] if usable else []
        while stack:
            node, polys = stack.pop()
            if node.plane is None:
                node.plane = polys[0].plane.clone()

            front: List[Polygon] = []
            back: List[Polygon] = []
            for poly in polys:
                node.plane.split_polygon(poly, node.polygons, node.polygons,
                                         front, back, self.epsilon)
            for side, fragments in (('front', front), ('back', back)):
                kept = [p for p in fragments if not p.is_degenerate()]
                skipped += len(fragments) - len(kept)
                if not kept:
                    continue
                child = getattr(node, side)
                if child is None:
                    child = node._child()
                    setattr(node, side, child)
                stack.append((child, kept))
        if skipped:
            logger.debug('skipped %d degenerate polygon(s) while building BSP tree',
                         skipped)

    def invert(self) -> None:
        """Swap solid and empty space for the whole tree."""
        for node in self.nodes():
            for poly in node.polygons:
                poly.flip()
            if node.plane is not None:
                node.plane.flip()
            node.front, node.back = node.back, node.front

    def clip_polygons(self, polygons: Iterable[Polygon]) -> List[Polygon]:
        """Return the parts of ``polygons`` that lie outside this tree's solid.

        Pieces reaching a missing front subtree are kept, pieces reaching a
        missing back subtree are discarded.  Pieces coplanar with a node
        follow their facing: same-facing ones go front, opposite-facing
        ones go back.  The output lists the front results before the back
        results at every node.
        """
        result: List[Polygon] = []
        stack = [(self, list(polygons))]
        while stack:
            node, polys = stack.pop()
            if node.plane is None:
                result.extend(polys)
                continue
            front: List[Polygon] = []
            back: List[Polygon] = []
            for poly in polys:
                node.plane.split_polygon(poly, front, back, front, back,
                                         self.epsilon)
            if back and node.back is not None:
                stack.append((node.back, back))
            if front:
                if node.front is not None:
                    stack.append((node.front, front))
                else:
                    result.extend(front)
        return result

    def clip_to(self, other: 'BspNode') -> None:
        """Remove from this tree everything inside the solid of ``other``."""
        if other is self:
            raise ValueError('cannot clip a BSP tree against itself')
        for node in self.nodes():
            node.polygons = other.clip_polygons(node.polygons)

    def all_polygons(self) -> List[Polygon]:
        polygons: List[Polygon] = []
        for node in self.nodes():
            polygons.extend(node.polygons)
        return polygons

    def clone(self) -> 'BspNode':
        """Deep copy: planes, polygons and subtrees are all fresh objects."""
        root = self._child()
        stack = [(self, root)]
        while stack:
            src, dst = stack.pop()
            if src.plane is not None:
                dst.plane = src.plane.clone()
            dst.polygons = [p.clone() for p in src.polygons]
            if src.front is not None:
                dst.front = dst._child()
                stack.append((src.front, dst.front))
            if src.back is not None:
                dst.back = dst._child()
                stack.append((src.back, dst.back))
        return root

    def node_count(self) -> int:
        return sum(1 for _ in self.nodes())

    def depth(self) -> int:
        deepest = 0
        stack = [(self, 1)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            for child in (node.front, node.back):
                if child is not None:
                    stack.append((child, level + 1))
        return deepest


__all__ = ['BspNode']
