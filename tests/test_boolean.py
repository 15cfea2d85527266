#!/usr/bin/env python3
"""
Boolean operation tests for yapCSG.

The two-cube scenario uses a unit cube at the origin and a second unit
cube offset by (0.5, 0.5, 0.5), whose overlap is a cube of edge 0.5.
Results are compared by enclosed volume, surface area and bounds rather
than by vertex order, since different operand orders triangulate the
same solid differently.
"""

import math

import pytest

from yapcsg.analysis import bounding_box, surface_area, volume
from yapcsg.boolean import (
    Operation,
    combine,
    intersect,
    intersect_polygons,
    subtract,
    subtract_polygons,
    union,
    union_polygons,
)
from yapcsg.bsp import BspNode
from yapcsg.errors import InvalidInputError
from yapcsg.polygon import Polygon
from yapcsg.primitives import box, cylinder, sphere


def _cube_a(material='a'):
    return box((0, 0, 0), (1, 1, 1), material)


def _cube_b(material='b'):
    return box((0.5, 0.5, 0.5), (1.5, 1.5, 1.5), material)


def _snapshot(polygons):
    return [(p.material, [v.position for v in p.vertices]) for p in polygons]


class TestTwoCubes:

    def test_union(self):
        result = union_polygons(_cube_a(), _cube_b())
        assert volume(result) == pytest.approx(1.875)
        assert surface_area(result) == pytest.approx(10.5)
        lo, hi = bounding_box(result)
        assert lo == pytest.approx((0.0, 0.0, 0.0))
        assert hi == pytest.approx((1.5, 1.5, 1.5))

    def test_intersection(self):
        result = intersect_polygons(_cube_a(), _cube_b())
        assert volume(result) == pytest.approx(0.125)
        assert surface_area(result) == pytest.approx(1.5)
        lo, hi = bounding_box(result)
        assert lo == pytest.approx((0.5, 0.5, 0.5))
        assert hi == pytest.approx((1.0, 1.0, 1.0))

    def test_subtraction(self):
        result = subtract_polygons(_cube_a(), _cube_b())
        assert volume(result) == pytest.approx(0.875)
        assert surface_area(result) == pytest.approx(6.0)
        lo, hi = bounding_box(result)
        assert lo == pytest.approx((0.0, 0.0, 0.0))
        assert hi == pytest.approx((1.0, 1.0, 1.0))

    def test_results_are_outward_facing(self):
        for op in Operation:
            result = combine(op, _cube_a(), _cube_b())
            assert volume(result, signed=True) > 0

    def test_union_is_commutative(self):
        ab = union_polygons(_cube_a(), _cube_b())
        ba = union_polygons(_cube_b(), _cube_a())
        assert volume(ab) == pytest.approx(volume(ba))
        assert surface_area(ab) == pytest.approx(surface_area(ba))

    def test_intersection_is_commutative(self):
        ab = intersect_polygons(_cube_a(), _cube_b())
        ba = intersect_polygons(_cube_b(), _cube_a())
        assert volume(ab) == pytest.approx(volume(ba))
        assert surface_area(ab) == pytest.approx(surface_area(ba))

    def test_subtract_plus_intersect_is_a(self):
        sub = volume(subtract_polygons(_cube_a(), _cube_b()))
        inter = volume(intersect_polygons(_cube_a(), _cube_b()))
        assert sub + inter == pytest.approx(volume(_cube_a()))

    def test_materials_are_carried_through(self):
        result = union_polygons(_cube_a('red'), _cube_b('blue'))
        assert {p.material for p in result} == {'red', 'blue'}
        carved = subtract_polygons(_cube_a('red'), _cube_b('blue'))
        assert {p.material for p in carved} == {'red', 'blue'}
        inner = [p for p in carved if p.material == 'blue']
        assert surface_area(inner) == pytest.approx(0.75)


class TestSelfOperations:

    def test_union_with_itself(self):
        a = _cube_a()
        result = union_polygons(a, a)
        assert volume(result) == pytest.approx(1.0)
        assert surface_area(result) == pytest.approx(6.0)

    def test_intersection_with_itself(self):
        a = _cube_a()
        result = intersect_polygons(a, a)
        assert volume(result) == pytest.approx(1.0)
        assert surface_area(result) == pytest.approx(6.0)

    def test_subtraction_from_itself_is_empty(self):
        a = _cube_a()
        assert subtract_polygons(a, a) == []


class TestOtherConfigurations:

    def test_disjoint_solids(self):
        a = _cube_a()
        far = box((3, 3, 3), (4, 4, 4))
        assert volume(union_polygons(a, far)) == pytest.approx(2.0)
        assert volume(intersect_polygons(a, far)) == pytest.approx(0.0, abs=1e-12)
        assert volume(subtract_polygons(a, far)) == pytest.approx(1.0)

    def test_cavity(self):
        outer = box((0, 0, 0), (2, 2, 2))
        inner = box((0.5, 0.5, 0.5), (1.5, 1.5, 1.5))
        hollow = subtract_polygons(outer, inner)
        assert volume(hollow) == pytest.approx(7.0)
        assert surface_area(hollow) == pytest.approx(24.0 + 6.0)
        assert volume(union_polygons(outer, inner)) == pytest.approx(8.0)
        assert volume(intersect_polygons(outer, inner)) == pytest.approx(1.0)

    def test_touching_faces_union(self):
        left = box((0, 0, 0), (1, 1, 1))
        right = box((1, 0, 0), (2, 1, 1))
        result = union_polygons(left, right)
        assert volume(result) == pytest.approx(2.0)
        assert surface_area(result) == pytest.approx(10.0)

    def test_drilled_block(self):
        block = box((-1, -1, -1), (1, 1, 1))
        slices = 16
        drill = cylinder((0, -2, 0), (0, 2, 0), radius=0.5, slices=slices)
        section = 0.5 * slices * 0.25 * math.sin(2.0 * math.pi / slices)
        result = subtract_polygons(block, drill)
        assert volume(result) == pytest.approx(8.0 - 2.0 * section)

    def test_sphere_and_cube(self):
        ball = sphere((0, 0, 0), 1.0, slices=12, stacks=6)
        corner = box((0, 0, 0), (2, 2, 2))
        whole = volume(ball)
        inter = volume(intersect_polygons(ball, corner))
        sub = volume(subtract_polygons(ball, corner))
        assert 0 < inter < whole
        assert inter + sub == pytest.approx(whole, rel=1e-4)


class TestDriverContract:

    def test_inputs_are_not_mutated(self):
        a = _cube_a()
        b = _cube_b()
        before_a = _snapshot(a)
        before_b = _snapshot(b)
        planes = [(p.plane.normal, p.plane.w) for p in a]
        for op in Operation:
            combine(op, a, b)
        assert _snapshot(a) == before_a
        assert _snapshot(b) == before_b
        assert [(p.plane.normal, p.plane.w) for p in a] == planes

    def test_deterministic(self):
        first = _snapshot(combine('union', _cube_a(), _cube_b()))
        second = _snapshot(combine('union', _cube_a(), _cube_b()))
        assert first == second

    def test_operation_parse(self):
        assert Operation.parse('union') is Operation.UNION
        assert Operation.parse('Difference') is Operation.SUBTRACTION
        assert Operation.parse('subtract') is Operation.SUBTRACTION
        assert Operation.parse(' intersect ') is Operation.INTERSECTION
        assert Operation.parse(Operation.UNION) is Operation.UNION
        with pytest.raises(InvalidInputError):
            Operation.parse('xor')
        with pytest.raises(InvalidInputError):
            Operation.parse(3)

    def test_empty_soup_is_invalid(self):
        with pytest.raises(InvalidInputError) as info:
            combine('union', [], _cube_b())
        assert info.value.details['operand'] == 'A'
        with pytest.raises(InvalidInputError):
            combine('union', _cube_a(), None)

    def test_degenerate_only_soup_is_invalid(self):
        flat = [Polygon([(0, 0, 0), (1, 0, 0), (2, 0, 0)])]
        with pytest.raises(InvalidInputError):
            combine('intersection', _cube_a(), flat)

    def test_degenerate_polygons_are_dropped(self):
        a = _cube_a() + [Polygon([(0, 0, 0), (1, 1, 1), (2, 2, 2)])]
        result = union_polygons(a, _cube_b())
        assert volume(result) == pytest.approx(1.875)

    def test_non_polygon_input_is_invalid(self):
        with pytest.raises(InvalidInputError):
            combine('union', _cube_a(), [((0, 0, 0), (1, 0, 0), (0, 1, 0))])

    def test_bad_epsilon(self):
        with pytest.raises(ValueError):
            combine('union', _cube_a(), _cube_b(), epsilon=-1.0)

    def test_tree_operations_require_distinct_trees(self):
        tree = BspNode(_cube_a())
        for fn in (union, subtract, intersect):
            with pytest.raises(ValueError):
                fn(tree, tree)

    def test_tree_level_union_matches_combine(self):
        a = BspNode(_cube_a())
        b = BspNode(_cube_b())
        result = union(a, b)
        assert result is a
        assert volume(a.all_polygons()) == pytest.approx(1.875)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
