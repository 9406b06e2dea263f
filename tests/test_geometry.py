"""
Geometry Tests: Polygon Area and Validation

Tests for the shoelace area, perimeter, real-unit conversion and
polygon warnings.
"""

import math
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from floorplan_measure.geometry import (
    Point,
    distance,
    polygon_area_pixels,
    polygon_perimeter_pixels,
    to_real_area,
    to_real_length,
    has_repeated_vertices,
    is_collinear,
    is_self_intersecting,
    validate_polygon,
)
from floorplan_measure.errors import InsufficientVertices, ScaleNotSet


def square(side: float, x0: float = 0.0, y0: float = 0.0):
    return [
        Point(x0, y0),
        Point(x0 + side, y0),
        Point(x0 + side, y0 + side),
        Point(x0, y0 + side),
    ]


def test_point_coerces_to_float():
    """Test Point stores float coordinates."""
    p = Point(3, 4)
    assert isinstance(p.x, float) and isinstance(p.y, float)
    assert p.as_tuple() == (3.0, 4.0)
    assert distance(Point(0, 0), p) == 5.0
    print("  [PASS] Point coercion")


def test_unit_square_area():
    """Test 10x10 pixel square has area 100."""
    area = polygon_area_pixels(square(10))
    assert area == 100.0, f"Expected 100.0, got {area}"
    print("  [PASS] Unit square area")


def test_triangle_area():
    """Test right triangle area."""
    triangle = [Point(0, 0), Point(4, 0), Point(0, 3)]
    assert abs(polygon_area_pixels(triangle) - 6.0) < 1e-9
    print("  [PASS] Triangle area")


def test_area_orientation_independent():
    """Test clockwise and counter-clockwise give the same magnitude."""
    points = [Point(0, 0), Point(50, 0), Point(60, 40), Point(20, 70), Point(-10, 30)]
    forward = polygon_area_pixels(points)
    backward = polygon_area_pixels(list(reversed(points)))
    assert forward > 0
    assert abs(forward - backward) < 1e-9
    print("  [PASS] Orientation independence")


def test_area_rotation_invariant():
    """Test cyclic rotation of the vertex list does not change the area."""
    points = [Point(1, 2), Point(8, 1), Point(9, 7), Point(4, 9), Point(0, 5)]
    expected = polygon_area_pixels(points)
    for k in range(1, len(points)):
        rotated = points[k:] + points[:k]
        assert abs(polygon_area_pixels(rotated) - expected) < 1e-9
    print("  [PASS] Rotation invariance")


def test_area_translation_invariant():
    """Test an offset square has the same area."""
    assert abs(polygon_area_pixels(square(10, 1000.5, -250.25)) - 100.0) < 1e-6
    print("  [PASS] Translation invariance")


def test_area_insufficient_vertices():
    """Test fewer than 3 points is rejected."""
    with pytest.raises(InsufficientVertices):
        polygon_area_pixels([])
    with pytest.raises(InsufficientVertices):
        polygon_area_pixels([Point(0, 0), Point(1, 1)])
    print("  [PASS] Insufficient vertices")


def test_self_intersecting_area_not_rejected():
    """Test a bowtie still returns the shoelace sum."""
    # Two opposite-orientation triangles cancel out
    bowtie = [Point(0, 0), Point(10, 10), Point(10, 0), Point(0, 10)]
    area = polygon_area_pixels(bowtie)
    assert area == 0.0, f"Expected shoelace sum 0.0, got {area}"
    print("  [PASS] Self-intersecting polygon")


def test_perimeter():
    """Test perimeter of a square."""
    assert abs(polygon_perimeter_pixels(square(10)) - 40.0) < 1e-9
    print("  [PASS] Perimeter")


def test_to_real_area():
    """Test area conversion uses the scale squared."""
    # 100 px = 10 m at 10 px/m, so 100x100 px square is 100 m2
    assert abs(to_real_area(10000.0, 10.0) - 100.0) < 1e-9
    assert abs(to_real_length(40.0, 10.0) - 4.0) < 1e-9
    print("  [PASS] Real area conversion")


def test_to_real_area_scale_not_set():
    """Test missing, zero and non-finite scales are rejected."""
    for bad in (None, 0, 0.0, -3.0, float("nan"), float("inf")):
        with pytest.raises(ScaleNotSet):
            to_real_area(100.0, bad)
        with pytest.raises(ScaleNotSet):
            to_real_length(100.0, bad)
    print("  [PASS] Scale not set")


def test_scale_round_trip():
    """Test a square of side L px at L px / R m calibration has area R^2."""
    for side_px, real_m in [(100.0, 10.0), (37.5, 2.5), (640.0, 0.9)]:
        pixels_per_meter = side_px / real_m
        area = to_real_area(polygon_area_pixels(square(side_px)), pixels_per_meter)
        assert math.isclose(area, real_m ** 2, rel_tol=1e-9), f"{side_px}, {real_m}: {area}"
    print("  [PASS] Scale round trip")


class TestPolygonValidation:
    """Tests for polygon warnings."""

    def test_simple_polygon_no_warnings(self):
        assert validate_polygon(square(100), 100.0) == []

    def test_self_intersection_detected(self):
        bowtie = [Point(0, 0), Point(10, 10), Point(10, 0), Point(0, 10)]
        assert is_self_intersecting(bowtie)
        assert not is_self_intersecting(square(10))
        warnings = validate_polygon(bowtie, 0.0)
        assert any("cross" in w for w in warnings)

    def test_repeated_vertices(self):
        points = [Point(0, 0), Point(10, 0), Point(10, 0), Point(0, 10)]
        assert has_repeated_vertices(points)
        assert not has_repeated_vertices(square(10))

    def test_degenerate_ring_not_self_intersecting(self):
        assert not is_self_intersecting([Point(0, 0), Point(1, 1), Point(0, 0)])

    def test_collinear_zero_area(self):
        line = [Point(0, 0), Point(5, 0), Point(10, 0)]
        assert polygon_area_pixels(line) == 0.0
        assert is_collinear(line)
        warnings = validate_polygon(line, 0.0)
        assert any("collinear" in w for w in warnings)

    def test_bowtie_zero_area_not_called_collinear(self):
        bowtie = [Point(0, 0), Point(10, 10), Point(10, 0), Point(0, 10)]
        assert not is_collinear(bowtie)
        warnings = validate_polygon(bowtie, 0.0)
        assert "Polygon has zero area" in warnings
        assert not any("collinear" in w for w in warnings)

    def test_tiny_area_warning(self):
        warnings = validate_polygon(square(1), 0.001)
        assert any("below" in w for w in warnings)


def run_all_tests():
    """Run all geometry tests."""
    print("\n" + "=" * 60)
    print("Geometry Tests")
    print("=" * 60)

    tests = [
        test_point_coerces_to_float,
        test_unit_square_area,
        test_triangle_area,
        test_area_orientation_independent,
        test_area_rotation_invariant,
        test_area_translation_invariant,
        test_area_insufficient_vertices,
        test_self_intersecting_area_not_rejected,
        test_perimeter,
        test_to_real_area,
        test_to_real_area_scale_not_set,
        test_scale_round_trip,
    ]

    passed = 0
    for test in tests:
        try:
            test()
            passed += 1
        except AssertionError as e:
            print(f"  [FAIL] {test.__name__}: {e}")

    all_passed = passed == len(tests)

    print("\nPolygon Validation Tests:")
    print("-" * 40)
    try:
        tests = TestPolygonValidation()
        tests.test_simple_polygon_no_warnings()
        tests.test_self_intersection_detected()
        tests.test_repeated_vertices()
        tests.test_degenerate_ring_not_self_intersecting()
        tests.test_collinear_zero_area()
        tests.test_bowtie_zero_area_not_called_collinear()
        tests.test_tiny_area_warning()
        print("  [PASS] Polygon validation")
    except AssertionError as e:
        print(f"  [FAIL] {e}")
        all_passed = False

    print("\n" + "=" * 60)
    print(f"Geometry Results: {'ALL PASSED' if all_passed else 'SOME FAILED'}")
    print("=" * 60)

    return all_passed


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
