"""
View Transform Tests: Screen/Image Mapping, Zoom and Pan
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from floorplan_measure.view import ViewState, ViewTransform, clamp_scale
from floorplan_measure.errors import InvalidInput, InvalidTransition
from floorplan_measure.geometry import Point
from floorplan_measure.constants import MIN_VIEW_SCALE, MAX_VIEW_SCALE


TOLERANCE = 1e-6


def assert_point_close(a: Point, b: Point, tol: float = TOLERANCE):
    assert abs(a.x - b.x) < tol and abs(a.y - b.y) < tol, f"{a} != {b}"


class TestScreenToImage:
    """Tests for coordinate mapping."""

    def test_identity(self):
        view = ViewTransform()
        assert view.state == ViewState(1.0, 0.0, 0.0)
        assert_point_close(view.screen_to_image(15, 25), Point(15, 25))

    def test_origin_and_offset(self):
        view = ViewTransform()
        view.set_surface_origin(100, 50)
        view.begin_pan(0, 0)
        view.pan(20, 10)
        view.end_pan()
        # x = (300 - 100 - 20) / 1, y = (200 - 50 - 10) / 1
        assert_point_close(view.screen_to_image(300, 200), Point(180, 140))

    def test_scale(self):
        view = ViewTransform()
        view.zoom_by(2.0)
        assert view.state.scale == 2.0
        assert_point_close(view.screen_to_image(40, 60), Point(20, 30))

    def test_image_to_screen_inverse(self):
        view = ViewTransform()
        view.set_surface_origin(12, 34)
        view.zoom(200, 150, 1)
        view.zoom(90, 30, 1)
        p = Point(57.25, -13.5)
        sx, sy = view.image_to_screen(p)
        assert_point_close(view.screen_to_image(sx, sy), p)


class TestZoom:
    """Tests for cursor-anchored zoom."""

    def test_zoom_in_step(self):
        view = ViewTransform()
        state = view.zoom(0, 0, 1)
        assert abs(state.scale - 1.1) < TOLERANCE

    def test_zoom_out_step(self):
        view = ViewTransform()
        state = view.zoom(0, 0, -1)
        assert abs(state.scale - 0.9) < TOLERANCE

    def test_zoom_keeps_cursor_point_fixed(self):
        """Test image point under the cursor is unchanged by zooming."""
        view = ViewTransform()
        view.set_surface_origin(30, 40)
        cursors = [(100, 100), (530, 80), (31, 41), (999, 640)]
        for direction in (1, 1, 1, -1, 1, -1, -1, 1):
            for sx, sy in cursors:
                before = view.screen_to_image(sx, sy)
                view.zoom(sx, sy, direction)
                after = view.screen_to_image(sx, sy)
                assert_point_close(before, after)

    def test_zoom_anchor_at_limits(self):
        """Test anchoring holds when the scale is clamped."""
        view = ViewTransform()
        for _ in range(100):
            before = view.screen_to_image(321, 123)
            view.zoom(321, 123, 1)
            assert_point_close(before, view.screen_to_image(321, 123), 1e-4)
        assert view.state.scale == MAX_VIEW_SCALE

        for _ in range(200):
            before = view.screen_to_image(10, 500)
            view.zoom(10, 500, -1)
            assert_point_close(before, view.screen_to_image(10, 500), 1e-4)
        assert view.state.scale == MIN_VIEW_SCALE

    def test_zoom_invalid_direction(self):
        view = ViewTransform()
        with pytest.raises(InvalidInput):
            view.zoom(0, 0, 0)
        with pytest.raises(InvalidInput):
            view.zoom(0, 0, 2)
        assert view.state == ViewState()

    def test_zoom_by_clamps(self):
        view = ViewTransform()
        view.zoom_by(1000)
        assert view.state.scale == MAX_VIEW_SCALE
        view.zoom_by(1e-6)
        assert view.state.scale == MIN_VIEW_SCALE

    def test_zoom_by_without_anchor_keeps_image_origin(self):
        view = ViewTransform()
        view.begin_pan(0, 0)
        view.pan(40, 25)
        view.end_pan()
        view.zoom_by(1.2)
        sx, sy = view.image_to_screen(Point(0, 0))
        assert abs(sx - 40) < TOLERANCE and abs(sy - 25) < TOLERANCE

    def test_clamp_scale(self):
        assert clamp_scale(0.01) == MIN_VIEW_SCALE
        assert clamp_scale(50) == MAX_VIEW_SCALE
        assert clamp_scale(3.5) == 3.5


class TestPan:
    """Tests for anchor-based panning."""

    def test_pan_is_absolute(self):
        """Test repeated move events do not accumulate."""
        view = ViewTransform()
        view.begin_pan(100, 100)
        for _ in range(50):
            view.drag_to(130, 90)
        assert view.state.offset_x == 30.0
        assert view.state.offset_y == -10.0

    def test_pan_path_independent(self):
        view = ViewTransform()
        view.begin_pan(0, 0)
        for step in range(1, 101):
            view.drag_to(step * 0.37, -step * 0.11)
        view.end_pan()
        assert abs(view.state.offset_x - 37.0) < TOLERANCE
        assert abs(view.state.offset_y + 11.0) < TOLERANCE

    def test_second_drag_starts_from_current_offset(self):
        view = ViewTransform()
        view.begin_pan(0, 0)
        view.drag_to(10, 10)
        view.end_pan()
        view.begin_pan(500, 500)
        view.drag_to(505, 495)
        assert view.state.offset_x == 15.0
        assert view.state.offset_y == 5.0

    def test_pan_keeps_scale(self):
        view = ViewTransform()
        view.zoom_by(3)
        view.begin_pan(0, 0)
        view.pan(7, 8)
        assert view.state.scale == 3

    def test_pan_without_drag(self):
        view = ViewTransform()
        with pytest.raises(InvalidTransition):
            view.pan(1, 1)
        with pytest.raises(InvalidTransition):
            view.drag_to(1, 1)

    def test_reset(self):
        view = ViewTransform()
        view.zoom(50, 50, 1)
        view.begin_pan(0, 0)
        view.reset()
        assert view.state == ViewState(1.0, 0.0, 0.0)
        assert not view.is_panning


def run_all_tests():
    """Run all view transform tests."""
    print("\n" + "=" * 60)
    print("View Transform Tests")
    print("=" * 60)

    all_passed = True

    print("\nScreen To Image Tests:")
    print("-" * 40)
    try:
        tests = TestScreenToImage()
        tests.test_identity()
        tests.test_origin_and_offset()
        tests.test_scale()
        tests.test_image_to_screen_inverse()
        print("  [PASS] Coordinate mapping")
    except AssertionError as e:
        print(f"  [FAIL] {e}")
        all_passed = False
    except Exception as e:
        print(f"  [ERROR] {e}")
        all_passed = False

    print("\nZoom Tests:")
    print("-" * 40)
    try:
        tests = TestZoom()
        tests.test_zoom_in_step()
        tests.test_zoom_out_step()
        tests.test_zoom_keeps_cursor_point_fixed()
        tests.test_zoom_anchor_at_limits()
        tests.test_zoom_invalid_direction()
        tests.test_zoom_by_clamps()
        tests.test_zoom_by_without_anchor_keeps_image_origin()
        tests.test_clamp_scale()
        print("  [PASS] Cursor-anchored zoom")
    except AssertionError as e:
        print(f"  [FAIL] {e}")
        all_passed = False
    except Exception as e:
        print(f"  [ERROR] {e}")
        all_passed = False

    print("\nPan Tests:")
    print("-" * 40)
    try:
        tests = TestPan()
        tests.test_pan_is_absolute()
        tests.test_pan_path_independent()
        tests.test_second_drag_starts_from_current_offset()
        tests.test_pan_keeps_scale()
        tests.test_pan_without_drag()
        tests.test_reset()
        print("  [PASS] Anchor-based panning")
    except AssertionError as e:
        print(f"  [FAIL] {e}")
        all_passed = False
    except Exception as e:
        print(f"  [ERROR] {e}")
        all_passed = False

    print("\n" + "=" * 60)
    print(f"View Transform Results: {'ALL PASSED' if all_passed else 'SOME FAILED'}")
    print("=" * 60)

    return all_passed


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
