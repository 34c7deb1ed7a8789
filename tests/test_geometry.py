"""
Tests for polygon, curve and hit-testing geometry.
"""
import math
import pytest

from models.transform import Vec2
from models.mask import CornerPoint, SmoothPoint
from utils.geometry import (
    distance, polygon_area, polyline_length, polygon_perimeter,
    points_centroid, polygon_centroid, bounds, is_polygon_valid,
    point_in_polygon, rotate_point, rotate_points,
    cubic_bezier_point, sample_cubic_bezier, flatten_mask_points,
    nearest_point_on_segment, find_closest_vertex, find_closest_edge, simplify_path,
)


def pts(*pairs):
    return [Vec2(x, y) for x, y in pairs]


UNIT_SQUARE = pts((0, 0), (1, 0), (1, 1), (0, 1))


# ══════════════════════════════════════════════════════════════════════════
# Measurements
# ══════════════════════════════════════════════════════════════════════════

class TestArea:

    def test_unit_square(self):
        assert polygon_area(UNIT_SQUARE) == pytest.approx(1.0)

    def test_winding_does_not_matter(self):
        assert polygon_area(list(reversed(UNIT_SQUARE))) == pytest.approx(1.0)

    def test_triangle(self):
        assert polygon_area(pts((0, 0), (4, 0), (0, 3))) == pytest.approx(6.0)

    @pytest.mark.parametrize('count', [0, 1, 2])
    def test_fewer_than_three_points_is_zero(self, count):
        assert polygon_area(UNIT_SQUARE[:count]) == 0.0

    def test_accepts_mask_points(self):
        square = [CornerPoint(0, 0), CornerPoint(2, 0), CornerPoint(2, 2), CornerPoint(0, 2)]
        assert polygon_area(square) == pytest.approx(4.0)

    def test_validity_threshold(self):
        assert is_polygon_valid(UNIT_SQUARE)
        assert not is_polygon_valid(pts((0, 0), (1, 0), (2, 0)))
        assert not is_polygon_valid(UNIT_SQUARE[:2])


class TestLengths:

    def test_distance(self):
        assert distance(Vec2(0, 0), Vec2(3, 4)) == 5.0

    def test_polyline_is_open(self):
        assert polyline_length(pts((0, 0), (3, 4), (3, 10))) == pytest.approx(11.0)

    def test_perimeter_is_closed(self):
        assert polygon_perimeter(UNIT_SQUARE) == pytest.approx(4.0)

    def test_single_point_has_no_length(self):
        assert polyline_length(pts((1, 1))) == 0.0
        assert polygon_perimeter(pts((1, 1))) == 0.0


class TestCentroidAndBounds:

    def test_mean_centroid(self):
        assert points_centroid(UNIT_SQUARE) == Vec2(0.5, 0.5)

    def test_empty_centroid(self):
        assert points_centroid([]) == Vec2(0.0, 0.0)

    def test_area_centroid_ignores_vertex_density(self):
        # Extra collinear vertices pull the mean but not the area centroid
        poly = pts((0, 0), (1, 0), (2, 0), (3, 0), (4, 0), (4, 4), (0, 4))
        c = polygon_centroid(poly)
        assert c.x == pytest.approx(2.0)
        assert c.y == pytest.approx(2.0)
        assert points_centroid(poly).y < 2.0

    def test_degenerate_falls_back_to_mean(self):
        line = pts((0, 0), (2, 0), (4, 0))
        assert polygon_centroid(line) == Vec2(2.0, 0.0)

    def test_bounds(self):
        assert bounds(pts((3, -1), (-2, 5), (0, 0))) == (-2.0, -1.0, 3.0, 5.0)
        assert bounds([]) == (0.0, 0.0, 0.0, 0.0)


# ══════════════════════════════════════════════════════════════════════════
# Containment
# ══════════════════════════════════════════════════════════════════════════

class TestPointInPolygon:

    def test_inside_and_outside(self):
        assert point_in_polygon(Vec2(0.5, 0.5), UNIT_SQUARE)
        assert not point_in_polygon(Vec2(1.5, 0.5), UNIT_SQUARE)

    def test_concave_notch_is_outside(self):
        u_shape = pts((0, 0), (3, 0), (3, 3), (2, 3), (2, 1), (1, 1), (1, 3), (0, 3))
        assert point_in_polygon(Vec2(0.5, 2), u_shape)
        assert not point_in_polygon(Vec2(1.5, 2), u_shape)

    def test_fewer_than_three_points(self):
        assert not point_in_polygon(Vec2(0, 0), pts((0, 0), (1, 1)))


# ══════════════════════════════════════════════════════════════════════════
# Transforms
# ══════════════════════════════════════════════════════════════════════════

class TestRotation:

    def test_quarter_turn(self):
        p = rotate_point(Vec2(1, 0), Vec2(0, 0), 90)
        assert p.x == pytest.approx(0.0, abs=1e-12)
        assert p.y == pytest.approx(1.0)

    def test_about_center(self):
        p = rotate_point(Vec2(2, 1), Vec2(1, 1), 180)
        assert p.x == pytest.approx(0.0)
        assert p.y == pytest.approx(1.0)

    def test_vectorised_matches_scalar(self):
        center = Vec2(3, -2)
        source = pts((0, 0), (5, 1), (-2, 7))
        batch = rotate_points(source, center, 37.5)
        for (bx, by), p in zip(batch, source):
            single = rotate_point(p, center, 37.5)
            assert bx == pytest.approx(single.x)
            assert by == pytest.approx(single.y)

    def test_rotation_preserves_area(self):
        rotated = rotate_points(UNIT_SQUARE, Vec2(0.5, 0.5), 33)
        assert polygon_area([Vec2(x, y) for x, y in rotated]) == pytest.approx(1.0)


# ══════════════════════════════════════════════════════════════════════════
# Bezier
# ══════════════════════════════════════════════════════════════════════════

class TestBezier:

    def test_endpoints(self):
        p0, c1, c2, p3 = pts((0, 0), (1, 2), (3, 2), (4, 0))
        assert cubic_bezier_point(p0, c1, c2, p3, 0) == p0
        assert cubic_bezier_point(p0, c1, c2, p3, 1) == p3

    def test_midpoint(self):
        p0, c1, c2, p3 = pts((0, 0), (0, 4), (4, 4), (4, 0))
        mid = cubic_bezier_point(p0, c1, c2, p3, 0.5)
        assert mid.x == pytest.approx(2.0)
        assert mid.y == pytest.approx(3.0)

    def test_sampling_is_inclusive(self):
        samples = sample_cubic_bezier(*pts((0, 0), (1, 1), (2, 1), (3, 0)), steps=10)
        assert len(samples) == 11
        assert samples[0] == Vec2(0, 0)
        assert samples[-1].x == pytest.approx(3.0)


class TestFlatten:

    def test_all_corners_unchanged(self):
        square = [CornerPoint(0, 0), CornerPoint(10, 0), CornerPoint(10, 10), CornerPoint(0, 10)]
        assert flatten_mask_points(square, closed=True) == pts((0, 0), (10, 0), (10, 10), (0, 10))

    def test_open_polyline_has_no_closing_segment(self):
        line = [CornerPoint(0, 0), CornerPoint(5, 0), CornerPoint(5, 5)]
        assert flatten_mask_points(line, closed=False) == pts((0, 0), (5, 0), (5, 5))

    def test_smooth_point_adds_samples(self):
        smooth = SmoothPoint(10, 0, h1=Vec2(8, -3), h2=Vec2(12, 3))
        outline = flatten_mask_points([CornerPoint(0, 0), smooth, CornerPoint(10, 10)],
                                      closed=True, steps=10)
        # Two curved segments of 10 new samples each, one straight closing edge,
        # and the closing duplicate of the start removed
        assert len(outline) == 1 + 10 + 10
        assert outline[0] == Vec2(0, 0)
        assert Vec2(10, 0) in outline

    def test_curved_area_differs_from_polygon(self):
        square = [CornerPoint(0, 0), CornerPoint(10, 0), CornerPoint(10, 10), CornerPoint(0, 10)]
        bulged = list(square)
        bulged[1] = SmoothPoint(10, 0, h1=Vec2(10, -5), h2=Vec2(15, 0))
        assert polygon_area(flatten_mask_points(bulged)) != pytest.approx(polygon_area(square))

    def test_empty_and_single(self):
        assert flatten_mask_points([]) == []
        assert flatten_mask_points([CornerPoint(1, 2)]) == [Vec2(1, 2)]


# ══════════════════════════════════════════════════════════════════════════
# Hit testing and simplification
# ══════════════════════════════════════════════════════════════════════════

class TestHitTesting:

    def test_nearest_point_clamps_to_segment(self):
        nearest, d = nearest_point_on_segment(Vec2(-5, 3), Vec2(0, 0), Vec2(10, 0))
        assert nearest == Vec2(0, 0)
        assert d == pytest.approx(math.hypot(5, 3))

    def test_closest_vertex_within_threshold(self):
        square = pts((0, 0), (100, 0), (100, 100))
        assert find_closest_vertex(Vec2(97, 4), square, threshold=8) == 1
        assert find_closest_vertex(Vec2(50, 50), square, threshold=8) is None

    def test_closest_edge_includes_closing_edge(self):
        square = pts((0, 0), (100, 0), (100, 100), (0, 100))
        assert find_closest_edge(Vec2(3, 50), square, threshold=10) == 3
        assert find_closest_edge(Vec2(3, 50), square, threshold=10, closed=False) is None

    def test_simplify_drops_collinear_jitter(self):
        path = pts((0, 0), (1, 0.1), (2, -0.1), (3, 0.05), (4, 0))
        assert simplify_path(path, tolerance=0.5) == [path[0], path[-1]]

    def test_simplify_keeps_corners(self):
        path = pts((0, 0), (5, 0.2), (10, 0), (10, 5), (10, 10))
        simplified = simplify_path(path, tolerance=1.0)
        assert simplified == [path[0], path[2], path[4]]
