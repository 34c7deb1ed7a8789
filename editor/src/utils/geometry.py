"""Polygon and curve geometry for masks.

Area, containment, Bezier flattening, centroid/bounds, rotation, hit testing
and freehand simplification. All functions are pure and accept any sequence of
objects exposing .x/.y (Vec2, CornerPoint, SmoothPoint).
"""

import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from models.transform import Vec2
from constants import (
    BEZIER_SAMPLE_STEPS, EDGE_HIT_THRESHOLD, VERTEX_HIT_THRESHOLD,
    MIN_VALID_POLYGON_AREA, POINT_KIND_SMOOTH, DEFAULT_SIMPLIFY_TOLERANCE
)


def _as_array(points) -> np.ndarray:
    """Points -> (N, 2) float array."""
    if len(points) == 0:
        return np.zeros((0, 2), dtype=float)
    return np.array([[p.x, p.y] for p in points], dtype=float)


# ========================================
# Measurements
# ========================================

def distance(p1, p2) -> float:
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def polygon_area(points) -> float:
    """Unsigned shoelace area, treating the points as implicitly closed.

    Fewer than 3 points have no area.
    """
    if len(points) < 3:
        return 0.0
    arr = _as_array(points)
    xs, ys = arr[:, 0], arr[:, 1]
    cross = xs * np.roll(ys, -1) - np.roll(xs, -1) * ys
    return float(abs(cross.sum()) / 2.0)


def polyline_length(points) -> float:
    """Length of an open polyline."""
    if len(points) < 2:
        return 0.0
    arr = _as_array(points)
    return float(np.linalg.norm(np.diff(arr, axis=0), axis=1).sum())


def polygon_perimeter(points) -> float:
    """Length of the closed ring through the points."""
    if len(points) < 2:
        return 0.0
    arr = _as_array(points)
    closed = np.vstack([arr, arr[:1]])
    return float(np.linalg.norm(np.diff(closed, axis=0), axis=1).sum())


def points_centroid(points) -> Vec2:
    """Arithmetic mean of the points (the pivot used for mask rotation)."""
    if len(points) == 0:
        return Vec2(0.0, 0.0)
    mean = _as_array(points).mean(axis=0)
    return Vec2(float(mean[0]), float(mean[1]))


def polygon_centroid(points) -> Vec2:
    """Area-weighted centroid; falls back to the mean for degenerate polygons."""
    if len(points) < 3:
        return points_centroid(points)
    arr = _as_array(points)
    xs, ys = arr[:, 0], arr[:, 1]
    xn, yn = np.roll(xs, -1), np.roll(ys, -1)
    cross = xs * yn - xn * ys
    signed_area = cross.sum() / 2.0
    if abs(signed_area) < 1e-12:
        return points_centroid(points)
    cx = ((xs + xn) * cross).sum() / (6.0 * signed_area)
    cy = ((ys + yn) * cross).sum() / (6.0 * signed_area)
    return Vec2(float(cx), float(cy))


def bounds(points) -> Tuple[float, float, float, float]:
    """(min_x, min_y, max_x, max_y); all zeros for an empty set."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    arr = _as_array(points)
    mins = arr.min(axis=0)
    maxs = arr.max(axis=0)
    return (float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1]))


def is_polygon_valid(points) -> bool:
    """At least a triangle with non-negligible area."""
    if len(points) < 3:
        return False
    return polygon_area(points) > MIN_VALID_POLYGON_AREA


# ========================================
# Containment
# ========================================

def point_in_polygon(point, polygon) -> bool:
    """Even-odd ray casting test. Fewer than 3 vertices is never inside."""
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y
        if (yi > point.y) != (yj > point.y):
            x_cross = (xj - xi) * (point.y - yi) / (yj - yi) + xi
            if point.x < x_cross:
                inside = not inside
        j = i
    return inside


# ========================================
# Transforms
# ========================================

def rotate_point(point, center, degrees) -> Vec2:
    """Rotate a point about center by degrees (positive is clockwise on a Y-down screen)."""
    rad = math.radians(degrees)
    cos_r, sin_r = math.cos(rad), math.sin(rad)
    dx = point.x - center.x
    dy = point.y - center.y
    return Vec2(center.x + dx * cos_r - dy * sin_r,
                center.y + dx * sin_r + dy * cos_r)


def rotate_points(points, center, degrees) -> np.ndarray:
    """Vectorised rotate_point; returns an (N, 2) array."""
    arr = _as_array(points)
    if degrees == 0 or len(arr) == 0:
        return arr
    rad = math.radians(degrees)
    matrix = np.array([[math.cos(rad), -math.sin(rad)],
                       [math.sin(rad), math.cos(rad)]])
    pivot = np.array([center.x, center.y])
    return (arr - pivot) @ matrix.T + pivot


# ========================================
# Bezier
# ========================================

def cubic_bezier_point(p0, c1, c2, p3, t) -> Vec2:
    """Evaluate a cubic Bezier at parameter t in [0, 1]."""
    u = 1.0 - t
    b0 = u * u * u
    b1 = 3 * u * u * t
    b2 = 3 * u * t * t
    b3 = t * t * t
    return Vec2(b0 * p0.x + b1 * c1.x + b2 * c2.x + b3 * p3.x,
                b0 * p0.y + b1 * c1.y + b2 * c2.y + b3 * p3.y)


def sample_cubic_bezier(p0, c1, c2, p3, steps=BEZIER_SAMPLE_STEPS) -> List[Vec2]:
    """Sample a cubic Bezier at t = 0, 1/steps, ..., 1 (inclusive)."""
    ts = np.linspace(0.0, 1.0, steps + 1)
    u = 1.0 - ts
    coeffs = np.stack([u ** 3, 3 * u * u * ts, 3 * u * ts * ts, ts ** 3], axis=1)
    ctrl = np.array([[p0.x, p0.y], [c1.x, c1.y], [c2.x, c2.y], [p3.x, p3.y]], dtype=float)
    samples = coeffs @ ctrl
    return [Vec2(float(x), float(y)) for x, y in samples]


def _out_control(point):
    if point.kind == POINT_KIND_SMOOTH:
        return point.h2
    return Vec2(point.x, point.y)


def _in_control(point):
    if point.kind == POINT_KIND_SMOOTH:
        return point.h1
    return Vec2(point.x, point.y)


def flatten_mask_points(points, closed=True, steps=BEZIER_SAMPLE_STEPS) -> List[Vec2]:
    """Polyline approximation of a mask outline for rendering and hit testing.

    A segment whose endpoints are both corners stays a straight line. A segment
    touching a smooth point becomes a cubic using the start point's outgoing
    handle (h2) and the end point's incoming handle (h1), sampled at a fixed
    step. The result is display-only and never stored.

    Args:
        points: Mask points (CornerPoint / SmoothPoint)
        closed: Join the last point back to the first
        steps: Samples per curved segment

    Returns:
        List of Vec2 (for a closed outline the first point is not repeated)
    """
    n = len(points)
    if n == 0:
        return []
    if n == 1:
        return [Vec2(points[0].x, points[0].y)]

    segment_count = n if closed else n - 1
    result = [Vec2(points[0].x, points[0].y)]

    for i in range(segment_count):
        start = points[i]
        end = points[(i + 1) % n]
        if start.kind != POINT_KIND_SMOOTH and end.kind != POINT_KIND_SMOOTH:
            result.append(Vec2(end.x, end.y))
            continue
        samples = sample_cubic_bezier(Vec2(start.x, start.y), _out_control(start),
                                      _in_control(end), Vec2(end.x, end.y), steps)
        # First sample duplicates the previous segment's end
        result.extend(samples[1:])

    if closed and len(result) > 1:
        # Closing segment ends where the outline started
        result.pop()
    return result


# ========================================
# Hit testing
# ========================================

def nearest_point_on_segment(p, a, b) -> Tuple[Vec2, float]:
    """Closest point on segment ab to p and its distance."""
    dx = b.x - a.x
    dy = b.y - a.y
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return Vec2(a.x, a.y), distance(p, a)
    t = ((p.x - a.x) * dx + (p.y - a.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    nearest = Vec2(a.x + t * dx, a.y + t * dy)
    return nearest, distance(p, nearest)


def perpendicular_distance(point, line_start, line_end) -> float:
    """Distance from point to the segment line_start-line_end."""
    return nearest_point_on_segment(point, line_start, line_end)[1]


def find_closest_vertex(point, points, threshold=VERTEX_HIT_THRESHOLD) -> Optional[int]:
    """Index of the vertex nearest to point within threshold, else None.

    Both point and vertices must be in the same space; callers hit-testing in
    screen space map the vertices with ViewState.to_screen first.
    """
    closest = None
    best = threshold
    for i, vertex in enumerate(points):
        d = distance(point, vertex)
        if d < best:
            best = d
            closest = i
    return closest


def find_closest_edge(point, points, threshold=EDGE_HIT_THRESHOLD, closed=True) -> Optional[int]:
    """Index i of the edge (i, i+1) nearest to point within threshold, else None."""
    n = len(points)
    if n < 2:
        return None
    edge_count = n if closed else n - 1
    closest = None
    best = threshold
    for i in range(edge_count):
        d = perpendicular_distance(point, points[i], points[(i + 1) % n])
        if d < best:
            best = d
            closest = i
    return closest


# ========================================
# Simplification
# ========================================

def simplify_path(points: Sequence, tolerance: float = DEFAULT_SIMPLIFY_TOLERANCE) -> list:
    """Douglas-Peucker simplification of an open path.

    Keeps both endpoints; drops interior points closer than tolerance to the
    chord. Returns the original objects (not copies).
    """
    if len(points) <= 2:
        return list(points)

    end = len(points) - 1
    max_distance = 0.0
    max_index = 0
    for i in range(1, end):
        d = perpendicular_distance(points[i], points[0], points[end])
        if d > max_distance:
            max_distance = d
            max_index = i

    if max_distance > tolerance:
        left = simplify_path(points[:max_index + 1], tolerance)
        right = simplify_path(points[max_index:], tolerance)
        return left[:-1] + right

    return [points[0], points[end]]
