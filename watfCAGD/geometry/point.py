"""
Point primitives shared by every curve type.

Points are plain 1D float64 numpy arrays (2D or 3D coordinates). The two
capabilities the curve algorithms need from a point type are:

    interpolate(a, b, t) = a * (1 - t) + b * t
    project_to_segment(p, a, b) -> (distance, param)

plus the nearest-segment insertion rule used by both the Bezier and the
B-spline editors.
"""

import numpy as np
from typing import Sequence, Tuple

from ..errors import DegenerateSegmentError


def as_point(coordinates) -> np.ndarray:
    """Convert a coordinate tuple to a float64 point array."""
    point = np.asarray(coordinates, dtype=np.float64)
    if point.ndim != 1:
        raise ValueError(f"A point must be a flat coordinate tuple, got shape {point.shape}")
    return point


def as_points(control_points) -> np.ndarray:
    """
    Convert a sequence of coordinate tuples to an (n, d) array.

    An empty sequence gives an array of shape (0, 0).
    """
    points = np.asarray(control_points, dtype=np.float64)
    if points.size == 0:
        return np.zeros((0, 0))
    if points.ndim != 2:
        raise ValueError(f"Control points must have shape (n, d), got {points.shape}")
    return points


def interpolate(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    """
    Linearly interpolate between a and b.

    Exact at the ends: t=0 returns a and t=1 returns b.
    """
    return a * (1.0 - t) + b * t


def project_to_segment(p: np.ndarray, a: np.ndarray,
                       b: np.ndarray) -> Tuple[float, float]:
    """
    Project p onto the segment [a, b].

    Parameters:
        p: Point to project
        a: Segment start
        b: Segment end

    Returns:
        (distance, param) where param in [0, 1] is the clamped position of
        the closest point along the segment and distance is |closest - p|

    Raises:
        DegenerateSegmentError: if a == b
    """
    v = b - a
    length_sq = float(np.dot(v, v))
    if length_sq == 0.0:
        raise DegenerateSegmentError(f"Cannot project onto zero-length segment at {a}")

    direction = p - a
    t = min(max(float(np.dot(direction, v)) / length_sq, 0.0), 1.0)
    closest = a + v * t
    return float(np.linalg.norm(closest - p)), t


def nearest_segment(points: Sequence[np.ndarray], p: np.ndarray) -> Tuple[int, float]:
    """
    Find the control polygon segment closest to p.

    Ties go to the lowest segment index. Zero-length segments are skipped
    since their neighbours cover the same location.

    Parameters:
        points: Control polygon with at least two points
        p: Query point

    Returns:
        (segment_index, param) of the nearest segment. If every segment has
        zero length, returns the last segment with param 1.0.
    """
    best_index = len(points) - 2
    best_param = 1.0
    best_dist = np.inf

    for i in range(len(points) - 1):
        a, b = points[i], points[i + 1]
        if np.array_equal(a, b):
            continue
        dist, param = project_to_segment(p, a, b)
        if dist < best_dist:
            best_index, best_param, best_dist = i, param, dist

    return best_index, best_param


def insertion_index(points: Sequence[np.ndarray], p: np.ndarray) -> int:
    """
    Index at which a new control point p should be inserted.

    - A single existing point: append
    - Nearest segment is the first one and p projects onto its start: prepend
    - Nearest segment is the last one and p projects onto its end: append
    - Otherwise: right after the nearest segment's start point
    """
    n = len(points)
    if n <= 1:
        return n

    segment, param = nearest_segment(points, p)
    if segment == 0 and param == 0.0:
        return 0
    if segment == n - 2 and param == 1.0:
        return n
    return segment + 1
