"""
Core geometry operations for zone boundaries.

Contains the planar predicates every other module builds on:
- Orientation (turn) test
- Point-in-polygon testing (ray casting)
- Circle-inside-polygon approximation
- Circle sampling
- Polygon area, vertex ordering (CCW) and simplicity

All predicates work on the horizontal (x, y) projection. Any third
coordinate is ignored here and carried along by callers.
"""

from enum import IntEnum
from typing import Union

import numpy as np
from shapely.geometry import LinearRing


# Edges whose endpoints differ in y by no more than this are skipped
# by the ray casting test
HORIZONTAL_EDGE_EPS = 1e-6


class Orientation(IntEnum):
    """Turn direction of an ordered point triple."""
    COLLINEAR = 0
    CLOCKWISE = 1
    COUNTER_CLOCKWISE = 2


def as_points(points, min_dims: int = 2) -> np.ndarray:
    """
    Convert an array-like of points to a float64 array of shape (N, D).

    Parameters
    ----------
    points : array-like
        Sequence of points, each with at least ``min_dims`` coordinates.
        An empty sequence is accepted.
    min_dims : int
        Minimum number of coordinates per point.

    Returns
    -------
    np.ndarray
        Array of shape (N, D) with D >= min_dims, or (0, min_dims) if empty.
    """
    arr = np.asarray(points, dtype=np.float64)
    if arr.size == 0:
        return np.zeros((0, min_dims))
    if arr.ndim != 2 or arr.shape[1] < min_dims:
        raise ValueError(
            f"Expected points of shape (N, >={min_dims}), got {arr.shape}"
        )
    return arr


def orientation(p, q, r) -> Orientation:
    """
    Classify the turn p -> q -> r.

    Uses the sign of the 2D cross product ``(q - p) x (r - q)``. An exact
    zero is collinear; no tolerance is applied.

    Parameters
    ----------
    p, q, r : array-like
        Points with at least two coordinates.

    Returns
    -------
    Orientation
        COUNTER_CLOCKWISE for a left turn, CLOCKWISE for a right turn.
    """
    val = (q[1] - p[1]) * (r[0] - q[0]) - (q[0] - p[0]) * (r[1] - q[1])

    if val == 0:
        return Orientation.COLLINEAR
    return Orientation.CLOCKWISE if val > 0 else Orientation.COUNTER_CLOCKWISE


def point_in_polygon(point, polygon) -> bool:
    """
    Test if a point lies inside a polygon (convex or concave).

    Counts crossings of a horizontal ray cast from the point towards +x.
    Edges that are horizontal within HORIZONTAL_EDGE_EPS are skipped.

    Points exactly on an edge or vertex give an implementation-defined
    answer; callers must not rely on either result.

    Parameters
    ----------
    point : array-like
        Query point with at least two coordinates.
    polygon : array-like
        Polygon vertices of shape (M, >=2), closing edge implied.

    Returns
    -------
    bool
        True if the crossing count is odd. Always False for fewer than
        three vertices.
    """
    poly = as_points(polygon)
    if len(poly) < 3:
        return False

    x, y = float(point[0]), float(point[1])

    p1 = poly[:, :2]
    p2 = np.roll(p1, -1, axis=0)
    dy = p2[:, 1] - p1[:, 1]

    sloped = np.abs(dy) > HORIZONTAL_EDGE_EPS
    straddles = (p1[:, 1] > y) != (p2[:, 1] > y)

    safe_dy = np.where(sloped, dy, 1.0)
    x_cross = (p2[:, 0] - p1[:, 0]) * (y - p1[:, 1]) / safe_dy + p1[:, 0]

    crossings = np.count_nonzero(sloped & straddles & (x < x_cross))
    return crossings % 2 == 1


def circle_points(center, radius: float, count: int) -> np.ndarray:
    """
    Sample points evenly on a horizontal circle.

    Parameters
    ----------
    center : array-like
        Circle center (x, y) or (x, y, z).
    radius : float
        Circle radius.
    count : int
        Number of samples. The first lies at angle 0 and the rest follow
        counter-clockwise.

    Returns
    -------
    np.ndarray
        Points of shape (count, 3). z equals the center's z (0 for a 2D
        center).
    """
    cx, cy = float(center[0]), float(center[1])
    cz = float(center[2]) if len(center) > 2 else 0.0

    angles = np.arange(count) * 2 * np.pi / count
    return np.column_stack([
        cx + radius * np.cos(angles),
        cy + radius * np.sin(angles),
        np.full(count, cz),
    ])


def circle_fully_inside_polygon(center, radius: float, polygon, samples: int = 8) -> bool:
    """
    Approximate test for a circle lying entirely inside a polygon.

    The center and ``samples`` evenly spaced perimeter points must all be
    inside. Narrow concavities between perimeter samples are not detected,
    so false positives are possible.
    """
    poly = as_points(polygon)
    if len(poly) < 3:
        return False

    if not point_in_polygon(center, poly):
        return False

    for perimeter_point in circle_points(center, radius, samples):
        if not point_in_polygon(perimeter_point, poly):
            return False

    return True


def segments_intersect(p1, q1, p2, q2) -> Union[bool, np.ndarray]:
    """
    Test if segments p1-q1 and p2-q2 properly cross.

    Segments joined end to start (q1 == p2 or q2 == p1) never count as
    intersecting, which lets callers test a new edge against neighbours
    it is attached to.

    Any argument may be an array of points of shape (K, 2); the test then
    runs row by row and returns a boolean array of shape (K,).
    """
    p1, q1, p2, q2 = (np.asarray(a, dtype=float) for a in (p1, q1, p2, q2))

    attached = _same_point(p1, q2) | _same_point(q1, p2)
    crossing = (
        ((_cross(p1, q1, p2) > 0) != (_cross(p1, q1, q2) > 0))
        & ((_cross(p2, q2, p1) > 0) != (_cross(p2, q2, q1) > 0))
    )

    result = crossing & ~attached
    return bool(result) if result.ndim == 0 else result


def signed_area(poly) -> float:
    """Signed shoelace area, positive for counter-clockwise vertices."""
    poly = as_points(poly)
    if len(poly) < 3:
        return 0.0

    x = poly[:, 0]
    y = poly[:, 1]
    return 0.5 * float(np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


def polygon_area(poly) -> float:
    """
    Compute the area of a polygon using the shoelace formula.

    Parameters
    ----------
    poly : array-like
        Polygon vertices of shape (M, >=2).

    Returns
    -------
    float
        Area of the polygon, 0 for fewer than three vertices.
    """
    return abs(signed_area(poly))


def is_simple_polygon(poly) -> bool:
    """True if the closed ring through the vertices has no self-intersections."""
    poly = as_points(poly)
    if len(poly) < 3:
        return False
    return LinearRing(poly[:, :2]).is_simple


def _cross(p, q, r):
    return (q[..., 1] - p[..., 1]) * (r[..., 0] - q[..., 0]) - (q[..., 0] - p[..., 0]) * (r[..., 1] - q[..., 1])


def _same_point(a, b):
    return (a[..., 0] == b[..., 0]) & (a[..., 1] == b[..., 1])
