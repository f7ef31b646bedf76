"""
Convex Hull Module (Gift Wrapping)

Builds the convex hull of a point cloud as a cyclic sequence of indices
into the input array, using the Jarvis march. The hull is emitted
counter-clockwise (interior on the left) in a y-up frame, starting from
the lowest point.
"""

from typing import List

import numpy as np

from ..core.geometry import Orientation, as_points, orientation


def build_convex_hull(points) -> List[int]:
    """
    Compute the convex hull of a point cloud by gift wrapping.

    Parameters
    ----------
    points : array-like
        Array of shape (N, >=2). Only x and y are used.

    Returns
    -------
    list of int
        Hull vertex indices in counter-clockwise order, without repeating
        the start. Fewer than three points are returned as ``[0, ..., N-1]``.

    Notes
    -----
    Collinear ties keep the current candidate, so points lying on a hull
    edge may or may not appear. Duplicates and fully collinear inputs
    always terminate; the walk emits at most N vertices.
    """
    pts = as_points(points)
    n = len(pts)

    if n < 3:
        return list(range(n))

    # Lowest point, leftmost on ties
    start = 0
    for i in range(1, n):
        if pts[i, 1] < pts[start, 1] or (
            pts[i, 1] == pts[start, 1] and pts[i, 0] < pts[start, 0]
        ):
            start = i

    hull = []
    p = start
    while True:
        hull.append(p)

        q = (p + 1) % n
        for i in range(n):
            if i == p:
                continue
            if _coincident(pts[q], pts[p]) or (
                orientation(pts[p], pts[i], pts[q]) is Orientation.COUNTER_CLOCKWISE
            ):
                q = i

        if _coincident(pts[q], pts[p]):
            # Every remaining point sits on top of p
            break

        p = q
        if p == start or _coincident(pts[p], pts[start]) or len(hull) >= n:
            break

    return hull


def _coincident(a: np.ndarray, b: np.ndarray) -> bool:
    return a[0] == b[0] and a[1] == b[1]
