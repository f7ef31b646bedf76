"""
Diagnostic statistics for published boundaries.
"""

import numpy as np

from ..core.geometry import as_points, is_simple_polygon, polygon_area


def boundary_stats(boundary) -> dict:
    """
    Compute diagnostic statistics for a boundary.

    Parameters
    ----------
    boundary : array-like
        Boundary vertices of shape (M, >=2), closing edge implied.

    Returns
    -------
    dict
        Statistics including:
        - num_vertices: Number of boundary vertices
        - area: Enclosed area in the horizontal plane
        - perimeter: Length of the closed outline
        - centroid: Mean of the vertices (x, y), None when empty
        - is_simple: Whether the outline is free of self-intersections
    """
    poly = as_points(boundary)
    n = len(poly)

    if n == 0:
        return {
            'num_vertices': 0,
            'area': 0.0,
            'perimeter': 0.0,
            'centroid': None,
            'is_simple': False,
        }

    xy = poly[:, :2]
    edges = np.roll(xy, -1, axis=0) - xy
    perimeter = float(np.sum(np.linalg.norm(edges, axis=1))) if n > 1 else 0.0

    return {
        'num_vertices': n,
        'area': float(polygon_area(xy)),
        'perimeter': perimeter,
        'centroid': np.mean(xy, axis=0),
        'is_simple': is_simple_polygon(xy),
    }
