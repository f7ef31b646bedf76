"""
Core geometry operations.
"""

from .geometry import (
    HORIZONTAL_EDGE_EPS,
    Orientation,
    orientation,
    point_in_polygon,
    circle_points,
    circle_fully_inside_polygon,
    segments_intersect,
    signed_area,
    polygon_area,
    is_simple_polygon,
)

__all__ = [
    'HORIZONTAL_EDGE_EPS',
    'Orientation',
    'orientation',
    'point_in_polygon',
    'circle_points',
    'circle_fully_inside_polygon',
    'segments_intersect',
    'signed_area',
    'polygon_area',
    'is_simple_polygon',
]
