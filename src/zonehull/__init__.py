"""
Zonehull - Editable zone boundaries over 3D sample points.

This package maintains a closed outline around regions of a world that
are marked as belonging to a zone:
- Circular areas are added and carved out incrementally
- The outline is a concave refinement of the samples' convex hull
- Heights are carried along from the samples, containment is planar

Main Functions
--------------
BoundaryEditor : Owns samples and the published boundary
build_convex_hull : Gift-wrapping convex hull as an index sequence
refine_concave_hull : Pull a convex hull inward toward interior points
project_elevation : Recover z for refined 2D boundary points
point_in_polygon : Ray casting containment test

Example
-------
>>> from zonehull import BoundaryEditor

>>> editor = BoundaryEditor()
>>> editor.add_area((0.0, 0.0, 5.0), radius=50.0)
>>> editor.contains((0.0, 0.0, 5.0))
True
"""

from .config import ZoneConfig
from .core.geometry import (
    Orientation,
    orientation,
    point_in_polygon,
    circle_points,
    circle_fully_inside_polygon,
    polygon_area,
)
from .hulls.convex import build_convex_hull
from .hulls.concave import refine_concave_hull
from .projection.elevation import project_elevation
from .editor.boundary import BoundaryEditor, EditorState, RenderHints
from .editor.stats import boundary_stats
from .visualization.plotting import plot_boundary

__all__ = [
    # Configuration
    'ZoneConfig',
    # Core geometry
    'Orientation',
    'orientation',
    'point_in_polygon',
    'circle_points',
    'circle_fully_inside_polygon',
    'polygon_area',
    # Hulls
    'build_convex_hull',
    'refine_concave_hull',
    # Projection
    'project_elevation',
    # Editor
    'BoundaryEditor',
    'EditorState',
    'RenderHints',
    'boundary_stats',
    # Visualization
    'plot_boundary',
]
