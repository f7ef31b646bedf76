"""
Incremental zone boundary editing.
"""

from .boundary import BoundaryEditor, BoundaryListener, EditorState, RenderHints
from .stats import boundary_stats

__all__ = [
    'BoundaryEditor',
    'BoundaryListener',
    'EditorState',
    'RenderHints',
    'boundary_stats',
]
