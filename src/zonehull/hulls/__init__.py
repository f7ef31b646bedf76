"""
Hull construction and refinement algorithms.
"""

from .convex import build_convex_hull
from .concave import CONCAVITY_SCALE, refine_concave_hull

__all__ = ['build_convex_hull', 'refine_concave_hull', 'CONCAVITY_SCALE']
