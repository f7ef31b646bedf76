"""
Visualization utilities.
"""

from .plotting import plot_boundary

__all__ = ['plot_boundary']
