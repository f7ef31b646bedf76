"""
2D to 3D elevation recovery.
"""

from .elevation import project_elevation

__all__ = ['project_elevation']
