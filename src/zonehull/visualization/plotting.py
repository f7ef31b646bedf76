"""
Visualization utilities for zone boundaries.

Contains plotting functions for:
- A published boundary with its working samples
"""

from typing import Optional, Union

import numpy as np
import matplotlib.pyplot as plt

from ..core.geometry import as_points
from ..editor.boundary import RenderHints
from ..editor.stats import boundary_stats


def plot_boundary(
    boundary: Union[RenderHints, np.ndarray],
    samples: Optional[np.ndarray] = None,
    ax: Optional[plt.Axes] = None,
    title: str = "Zone",
    show_stats: bool = True
) -> plt.Axes:
    """
    Visualize a zone boundary in the horizontal plane.

    Parameters
    ----------
    boundary : RenderHints or np.ndarray
        Render hints from BoundaryEditor.render_hints(), or boundary
        vertices of shape (M, >=2).
    samples : np.ndarray, optional
        Working samples of shape (N, >=2) to scatter underneath.
    ax : plt.Axes, optional
        Matplotlib axes to plot on. Creates new figure if None.
    title : str
        Plot title.
    show_stats : bool
        Whether to show boundary statistics.

    Returns
    -------
    plt.Axes
        The matplotlib axes object.
    """
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(8, 8))

    closed = True
    if isinstance(boundary, RenderHints):
        closed = boundary.closed
        poly = as_points(boundary.points)
    else:
        poly = as_points(boundary)

    if samples is not None and len(samples) > 0:
        samples = as_points(samples)
        ax.scatter(
            samples[:, 0], samples[:, 1],
            c='steelblue', alpha=0.6, s=20, label='Samples', zorder=2
        )

    if len(poly) > 0:
        outline = np.vstack([poly, poly[:1]]) if closed else poly
        ax.plot(outline[:, 0], outline[:, 1], 'k-', linewidth=2, zorder=3)
        if closed and len(poly) >= 3:
            ax.fill(poly[:, 0], poly[:, 1], alpha=0.15, color='green', zorder=1)
        ax.scatter(poly[:, 0], poly[:, 1], c='black', s=30, marker='s', zorder=4, label='Boundary')

    if show_stats:
        stats = boundary_stats(poly)
        stats_text = (
            f"Vertices: {stats['num_vertices']}\n"
            f"Area: {stats['area']:.2f}\n"
            f"Perimeter: {stats['perimeter']:.2f}\n"
            f"Simple: {stats['is_simple']}"
        )
        ax.text(
            0.02, 0.98, stats_text,
            transform=ax.transAxes,
            verticalalignment='top',
            fontfamily='monospace',
            fontsize=9,
            bbox=dict(boxstyle='round', facecolor='white', alpha=0.8)
        )

    ax.set_xlabel('X')
    ax.set_ylabel('Y')
    ax.set_title(title)
    if ax.get_legend_handles_labels()[0]:
        ax.legend(loc='upper right')
    ax.set_aspect('equal', adjustable='box')
    ax.grid(True, alpha=0.3)

    return ax
