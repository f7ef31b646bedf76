"""
Boundary Editor Module

Owns the working sample set of a zone and its published boundary, and
implements the incremental editing protocol:

1. add_area() seeds a ring of samples around a point
2. remove_area() deletes samples inside a circle and re-seeds the cut
3. recompute() rebuilds the boundary (convex hull -> concave refinement
   -> elevation projection) and replaces the sample set with it

Hosts read the published boundary through render_hints() or by
registering a listener. The editor does no locking; hosts sharing one
editor between threads must serialize every call.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

import numpy as np

from ..config import MIN_HULL_SAMPLES, MIN_REMOVE_SAMPLES, ZoneConfig
from ..core.geometry import (
    as_points,
    circle_fully_inside_polygon,
    circle_points,
    point_in_polygon,
)
from ..hulls.concave import refine_concave_hull
from ..hulls.convex import build_convex_hull
from ..projection.elevation import project_elevation

logger = logging.getLogger(__name__)


class EditorState(Enum):
    """Lifecycle state of a BoundaryEditor."""
    EMPTY = "empty"
    UNREFINED = "unrefined"
    BOUNDED = "bounded"


@dataclass(frozen=True)
class RenderHints:
    """
    Snapshot of a published boundary for the host to render.

    Attributes
    ----------
    points : np.ndarray
        Boundary vertices of shape (M, 3), in drawing order.
    closed : bool
        The last vertex connects back to the first.
    revision : int
        Number of published changes (recomputes and clears) when the
        snapshot was taken.
    """
    points: np.ndarray
    closed: bool = True
    revision: int = 0


BoundaryListener = Callable[[RenderHints], None]


class BoundaryEditor:
    """
    Editable zone boundary over a set of 3D sample points.

    Parameters
    ----------
    config : ZoneConfig, optional
        Radius, refinement and sampling settings. Defaults to ZoneConfig().
    """

    def __init__(self, config: Optional[ZoneConfig] = None):
        self.config = config if config is not None else ZoneConfig()
        self._samples = np.zeros((0, 3))
        self._boundary = np.zeros((0, 3))
        self._revision = 0
        self._listeners: List[BoundaryListener] = []

    @property
    def samples(self) -> np.ndarray:
        """Working sample set, shape (N, 3). A copy."""
        return self._samples.copy()

    @property
    def boundary(self) -> np.ndarray:
        """Published boundary, shape (M, 3). A copy; empty before the first hull."""
        return self._boundary.copy()

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def state(self) -> EditorState:
        if len(self._boundary) > 0:
            return EditorState.BOUNDED
        if len(self._samples) < MIN_REMOVE_SAMPLES:
            return EditorState.EMPTY
        return EditorState.UNREFINED

    def add_area(self, center, radius: Optional[float] = None, auto_recompute: bool = True) -> None:
        """
        Grow the zone by a circle around ``center``.

        Samples a ring of ``config.candidate_count`` points and keeps the
        ones not already inside the published boundary.

        Parameters
        ----------
        center : array-like
            Circle center (x, y, z). New samples take its z.
        radius : float, optional
            Circle radius. Defaults to ``config.default_radius``.
        auto_recompute : bool
            Rebuild the boundary afterwards. Default True.
        """
        radius = self._resolve_radius(radius)
        candidates = circle_points(center, radius, self.config.candidate_count)

        keep = [p for p in candidates if not point_in_polygon(p, self._boundary)]
        if keep:
            self._samples = np.vstack([self._samples, np.array(keep)])

        logger.debug(
            f"add_area at {tuple(center)} r={radius}: kept {len(keep)} of "
            f"{len(candidates)} candidates, {len(self._samples)} samples"
        )

        if auto_recompute:
            self.recompute()

    def remove_area(self, center, radius: Optional[float] = None, auto_recompute: bool = True) -> None:
        """
        Carve a circle around ``center`` out of the zone.

        Does nothing with fewer than three samples, or when the circle lies
        entirely inside the boundary (carving the interior cannot move the
        outline). Otherwise deletes every sample within ``radius`` and
        re-seeds the part of the circle that was inside the old boundary,
        so the new outline follows the cut.

        Parameters
        ----------
        center : array-like
            Circle center (x, y, z). Re-seeded samples take its z.
        radius : float, optional
            Circle radius. Defaults to ``config.default_radius``.
        auto_recompute : bool
            Rebuild the boundary afterwards. Default True.
        """
        radius = self._resolve_radius(radius)

        if len(self._samples) < MIN_REMOVE_SAMPLES:
            logger.debug(
                f"remove_area skipped: {len(self._samples)} samples, "
                f"need {MIN_REMOVE_SAMPLES}"
            )
            return

        if circle_fully_inside_polygon(
            center, radius, self._boundary, self.config.perimeter_samples
        ):
            logger.debug(f"remove_area at {tuple(center)} r={radius} is interior, skipped")
            return

        original_hull = self._boundary.copy()

        dx = self._samples[:, 0] - float(center[0])
        dy = self._samples[:, 1] - float(center[1])
        inside = dx * dx + dy * dy <= radius * radius
        self._samples = self._samples[~inside]

        candidates = circle_points(center, radius, self.config.candidate_count)
        reseed = [p for p in candidates if point_in_polygon(p, original_hull)]
        if reseed:
            self._samples = np.vstack([self._samples, np.array(reseed)])

        logger.debug(
            f"remove_area at {tuple(center)} r={radius}: removed "
            f"{int(np.count_nonzero(inside))}, re-seeded {len(reseed)}, "
            f"{len(self._samples)} samples"
        )

        if auto_recompute:
            self.recompute()

    def recompute(self) -> None:
        """
        Rebuild and publish the boundary from the sample set.

        With fewer than four samples nothing happens and any earlier
        boundary stays published. Otherwise the new boundary replaces both
        the published boundary and the sample set, and listeners are
        notified.
        """
        if len(self._samples) < MIN_HULL_SAMPLES:
            logger.debug(
                f"recompute skipped: {len(self._samples)} samples, "
                f"need {MIN_HULL_SAMPLES}"
            )
            return

        hull = build_convex_hull(self._samples)
        refined = refine_concave_hull(
            self._samples,
            hull,
            concavity=self.config.concavity,
            min_edge_length=self.config.min_edge_length,
        )
        if len(refined) < 3:
            logger.debug(
                f"recompute skipped: samples collapse to {len(refined)} hull vertices"
            )
            return

        boundary = project_elevation(
            refined, self._samples, tolerance=self.config.elevation_tolerance
        )

        self._boundary = boundary
        self._samples = boundary.copy()
        self._revision += 1

        logger.debug(
            f"recompute #{self._revision}: {len(hull)} hull vertices, "
            f"{len(boundary)} boundary vertices"
        )

        self._publish()

    def contains(self, point) -> bool:
        """True if ``point`` lies inside the published boundary."""
        return point_in_polygon(point, self._boundary)

    def clear(self) -> None:
        """
        Drop all samples and the published boundary.

        Publishing the empty boundary counts as a revision, and listeners
        receive the empty hints so hosts stop drawing the old zone.
        """
        self._samples = np.zeros((0, 3))
        self._boundary = np.zeros((0, 3))
        self._revision += 1

        logger.debug(f"cleared, revision {self._revision}")
        self._publish()

    def set_samples(self, samples) -> None:
        """Replace the working sample set, e.g. when restoring a saved zone."""
        samples = as_points(samples, min_dims=3)
        self._samples = samples[:, :3].copy()

    def render_hints(self) -> RenderHints:
        """Current boundary snapshot for the host to draw."""
        return RenderHints(points=self._boundary.copy(), closed=True, revision=self._revision)

    def add_listener(self, listener: BoundaryListener) -> None:
        """Call ``listener(hints)`` after every successful recompute or clear()."""
        self._listeners.append(listener)

    def remove_listener(self, listener: BoundaryListener) -> None:
        self._listeners.remove(listener)

    def _publish(self) -> None:
        hints = self.render_hints()
        for listener in list(self._listeners):
            listener(hints)

    def _resolve_radius(self, radius: Optional[float]) -> float:
        if radius is None:
            return self.config.default_radius
        if radius < 0:
            raise ValueError(f"radius must be >= 0, got {radius}")
        return float(radius)
