"""
Zone Configuration

Named constants and the validated configuration object shared by the
boundary editor. Every tunable has a default matching the reference
zone-marker behaviour and can be overridden per editor.
"""

from dataclasses import dataclass, fields
from typing import Any, Mapping


# Default radius for add/remove operations (world units)
DEFAULT_RADIUS = 100.0

# Concave refinement defaults
DEFAULT_CONCAVITY = 2.0
DEFAULT_MIN_EDGE_LENGTH = 0.0

# Matching tolerance when recovering z for refined boundary points
DEFAULT_ELEVATION_TOLERANCE = 0.01

# Points generated on each add/remove circle
CANDIDATE_COUNT = 32

# Perimeter points checked by the circle-inside-polygon approximation
PERIMETER_SAMPLES = 8

# Sample count thresholds
MIN_REMOVE_SAMPLES = 3
MIN_HULL_SAMPLES = 4


@dataclass(frozen=True)
class ZoneConfig:
    """
    Tunables for a BoundaryEditor.

    Attributes
    ----------
    default_radius : float
        Radius used when add_area/remove_area are called without one.
    concavity : float
        Refinement concavity. 0 keeps the convex hull, larger values pull
        the boundary further inward.
    min_edge_length : float
        Boundary edges shorter than this are never refined.
    elevation_tolerance : float
        Per-axis tolerance for matching a refined point to a source sample.
    candidate_count : int
        Number of points sampled on each add/remove circle.
    perimeter_samples : int
        Number of perimeter points used to decide whether a removal circle
        lies entirely inside the boundary.
    """

    default_radius: float = DEFAULT_RADIUS
    concavity: float = DEFAULT_CONCAVITY
    min_edge_length: float = DEFAULT_MIN_EDGE_LENGTH
    elevation_tolerance: float = DEFAULT_ELEVATION_TOLERANCE
    candidate_count: int = CANDIDATE_COUNT
    perimeter_samples: int = PERIMETER_SAMPLES

    def __post_init__(self):
        """Validate configuration values."""
        if not self.default_radius > 0:
            raise ValueError(
                f"default_radius must be > 0, got {self.default_radius}"
            )

        if self.concavity < 0:
            raise ValueError(f"concavity must be >= 0, got {self.concavity}")

        if self.min_edge_length < 0:
            raise ValueError(
                f"min_edge_length must be >= 0, got {self.min_edge_length}"
            )

        if self.elevation_tolerance < 0:
            raise ValueError(
                f"elevation_tolerance must be >= 0, got {self.elevation_tolerance}"
            )

        if self.candidate_count < 3:
            raise ValueError(
                f"candidate_count must be >= 3, got {self.candidate_count}"
            )

        if self.perimeter_samples < 1:
            raise ValueError(
                f"perimeter_samples must be >= 1, got {self.perimeter_samples}"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ZoneConfig":
        """
        Build a config from a mapping, e.g. a parsed settings file.

        Unknown keys are rejected so typos do not silently fall back to
        defaults.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(
                f"Unknown ZoneConfig keys: {unknown}. Valid keys are {sorted(known)}"
            )
        return cls(**dict(data))
