"""
Elevation Projection Module

Lifts refined 2D boundary points back to 3D. Each point takes the height
of a source sample: the first one matching its (x, y) within a tolerance,
or failing that the nearest one in the horizontal plane. Heights are
never interpolated, so every output z can be traced to a real sample.
"""

import numpy as np

from ..config import DEFAULT_ELEVATION_TOLERANCE
from ..core.geometry import as_points


def project_elevation(
    points_2d,
    original_points_3d,
    tolerance: float = DEFAULT_ELEVATION_TOLERANCE
) -> np.ndarray:
    """
    Recover z for 2D points from the samples they were derived from.

    Parameters
    ----------
    points_2d : array-like
        Array of shape (M, >=2). Only x and y are read.
    original_points_3d : array-like
        Source samples of shape (N, 3). May be empty.
    tolerance : float
        Per-axis matching tolerance: a sample matches when both
        ``|dx| < tolerance`` and ``|dy| < tolerance``. Default 0.01.

    Returns
    -------
    np.ndarray
        Array of shape (M, 3). z is 0 when there are no source samples.
    """
    points_2d = as_points(points_2d)
    originals = as_points(original_points_3d, min_dims=3)

    result = np.zeros((len(points_2d), 3))
    result[:, :2] = points_2d[:, :2]

    if len(originals) == 0:
        return result

    for k, (x, y) in enumerate(points_2d[:, :2]):
        dx = originals[:, 0] - x
        dy = originals[:, 1] - y

        matches = np.flatnonzero((np.abs(dx) < tolerance) & (np.abs(dy) < tolerance))
        if len(matches) > 0:
            result[k, 2] = originals[matches[0], 2]
        else:
            # argmin returns the first of equally near samples
            result[k, 2] = originals[np.argmin(dx * dx + dy * dy), 2]

    return result
