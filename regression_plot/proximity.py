from __future__ import annotations

from typing import Iterable, Optional, Tuple

import numpy as np

from .calibration import CoordinateMapper
from .data_model import Point

DEFAULT_THRESHOLD_PX = 10.0


def find_nearest(
    query: Tuple[float, float],
    points: Iterable[Point],
    mapper: CoordinateMapper,
    threshold_px: float = DEFAULT_THRESHOLD_PX,
) -> Optional[int]:
    """
    Index of the point closest to `query` (viewport px), or None.

    Distances are measured in viewport space. The minimum must be strictly
    below threshold_px. Exact ties go to the earliest point.
    """
    pts = list(points)
    if not pts:
        return None

    xs = np.array([p.x for p in pts], dtype=np.float64)
    ys = np.array([p.y for p in pts], dtype=np.float64)
    sx, sy = mapper.to_viewport(xs, ys)

    d = np.hypot(sx - float(query[0]), sy - float(query[1]))
    d = np.where(np.isnan(d), np.inf, d)

    best = int(np.argmin(d))  # first occurrence on ties
    if d[best] < threshold_px:
        return best
    return None
