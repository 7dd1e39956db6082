from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Tuple

from .data_model import Point

DEFAULT_PADDING = 1.0


@dataclass(frozen=True)
class Bounds:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def contains(self, x: float, y: float) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y


DEFAULT_BOUNDS = Bounds(-1.0, 1.0, -1.0, 1.0)


def _axis_range(values: Iterable[float], default: Tuple[float, float], pad: float) -> Tuple[float, float]:
    finite = [v for v in values if math.isfinite(v)]
    if not finite:
        return default
    lo, hi = min(finite) - pad, max(finite) + pad
    if hi <= lo:
        # padding lost to rounding at large magnitudes
        span = max(abs(lo), 1.0) * 1e-6
        lo, hi = lo - span, hi + span
    return lo, hi


def compute_bounds(points: Iterable[Point], padding: float = DEFAULT_PADDING) -> Bounds:
    """
    Padded data-space rectangle around the points.

    Raw extrema are widened by `padding` on all four sides so that a single
    point (or a set with one distinct x or y) still spans a non-empty range.
    An empty set gives DEFAULT_BOUNDS. Non-finite coordinates are left out of
    the extrema; an axis with no finite values uses the default range.
    """
    pts = list(points)
    if not pts:
        return DEFAULT_BOUNDS
    pad = padding if padding > 0 else DEFAULT_PADDING

    min_x, max_x = _axis_range((p.x for p in pts), (DEFAULT_BOUNDS.min_x, DEFAULT_BOUNDS.max_x), pad)
    min_y, max_y = _axis_range((p.y for p in pts), (DEFAULT_BOUNDS.min_y, DEFAULT_BOUNDS.max_y), pad)
    return Bounds(min_x, max_x, min_y, max_y)
