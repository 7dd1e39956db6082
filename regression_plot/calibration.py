from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .bounds import Bounds
from .fitting import ArrayLike


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float


@dataclass(frozen=True)
class Margins:
    # screen border (px) reserved for the header text and axis labels
    left: float = 50.0
    right: float = 50.0
    top: float = 170.0
    bottom: float = 50.0


@dataclass(frozen=True)
class AxisMapping:
    # pixel anchors
    p0: float
    p1: float
    # value anchors
    v0: float
    v1: float

    def is_valid(self) -> bool:
        return self.p0 != self.p1 and self.v0 != self.v1

    def px_to_value(self, p: ArrayLike) -> ArrayLike:
        t = (p - self.p0) / (self.p1 - self.p0)
        return self.v0 + t * (self.v1 - self.v0)

    def value_to_px(self, v: ArrayLike) -> ArrayLike:
        t = (v - self.v0) / (self.v1 - self.v0)
        return self.p0 + t * (self.p1 - self.p0)


@dataclass(frozen=True)
class CoordinateMapper:
    """
    Affine map between data space and viewport pixels.

    x grows to the right on both sides; data y grows upward while screen y
    grows downward, so the y mapping runs from the bottom margin (min_y) to
    the top margin (max_y).
    """
    x: AxisMapping
    y: AxisMapping
    bounds: Bounds
    viewport: Viewport

    @classmethod
    def build(cls, bounds: Bounds, viewport: Viewport, margins: Margins = Margins()) -> "CoordinateMapper":
        w = float(viewport.width)
        h = float(viewport.height)

        left = margins.left
        right = max(w - margins.right, left + 1.0)
        bottom = h - margins.bottom
        top = min(margins.top, bottom - 1.0)

        x = AxisMapping(p0=left, p1=right, v0=bounds.min_x, v1=bounds.max_x)
        y = AxisMapping(p0=bottom, p1=top, v0=bounds.min_y, v1=bounds.max_y)
        return cls(x=x, y=y, bounds=bounds, viewport=viewport)

    def to_viewport(self, x: ArrayLike, y: ArrayLike) -> Tuple[ArrayLike, ArrayLike]:
        return self.x.value_to_px(x), self.y.value_to_px(y)

    def to_data(self, sx: ArrayLike, sy: ArrayLike) -> Tuple[ArrayLike, ArrayLike]:
        return self.x.px_to_value(sx), self.y.px_to_value(sy)

    def plot_rect(self) -> Tuple[float, float, float, float]:
        """(x0, y0, x1, y1) of the data area in viewport pixels, top-left first."""
        return (
            min(self.x.p0, self.x.p1),
            min(self.y.p0, self.y.p1),
            max(self.x.p0, self.x.p1),
            max(self.y.p0, self.y.p1),
        )

    def axis_segments(self) -> List[Tuple[Tuple[float, float], Tuple[float, float]]]:
        """X axis along y=0 and Y axis along x=0, each spanning the bounds."""
        b = self.bounds
        x_axis = (self.to_viewport(b.min_x, 0.0), self.to_viewport(b.max_x, 0.0))
        y_axis = (self.to_viewport(0.0, b.min_y), self.to_viewport(0.0, b.max_y))
        return [x_axis, y_axis]
