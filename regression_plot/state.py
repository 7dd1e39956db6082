"""
Editor State
============
The single object the frontend talks to. It owns the point set and every
value derived from it (bounds, regression model, coordinate mapper) and
exposes one method per frontend event.

Each event mutates the points, the fit kind or the viewport and then runs the
full recompute cascade (bounds -> model -> mapper) before returning, so the
frontend can read consistent state right after any call.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from . import config
from .bounds import Bounds, compute_bounds
from .calibration import CoordinateMapper, Margins, Viewport
from .data_model import Point, PointSet
from .points_csv import load_points, save_points
from .proximity import find_nearest
from .regression import FitKind, RegressionModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Prediction:
    ok: bool
    x: Optional[float] = None
    y: Optional[float] = None
    message: str = ""

    def text(self) -> str:
        if not self.ok:
            return f"Prediction: {self.message}"
        return f"Prediction: Y = {self.y:.6f}"


def parse_number(text: str) -> Optional[float]:
    """
    Parse a finite decimal number. Digit separators ("1_000") and the
    nan/inf spellings float() would accept are rejected, as is anything
    that overflows to infinity ("1e999").
    """
    s = (text or "").strip()
    if not s or "_" in s:
        return None
    try:
        value = float(s)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def demo_points() -> List[Point]:
    return [Point(x, y) for x, y in config.DEMO_POINTS]


@dataclass
class EditorState:
    points: PointSet = field(default_factory=PointSet)
    fit_kind: FitKind = FitKind.LINEAR
    viewport: Viewport = Viewport(*config.WINDOW_SIZE)
    margins: Margins = config.MARGINS
    padding: float = config.BOUNDS_PADDING
    remove_threshold_px: float = config.REMOVE_THRESHOLD_PX
    highlight_threshold: float = config.HIGHLIGHT_THRESHOLD

    # derived, rebuilt by recompute()
    bounds: Bounds = field(init=False)
    model: RegressionModel = field(init=False)
    mapper: CoordinateMapper = field(init=False)

    def __post_init__(self) -> None:
        self.fit_kind = FitKind.parse(self.fit_kind)
        self.model = RegressionModel.fit([], self.fit_kind)
        self.recompute()

    @classmethod
    def from_points(cls, points: Iterable[Point], **kwargs) -> "EditorState":
        return cls(points=PointSet(list(points)), **kwargs)

    @classmethod
    def load(
        cls,
        path: str,
        fallback: Optional[Sequence[Point]] = None,
        **kwargs,
    ) -> "EditorState":
        """
        Build a state from a data file. An unreadable or empty file seeds the
        fallback points (the demo set by default) instead.
        """
        fallback = list(fallback) if fallback is not None else demo_points()
        try:
            loaded = load_points(path)
        except OSError as e:
            logger.warning("Unable to open %s (%s). Using demo data...", path, e)
            loaded = []
        else:
            if not loaded:
                logger.warning("Empty or invalid data in %s. Using demo data...", path)
        return cls.from_points(loaded or fallback, **kwargs)

    # ---------- recompute cascade ----------

    def recompute(self) -> None:
        self.bounds = compute_bounds(self.points, self.padding)
        self.model.rebuild(self.points, self.fit_kind)
        self.mapper = CoordinateMapper.build(self.bounds, self.viewport, self.margins)

    # ---------- frontend events ----------

    def point_added(self, sx: float, sy: float) -> Point:
        x, y = self.mapper.to_data(float(sx), float(sy))
        p = Point(float(x), float(y))
        self.points.add(p)
        logger.debug("Added point (%.3f, %.3f)", p.x, p.y)
        self.recompute()
        return p

    def point_removal_requested(self, sx: float, sy: float) -> Optional[Point]:
        idx = find_nearest((sx, sy), self.points, self.mapper, self.remove_threshold_px)
        if idx is None:
            logger.debug("No point within %.1f px of (%.1f, %.1f)", self.remove_threshold_px, sx, sy)
            return None
        removed = self.points.remove_at(idx)
        if removed is not None:
            logger.debug("Removed point #%d (%.3f, %.3f)", idx, removed.x, removed.y)
            self.recompute()
        return removed

    def remove_at(self, i: int) -> Optional[Point]:
        removed = self.points.remove_at(i)
        if removed is not None:
            self.recompute()
        return removed

    def fit_kind_changed(self, kind: Union[FitKind, str]) -> None:
        self.fit_kind = FitKind.parse(kind)
        logger.info("Current regression: %s", self.fit_kind.label)
        self.recompute()

    def viewport_resized(self, width: float, height: float) -> None:
        self.viewport = Viewport(float(width), float(height))
        self.recompute()

    def prediction_queried(self, text: str) -> Prediction:
        x = parse_number(text)
        if x is None:
            logger.info("Invalid X for prediction: %r", text)
            return Prediction(ok=False, message="invalid X")
        y = float(self.model.evaluate(x))
        return Prediction(ok=True, x=x, y=y)

    def replace_points(self, points: Iterable[Point]) -> None:
        self.points.replace(points)
        self.recompute()

    # ---------- persistence ----------

    def save(self, path: str) -> bool:
        try:
            save_points(path, self.points)
        except OSError as e:
            logger.error("Unable to open save file %s: %s", path, e)
            return False
        return True

    # ---------- read-only views for rendering ----------

    def screen_points(self) -> Tuple[np.ndarray, np.ndarray]:
        return self.mapper.to_viewport(self.points.xs(), self.points.ys())

    def far_points(self) -> np.ndarray:
        return self.model.far_point_mask(self.points, self.highlight_threshold)

    def curve_samples(self, segments: int = config.CURVE_SEGMENTS) -> List[Tuple[float, float]]:
        """Viewport polyline of the fitted curve across the padded x range."""
        if not len(self.points):
            return []
        segments = max(1, int(segments))
        xs = np.linspace(self.bounds.min_x, self.bounds.max_x, segments + 1)
        ys = self.model.evaluate(xs)
        sx, sy = self.mapper.to_viewport(xs, ys)
        return [(float(a), float(b)) for a, b in zip(sx, sy) if np.isfinite(a) and np.isfinite(b)]

    def cursor_text(self, sx: float, sy: float) -> str:
        x, y = self.mapper.to_data(float(sx), float(sy))
        return f"X={x:.2f}, Y={y:.2f}"

    def status_line(self) -> str:
        return f"{len(self.points)} point(s) | {self.fit_kind.label} | {self.model.equation()}"
