from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Union

import numpy as np

from .data_model import Point
from .fitting import (
    ArrayLike,
    LinearCoeffs,
    QuadraticCoeffs,
    fit_linear,
    fit_quadratic,
)

logger = logging.getLogger(__name__)

Coeffs = Union[LinearCoeffs, QuadraticCoeffs]


class FitKind(str, Enum):
    LINEAR = "linear"
    QUADRATIC = "quadratic"

    @property
    def label(self) -> str:
        if self is FitKind.LINEAR:
            return "Linear"
        return "Polynomial (2nd degree)"

    @classmethod
    def parse(cls, s: Union[str, "FitKind"]) -> "FitKind":
        if isinstance(s, FitKind):
            return s
        key = str(s).strip().lower()
        aliases = {
            "linear": cls.LINEAR,
            "line": cls.LINEAR,
            "l": cls.LINEAR,
            "1": cls.LINEAR,
            "quadratic": cls.QUADRATIC,
            "poly2": cls.QUADRATIC,
            "p": cls.QUADRATIC,
            "2": cls.QUADRATIC,
        }
        if key not in aliases:
            raise ValueError(f"Unknown fit kind: {s!r}")
        return aliases[key]


def _zero_coeffs(kind: FitKind) -> Coeffs:
    if kind is FitKind.LINEAR:
        return LinearCoeffs()
    return QuadraticCoeffs()


@dataclass
class RegressionModel:
    kind: FitKind = FitKind.LINEAR
    coeffs: Coeffs = field(default_factory=LinearCoeffs)

    def __post_init__(self) -> None:
        self.kind = FitKind.parse(self.kind)
        expected = LinearCoeffs if self.kind is FitKind.LINEAR else QuadraticCoeffs
        if not isinstance(self.coeffs, expected):
            raise TypeError(f"{self.kind.value} model needs {expected.__name__}, got {type(self.coeffs).__name__}")

    @classmethod
    def fit(cls, points: Iterable[Point], kind: FitKind = FitKind.LINEAR) -> "RegressionModel":
        kind = FitKind.parse(kind)
        model = cls(kind=kind, coeffs=_zero_coeffs(kind))
        model.rebuild(points)
        return model

    def rebuild(self, points: Iterable[Point], kind: Optional[FitKind] = None) -> None:
        # always a full recompute from the given points
        if kind is not None:
            self.kind = FitKind.parse(kind)
        if self.kind is FitKind.LINEAR:
            self.coeffs = fit_linear(points)
        else:
            self.coeffs = fit_quadratic(points)
        logger.debug("model rebuilt: %s", self.equation())

    def switch_kind(self, kind: FitKind, points: Iterable[Point]) -> None:
        self.rebuild(points, kind=kind)

    def evaluate(self, x: ArrayLike) -> ArrayLike:
        return self.coeffs.evaluate(x)

    def equation(self, digits: int = 3) -> str:
        c = self.coeffs
        if isinstance(c, LinearCoeffs):
            return f"y = {c.slope:.{digits}f}x + {c.intercept:.{digits}f}"
        return f"y = {c.a:.{digits}f}x^2 + {c.b:.{digits}f}x + {c.c:.{digits}f}"

    def residuals(self, points: Iterable[Point]) -> np.ndarray:
        pts = list(points)
        xs = np.array([p.x for p in pts], dtype=np.float64)
        ys = np.array([p.y for p in pts], dtype=np.float64)
        return ys - self.evaluate(xs)

    def far_point_mask(self, points: Iterable[Point], threshold: float) -> np.ndarray:
        """True where |observed - predicted| exceeds threshold (data units)."""
        return np.abs(self.residuals(points)) > threshold
