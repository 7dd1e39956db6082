from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Tuple, Union

import numpy as np

from .data_model import Point

logger = logging.getLogger(__name__)

# |det| below this treats the normal-equation matrix as singular
SINGULAR_DET_EPS = 1e-12
# a degree-2 fit is underdetermined below three points
MIN_QUADRATIC_POINTS = 3

ArrayLike = Union[float, np.ndarray]


@dataclass(frozen=True)
class LinearCoeffs:
    slope: float = 0.0
    intercept: float = 0.0

    def evaluate(self, x: ArrayLike) -> ArrayLike:
        return self.slope * x + self.intercept


@dataclass(frozen=True)
class QuadraticCoeffs:
    # y = a*x^2 + b*x + c
    a: float = 0.0
    b: float = 0.0
    c: float = 0.0

    def evaluate(self, x: ArrayLike) -> ArrayLike:
        return self.a * x * x + self.b * x + self.c


def _as_arrays(points: Iterable[Point]) -> Tuple[np.ndarray, np.ndarray]:
    pts = list(points)
    xs = np.array([p.x for p in pts], dtype=np.float64)
    ys = np.array([p.y for p in pts], dtype=np.float64)
    return xs, ys


def _det3(m: np.ndarray) -> float:
    return float(
        m[0, 0] * (m[1, 1] * m[2, 2] - m[1, 2] * m[2, 1])
        - m[0, 1] * (m[1, 0] * m[2, 2] - m[1, 2] * m[2, 0])
        + m[0, 2] * (m[1, 0] * m[2, 1] - m[1, 1] * m[2, 0])
    )


def fit_linear(points: Iterable[Point]) -> LinearCoeffs:
    """
    Ordinary least-squares line y = slope*x + intercept.

    slope = sum((x - mean_x) * (y - mean_y)) / sum((x - mean_x)^2)

    Degenerate inputs do not raise:
      - no points          -> (0, 0)
      - all x identical    -> slope 0, intercept mean_y (horizontal line)
    """
    xs, ys = _as_arrays(points)
    if xs.size == 0:
        return LinearCoeffs(0.0, 0.0)

    mean_x = float(np.mean(xs))
    mean_y = float(np.mean(ys))
    dx = xs - mean_x
    dy = ys - mean_y
    numerator = float(np.sum(dx * dy))
    denominator = float(np.sum(dx * dx))

    slope = 0.0
    if denominator != 0.0:
        slope = numerator / denominator
    else:
        logger.debug("linear fit: zero x variance over %d points, using horizontal line", xs.size)
    intercept = mean_y - slope * mean_x
    return LinearCoeffs(slope, intercept)


def quadratic_normal_equations(points: Iterable[Point]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Build the 3x3 normal equations for (c, b, a):

        [ n    Sx   Sx2 ] [c]   [Sy  ]
        [ Sx   Sx2  Sx3 ] [b] = [Sxy ]
        [ Sx2  Sx3  Sx4 ] [a]   [Sx2y]

    All sums are accumulated in float64.
    """
    xs, ys = _as_arrays(points)
    x2 = xs * xs
    x3 = x2 * xs
    x4 = x3 * xs

    n = float(xs.size)
    sx, sx2, sx3, sx4 = float(xs.sum()), float(x2.sum()), float(x3.sum()), float(x4.sum())
    sy, sxy, sx2y = float(ys.sum()), float((xs * ys).sum()), float((x2 * ys).sum())

    A = np.array(
        [
            [n, sx, sx2],
            [sx, sx2, sx3],
            [sx2, sx3, sx4],
        ],
        dtype=np.float64,
    )
    B = np.array([sy, sxy, sx2y], dtype=np.float64)
    return A, B


def fit_quadratic(points: Iterable[Point]) -> QuadraticCoeffs:
    """
    Least-squares parabola y = a*x^2 + b*x + c solved with Cramer's rule.

    Returns (0, 0, 0) when fewer than three points are given or when the
    normal-equation matrix is singular (|det| < SINGULAR_DET_EPS), e.g. when
    the points only cover one or two distinct x values.
    """
    pts = list(points)
    if len(pts) < MIN_QUADRATIC_POINTS:
        return QuadraticCoeffs(0.0, 0.0, 0.0)

    A, B = quadratic_normal_equations(pts)
    D = _det3(A)
    if abs(D) < SINGULAR_DET_EPS:
        logger.debug("quadratic fit: singular system (det=%g) over %d points", D, len(pts))
        return QuadraticCoeffs(0.0, 0.0, 0.0)

    # Cramer: replace column j by B; column order is (c, b, a)
    solved = []
    for col in range(3):
        Aj = A.copy()
        Aj[:, col] = B
        solved.append(_det3(Aj) / D)
    c, b, a = solved
    return QuadraticCoeffs(a, b, c)
