from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Point:
    # data-space coordinates; NaN/Inf are carried through untouched
    x: float
    y: float


@dataclass
class PointSet:
    points: List[Point] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def __getitem__(self, i: int) -> Point:
        # plain list indexing, negative indices count from the end
        return self.points[i]

    def size(self) -> int:
        return len(self.points)

    def at(self, i: int) -> Point:
        """Point at index i. Same contract as remove_at: no wrap-around, IndexError when invalid."""
        if i < 0 or i >= len(self.points):
            raise IndexError(f"point index {i} out of range (size={len(self.points)})")
        return self.points[i]

    def add(self, p: Point) -> None:
        self.points.append(p)

    def remove_at(self, i: int) -> Optional[Point]:
        """
        Remove and return the point at index i.

        Negative indices are not accepted (no wrap-around). An invalid index
        leaves the set untouched and returns None.
        """
        if i < 0 or i >= len(self.points):
            logger.debug("remove_at(%s) ignored: index out of range (size=%d)", i, len(self.points))
            return None
        return self.points.pop(i)

    def clear(self) -> None:
        self.points.clear()

    def replace(self, points: Iterable[Point]) -> None:
        self.points = list(points)

    def xs(self) -> np.ndarray:
        return np.fromiter((p.x for p in self.points), dtype=np.float64, count=len(self.points))

    def ys(self) -> np.ndarray:
        return np.fromiter((p.y for p in self.points), dtype=np.float64, count=len(self.points))
