from __future__ import annotations

import csv
import io
import logging
import re
from typing import Iterable, List, Optional

from .data_model import Point

logger = logging.getLogger(__name__)

# x and y separated by a comma, a semicolon or plain whitespace
_FIELD_SPLIT = re.compile(r"\s*[,;]\s*|\s+")


def parse_points_line(line: str) -> Optional[Point]:
    """
    Parse one "x,y" / "x;y" / "x y" line. Fields beyond the second are
    ignored. Returns None for blank or malformed lines (headers included).
    """
    s = line.strip()
    if not s:
        return None
    fields = _FIELD_SPLIT.split(s)
    if len(fields) < 2:
        return None
    try:
        return Point(float(fields[0]), float(fields[1]))
    except ValueError:
        return None


def parse_points_text(text: str) -> List[Point]:
    points: List[Point] = []
    skipped = 0
    for line in text.splitlines():
        p = parse_points_line(line)
        if p is None:
            if line.strip():
                skipped += 1
            continue
        points.append(p)
    if skipped:
        logger.debug("Skipped %d unparseable line(s)", skipped)
    return points


def load_points(path: str) -> List[Point]:
    """Read points from a two-column text file. OSError propagates."""
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        points = parse_points_text(f.read())
    logger.info("Loaded %d point(s) from %s", len(points), path)
    return points


def points_csv_string(points: Iterable[Point], delimiter: str = ",") -> str:
    buf = io.StringIO()
    w = csv.writer(buf, delimiter=delimiter, lineterminator="\n")
    for p in points:
        w.writerow([p.x, p.y])
    return buf.getvalue()


def save_points(path: str, points: Iterable[Point], delimiter: str = ",") -> None:
    """Write one "x,y" row per point, overwriting `path`. OSError propagates."""
    pts = list(points)
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f, delimiter=delimiter, lineterminator="\n")
        for p in pts:
            w.writerow([p.x, p.y])
    logger.info("Saved %d point(s) to %s", len(pts), path)
