"""
Settings and constants for the regression plot editor.

Layout constants live at module level. User-tunable settings are an
EditorSettings dataclass persisted as JSON in the home directory; a missing or
corrupt file never blocks startup, it just yields the defaults.
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import List, Optional, Tuple

from .calibration import Margins

logger = logging.getLogger(__name__)

CONFIG_PATH = Path.home() / ".regplot_config.json"

WINDOW_SIZE: Tuple[int, int] = (800, 600)
WINDOW_TITLE = "Regression: Linear or Polynomial"

MARGINS = Margins(left=50.0, right=50.0, top=170.0, bottom=50.0)

BOUNDS_PADDING = 1.0
REMOVE_THRESHOLD_PX = 10.0
HIGHLIGHT_THRESHOLD = 0.5
CURVE_SEGMENTS = 200
POINT_RADIUS_PX = 3

DEFAULT_DATA_PATH = "data.csv"
DEFAULT_SAVE_PATH = "data_updated.csv"

DEMO_POINTS: List[Tuple[float, float]] = [
    (1.0, 1.0),
    (2.0, 2.0),
    (3.0, 1.3),
    (4.0, 3.0),
    (5.0, 4.5),
]

# colours shared by the Tk canvas and the PNG snapshot
BACKGROUND = "#1e1e3c"
AXIS_COLOR = "#ffffff"
CURVE_COLOR = "#00ff00"
POINT_COLOR = "#ff0000"
FAR_RING_COLOR = "#ffa500"
TEXT_COLOR = "#ffffff"


@dataclass
class EditorSettings:
    data_path: str = DEFAULT_DATA_PATH
    save_path: str = DEFAULT_SAVE_PATH
    fit_kind: str = "linear"
    remove_threshold_px: float = REMOVE_THRESHOLD_PX
    highlight_threshold: float = HIGHLIGHT_THRESHOLD
    bounds_padding: float = BOUNDS_PADDING
    curve_segments: int = CURVE_SEGMENTS


def load_settings(path: Optional[Path] = None) -> EditorSettings:
    path = Path(path) if path is not None else CONFIG_PATH
    settings = EditorSettings()
    if not path.exists():
        return settings

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", path, e)
        return settings
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
        return settings

    for f in fields(EditorSettings):
        if f.name not in data:
            continue
        default = getattr(settings, f.name)
        value = _checked_value(data[f.name], default)
        if value is None:
            logger.warning("Ignoring setting %s=%r in %s: expected %s",
                           f.name, data[f.name], path, type(default).__name__)
            continue
        setattr(settings, f.name, value)
    return settings


def _checked_value(value, default):
    """Return value coerced to the default's type, or None when it does not fit."""
    # bool is an int subclass, but never a valid number here
    if isinstance(value, bool):
        return None
    if isinstance(default, float) and isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, type(default)):
        return value
    return None


def save_settings(settings: EditorSettings, path: Optional[Path] = None) -> None:
    path = Path(path) if path is not None else CONFIG_PATH
    path.write_text(json.dumps(asdict(settings), indent=2), encoding="utf-8")
    logger.debug("Settings written to %s", path)
