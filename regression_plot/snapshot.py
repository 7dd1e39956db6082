from __future__ import annotations

import logging
from typing import Optional

from PIL import Image, ImageDraw

from . import config
from .state import EditorState

logger = logging.getLogger(__name__)


def render_snapshot(state: EditorState, *, title: Optional[str] = None) -> Image.Image:
    """
    Draw the current scene (axes, points, fitted curve, header text) into an
    RGB image the size of the state's viewport, using the same mapper as the
    canvas so both agree pixel for pixel.
    """
    w = max(1, int(round(state.viewport.width)))
    h = max(1, int(round(state.viewport.height)))
    img = Image.new("RGB", (w, h), config.BACKGROUND)
    draw = ImageDraw.Draw(img)

    for (x0, y0), (x1, y1) in state.mapper.axis_segments():
        draw.line([(x0, y0), (x1, y1)], fill=config.AXIS_COLOR, width=1)

    curve = state.curve_samples()
    if len(curve) >= 2:
        draw.line(curve, fill=config.CURVE_COLOR, width=2)

    r = config.POINT_RADIUS_PX
    sx, sy = state.screen_points()
    far = state.far_points()
    for px, py, is_far in zip(sx, sy, far):
        if not (abs(px) < 1e9 and abs(py) < 1e9):
            continue
        if is_far:
            draw.ellipse([px - r - 3, py - r - 3, px + r + 3, py + r + 3], outline=config.FAR_RING_COLOR)
        draw.ellipse([px - r, py - r, px + r, py + r], fill=config.POINT_COLOR)

    draw.text((20, 20), title or f"Regression {state.fit_kind.label}", fill=config.TEXT_COLOR)
    draw.text((20, 50), state.model.equation(), fill=config.TEXT_COLOR)
    return img


def save_snapshot(state: EditorState, path: str) -> None:
    """Write the rendered scene to `path`; format follows the extension. OSError propagates."""
    img = render_snapshot(state)
    img.save(path)
    logger.info("Snapshot written to %s", path)
