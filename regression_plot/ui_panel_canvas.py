from __future__ import annotations

import math
import tkinter as tk
from tkinter import ttk
from typing import List, Tuple

from . import config

HINT_TEXT = "LMB=add point; RMB=remove; S=save; L=Linear; P=Poly2"


class CanvasPanel:
    def __init__(self, owner, parent: tk.Widget, *, actor) -> None:
        self.owner = owner
        self.actor = actor

        frame = ttk.Frame(parent)
        self.frame = frame
        frame.pack(side="top", fill="both", expand=True)

        owner.canvas = tk.Canvas(frame, background=config.BACKGROUND, highlightthickness=0)
        owner.canvas.configure(takefocus=1)
        owner.canvas.pack(side="top", fill="both", expand=True)
        owner.canvas.bind("<Configure>", actor._on_canvas_configure)
        owner.canvas.bind("<Button-1>", actor._on_click)
        owner.canvas.bind("<Button-3>", actor._on_right_click)
        owner.canvas.bind("<Motion>", actor._on_motion)
        owner.canvas.bind("<Leave>", actor._on_canvas_leave)
        owner.canvas.bind("<KeyPress-1>", lambda _e: owner.controls_actor._set_fit_kind("linear"))
        owner.canvas.bind("<KeyPress-2>", lambda _e: owner.controls_actor._set_fit_kind("quadratic"))


class CanvasActor:
    def __init__(self, owner) -> None:
        object.__setattr__(self, "owner", owner)

    def __getattr__(self, name):
        return getattr(self.owner, name)

    def __setattr__(self, name, value) -> None:
        if name == "owner":
            object.__setattr__(self, name, value)
            return
        setattr(self.owner, name, value)

    def _on_canvas_configure(self, evt=None):
        # Avoid thrashing when resizing: schedule a single re-render
        if getattr(self, "_render_after_id", None) is not None:
            self.after_cancel(self._render_after_id)
        size = (evt.width, evt.height) if evt is not None else None
        self._render_after_id = self.after(30, lambda: self._apply_resize(size))

    def _apply_resize(self, size) -> None:
        self._render_after_id = None
        if size is None:
            self.canvas.update_idletasks()
            size = (self.canvas.winfo_width(), self.canvas.winfo_height())
        w, h = max(10, int(size[0])), max(10, int(size[1]))
        self.editor.viewport_resized(w, h)
        self._redraw()

    # ---------- drawing ----------

    def _redraw(self):
        c = self.canvas
        c.delete("scene")
        self._draw_header()
        self._draw_axes()
        self._draw_points()
        self._draw_curve()
        if self._last_mouse_canvas is not None:
            self._draw_cursor_text(*self._last_mouse_canvas)

    def _draw_header(self) -> None:
        c = self.canvas
        w = self.editor.viewport.width
        right_col = max(400, int(w / 2))
        c.create_text(20, 20, anchor="nw", text="Enter X value (press Enter):",
                      fill=config.TEXT_COLOR, tags=("scene",))
        c.create_text(20, 80, anchor="nw", text=self.prediction_var.get(),
                      fill=config.POINT_COLOR, tags=("scene",))
        c.create_text(right_col, 20, anchor="nw", text=HINT_TEXT,
                      fill=config.TEXT_COLOR, tags=("scene",))
        c.create_text(right_col, 50, anchor="nw", text=f"Regression {self.editor.fit_kind.label}",
                      fill="#ff00ff", tags=("scene",))
        c.create_text(right_col, 80, anchor="nw", text=self.editor.model.equation(),
                      fill=config.CURVE_COLOR, tags=("scene",))

    def _draw_axes(self) -> None:
        c = self.canvas
        (x_axis, y_axis) = self.editor.mapper.axis_segments()
        for (x0, y0), (x1, y1) in (x_axis, y_axis):
            c.create_line(x0, y0, x1, y1, fill=config.AXIS_COLOR, tags=("scene",))
        lx, ly = x_axis[1]
        c.create_text(lx - 20, ly + 5, anchor="nw", text="X", fill=config.AXIS_COLOR, tags=("scene",))
        yx, yy = y_axis[1]
        c.create_text(yx + 5, yy, anchor="nw", text="Y", fill=config.AXIS_COLOR, tags=("scene",))

    def _draw_points(self) -> None:
        c = self.canvas
        r = config.POINT_RADIUS_PX
        sx, sy = self.editor.screen_points()
        far = self.editor.far_points()
        for px, py, is_far in zip(sx, sy, far):
            if not (math.isfinite(px) and math.isfinite(py)):
                continue
            if is_far:
                c.create_oval(px - r - 3, py - r - 3, px + r + 3, py + r + 3,
                              outline=config.FAR_RING_COLOR, tags=("scene",))
            c.create_oval(px - r, py - r, px + r, py + r,
                          fill=config.POINT_COLOR, outline="", tags=("scene",))

    def _draw_curve(self) -> None:
        pts: List[Tuple[float, float]] = self.editor.curve_samples(self.settings.curve_segments)
        if len(pts) < 2:
            return
        flat = [v for xy in pts for v in xy]
        self.canvas.create_line(*flat, fill=config.CURVE_COLOR, width=2, tags=("scene",))

    def _draw_cursor_text(self, cx: int, cy: int) -> None:
        self.canvas.delete("cursor")
        self.canvas.create_text(cx + 10, cy + 10, anchor="nw", text=self.editor.cursor_text(cx, cy),
                                fill=config.TEXT_COLOR, tags=("scene", "cursor"))

    # ---------- events ----------

    def _on_click(self, event):
        self.canvas.focus_set()
        self.editor.point_added(event.x, event.y)
        self.owner.controls_actor._after_change()

    def _on_right_click(self, event):
        self.canvas.focus_set()
        removed = self.editor.point_removal_requested(event.x, event.y)
        if removed is None:
            return
        self.owner.controls_actor._after_change()

    def _on_motion(self, event):
        self._last_mouse_canvas = (event.x, event.y)
        self._draw_cursor_text(event.x, event.y)

    def _on_canvas_leave(self, _event):
        self._last_mouse_canvas = None
        self.canvas.delete("cursor")
