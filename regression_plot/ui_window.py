from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Optional, Tuple

from . import config
from .config import EditorSettings
from .state import EditorState
from .ui_panel_canvas import CanvasPanel, CanvasActor
from .ui_panel_controls import ToolbarPanel, PredictionPanel, ControlsActor


class RegressionWindow(tk.Tk):
    def __init__(self, editor: EditorState, settings: EditorSettings):
        super().__init__()
        self.title(config.WINDOW_TITLE)
        w, h = config.WINDOW_SIZE
        self.geometry(f"{w}x{h}")
        self.resizable(True, True)

        # tk.Tk already has a state() method, so the model lives in `editor`
        self.editor = editor
        self.settings = settings

        self.fit_kind_var = tk.StringVar(value=editor.fit_kind.value)
        self.x_input_var = tk.StringVar(value="")
        self.prediction_var = tk.StringVar(value="Prediction: Y = ?")
        self.status_var = tk.StringVar(value=editor.status_line())

        self._render_after_id: Optional[str] = None
        self._last_mouse_canvas: Optional[Tuple[int, int]] = None
        self._last_query: Optional[str] = None

        self.canvas_actor = CanvasActor(self)
        self.controls_actor = ControlsActor(self)

        self._build_ui()
        self._bind_keys()
        self.canvas_actor._on_canvas_configure()

    # ---------- UI ----------
    def _build_ui(self):
        root = ttk.Frame(self)
        root.pack(fill="both", expand=True)

        self.toolbar_panel = ToolbarPanel(
            self,
            root,
            on_fit_change=self.controls_actor._on_fit_change,
            on_save=self.controls_actor._save,
            on_save_as=self.controls_actor._save_as,
            on_export_png=self.controls_actor._export_png,
        )
        self.canvas_panel = CanvasPanel(self, root, actor=self.canvas_actor)

        # the X entry sits in the canvas header, under the prompt text
        self.prediction_panel = PredictionPanel(self, self.canvas, on_predict=self.controls_actor._predict)
        self._entry_window = self.canvas.create_window(20, 42, anchor="nw", window=self.prediction_panel.frame)

    def _bind_keys(self):
        # the X entry rejects these letters, so they are free as shortcuts
        for key, kind in (("l", "linear"), ("L", "linear"), ("p", "quadratic"), ("P", "quadratic")):
            self.bind(f"<KeyPress-{key}>", lambda _e, k=kind: self.controls_actor._set_fit_kind(k))
        self.bind("<KeyPress-s>", lambda _e: self.controls_actor._save())
        self.bind("<KeyPress-S>", lambda _e: self.controls_actor._save())
