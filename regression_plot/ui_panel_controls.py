from __future__ import annotations

import re
import tkinter as tk
from tkinter import ttk, filedialog, messagebox
from typing import Callable

from .regression import FitKind
from .snapshot import save_snapshot

# characters a partially typed float may contain
_NUMBER_CHARS = re.compile(r"^[0-9eE+\-.]*$")


class ToolbarPanel:
    def __init__(
        self,
        owner,
        parent: tk.Widget,
        *,
        on_fit_change: Callable[[], None],
        on_save: Callable[[], None],
        on_save_as: Callable[[], None],
        on_export_png: Callable[[], None],
    ) -> None:
        self.owner = owner
        self.frame = ttk.Frame(parent, padding=(8, 6, 8, 4))
        self.frame.pack(side="top", fill="x")

        ttk.Label(self.frame, text="Regression:").pack(side="left")
        for lbl, kind in [("Linear", FitKind.LINEAR), ("Poly2", FitKind.QUADRATIC)]:
            ttk.Radiobutton(
                self.frame,
                text=lbl,
                value=kind.value,
                variable=owner.fit_kind_var,
                command=on_fit_change,
            ).pack(side="left", padx=(8, 0))

        ttk.Separator(self.frame, orient="vertical").pack(side="left", fill="y", padx=10)
        ttk.Button(self.frame, text="Save", command=on_save).pack(side="left")
        ttk.Button(self.frame, text="Save As…", command=on_save_as).pack(side="left", padx=(8, 0))
        ttk.Button(self.frame, text="Export PNG…", command=on_export_png).pack(side="left", padx=(8, 0))

        ttk.Label(self.frame, textvariable=owner.status_var).pack(side="right")


class PredictionPanel:
    """Entry for the X value; lives inside the canvas header via create_window."""

    def __init__(self, owner, parent: tk.Widget, *, on_predict: Callable[[], None]) -> None:
        self.owner = owner
        frame = ttk.Frame(parent)
        self.frame = frame

        vcmd = (frame.register(self._accepts), "%P")
        owner.x_entry = ttk.Entry(
            frame,
            textvariable=owner.x_input_var,
            width=16,
            validate="key",
            validatecommand=vcmd,
        )
        owner.x_entry.pack(side="left")
        ttk.Button(frame, text="Predict", command=on_predict).pack(side="left", padx=(6, 0))
        owner.x_entry.bind("<Return>", lambda _e: on_predict())
        owner.x_entry.bind("<KP_Enter>", lambda _e: on_predict())

    @staticmethod
    def _accepts(proposed: str) -> bool:
        return bool(_NUMBER_CHARS.match(proposed))


class ControlsActor:
    def __init__(self, owner) -> None:
        object.__setattr__(self, "owner", owner)

    def __getattr__(self, name):
        return getattr(self.owner, name)

    def __setattr__(self, name, value) -> None:
        if name == "owner":
            object.__setattr__(self, name, value)
            return
        setattr(self.owner, name, value)

    def _on_fit_change(self) -> None:
        self._set_fit_kind(self.fit_kind_var.get())

    def _set_fit_kind(self, kind) -> None:
        kind = FitKind.parse(kind)
        self.editor.fit_kind_changed(kind)
        if self.fit_kind_var.get() != kind.value:
            self.fit_kind_var.set(kind.value)
        self.settings.fit_kind = kind.value
        self._after_change()

    def _predict(self) -> None:
        result = self.editor.prediction_queried(self.x_input_var.get())
        self._last_query = self.x_input_var.get() if result.ok else None
        self.prediction_var.set(result.text())
        self.owner.canvas_actor._redraw()

    def _refresh_prediction(self) -> None:
        # keep a shown prediction in sync with the current model
        if getattr(self, "_last_query", None):
            self.prediction_var.set(self.editor.prediction_queried(self._last_query).text())

    def _after_change(self) -> None:
        self._refresh_prediction()
        self.status_var.set(self.editor.status_line())
        self.owner.canvas_actor._redraw()

    def _save(self) -> None:
        path = self.settings.save_path
        if self.editor.save(path):
            self.status_var.set(f"Data saved to {path}")
        else:
            self._show_error("Save failed", f"Unable to open save file:\n{path}")

    def _save_as(self) -> None:
        path = filedialog.asksaveasfilename(
            parent=self.owner,
            defaultextension=".csv",
            filetypes=[("CSV files", "*.csv"), ("Text files", "*.txt"), ("All files", "*.*")],
            title="Save points as…",
        )
        if not path:
            return
        if self.editor.save(path):
            self.settings.save_path = path
            self.status_var.set(f"Data saved to {path}")
        else:
            self._show_error("Save failed", f"Unable to open save file:\n{path}")

    def _export_png(self) -> None:
        path = filedialog.asksaveasfilename(
            parent=self.owner,
            defaultextension=".png",
            filetypes=[("PNG images", "*.png"), ("All files", "*.*")],
            title="Export plot as…",
        )
        if not path:
            return
        try:
            save_snapshot(self.editor, path)
        except (OSError, ValueError) as e:
            self._show_error("Export failed", str(e))
            return
        self.status_var.set(f"Exported {path}")

    def _show_error(self, title: str, message: str) -> None:
        messagebox.showerror(title, message, parent=self.owner)
