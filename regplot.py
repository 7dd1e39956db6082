"""
Interactive regression plot.

Loads a two-column point file, shows the best-fit line or parabola and lets
you add (left click) and remove (right click) points while the fit updates.

Usage:
    $ python regplot.py [--data data.csv] [--save-to data_updated.csv] [--fit quadratic]
"""
from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from regression_plot.config import load_settings, save_settings
from regression_plot.logging_config import setup_logging
from regression_plot.regression import FitKind
from regression_plot.state import EditorState
from regression_plot.ui_window import RegressionWindow

logger = logging.getLogger("regression_plot.app")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Interactive linear / quadratic regression plot")
    p.add_argument("--data", help="two-column point file to load (default from settings: data.csv)")
    p.add_argument("--save-to", dest="save_to", help="file written by Save / the S key")
    p.add_argument("--fit", choices=[k.value for k in FitKind], help="initial regression type")
    p.add_argument("--threshold-px", dest="threshold_px", type=float,
                   help="max distance (px) for right-click removal")
    p.add_argument("--log-level", dest="log_level", default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    p.add_argument("--log-file", dest="log_file", default=None)
    p.add_argument("--no-save-settings", dest="save_settings", action="store_false",
                   help="do not write the settings file on exit")
    return p


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)

    settings = load_settings()
    if args.data:
        settings.data_path = args.data
    if args.save_to:
        settings.save_path = args.save_to
    if args.fit:
        settings.fit_kind = args.fit
    if args.threshold_px is not None:
        settings.remove_threshold_px = args.threshold_px

    try:
        fit_kind = FitKind.parse(settings.fit_kind)
    except ValueError:
        logger.warning("Unknown fit kind %r in settings, using linear", settings.fit_kind)
        fit_kind = FitKind.LINEAR

    editor = EditorState.load(
        settings.data_path,
        fit_kind=fit_kind,
        padding=settings.bounds_padding,
        remove_threshold_px=settings.remove_threshold_px,
        highlight_threshold=settings.highlight_threshold,
    )
    logger.info("Starting with %d point(s), %s", len(editor.points), editor.model.equation())

    app = RegressionWindow(editor, settings)
    app.mainloop()

    if args.save_settings:
        try:
            save_settings(settings)
        except OSError as e:
            logger.warning("Could not write settings: %s", e)


if __name__ == "__main__":
    main()
