import json
import logging

import pytest

from regression_plot.config import EditorSettings, load_settings, save_settings
from regression_plot.logging_config import setup_logging
from regression_plot.state import EditorState


def test_missing_file_gives_defaults(tmp_path):
    assert load_settings(tmp_path / "missing.json") == EditorSettings()


def test_corrupt_file_gives_defaults(tmp_path, caplog):
    path = tmp_path / "cfg.json"
    path.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="regression_plot"):
        assert load_settings(path) == EditorSettings()
    assert "unreadable" in caplog.text


def test_non_object_json_gives_defaults(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert load_settings(path) == EditorSettings()


def test_partial_file_merges_and_ignores_unknown_keys(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"save_path": "out.csv", "bogus": 1}), encoding="utf-8")
    s = load_settings(path)
    assert s.save_path == "out.csv"
    assert s.data_path == EditorSettings().data_path


@pytest.mark.parametrize("key, value", [
    ("bounds_padding", "wide"),
    ("data_path", None),
    ("remove_threshold_px", "10"),
    ("highlight_threshold", True),
    ("curve_segments", 12.5),
    ("fit_kind", ["linear"]),
])
def test_wrongly_typed_value_keeps_default(tmp_path, caplog, key, value):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({key: value, "save_path": "out.csv"}), encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="regression_plot"):
        s = load_settings(path)
    assert getattr(s, key) == getattr(EditorSettings(), key)
    assert s.save_path == "out.csv"
    assert key in caplog.text


def test_int_accepted_where_float_expected(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"remove_threshold_px": 15, "bounds_padding": 2}), encoding="utf-8")
    s = load_settings(path)
    assert s.remove_threshold_px == 15.0
    assert isinstance(s.remove_threshold_px, float)
    assert s.bounds_padding == 2.0


def test_loaded_settings_drive_the_editor(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({
        "bounds_padding": "wide",
        "data_path": None,
        "remove_threshold_px": "10",
    }), encoding="utf-8")
    s = load_settings(path)
    editor = EditorState.load(
        str(tmp_path / s.data_path),
        padding=s.bounds_padding,
        remove_threshold_px=s.remove_threshold_px,
    )
    assert editor.points.size() == 5
    assert editor.point_removal_requested(0, 0) is None


def test_save_and_reload(tmp_path):
    path = tmp_path / "cfg.json"
    s = EditorSettings(fit_kind="quadratic", remove_threshold_px=15.0)
    save_settings(s, path)
    assert load_settings(path) == s


def test_setup_logging_does_not_duplicate_handlers():
    setup_logging(logging.DEBUG)
    setup_logging(logging.INFO)
    logger = logging.getLogger("regression_plot")
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
