"""Event dispatch on EditorState, including the load -> quadratic -> predict scenario."""

import logging

import numpy as np
import pytest

from regression_plot.bounds import DEFAULT_BOUNDS, compute_bounds
from regression_plot.calibration import Viewport
from regression_plot.data_model import Point
from regression_plot.fitting import fit_linear, fit_quadratic
from regression_plot.regression import FitKind
from regression_plot.state import EditorState, demo_points, parse_number

SCENARIO = [(1, 1), (2, 2), (3, 1.3), (4, 3), (5, 4.5)]


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("".join(f"{x},{y}\n" for x, y in SCENARIO), encoding="utf-8")
    return str(path)


@pytest.fixture
def editor():
    return EditorState.from_points(demo_points())


# =============================================================================
# LOADING
# =============================================================================

def test_end_to_end_quadratic_prediction(data_file):
    st = EditorState.load(data_file)
    assert len(st.points) == 5

    st.fit_kind_changed(FitKind.QUADRATIC)
    result = st.prediction_queried("6")

    expected = fit_quadratic([Point(x, y) for x, y in SCENARIO]).evaluate(6.0)
    assert result.ok
    assert result.x == 6.0
    assert result.y == pytest.approx(expected)
    a, b, c = np.polyfit([x for x, _ in SCENARIO], [y for _, y in SCENARIO], 2)
    assert result.y == pytest.approx(a * 36 + b * 6 + c, rel=1e-6)


def test_missing_file_seeds_demo_points(tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger="regression_plot"):
        st = EditorState.load(str(tmp_path / "missing.csv"))
    assert list(st.points) == demo_points()
    assert "demo data" in caplog.text


def test_empty_file_seeds_caller_fallback(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("header only\n\n", encoding="utf-8")
    fallback = [Point(0, 0), Point(1, 2)]
    st = EditorState.load(str(path), fallback=fallback)
    assert list(st.points) == fallback


def test_load_passes_options(data_file):
    st = EditorState.load(data_file, fit_kind="quadratic", remove_threshold_px=20.0)
    assert st.fit_kind is FitKind.QUADRATIC
    assert st.remove_threshold_px == 20.0


# =============================================================================
# EVENTS
# =============================================================================

def test_initial_state_is_consistent(editor):
    assert editor.bounds == compute_bounds(editor.points)
    assert editor.model.coeffs == fit_linear(editor.points)
    assert editor.mapper.viewport == editor.viewport


def test_empty_state_uses_defaults():
    st = EditorState()
    assert st.bounds == DEFAULT_BOUNDS
    assert st.curve_samples() == []
    assert st.prediction_queried("2").y == 0.0


def test_point_added_maps_viewport_to_data(editor):
    sx, sy = editor.mapper.to_viewport(2.5, 3.0)
    p = editor.point_added(sx, sy)
    assert p.x == pytest.approx(2.5)
    assert p.y == pytest.approx(3.0)
    assert len(editor.points) == 6
    assert editor.model.coeffs == fit_linear(editor.points)


def test_point_added_outside_bounds_grows_bounds(editor):
    old = editor.bounds
    editor.point_added(editor.viewport.width - 1, 1)
    assert editor.bounds.max_x > old.max_x
    assert editor.bounds.max_y > old.max_y


def test_point_removal_removes_nearest(editor):
    sx, sy = editor.mapper.to_viewport(3.0, 1.3)
    removed = editor.point_removal_requested(sx + 2, sy - 2)
    assert removed == Point(3.0, 1.3)
    assert len(editor.points) == 4
    assert editor.model.coeffs == fit_linear(editor.points)
    assert editor.bounds == compute_bounds(editor.points)


def test_point_removal_far_away_is_noop(editor):
    before = editor.model.coeffs
    assert editor.point_removal_requested(1, 1) is None
    assert len(editor.points) == 5
    assert editor.model.coeffs == before


def test_remove_at_invalid_index_is_noop(editor):
    assert editor.remove_at(99) is None
    assert len(editor.points) == 5


def test_removing_everything_falls_back_to_default_bounds():
    st = EditorState.from_points([Point(0.0, 0.0)])
    assert st.remove_at(0) == Point(0.0, 0.0)
    assert st.bounds == DEFAULT_BOUNDS
    assert st.remove_at(0) is None


def test_fit_kind_changed_rebuilds(editor):
    editor.fit_kind_changed("quadratic")
    assert editor.model.kind is FitKind.QUADRATIC
    assert editor.model.coeffs == fit_quadratic(editor.points)
    editor.fit_kind_changed(FitKind.LINEAR)
    assert editor.model.coeffs == fit_linear(editor.points)


def test_fit_kind_changed_rejects_unknown(editor):
    with pytest.raises(ValueError):
        editor.fit_kind_changed("cubic")


def test_viewport_resized_rebuilds_mapper(editor):
    editor.viewport_resized(1000, 700)
    assert editor.viewport == Viewport(1000.0, 700.0)
    assert editor.mapper.to_viewport(editor.bounds.max_x, editor.bounds.min_y) == pytest.approx((950.0, 650.0))


# =============================================================================
# PREDICTION
# =============================================================================

@pytest.mark.parametrize("text", ["", "   ", "abc", "1.2.3", "--1", "1_000", "nan", "inf", "1e999"])
def test_invalid_prediction_input(editor, text):
    result = editor.prediction_queried(text)
    assert not result.ok
    assert result.text() == "Prediction: invalid X"


def test_prediction_uses_active_model(editor):
    c = fit_linear(editor.points)
    result = editor.prediction_queried(" 2.5 ")
    assert result.ok
    assert result.y == pytest.approx(c.slope * 2.5 + c.intercept)
    assert result.text().startswith("Prediction: Y = ")


def test_parse_number():
    assert parse_number("-1e3") == -1000.0
    assert parse_number("x") is None
    assert parse_number(None) is None
    assert parse_number(" 2.5 ") == 2.5
    assert parse_number("1_000") is None
    assert parse_number("-inf") is None
    assert parse_number("NaN") is None


# =============================================================================
# PERSISTENCE / RENDER HELPERS
# =============================================================================

def test_save_writes_points(editor, tmp_path):
    path = tmp_path / "out.csv"
    assert editor.save(str(path))
    assert path.read_text(encoding="utf-8").splitlines()[0] == "1.0,1.0"


def test_save_failure_is_reported(editor, tmp_path):
    assert editor.save(str(tmp_path)) is False
    assert len(editor.points) == 5


def test_curve_samples_span_plot_width(editor):
    pts = editor.curve_samples(10)
    assert len(pts) == 11
    assert pts[0][0] == pytest.approx(editor.mapper.x.p0)
    assert pts[-1][0] == pytest.approx(editor.mapper.x.p1)


def test_far_points_flags_large_residuals():
    st = EditorState.from_points([Point(0, 0), Point(1, 1), Point(2, 2), Point(3, 3), Point(1.5, 4)])
    assert st.far_points().tolist()[-1] is True


def test_cursor_text(editor):
    sx, sy = editor.mapper.to_viewport(1.234, 2.0)
    assert editor.cursor_text(sx, sy) == "X=1.23, Y=2.00"


def test_status_line(editor):
    assert editor.status_line().startswith("5 point(s) | Linear | y = ")
