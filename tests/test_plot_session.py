"""Tests for the plot session command handling."""

import math

import pytest

import sampler
from math_functions import exponential, logarithmic, polynomial
from plot_model import Curve, Range
from plot_session import (
    ChangeParameters, ChangeRange, ClearPlots, DrawFunction, Exit, LoadCurves, PlotSession,
    SaveCurves,
)
from plotter_config import PlotterSettings


class TestSeeding:
    """Test the start-up curves."""

    def test_default_curves(self, session):
        session.seed_default_curves()
        curves = session.plot_collection.list()

        assert [c.function.describe() for c in curves] == [
            "Polynomial Function: y = 1 + 0x - 1x^2",
            "Trigonometric Function: y = 1*sin(1x + 0)",
        ]
        assert all(len(c.points) == 101 for c in curves)

    def test_initial_ranges_come_from_settings(self):
        session = PlotSession(PlotterSettings(x_range=(-3.0, 3.0), y_range=(-1.0, 1.0)))
        assert session.coordinate_system.x_range == Range(-3, 3)
        assert session.coordinate_system.y_range == Range(-1, 1)


class TestDrawing:
    """Test drawing new functions."""

    def test_draw_replaces_collection(self, session):
        session.seed_default_curves()
        messages = session.apply(DrawFunction(exponential(1, 2)))

        (curve,) = session.plot_collection.list()
        assert curve.function == exponential(1, 2)
        assert messages[0].startswith("Plotted Exponential Function")

    def test_failed_draw_leaves_collection_untouched(self, session):
        session.seed_default_curves()
        before = session.plot_collection.list()

        messages = session.apply(DrawFunction(logarithmic(1, 10, 0)))

        assert messages[0].startswith("Error:")
        assert session.plot_collection.list() == before

    def test_skip_policy_draws_defined_part(self, settings):
        settings.domain_policy = "skip"
        session = PlotSession(settings)

        session.apply(DrawFunction(logarithmic(1, 10, 0)))

        (curve,) = session.plot_collection.list()
        assert curve.points
        assert all(p.x > 0 for p in curve.points)


class TestRangeChanges:
    """Test changing the visible range."""

    def test_curves_resampled_over_new_range(self, session):
        session.seed_default_curves()
        session.apply(ChangeRange((0.0, 5.0), (-1.0, 1.0)))

        for curve in session.plot_collection.list():
            assert curve.points[0].x == pytest.approx(0.0)
            assert curve.points[-1].x == pytest.approx(5.0)
        assert session.coordinate_system.y_range == Range(-1, 1)

    def test_later_draws_use_new_range(self, session):
        session.apply(ChangeRange((1.0, 2.0), (-1.0, 1.0)))
        session.apply(DrawFunction(polynomial([0, 1])))

        (curve,) = session.plot_collection.list()
        assert curve.points[0].x == pytest.approx(1.0)
        assert curve.points[-1].x == pytest.approx(2.0)

    def test_inverted_range_rejected(self, session):
        session.seed_default_curves()
        before = [c.points for c in session.plot_collection.list()]

        messages = session.apply(ChangeRange((5.0, 0.0), (-1.0, 1.0)))

        assert messages[0].startswith("Error:")
        assert session.coordinate_system.x_range == Range(-10, 10)
        assert [c.points for c in session.plot_collection.list()] == before

    def test_failing_curve_keeps_points_others_regenerate(self, session, parabola):
        session.apply(ChangeRange((1.0, 10.0), (-5.0, 5.0)))
        session.apply(DrawFunction(logarithmic(1, 10, 0)))
        session.plot_collection.add(sampler.sample_curve(parabola, Range(1, 10), 100))
        log_points = session.plot_collection.list()[0].points

        messages = session.apply(ChangeRange((-5.0, 5.0), (-5.0, 5.0)))

        log_curve, parabola_curve = session.plot_collection.list()
        assert log_curve.points == log_points
        assert parabola_curve.points[0].x == pytest.approx(-5.0)
        assert any("could not regenerate Logarithmic Function" in m for m in messages)

    def test_loaded_curves_are_left_alone(self, session):
        session.seed_default_curves()
        session.apply(SaveCurves())
        session.apply(LoadCurves())
        before = [c.points for c in session.plot_collection.list()]

        session.apply(ChangeRange((0.0, 1.0), (0.0, 1.0)))

        assert [c.points for c in session.plot_collection.list()] == before


class TestParameterChanges:
    """Test re-parametrizing the last drawn function."""

    def test_updates_last_function_curve(self, session):
        session.seed_default_curves()
        session.apply(ChangeParameters((2.0, 1.0, 0.0)))

        poly, trig = session.plot_collection.list()
        assert trig.function.params == (2.0, 1.0, 0.0)
        assert trig.points[0].y == pytest.approx(2.0 * math.sin(-10.0))
        assert poly.function == polynomial([1, 0, -1])

    def test_without_function_curve(self, session):
        messages = session.apply(ChangeParameters((1.0,)))
        assert messages == ["No function curve to change; draw a function first."]

    def test_wrong_count_reported(self, session):
        session.apply(DrawFunction(exponential(1, 2)))
        messages = session.apply(ChangeParameters((1.0, 2.0, 3.0)))

        assert messages[0].startswith("Error:")
        assert session.plot_collection.list()[0].function == exponential(1, 2)


class TestPersistence:
    """Test save and load commands."""

    def test_save_then_load(self, session, settings):
        session.seed_default_curves()
        saved = [c.points for c in session.plot_collection.list()]

        assert session.apply(SaveCurves()) == [f"Saved 2 curve(s) to {settings.curves_file}"]
        session.apply(ClearPlots())
        messages = session.apply(LoadCurves())

        assert messages == [f"Loaded 2 curve(s) from {settings.curves_file}"]
        assert [c.points for c in session.plot_collection.list()] == saved
        assert not any(c.is_evaluable for c in session.plot_collection.list())

    def test_corrupt_line_reported(self, session, tmp_path):
        path = tmp_path / "mixed.txt"
        path.write_text("garbage\n0.0,1.0 1.0,2.0\n", encoding="utf-8")

        messages = session.apply(LoadCurves(str(path)))

        assert len(session.plot_collection) == 1
        assert messages[0] == f"Loaded 1 curve(s) from {path}"
        assert messages[1] == "Warning: skipped 1 malformed line(s): 1"

    def test_undecodable_line_reported(self, session, tmp_path):
        path = tmp_path / "binary.txt"
        path.write_bytes(b"1.0,2.0 3.0,4.0\n\xff\xfe,\x80\n")

        messages = session.apply(LoadCurves(str(path)))

        assert len(session.plot_collection) == 1
        assert messages == [
            f"Loaded 1 curve(s) from {path}",
            "Warning: skipped 1 malformed line(s): 2",
        ]

    def test_save_count_matches_reload(self, settings):
        settings.domain_policy = "skip"
        session = PlotSession(settings)
        session.apply(DrawFunction(logarithmic(1, 10, 0)))
        session.plot_collection.add(Curve(None, ()))

        assert session.apply(SaveCurves()) == [f"Saved 1 curve(s) to {settings.curves_file}"]
        assert session.apply(LoadCurves()) == [f"Loaded 1 curve(s) from {settings.curves_file}"]

    def test_missing_file_keeps_collection(self, session, tmp_path):
        session.seed_default_curves()
        messages = session.apply(LoadCurves(str(tmp_path / "missing.txt")))

        assert messages[0].startswith("Error: Cannot read curve file")
        assert len(session.plot_collection) == 2


class TestQueue:
    """Test the command queue and exit."""

    def test_commands_run_in_order(self, session):
        session.submit(DrawFunction(polynomial([1])))
        session.submit(ClearPlots())
        assert session.has_pending

        messages = session.process_pending()

        assert messages[0].startswith("Plotted Polynomial Function")
        assert messages[1] == "Plots cleared"
        assert not session.has_pending
        assert len(session.plot_collection) == 0

    def test_exit(self, session):
        assert session.apply(Exit()) == ["Goodbye"]
        assert session.running is False

    def test_unknown_command(self, session):
        messages = session.apply("bogus")
        assert messages[0].startswith("Unknown command")
