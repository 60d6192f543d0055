"""Pytest configuration and shared fixtures."""

import matplotlib

matplotlib.use("Agg")

import pytest

from math_functions import logarithmic, polynomial, sine
from plot_model import Curve, Point, Range
from plot_session import PlotSession
from plotter_config import PlotterSettings


@pytest.fixture(autouse=True)
def _no_settings_env(monkeypatch):
    monkeypatch.delenv("FUNCTION_PLOTTER_SETTINGS", raising=False)


@pytest.fixture
def settings(tmp_path):
    """Default settings with files redirected into the test directory."""
    return PlotterSettings(
        curves_file=str(tmp_path / "curves.txt"),
        frame_path=str(tmp_path / "plot.png"),
    )


@pytest.fixture
def session(settings):
    return PlotSession(settings)


@pytest.fixture
def parabola():
    """1 - x^2"""
    return polynomial([1, 0, -1])


@pytest.fixture
def sine_wave():
    return sine(1.0, 1.0, 0.0)


@pytest.fixture
def log10_function():
    return logarithmic(1, 10, 0)


@pytest.fixture
def default_range():
    return Range(-10, 10)


@pytest.fixture
def two_point_curve():
    return Curve(None, (Point(1.0, 2.0), Point(3.0, 4.0)))
