"""
绘图数据模型 - 点、范围、坐标系、曲线和曲线集合
"""
from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from math_functions import MathFunction
from plot_errors import InvalidArgument


class Point(NamedTuple):
    x: float
    y: float


class Range(NamedTuple):
    """闭区间 [min, max]，本身不做校验"""
    min: float
    max: float

    @property
    def span(self):
        return self.max - self.min

    @property
    def is_inverted(self):
        return self.min > self.max

    def __str__(self):
        return f"[{self.min:g}, {self.max:g}]"


class CoordinateSystem:
    """当前可见的 X/Y 范围"""

    def __init__(self, x_range, y_range):
        self._x_range = Range(*x_range)
        self._y_range = Range(*y_range)

    @property
    def x_range(self):
        return self._x_range

    @property
    def y_range(self):
        return self._y_range

    def get_x_range(self):
        return self._x_range

    def get_y_range(self):
        return self._y_range

    def set_ranges(self, x_range, y_range):
        """同时替换两个范围，任一无效则都不修改"""
        x_range = Range(*x_range)
        y_range = Range(*y_range)
        for axis, rng in (("X", x_range), ("Y", y_range)):
            if rng.is_inverted:
                raise InvalidArgument(
                    f"{axis} range minimum must not exceed maximum (got {rng.min:g} > {rng.max:g})."
                )
        self._x_range = x_range
        self._y_range = y_range

    def __repr__(self):
        return f"CoordinateSystem(x={self._x_range}, y={self._y_range})"


@dataclass
class Curve:
    """函数及其采样点；从文件加载的曲线没有函数，只能重绘不能重新采样"""
    function: Optional[MathFunction]
    points: tuple = field(default_factory=tuple)

    @property
    def is_evaluable(self):
        return self.function is not None

    @property
    def label(self):
        if self.function is None:
            return "Loaded curve"
        return self.function.describe()

    def replace_points(self, points):
        self.points = tuple(Point(float(x), float(y)) for x, y in points)


class PlotCollection:
    """按添加顺序保存的曲线列表，后添加的绘制在上层"""

    def __init__(self):
        self._curves = []

    def add(self, curve):
        self._curves.append(curve)

    def clear(self):
        self._curves.clear()

    def replace(self, curves):
        self._curves = list(curves)

    def list(self):
        return tuple(self._curves)

    def __len__(self):
        return len(self._curves)

    def __iter__(self):
        return iter(tuple(self._curves))
