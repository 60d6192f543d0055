"""
绘图会话 - 持有坐标系和曲线集合，按顺序执行命令队列中的命令

输入（控制台菜单或 GUI）只负责把命令放进队列，渲染只读取曲线集合，
两者互不依赖。
"""
import logging
from collections import deque
from dataclasses import dataclass
from typing import Optional

import curve_store
import sampler
from math_functions import polynomial, sine
from plot_errors import PlotterError
from plot_model import CoordinateSystem, PlotCollection, Range
from plotter_config import PlotterSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrawFunction:
    function: object


@dataclass(frozen=True)
class ChangeRange:
    x_range: tuple
    y_range: tuple


@dataclass(frozen=True)
class ChangeParameters:
    values: tuple


@dataclass(frozen=True)
class ClearPlots:
    pass


@dataclass(frozen=True)
class SaveCurves:
    path: Optional[str] = None


@dataclass(frozen=True)
class LoadCurves:
    path: Optional[str] = None


@dataclass(frozen=True)
class Exit:
    pass


class PlotSession:
    def __init__(self, settings=None):
        self.settings = settings or PlotterSettings()
        self.coordinate_system = CoordinateSystem(
            Range(*self.settings.x_range), Range(*self.settings.y_range)
        )
        self.plot_collection = PlotCollection()
        self.running = True
        self._pending = deque()

    def seed_default_curves(self):
        """启动时的默认曲线：1 - x^2 和 sin(x)"""
        x_range = self.coordinate_system.x_range
        for function in (polynomial([1, 0, -1]), sine(1.0, 1.0, 0.0)):
            curve = sampler.sample_curve(function, x_range, self.settings.num_points,
                                         self.settings.skip_undefined)
            self.plot_collection.add(curve)

    def submit(self, command):
        self._pending.append(command)

    @property
    def has_pending(self):
        return bool(self._pending)

    def process_pending(self):
        """执行队列中所有命令，返回要显示给用户的消息"""
        messages = []
        while self._pending:
            messages.extend(self.apply(self._pending.popleft()))
        return messages

    def apply(self, command):
        """执行一条命令；错误转换成消息，不向外抛出"""
        handler = self._handlers().get(type(command))
        if handler is None:
            logger.error("Unknown command %r", command)
            return [f"Unknown command: {command!r}"]
        try:
            return handler(command)
        except PlotterError as e:
            logger.warning("%s failed: %s", type(command).__name__, e)
            return [f"Error: {e}"]

    def _handlers(self):
        return {
            DrawFunction: self._draw_function,
            ChangeRange: self._change_range,
            ChangeParameters: self._change_parameters,
            ClearPlots: self._clear,
            SaveCurves: self._save,
            LoadCurves: self._load,
            Exit: self._exit,
        }

    def _sample(self, function):
        return sampler.sample_curve(function, self.coordinate_system.x_range,
                                    self.settings.num_points, self.settings.skip_undefined)

    def _draw_function(self, command):
        # 先采样，成功后才替换集合
        curve = self._sample(command.function)
        self.plot_collection.clear()
        self.plot_collection.add(curve)
        return [f"Plotted {curve.label} over x in {self.coordinate_system.x_range}"]

    def _change_range(self, command):
        self.coordinate_system.set_ranges(command.x_range, command.y_range)
        x_range = self.coordinate_system.x_range
        messages = [f"Range set to x in {x_range}, y in {self.coordinate_system.y_range}"]

        for curve in self.plot_collection.list():
            if not curve.is_evaluable:
                continue
            try:
                sampler.regenerate(curve, x_range, self.settings.num_points,
                                   self.settings.skip_undefined)
            except PlotterError as e:
                logger.warning("Could not regenerate %s: %s", curve.label, e)
                messages.append(f"Error: could not regenerate {curve.label}: {e}")
        return messages

    def _change_parameters(self, command):
        target = None
        for curve in reversed(self.plot_collection.list()):
            if curve.is_evaluable:
                target = curve
                break
        if target is None:
            return ["No function curve to change; draw a function first."]

        function = target.function.with_params(*command.values)
        points = sampler.generate(function, self.coordinate_system.x_range,
                                  self.settings.num_points, self.settings.skip_undefined)
        target.function = function
        target.replace_points(points)
        return [f"Updated {target.label}"]

    def _clear(self, command):
        self.plot_collection.clear()
        return ["Plots cleared"]

    def _save(self, command):
        path = command.path or self.settings.curves_file
        count = curve_store.save_collection(self.plot_collection, path)
        return [f"Saved {count} curve(s) to {path}"]

    def _load(self, command):
        path = command.path or self.settings.curves_file
        report = curve_store.load_collection(path)
        self.plot_collection.replace(report.curves)
        messages = [f"Loaded {len(report.curves)} curve(s) from {path}"]
        if report.skipped_count:
            lines = ", ".join(str(n) for n in report.skipped_lines)
            messages.append(f"Warning: skipped {report.skipped_count} malformed line(s): {lines}")
        return messages

    def _exit(self, command):
        self.running = False
        return ["Goodbye"]
