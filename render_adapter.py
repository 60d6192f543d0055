"""
渲染适配 - 把曲线和坐标网格转换成绘图图元，并用 matplotlib 画出来

画布固定为 800x600 像素，每单位 20 像素，原点在像素 (400, 300)，
Y 轴向下为正。像素比例与坐标系的范围无关：修改范围只改变采样区间，
不改变画面缩放。
"""
import logging
import os
from typing import NamedTuple

from matplotlib import font_manager
from matplotlib.figure import Figure
from matplotlib.font_manager import FontProperties

from plot_errors import ResourceUnavailable

logger = logging.getLogger(__name__)

CANVAS_WIDTH = 800
CANVAS_HEIGHT = 600
PIXELS_PER_UNIT = 20
ORIGIN_X = 400
ORIGIN_Y = 300
GRID_STEP = 40
DPI = 100

BACKGROUND_COLOR = "white"
AXIS_COLOR = "black"
CURVE_COLOR = "black"
GRID_COLOR = (200 / 255, 200 / 255, 200 / 255)

AXIS_LABEL_SIZE = 20
VALUE_LABEL_SIZE = 15


class Segment(NamedTuple):
    x0: float
    y0: float
    x1: float
    y1: float
    color: object


class Label(NamedTuple):
    text: str
    x: float
    y: float
    size: int


def to_pixel(point):
    """坐标 (x, y) -> 像素 (px, py)"""
    x, y = point
    return (x * PIXELS_PER_UNIT + ORIGIN_X, -y * PIXELS_PER_UNIT + ORIGIN_Y)


def grid_lines():
    lines = []
    for i in range(0, CANVAS_WIDTH + 1, GRID_STEP):
        lines.append(Segment(i, 0, i, CANVAS_HEIGHT, GRID_COLOR))
    for i in range(0, CANVAS_HEIGHT + 1, GRID_STEP):
        lines.append(Segment(0, i, CANVAS_WIDTH, i, GRID_COLOR))
    return lines


def grid_labels():
    """网格刻度值，跳过与坐标轴重叠的位置"""
    labels = []
    for i in range(0, CANVAS_WIDTH + 1, GRID_STEP):
        if i != ORIGIN_X:
            value = int((i - ORIGIN_X) / PIXELS_PER_UNIT)
            labels.append(Label(str(value), i, ORIGIN_Y + 10, VALUE_LABEL_SIZE))
    for i in range(0, CANVAS_HEIGHT + 1, GRID_STEP):
        if i != ORIGIN_Y:
            value = int((ORIGIN_Y - i) / PIXELS_PER_UNIT)
            labels.append(Label(str(value), ORIGIN_X + 10, i, VALUE_LABEL_SIZE))
    return labels


def axis_lines():
    return [
        Segment(0, ORIGIN_Y, CANVAS_WIDTH, ORIGIN_Y, AXIS_COLOR),
        Segment(ORIGIN_X, 0, ORIGIN_X, CANVAS_HEIGHT, AXIS_COLOR),
    ]


def axis_labels():
    return [
        Label("X", CANVAS_WIDTH - 20, ORIGIN_Y + 10, AXIS_LABEL_SIZE),
        Label("Y", ORIGIN_X + 20, 10, AXIS_LABEL_SIZE),
    ]


def curve_pixels(curve):
    return [to_pixel(p) for p in curve.points]


def curve_segments(curve):
    """相邻采样点之间的线段"""
    pixels = curve_pixels(curve)
    return [
        Segment(x0, y0, x1, y1, CURVE_COLOR)
        for (x0, y0), (x1, y1) in zip(pixels, pixels[1:])
    ]


def load_label_font(font_name):
    """按文件路径或字体族名称查找标签字体，找不到时抛出 ResourceUnavailable"""
    if os.path.isfile(font_name):
        return FontProperties(fname=font_name)
    try:
        path = font_manager.findfont(FontProperties(family=font_name), fallback_to_default=False)
    except ValueError as e:
        raise ResourceUnavailable(f"Label font {font_name!r} is not available") from e
    return FontProperties(fname=path)


def create_figure():
    return Figure(figsize=(CANVAS_WIDTH / DPI, CANVAS_HEIGHT / DPI), dpi=DPI,
                  facecolor=BACKGROUND_COLOR)


class CanvasRenderer:
    """在 matplotlib Figure 上按像素坐标绘制网格、坐标轴和所有曲线"""

    def __init__(self, figure, font_name="DejaVu Sans"):
        self.figure = figure
        self.font_name = font_name
        self.ax = figure.add_axes([0, 0, 1, 1])
        self._font = None
        self._font_checked = False

    @property
    def labels_enabled(self):
        return self._label_font() is not None

    def _label_font(self):
        # 字体只查找一次，缺失时只警告一次
        if not self._font_checked:
            self._font_checked = True
            try:
                self._font = load_label_font(self.font_name)
            except ResourceUnavailable as e:
                logger.warning("%s; grid and axis labels are skipped", e)
                self._font = None
        return self._font

    def _draw_segments(self, segments, linewidth):
        for seg in segments:
            self.ax.plot([seg.x0, seg.x1], [seg.y0, seg.y1], color=seg.color, linewidth=linewidth)

    def _draw_labels(self, labels):
        font = self._label_font()
        if font is None:
            return
        for label in labels:
            prop = font.copy()
            # 字号按像素给出，换算成磅
            prop.set_size(label.size * 72.0 / self.figure.dpi)
            self.ax.text(label.x, label.y, label.text, fontproperties=prop,
                         color=AXIS_COLOR, ha='left', va='top')

    def draw(self, collection):
        """重绘一帧"""
        ax = self.ax
        ax.clear()
        ax.set_xlim(0, CANVAS_WIDTH)
        ax.set_ylim(CANVAS_HEIGHT, 0)
        ax.set_axis_off()

        self._draw_segments(grid_lines(), linewidth=0.8)
        self._draw_labels(grid_labels())
        self._draw_segments(axis_lines(), linewidth=1.2)
        self._draw_labels(axis_labels())

        for curve in collection.list():
            pixels = curve_pixels(curve)
            if len(pixels) < 2:
                continue
            xs, ys = zip(*pixels)
            ax.plot(xs, ys, color=CURVE_COLOR, linewidth=1.5)
