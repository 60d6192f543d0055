"""
采样器 - 在区间上均匀采样函数，生成曲线点
"""
import logging

import numpy as np

from plot_errors import InvalidArgument
from plot_model import Curve, Point, Range

logger = logging.getLogger(__name__)


def generate(function, x_range, num_points, skip_undefined=False):
    """
    在 x_range 上生成 num_points + 1 个等距采样点。

    min > max 时按递减顺序采样。对数函数遇到 x <= 0 时默认抛出
    InvalidArgument 并中止整次采样；skip_undefined=True 时跳过这些点。
    """
    if num_points <= 0:
        raise InvalidArgument(f"Number of sample points must be greater than 0 (got {num_points}).")

    x_range = Range(*x_range)
    xs = np.linspace(x_range.min, x_range.max, int(num_points) + 1)

    points = []
    skipped = 0
    for x in xs:
        try:
            y = function.evaluate(x)
        except InvalidArgument as e:
            if not skip_undefined:
                raise InvalidArgument(
                    f"{e} Change the range to x > 0 or set domain_policy to \"skip\"."
                ) from e
            skipped += 1
            continue
        points.append(Point(float(x), y))

    if skipped:
        logger.debug("Skipped %d undefined samples of %s", skipped, function.describe())
    return tuple(points)


def sample_curve(function, x_range, num_points, skip_undefined=False):
    """采样并构造新曲线"""
    return Curve(function, generate(function, x_range, num_points, skip_undefined))


def regenerate(curve, x_range, num_points, skip_undefined=False):
    """
    在新范围上重新采样曲线。

    失败时保留原有的点并抛出异常；没有函数的曲线保持不变，返回 False。
    """
    if not curve.is_evaluable:
        return False
    points = generate(curve.function, x_range, num_points, skip_undefined)
    curve.replace_points(points)
    return True
