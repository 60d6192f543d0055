"""
曲线存储 - 曲线与文本记录之间的转换，以及整个集合的保存和加载

文件格式：每行一条曲线，点之间用空格分隔，每个点写作 "x,y"，
小数点固定为 "."。只保存点，不保存函数类型和参数，
加载后的曲线可以重绘，但不能重新采样。
"""
import logging
from dataclasses import dataclass, field

from plot_errors import MalformedRecord, ResourceUnavailable
from plot_model import Curve, Point

logger = logging.getLogger(__name__)


def _format_number(value):
    # repr 与区域设置无关，并且可以精确还原
    return repr(float(value))


def _parse_number(text, token, line_number):
    try:
        return float(text)
    except ValueError:
        raise MalformedRecord(f"not a number: {text!r} in token {token!r}",
                              token=token, line_number=line_number) from None


def serialize(curve):
    """曲线 -> 一行文本"""
    return " ".join(f"{_format_number(p.x)},{_format_number(p.y)}" for p in curve.points)


def deserialize(record, line_number=None):
    """一行文本 -> 点序列，格式错误时抛出 MalformedRecord"""
    points = []
    for token in record.split():
        parts = token.split(",")
        if len(parts) != 2:
            raise MalformedRecord(f"expected 'x,y', got {token!r}",
                                  token=token, line_number=line_number)
        x = _parse_number(parts[0], token, line_number)
        y = _parse_number(parts[1], token, line_number)
        points.append(Point(x, y))
    return tuple(points)


@dataclass
class LoadReport:
    curves: list = field(default_factory=list)
    skipped_lines: list = field(default_factory=list)

    @property
    def skipped_count(self):
        return len(self.skipped_lines)


def save_collection(collection, file_path):
    """把集合中的曲线写入文件，返回写入的曲线数；没有点的曲线不写入"""
    try:
        with open(file_path, 'w', encoding='utf-8') as f:
            count = 0
            for curve in collection.list():
                if not curve.points:
                    # 空曲线写成空行会在加载时被忽略，所以不写
                    continue
                f.write(serialize(curve) + "\n")
                count += 1
    except OSError as e:
        raise ResourceUnavailable(f"Cannot write curve file {file_path}: {e.strerror or e}") from e

    logger.info("Saved %d curves to %s", count, file_path)
    return count


def _decode_line(raw, line_number):
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError as e:
        raise MalformedRecord(f"invalid UTF-8 at byte {e.start}", line_number=line_number) from None


def load_collection(file_path):
    """
    从文件读取曲线。

    空行忽略；格式错误的行跳过并记录行号，不影响其余行。
    """
    try:
        # 按字节读取，逐行解码，编码错误只影响该行
        with open(file_path, 'rb') as f:
            lines = f.read().splitlines()
    except OSError as e:
        raise ResourceUnavailable(f"Cannot read curve file {file_path}: {e.strerror or e}") from e

    report = LoadReport()
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            points = deserialize(_decode_line(line, line_number), line_number=line_number)
        except MalformedRecord as e:
            logger.warning("Skipping malformed curve record: %s", e)
            report.skipped_lines.append(line_number)
            continue
        report.curves.append(Curve(None, points))

    logger.info("Loaded %d curves from %s (%d skipped)",
                len(report.curves), file_path, report.skipped_count)
    return report
