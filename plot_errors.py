"""
错误类型 - 函数绘制器中抛出并向用户报告的异常
"""


class PlotterError(Exception):
    """所有向用户报告的错误的基类"""


class InvalidArgument(PlotterError, ValueError):
    """函数参数、采样点数或坐标范围无效"""


class MalformedRecord(PlotterError, ValueError):
    """无法解析的曲线记录"""

    def __init__(self, message, token=None, line_number=None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.token = token
        self.line_number = line_number


class InvalidInput(PlotterError):
    """菜单选项或参数输入无效"""


class ResourceUnavailable(PlotterError, OSError):
    """字体或曲线文件不可用"""
