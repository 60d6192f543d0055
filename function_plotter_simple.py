"""
函数曲线绘制器 - 控制台版本
不打开窗口，每一帧渲染到 PNG 文件，菜单在控制台中阻塞读取
"""
import logging
import sys

from matplotlib.backends.backend_agg import FigureCanvasAgg

from console_menu import run_console
from logging_config import setup_logging
from plot_errors import PlotterError
from plot_session import PlotSession
from plotter_config import load_settings
from render_adapter import CanvasRenderer, create_figure

logger = logging.getLogger(__name__)


def make_frame_renderer(session, frame_path):
    """返回渲染一帧并写入 frame_path 的回调"""
    figure = create_figure()
    FigureCanvasAgg(figure)
    renderer = CanvasRenderer(figure, session.settings.label_font)

    def render_frame():
        renderer.draw(session.plot_collection)
        try:
            figure.savefig(frame_path, facecolor=figure.get_facecolor())
        except OSError as e:
            # 写不了图片也继续运行菜单
            logger.error("Cannot write frame to %s: %s", frame_path, e)

    return render_frame


def main():
    setup_logging()
    try:
        settings = load_settings()
    except PlotterError as e:
        print(f"Invalid settings: {e}")
        sys.exit(1)
    setup_logging(settings.log_level)

    session = PlotSession(settings)
    session.seed_default_curves()
    print(f"Frames are written to {settings.frame_path}")
    run_console(session, make_frame_renderer(session, settings.frame_path))


if __name__ == '__main__':
    main()
