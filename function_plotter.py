import logging
import queue
import sys
import threading

import matplotlib
from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QLineEdit, QPushButton, QGroupBox, QFrame, QListWidget,
)
from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QFont
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.backends.backend_qtagg import NavigationToolbar2QT as NavigationToolbar

from console_menu import MenuDialog
from logging_config import setup_logging
from plot_errors import PlotterError
from plot_session import ClearPlots, PlotSession
from plotter_config import load_settings
from render_adapter import CanvasRenderer, create_figure

matplotlib.use('QtAgg')

logger = logging.getLogger(__name__)


class FunctionPlotter(QMainWindow):
    """
    函数曲线绘制器主窗口

    命令来自两处：后台线程逐行读取的 stdin，以及窗口里的输入框。
    两者都只把文本行交给 MenuDialog，由定时器在界面线程里执行命令并重绘，
    所以等待输入时窗口仍然可以响应。
    """

    def __init__(self, settings=None, session=None, read_stdin=True):
        super().__init__()
        self.setWindowTitle("Graph Plotter")

        self.session = session or PlotSession(settings)
        self.settings = self.session.settings
        self.dialog = MenuDialog(self.settings)

        # stdin 读取线程只往队列里放文本行
        self.input_queue = queue.Queue()
        self.stdin_thread = None
        if read_stdin:
            self.stdin_thread = threading.Thread(target=self.read_stdin, name="stdin-reader", daemon=True)
            self.stdin_thread.start()

        self.input_timer = QTimer()
        self.input_timer.timeout.connect(self.poll_input)

        self.init_ui()
        self.redraw()
        self.show_prompt()
        self.input_timer.start(self.settings.poll_interval_ms)

    def read_stdin(self):
        for line in sys.stdin:
            self.input_queue.put(line)
        # None 表示 stdin 已关闭
        self.input_queue.put(None)

    def init_ui(self):
        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QHBoxLayout(main_widget)

        control_panel = self.create_control_panel()
        main_layout.addWidget(control_panel, 2)

        plot_panel = self.create_plot_panel()
        main_layout.addWidget(plot_panel, 4)

        self.statusBar().showMessage("Ready")

    def create_control_panel(self):
        panel = QWidget()
        layout = QVBoxLayout(panel)

        title = QLabel("Graph Plotter")
        title.setFont(QFont("Arial", 16, QFont.Weight.Bold))
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title)

        menu_group = QGroupBox("Menu")
        menu_layout = QVBoxLayout()

        self.prompt_label = QLabel()
        self.prompt_label.setWordWrap(True)
        menu_layout.addWidget(self.prompt_label)

        self.command_input = QLineEdit()
        self.command_input.setPlaceholderText("Type a menu number or parameters and press Enter")
        self.command_input.returnPressed.connect(self.submit_input_line)
        menu_layout.addWidget(self.command_input)

        menu_group.setLayout(menu_layout)
        layout.addWidget(menu_group)

        log_group = QGroupBox("Messages")
        log_layout = QVBoxLayout()
        self.message_list = QListWidget()
        log_layout.addWidget(self.message_list)
        log_group.setLayout(log_layout)
        layout.addWidget(log_group)

        self.clear_button = QPushButton("Clear plots")
        self.clear_button.setFont(QFont("Arial", 12))
        self.clear_button.setStyleSheet("""
            QPushButton {
                background-color: #f44336;
                color: white;
                border: none;
                padding: 10px;
                border-radius: 5px;
            }
            QPushButton:hover {
                background-color: #da190b;
            }
        """)
        self.clear_button.clicked.connect(self.clear_plot)
        layout.addWidget(self.clear_button)

        return panel

    def create_plot_panel(self):
        plot_frame = QFrame()
        plot_frame.setFrameStyle(QFrame.Shape.StyledPanel)
        plot_layout = QVBoxLayout(plot_frame)

        self.figure = create_figure()
        self.canvas = FigureCanvas(self.figure)
        self.canvas.setFixedSize(800, 600)
        self.renderer = CanvasRenderer(self.figure, self.settings.label_font)

        self.toolbar = NavigationToolbar(self.canvas, self)
        plot_layout.addWidget(self.toolbar)
        plot_layout.addWidget(self.canvas)

        return plot_frame

    def poll_input(self):
        """定时器回调：处理 stdin 里积压的所有行"""
        while True:
            try:
                line = self.input_queue.get_nowait()
            except queue.Empty:
                break
            if line is None:
                logger.info("stdin closed, console input stopped")
                self.show_message("Console input closed; use the Menu box in the window.")
                continue
            self.handle_line(line)
            if not self.session.running:
                break

    def submit_input_line(self):
        line = self.command_input.text()
        self.command_input.clear()
        self.handle_line(line)

    def handle_line(self, line):
        try:
            command = self.dialog.feed(line)
        except PlotterError as e:
            self.show_message(f"Error: {e}")
            command = None

        if command is not None:
            self.session.submit(command)
        self.process_commands()

    def process_commands(self):
        for message in self.session.process_pending():
            self.show_message(message)

        if not self.session.running:
            self.close()
            return

        self.redraw()
        self.show_prompt()

    def show_message(self, message):
        print(message)
        self.message_list.addItem(message)
        self.message_list.scrollToBottom()
        self.statusBar().showMessage(message)

    def show_prompt(self):
        prompt = self.dialog.prompt()
        self.prompt_label.setText(prompt)
        sys.stdout.write(prompt)
        sys.stdout.flush()

    def redraw(self):
        self.renderer.draw(self.session.plot_collection)
        self.canvas.draw()

    def clear_plot(self):
        """清除图像"""
        self.session.submit(ClearPlots())
        self.process_commands()

    def closeEvent(self, event):
        """关闭窗口时停止定时器"""
        self.input_timer.stop()
        event.accept()


def main():
    setup_logging()
    try:
        settings = load_settings()
    except PlotterError as e:
        print(f"Invalid settings: {e}")
        sys.exit(1)
    setup_logging(settings.log_level)

    app = QApplication(sys.argv)
    window = FunctionPlotter(settings)
    window.session.seed_default_curves()
    window.redraw()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
