"""
控制台菜单 - 把用户逐行输入的文本转换成会话命令

MenuDialog 是按行驱动的状态机：先读菜单编号，需要参数的选项再读一行参数。
它不直接读取 stdin，所以既可以由阻塞的控制台循环驱动，也可以由 GUI 的
定时器逐行喂入。
"""
import logging
import math
import sys

from math_functions import TRIG_KINDS, exponential, logarithmic, polynomial, trigonometric
from plot_errors import InvalidInput, PlotterError
from plot_session import (
    ChangeParameters, ChangeRange, ClearPlots, DrawFunction, Exit, LoadCurves, SaveCurves,
)

logger = logging.getLogger(__name__)

AWAITING_CHOICE = "awaiting_choice"
AWAITING_PARAMETERS = "awaiting_parameters"

# (动作, 菜单文字, 参数提示)；没有提示的选项不需要参数
MENU_ITEMS = [
    ("polynomial", "Draw polynomial",
     "Enter polynomial coefficients, lowest degree first (e.g. -1 0 1 for x^2 - 1): "),
    ("trigonometric", "Draw trigonometric function",
     "Enter trigonometric parameters ([sin|cos] amplitude frequency phase): "),
    ("exponential", "Draw exponential function",
     "Enter exponential parameters (coefficient base): "),
    ("logarithmic", "Draw logarithmic function",
     "Enter logarithmic parameters (a base c): "),
    ("range", "Change range",
     "Enter new range (xmin xmax ymin ymax): "),
    ("parameters", "Change function parameters",
     "Enter new parameters for the last drawn function: "),
    ("clear", "Clear plots", None),
    ("save", "Save curves to file", "File name [{curves_file}]: "),
    ("load", "Load curves from file", "File name [{curves_file}]: "),
    ("exit", "Exit", None),
]


def menu_text():
    lines = [f"{number}. {title}" for number, (_, title, _) in enumerate(MENU_ITEMS, start=1)]
    return "\n".join(lines) + "\nChoice: "


def parse_reals(line, count=None, minimum=1):
    """解析一行实数；count 指定精确个数，否则至少 minimum 个"""
    values = []
    for token in line.split():
        try:
            value = float(token)
        except ValueError:
            raise InvalidInput(f"{token!r} is not a number") from None
        if not math.isfinite(value):
            raise InvalidInput(f"{token!r} is not a finite number")
        values.append(value)

    if count is not None and len(values) != count:
        raise InvalidInput(f"expected {count} numbers, got {len(values)}")
    if count is None and len(values) < minimum:
        raise InvalidInput(f"expected at least {minimum} number(s), got {len(values)}")
    return values


def _build_trigonometric(line):
    tokens = line.split()
    kind = "sin"
    if tokens and tokens[0].lower() in TRIG_KINDS:
        kind = tokens.pop(0).lower()
    amplitude, frequency, phase = parse_reals(" ".join(tokens), count=3)
    return DrawFunction(trigonometric(kind, amplitude, frequency, phase))


def _build_range(line):
    x_min, x_max, y_min, y_max = parse_reals(line, count=4)
    return ChangeRange((x_min, x_max), (y_min, y_max))


BUILDERS = {
    "polynomial": lambda line: DrawFunction(polynomial(parse_reals(line))),
    "trigonometric": _build_trigonometric,
    "exponential": lambda line: DrawFunction(exponential(*parse_reals(line, count=2))),
    "logarithmic": lambda line: DrawFunction(logarithmic(*parse_reals(line, count=3))),
    "range": _build_range,
    "parameters": lambda line: ChangeParameters(tuple(parse_reals(line))),
    "save": lambda line: SaveCurves(line.strip() or None),
    "load": lambda line: LoadCurves(line.strip() or None),
}

IMMEDIATE = {
    "clear": ClearPlots,
    "exit": Exit,
}


class MenuDialog:
    def __init__(self, settings):
        self.settings = settings
        self.state = AWAITING_CHOICE
        self._action = None

    def prompt(self):
        """当前应显示的提示：菜单或参数提示"""
        if self.state == AWAITING_CHOICE:
            return menu_text()
        _, _, prompt = MENU_ITEMS[self._action]
        return prompt.format(curves_file=self.settings.curves_file)

    def reset(self):
        self.state = AWAITING_CHOICE
        self._action = None

    def feed(self, line):
        """
        处理一行输入，返回命令或 None（还需要更多输入）。

        输入无效时回到菜单状态并抛出异常。
        """
        try:
            if self.state == AWAITING_CHOICE:
                return self._choose(line)
            return self._read_parameters(line)
        except PlotterError:
            self.reset()
            raise

    def _choose(self, line):
        text = line.strip()
        try:
            choice = int(text)
        except ValueError:
            raise InvalidInput(f"Invalid choice {text!r}. Please enter a number from 1 to {len(MENU_ITEMS)}.") from None
        if not 1 <= choice <= len(MENU_ITEMS):
            raise InvalidInput(f"Invalid choice {choice}. Please enter a number from 1 to {len(MENU_ITEMS)}.")

        action, _, prompt = MENU_ITEMS[choice - 1]
        if prompt is None:
            return IMMEDIATE[action]()
        self.state = AWAITING_PARAMETERS
        self._action = choice - 1
        return None

    def _read_parameters(self, line):
        action = MENU_ITEMS[self._action][0]
        command = BUILDERS[action](line)
        self.reset()
        return command


def run_console(session, render_frame=None, stdin=None, stdout=None):
    """
    阻塞的控制台主循环：每次先渲染一帧，再阻塞读取一行输入。

    等待输入期间不会重绘，这是控制台驱动方式本身的限制。
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    dialog = MenuDialog(session.settings)

    def say(text):
        stdout.write(text + "\n")

    while session.running:
        if render_frame is not None:
            render_frame()

        stdout.write(dialog.prompt())
        stdout.flush()
        line = stdin.readline()
        if not line:
            # 输入结束等同于退出
            stdout.write("\n")
            session.submit(Exit())
            for message in session.process_pending():
                say(message)
            break

        try:
            command = dialog.feed(line)
        except PlotterError as e:
            logger.info("Rejected input %r: %s", line.strip(), e)
            say(f"Error: {e}")
            continue

        if command is not None:
            session.submit(command)
        for message in session.process_pending():
            say(message)
