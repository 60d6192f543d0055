"""
配置 - 默认设置以及从 JSON 文件加载设置

配置文件路径可以直接传入，也可以通过环境变量 FUNCTION_PLOTTER_SETTINGS 指定。
文件不存在时使用默认值。
"""
import json
import logging
import os
from dataclasses import dataclass, fields, asdict

from plot_errors import InvalidArgument, ResourceUnavailable

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "FUNCTION_PLOTTER_SETTINGS"
DOMAIN_POLICIES = ("abort", "skip")


@dataclass
class PlotterSettings:
    num_points: int = 100
    x_range: tuple = (-10.0, 10.0)
    y_range: tuple = (-10.0, 10.0)
    label_font: str = "DejaVu Sans"
    curves_file: str = "curves.txt"
    frame_path: str = "plot.png"
    # abort: 对数定义域外的点中止本条曲线；skip: 跳过这些点
    domain_policy: str = "abort"
    poll_interval_ms: int = 50
    log_level: str = "WARNING"

    @property
    def skip_undefined(self):
        return self.domain_policy == "skip"

    def validate(self):
        if int(self.num_points) <= 0:
            raise InvalidArgument(f"num_points must be greater than 0 (got {self.num_points}).")
        for name in ("x_range", "y_range"):
            value = getattr(self, name)
            if len(value) != 2:
                raise InvalidArgument(f"{name} must be a [min, max] pair (got {value!r}).")
            if float(value[0]) > float(value[1]):
                raise InvalidArgument(f"{name} minimum must not exceed maximum (got {value!r}).")
        if self.domain_policy not in DOMAIN_POLICIES:
            raise InvalidArgument(
                f"domain_policy must be one of {', '.join(DOMAIN_POLICIES)} (got {self.domain_policy!r})."
            )
        if int(self.poll_interval_ms) <= 0:
            raise InvalidArgument(f"poll_interval_ms must be greater than 0 (got {self.poll_interval_ms}).")
        if not isinstance(logging.getLevelName(str(self.log_level).upper()), int):
            raise InvalidArgument(f"Unknown log_level {self.log_level!r}.")

    def to_dict(self):
        return asdict(self)


def _coerce(settings):
    settings.num_points = int(settings.num_points)
    settings.x_range = tuple(float(v) for v in settings.x_range)
    settings.y_range = tuple(float(v) for v in settings.y_range)
    settings.poll_interval_ms = int(settings.poll_interval_ms)
    settings.log_level = str(settings.log_level).upper()
    return settings


def load_settings(file_path=None):
    """加载设置，未知的键记录警告后忽略"""
    file_path = file_path or os.environ.get(SETTINGS_ENV_VAR)
    settings = PlotterSettings()
    if not file_path:
        return settings
    if not os.path.exists(file_path):
        logger.info("Settings file %s not found, using defaults", file_path)
        return settings

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidArgument(f"Settings file {file_path} is not valid JSON: {e}") from e
    except OSError as e:
        raise ResourceUnavailable(f"Cannot read settings file {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidArgument(f"Settings file {file_path} must contain a JSON object.")

    known = {f.name for f in fields(PlotterSettings)}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown setting %r in %s", key, file_path)
            continue
        setattr(settings, key, value)

    try:
        settings = _coerce(settings)
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f"Invalid value in settings file {file_path}: {e}") from e
    settings.validate()
    logger.debug("Loaded settings from %s: %s", file_path, settings.to_dict())
    return settings


def save_settings(settings, file_path):
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(settings.to_dict(), f, ensure_ascii=False, indent=2)
