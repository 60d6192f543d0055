"""
日志配置 - 初始化全局日志
"""
import logging
import sys


def setup_logging(level=logging.INFO, log_file=None):
    """
    配置根日志记录器。

    level 可以是 logging.DEBUG 这样的整数，也可以是 "DEBUG" 这样的名称；
    log_file 不为空时同时写入文件。
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger()
    logger.setLevel(level)

    # 重复初始化时先清掉旧的处理器，避免重复输出
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # matplotlib 的字体查找日志太多
    logging.getLogger("matplotlib").setLevel(max(level, logging.WARNING))

    logger.debug("Logging initialized.")
