"""
日志工具模块
Logger Utility Module
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Dict, Any

LOGGER_PREFIX = "GestureRPS"


def get_log_level(level_str: str) -> int:
    """
    从字符串获取日志级别

    Args:
        level_str: 日志级别字符串（DEBUG, INFO, WARNING, ERROR, CRITICAL）

    Returns:
        int: 日志级别，无法识别时返回 INFO
    """
    level_map = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL
    }
    return level_map.get(str(level_str).upper(), logging.INFO)


def setup_logger(
    name: str = LOGGER_PREFIX,
    log_file: Optional[str] = None,
    level: int = logging.INFO,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    设置日志记录器

    子记录器（GestureRPS.xxx）只设置级别，输出交给根记录器 GestureRPS 的处理器，
    这样 setup_logger_from_config 调整一次即可作用于所有模块。

    Args:
        name: 日志记录器名称
        log_file: 日志文件路径（可选）
        level: 日志级别
        format_string: 日志格式字符串（可选）

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    logger = logging.getLogger(name)

    if name != LOGGER_PREFIX:
        # 确保根记录器已有处理器
        setup_logger(LOGGER_PREFIX)
        logger.setLevel(logging.NOTSET)
        return logger

    # 避免重复添加处理器
    if logger.handlers:
        return logger

    logger.setLevel(level)

    if format_string is None:
        format_string = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    formatter = logging.Formatter(format_string)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        _add_file_handler(logger, log_file, formatter)

    return logger


def _add_file_handler(logger: logging.Logger, log_file: str, formatter: logging.Formatter):
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)


def setup_logger_from_config(config: Dict[str, Any], name: str = LOGGER_PREFIX) -> logging.Logger:
    """
    从配置字典设置日志记录器

    Args:
        config: 配置字典（包含 level 和 file 键）
        name: 返回的日志记录器名称

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    root = setup_logger(LOGGER_PREFIX)
    root.setLevel(get_log_level(config.get('level', 'INFO')))

    log_file = config.get('file')
    if log_file and not any(isinstance(h, logging.FileHandler) for h in root.handlers):
        formatter = root.handlers[0].formatter if root.handlers else logging.Formatter()
        _add_file_handler(root, log_file, formatter)

    return setup_logger(name)
