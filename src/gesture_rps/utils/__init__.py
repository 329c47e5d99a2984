"""
工具类模块
Utility Classes
"""
from .logger import setup_logger, setup_logger_from_config, get_log_level
from .config_loader import ConfigLoader, DEFAULT_CONFIG
from .error_handler import ErrorHandler, global_error_handler
from .exceptions import (
    HardwareException,
    CameraException,
    RecognitionException,
    ModelLoadException,
    PredictionException,
    ConfigurationException
)

__all__ = [
    'setup_logger',
    'setup_logger_from_config',
    'get_log_level',
    'ConfigLoader',
    'DEFAULT_CONFIG',
    'ErrorHandler',
    'global_error_handler',
    'HardwareException',
    'CameraException',
    'RecognitionException',
    'ModelLoadException',
    'PredictionException',
    'ConfigurationException'
]
