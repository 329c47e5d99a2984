"""
配置加载工具模块
Configuration Loader Utility
"""
import copy
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from .exceptions import ConfigurationException
from .logger import setup_logger

logger = setup_logger("GestureRPS.ConfigLoader")

DEFAULT_CONFIG: Dict[str, Any] = {
    'camera': {
        'type': 'usb',
        'device_id': 0,
        'width': 640,
        'height': 480,
        'fps': 30,
    },
    'classifier': {
        'type': 'onnx',
        'model_path': 'models/rps_model.onnx',
        'input_size': 150,
        'labels': ['rock', 'paper', 'scissors'],
        'providers': ['CPUExecutionProvider'],
    },
    'game': {
        'countdown_seconds': 3,
        'tick_interval': 1.0,
        'result_display_seconds': 5.0,
    },
    'logging': {
        'level': 'INFO',
        'file': None,
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigLoader:
    """配置加载器类"""

    @staticmethod
    def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
        """
        从YAML文件加载配置，缺失的键使用 DEFAULT_CONFIG 补齐

        Args:
            config_path: 配置文件路径，None 时直接返回默认配置

        Returns:
            Dict[str, Any]: 配置字典

        Raises:
            FileNotFoundError: 配置文件不存在
            ConfigurationException: YAML 解析错误或内容不是映射
        """
        if config_path is None:
            logger.info("未指定配置文件，使用默认配置")
            return copy.deepcopy(DEFAULT_CONFIG)

        config_file = Path(config_path)

        if not config_file.exists():
            raise FileNotFoundError(f"配置文件不存在: {config_path}")

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"YAML解析错误: {e}")
            raise ConfigurationException(f"YAML解析错误: {e}") from e

        if config is None:
            logger.warning(f"配置文件为空: {config_path}")
            config = {}

        if not isinstance(config, dict):
            raise ConfigurationException(f"配置文件顶层必须是映射: {config_path}")

        logger.info(f"成功加载配置文件: {config_path}")
        return _deep_merge(DEFAULT_CONFIG, config)

    @staticmethod
    def get_camera_config(config: Dict[str, Any]) -> Dict[str, Any]:
        """获取摄像头配置"""
        return config.get('camera', {})

    @staticmethod
    def get_classifier_config(config: Dict[str, Any]) -> Dict[str, Any]:
        """获取识别模型配置"""
        return config.get('classifier', {})

    @staticmethod
    def get_game_config(config: Dict[str, Any]) -> Dict[str, Any]:
        """
        从配置中获取游戏配置并校验时间参数

        Args:
            config: 完整配置字典

        Returns:
            Dict[str, Any]: 游戏配置字典

        Raises:
            ConfigurationException: 倒计时或时间间隔不是正数
        """
        game_config = config.get('game', {})
        for key in ('countdown_seconds', 'tick_interval', 'result_display_seconds'):
            value = game_config.get(key, DEFAULT_CONFIG['game'][key])
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ConfigurationException(f"游戏配置 {key} 必须是正数: {value!r}", config_key=f"game.{key}")
        if int(game_config.get('countdown_seconds', 3)) != game_config.get('countdown_seconds', 3):
            raise ConfigurationException("倒计时必须是整数", config_key="game.countdown_seconds")
        return game_config

    @staticmethod
    def get_logging_config(config: Dict[str, Any]) -> Dict[str, Any]:
        """获取日志配置"""
        return config.get('logging', {})
