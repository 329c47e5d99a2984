"""
硬件工厂类
Hardware Factory Class
"""
from typing import Dict, Any
from ..base.video_source import VideoSource
from ...utils.exceptions import ConfigurationException


class HardwareFactory:
    """硬件工厂类，负责按名称创建视频源实例"""

    _camera_classes: Dict[str, type] = {}

    @classmethod
    def register_camera(cls, name: str, camera_class: type):
        """
        注册摄像头类

        Args:
            name: 摄像头名称（如 'usb'）
            camera_class: 摄像头类（必须继承自VideoSource）
        """
        if not issubclass(camera_class, VideoSource):
            raise TypeError(f"{camera_class} must be a subclass of VideoSource")
        cls._camera_classes[name.lower()] = camera_class

    @classmethod
    def create_camera(cls, name: str, config: Dict[str, Any]) -> VideoSource:
        """
        创建摄像头实例

        Args:
            name: 摄像头名称
            config: 构造参数（不含 type）

        Returns:
            VideoSource: 摄像头实例

        Raises:
            ConfigurationException: 未注册的摄像头类型
        """
        name_lower = name.lower()
        if name_lower not in cls._camera_classes:
            raise ConfigurationException(f"Unknown camera: {name}", config_key="camera.type")

        return cls._camera_classes[name_lower](**config)

    @classmethod
    def get_available_cameras(cls) -> list:
        return list(cls._camera_classes.keys())
