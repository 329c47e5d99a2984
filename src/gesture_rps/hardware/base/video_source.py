"""
视频源抽象基类
Video Source Base Class
"""
from abc import ABC, abstractmethod
from typing import Optional
import numpy as np


class VideoSource(ABC):
    """视频源抽象基类，定义所有摄像头必须实现的接口"""

    @abstractmethod
    def connect(self) -> bool:
        """
        连接视频源

        Returns:
            bool: 连接是否成功
        """
        pass

    @abstractmethod
    def disconnect(self) -> bool:
        """
        断开连接

        Returns:
            bool: 断开是否成功
        """
        pass

    @abstractmethod
    def is_connected(self) -> bool:
        pass

    @abstractmethod
    def play(self):
        """恢复实时画面"""
        pass

    @abstractmethod
    def pause(self):
        """冻结当前画面，之后 current_frame() 一直返回同一帧"""
        pass

    @abstractmethod
    def is_playing(self) -> bool:
        pass

    @abstractmethod
    def current_frame(self) -> Optional[np.ndarray]:
        """
        获取当前帧

        Returns:
            Optional[np.ndarray]: BGR 图像；从未取得过画面时返回 None

        Raises:
            CameraException: 设备读取出错
        """
        pass

    @abstractmethod
    def get_resolution(self) -> tuple:
        """
        获取分辨率

        Returns:
            tuple: (width, height)
        """
        pass

    def get_status(self) -> dict:
        """获取视频源状态信息"""
        resolution = self.get_resolution() if self.is_connected() else (0, 0)
        return {
            "connected": self.is_connected(),
            "playing": self.is_playing(),
            "resolution": resolution,
            "type": self.__class__.__name__
        }
