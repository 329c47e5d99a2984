"""
USB摄像头实现
USB Camera Implementation
"""
import cv2
import numpy as np
from typing import Optional, Tuple
from ...base.video_source import VideoSource
from ....utils.exceptions import CameraException
from ....utils.logger import setup_logger

logger = setup_logger("GestureRPS.USBCamera")


class USBCamera(VideoSource):
    """USB摄像头实现类，暂停时保留最后一帧"""

    def __init__(self, device_id: int = 0, width: int = 640, height: int = 480,
                 fps: int = 30, backend: Optional[int] = None):
        """
        初始化USB摄像头

        Args:
            device_id: 摄像头设备ID（默认0）
            width: 图像宽度（默认640）
            height: 图像高度（默认480）
            fps: 帧率（默认30）
            backend: OpenCV后端（可选，如cv2.CAP_V4L2）
        """
        self.device_id = device_id
        self.width = width
        self.height = height
        self.fps = fps
        self.backend = backend
        self._cap: Optional[cv2.VideoCapture] = None
        self._connected = False
        self._playing = True
        self._last_frame: Optional[np.ndarray] = None
        self._current_resolution = (width, height)

        logger.info(f"初始化USB摄像头: device_id={device_id}, resolution={width}x{height}, fps={fps}")

    def connect(self) -> bool:
        """
        连接摄像头并读取一帧验证

        Returns:
            bool: 连接是否成功
        """
        if self._connected:
            logger.warning("摄像头已经连接")
            return True

        if self.backend is not None:
            self._cap = cv2.VideoCapture(self.device_id, self.backend)
        else:
            self._cap = cv2.VideoCapture(self.device_id)

        if not self._cap.isOpened():
            logger.error(f"无法打开摄像头设备: {self.device_id}")
            self._release()
            return False

        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        self._cap.set(cv2.CAP_PROP_FPS, self.fps)

        actual_width = int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        actual_height = int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        self._current_resolution = (actual_width, actual_height)

        ret, frame = self._cap.read()
        if not ret or frame is None:
            logger.error("摄像头连接测试失败：无法读取图像")
            self._release()
            return False

        self._last_frame = frame
        self._connected = True
        logger.info(f"摄像头连接成功: device_id={self.device_id}, "
                    f"实际分辨率={actual_width}x{actual_height}")
        return True

    def _release(self):
        if self._cap is not None:
            self._cap.release()
            self._cap = None

    def disconnect(self) -> bool:
        if not self._connected:
            logger.warning("摄像头未连接")
            return True

        self._release()
        self._connected = False
        logger.info(f"摄像头已断开: device_id={self.device_id}")
        return True

    def is_connected(self) -> bool:
        if not self._connected or self._cap is None:
            return False

        # 设备被拔出时 isOpened() 会变为 False
        if not self._cap.isOpened():
            self._connected = False
            return False

        return True

    def play(self):
        if not self._playing:
            logger.debug("恢复实时画面")
        self._playing = True

    def pause(self):
        if self._playing:
            logger.debug("画面已冻结")
        self._playing = False

    def is_playing(self) -> bool:
        return self._playing

    def current_frame(self) -> Optional[np.ndarray]:
        """
        获取当前帧：播放时读取新帧，暂停时返回冻结的帧

        Returns:
            Optional[np.ndarray]: 图像数据（BGR格式），从未取得画面时返回None

        Raises:
            CameraException: OpenCV 读取出错
        """
        if self._playing and self.is_connected():
            try:
                ret, frame = self._cap.read()
            except cv2.error as e:
                raise CameraException(f"读取画面出错: {e}", device_id=self.device_id) from e
            if ret and frame is not None:
                self._last_frame = frame
            else:
                logger.warning("捕获图像失败")

        return None if self._last_frame is None else self._last_frame.copy()

    def get_resolution(self) -> Tuple[int, int]:
        """
        获取摄像头分辨率

        Returns:
            Tuple[int, int]: (width, height)
        """
        if self.is_connected():
            width = int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH))
            height = int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
            self._current_resolution = (width, height)
        return self._current_resolution

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
