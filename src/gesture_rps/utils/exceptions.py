"""
自定义异常类
Custom Exception Classes
"""
from typing import Optional


class HardwareException(Exception):
    """硬件相关异常基类"""
    def __init__(self, message: str, hardware_type: Optional[str] = None):
        super().__init__(message)
        self.hardware_type = hardware_type
        self.message = message


class CameraException(HardwareException):
    """摄像头异常（无法打开、从未产生画面）"""
    def __init__(self, message: str, device_id: Optional[int] = None):
        super().__init__(message, hardware_type="camera")
        self.device_id = device_id


class RecognitionException(Exception):
    """手势识别异常基类"""
    def __init__(self, message: str, model_path: Optional[str] = None):
        super().__init__(message)
        self.model_path = model_path
        self.message = message


class ModelLoadException(RecognitionException):
    """模型加载失败"""


class PredictionException(RecognitionException):
    """模型无法给出可用的手势"""
    def __init__(self, message: str, confidence: Optional[list] = None):
        super().__init__(message)
        self.confidence = confidence


class ConfigurationException(Exception):
    """配置异常"""
    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message)
        self.config_key = config_key
        self.message = message
