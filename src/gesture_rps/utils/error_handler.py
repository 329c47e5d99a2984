"""
错误处理工具模块
Error Handler Utility Module
"""
import traceback
from typing import Optional, Callable, Dict
from .exceptions import (
    HardwareException, CameraException, RecognitionException, ModelLoadException,
    PredictionException, ConfigurationException
)
from .logger import setup_logger

logger = setup_logger("GestureRPS.ErrorHandler")


class ErrorHandler:
    """错误处理器类，按异常类型分发处理函数（子类优先）"""

    def __init__(self):
        """初始化错误处理器"""
        self.error_callbacks: Dict[type, Callable] = {}
        self.setup_default_handlers()

    def setup_default_handlers(self):
        """设置默认错误处理函数，注册顺序即匹配顺序，子类在前"""
        self.error_callbacks[CameraException] = self._handle_camera_error
        self.error_callbacks[HardwareException] = self._handle_hardware_error
        self.error_callbacks[ModelLoadException] = self._handle_model_load_error
        self.error_callbacks[PredictionException] = self._handle_prediction_error
        self.error_callbacks[RecognitionException] = self._handle_recognition_error
        self.error_callbacks[ConfigurationException] = self._handle_config_error

    def register_handler(self, exception_type: type, handler: Callable):
        """
        注册错误处理函数，会覆盖同类型的已有处理函数

        Args:
            exception_type: 异常类型
            handler: 处理函数 handler(exception, context)
        """
        # 新注册的处理函数优先匹配
        self.error_callbacks.pop(exception_type, None)
        self.error_callbacks = {exception_type: handler, **self.error_callbacks}
        logger.debug(f"注册错误处理函数: {exception_type.__name__}")

    def handle(self, exception: Exception, context: Optional[str] = None) -> bool:
        """
        处理异常

        Args:
            exception: 异常对象
            context: 上下文信息

        Returns:
            bool: 是否找到并成功执行了对应的处理函数
        """
        error_msg = "异常发生"
        if context:
            error_msg += f" (上下文: {context})"
        error_msg += f": {exception}"
        logger.error(error_msg)

        handler = None
        for exc_type, handler_func in self.error_callbacks.items():
            if isinstance(exception, exc_type):
                handler = handler_func
                break

        if handler is None:
            self._handle_generic_error(exception, context)
            return False

        try:
            handler(exception, context)
            return True
        except Exception as e:
            logger.error(f"错误处理函数执行异常: {e}", exc_info=True)
            return False

    def _handle_hardware_error(self, exception: HardwareException, context: Optional[str]):
        logger.error(f"硬件错误 [{exception.hardware_type}]: {exception.message}")

    def _handle_camera_error(self, exception: CameraException, context: Optional[str]):
        logger.error(f"摄像头错误 [设备: {exception.device_id}]: {exception.message}")

    def _handle_model_load_error(self, exception: ModelLoadException, context: Optional[str]):
        logger.error(f"模型加载失败 [{exception.model_path}]: {exception.message}")

    def _handle_prediction_error(self, exception: PredictionException, context: Optional[str]):
        logger.warning(f"手势预测失败 [置信度: {exception.confidence}]: {exception.message}")

    def _handle_recognition_error(self, exception: RecognitionException, context: Optional[str]):
        logger.warning(f"手势识别错误: {exception.message}")

    def _handle_config_error(self, exception: ConfigurationException, context: Optional[str]):
        logger.error(f"配置错误 [键: {exception.config_key}]: {exception.message}")

    def _handle_generic_error(self, exception: Exception, context: Optional[str]):
        """处理通用错误"""
        logger.error(f"未处理的异常: {type(exception).__name__}: {exception}")
        logger.debug("".join(traceback.format_exception(type(exception), exception, exception.__traceback__)))


# 全局错误处理器实例
global_error_handler = ErrorHandler()
