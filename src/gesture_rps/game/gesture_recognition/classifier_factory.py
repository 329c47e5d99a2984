"""
手势分类器工厂
Gesture Classifier Factory
"""
from pathlib import Path
from typing import Optional
from .classifier import Classifier
from .onnx_classifier import OnnxClassifier
from ...utils.exceptions import ConfigurationException
from ...utils.logger import setup_logger

logger = setup_logger("GestureRPS.ClassifierFactory")


class ClassifierFactory:
    """手势分类器工厂类"""

    @staticmethod
    def create_from_config(config: dict, base_dir: Optional[Path] = None) -> Classifier:
        """
        从配置字典创建分类器（不加载模型）

        Args:
            config: classifier 配置段
            base_dir: 相对模型路径的基准目录，默认为当前工作目录

        Returns:
            Classifier: 分类器实例

        Raises:
            ConfigurationException: 不支持的分类器类型或缺少模型路径
        """
        classifier_type = str(config.get('type', 'onnx')).lower()

        if classifier_type != 'onnx':
            raise ConfigurationException(
                f"不支持的分类器类型: {classifier_type}，支持的类型: 'onnx'",
                config_key="classifier.type"
            )

        model_path = config.get('model_path')
        if not model_path:
            raise ConfigurationException("未指定模型路径", config_key="classifier.model_path")

        path = Path(model_path)
        if not path.is_absolute() and base_dir is not None:
            path = Path(base_dir) / path

        logger.info(f"创建 ONNX 分类器: {path}")
        return OnnxClassifier(
            model_path=str(path),
            input_size=config.get('input_size', 150),
            labels=config.get('labels', ('rock', 'paper', 'scissors')),
            providers=config.get('providers')
        )
