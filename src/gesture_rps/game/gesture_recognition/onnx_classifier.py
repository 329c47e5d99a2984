"""
ONNX 手势分类器
ONNX Gesture Classifier

模型输入为 NHWC 的 RGB 图像（归一化到 [0, 1]），输出为每个标签的置信度。
"""
import cv2
import numpy as np
import onnxruntime as ort
from pathlib import Path
from typing import Optional, Sequence, List
from .classifier import Classifier, ClassificationResult, select_move
from ..game_logic.move import LABELS
from ...utils.exceptions import ModelLoadException, PredictionException
from ...utils.logger import setup_logger

logger = setup_logger("GestureRPS.OnnxClassifier")


class OnnxClassifier(Classifier):
    """基于 onnxruntime 的三分类手势识别器"""

    def __init__(self,
                 model_path: str,
                 input_size: int = 150,
                 labels: Sequence[str] = LABELS,
                 providers: Optional[List[str]] = None):
        """
        初始化分类器（不加载模型）

        Args:
            model_path: ONNX 模型文件路径
            input_size: 模型输入边长（正方形）
            labels: 输出通道对应的标签，顺序即模型输出顺序
            providers: onnxruntime 执行提供者，默认仅 CPU
        """
        self.model_path = Path(model_path)
        self.input_size = int(input_size)
        self.labels = tuple(labels)
        self.providers = list(providers) if providers else ['CPUExecutionProvider']
        self.session: Optional[ort.InferenceSession] = None
        self.input_name: str = ""

        logger.info(f"初始化 ONNX 分类器: {self.model_path}, 输入尺寸: {self.input_size}x{self.input_size}")

    def load(self):
        """
        创建推理会话

        Raises:
            ModelLoadException: 模型文件不存在或会话创建失败
        """
        if self.session is not None:
            logger.warning("模型已经加载")
            return

        if not self.model_path.exists():
            raise ModelLoadException(f"模型文件不存在: {self.model_path}", model_path=str(self.model_path))

        available = ort.get_available_providers()
        providers = [p for p in self.providers if p in available] or ['CPUExecutionProvider']

        try:
            sess_options = ort.SessionOptions()
            sess_options.graph_optimization_level = ort.GraphOptimizationLevel.ORT_ENABLE_ALL
            session = ort.InferenceSession(
                str(self.model_path),
                sess_options=sess_options,
                providers=providers
            )
        except Exception as e:
            raise ModelLoadException(f"创建推理会话失败: {e}", model_path=str(self.model_path)) from e

        self.input_name = session.get_inputs()[0].name
        self.session = session
        logger.info(f"✓ 模型加载成功: {self.model_path} (providers={providers})")

    def is_ready(self) -> bool:
        return self.session is not None

    def preprocess(self, frame: np.ndarray) -> np.ndarray:
        """
        预处理图像以适配模型输入

        Args:
            frame: BGR 图像

        Returns:
            np.ndarray: 形状 (1, size, size, 3) 的 float32 数组
        """
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        resized = cv2.resize(rgb, (self.input_size, self.input_size), interpolation=cv2.INTER_NEAREST)
        normalized = resized.astype(np.float32) / 255.0
        return np.expand_dims(normalized, axis=0)

    def classify(self, frame: np.ndarray) -> ClassificationResult:
        if self.session is None:
            raise PredictionException("模型尚未加载")

        try:
            outputs = self.session.run(None, {self.input_name: self.preprocess(frame)})
        except Exception as e:
            raise PredictionException(f"推理失败: {e}") from e

        scores = np.asarray(outputs[0], dtype=np.float32).reshape(-1) if outputs else np.empty(0)
        confidence = tuple(float(s) for s in scores)
        move = select_move(confidence, self.labels)

        logger.debug(f"分类结果: {move}, 置信度: {confidence}")
        return ClassificationResult(move=move, confidence=confidence)
