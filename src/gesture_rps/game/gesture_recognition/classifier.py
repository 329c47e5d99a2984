"""
手势分类器接口
Gesture Classifier Interface
"""
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple
import numpy as np
from ..game_logic.move import Move, LABELS


@dataclass(frozen=True)
class ClassificationResult:
    """分类结果，move 为 None 表示无法确定手势"""
    move: Optional[Move]
    confidence: Tuple[float, ...] = ()

    @property
    def is_resolved(self) -> bool:
        return self.move is not None

    def to_dict(self) -> dict:
        return {
            'move': self.move.value if self.move else None,
            'confidence': list(self.confidence)
        }


def select_move(scores: Sequence[float], labels: Sequence[str] = LABELS) -> Optional[Move]:
    """
    取置信度最高的标签（argmax），并列时取声明顺序靠前的标签

    Args:
        scores: 每个标签的置信度，顺序与 labels 一致
        labels: 标签名称

    Returns:
        Optional[Move]: 识别出的出拳；分数为空、含非有限值或最高分对应的
        下标超出标签范围时返回 None
    """
    if len(scores) == 0:
        return None

    values = [float(s) for s in scores]
    if not all(math.isfinite(v) for v in values):
        return None

    best_index = 0
    for index, value in enumerate(values):
        if value > values[best_index]:
            best_index = index

    if best_index >= len(labels):
        return None
    return Move.from_string(labels[best_index])


class Classifier(ABC):
    """分类器抽象基类，模型加载完成前 is_ready() 返回 False"""

    @abstractmethod
    def load(self):
        """
        加载模型

        Raises:
            ModelLoadException: 模型不可用
        """

    @abstractmethod
    def is_ready(self) -> bool:
        """模型是否可以进行推理"""

    @abstractmethod
    def classify(self, frame: np.ndarray) -> ClassificationResult:
        """
        对一帧图像分类

        Args:
            frame: BGR 图像

        Returns:
            ClassificationResult: 分类结果

        Raises:
            PredictionException: 推理过程出错
        """
