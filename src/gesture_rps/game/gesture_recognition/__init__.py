"""
手势识别模块
Gesture Recognition Module
"""
from .classifier import Classifier, ClassificationResult, select_move
from .onnx_classifier import OnnxClassifier
from .classifier_factory import ClassifierFactory

__all__ = [
    'Classifier',
    'ClassificationResult',
    'select_move',
    'OnnxClassifier',
    'ClassifierFactory'
]
