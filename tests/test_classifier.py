"""
手势分类器测试
Gesture Classifier Tests
"""
import math

import numpy as np
import pytest

from gesture_rps.game.game_logic import Move
from gesture_rps.game.gesture_recognition import (
    ClassificationResult, ClassifierFactory, OnnxClassifier, select_move
)
from gesture_rps.utils.exceptions import (
    ConfigurationException, ModelLoadException, PredictionException
)


@pytest.mark.parametrize("scores,expected", [
    ([0.9, 0.05, 0.05], Move.ROCK),
    ([0.1, 0.7, 0.2], Move.PAPER),
    ([0.1, 0.2, 0.7], Move.SCISSORS),
    ([0.1, 0.45, 0.45], Move.PAPER),
    ([1 / 3, 1 / 3, 1 / 3], Move.ROCK),
    ([0.2, 0.8], Move.PAPER),
])
def test_select_move_argmax_with_first_index_ties(scores, expected):
    assert select_move(scores) is expected


@pytest.mark.parametrize("scores", [
    [],
    [math.nan, 0.2, 0.3],
    [0.1, math.inf, 0.3],
    [0.1, 0.1, 0.1, 0.9],
])
def test_select_move_degenerate_scores(scores):
    assert select_move(scores) is None


def test_select_move_uses_given_label_order():
    assert select_move([0.1, 0.8, 0.1], labels=("scissors", "rock", "paper")) is Move.ROCK


def test_select_move_accepts_numpy_rows():
    assert select_move(np.array([0.2, 0.1, 0.7], dtype=np.float32)) is Move.SCISSORS


def test_classification_result_resolution():
    assert ClassificationResult(Move.ROCK, (0.9, 0.05, 0.05)).is_resolved
    unresolved = ClassificationResult(None)
    assert not unresolved.is_resolved
    assert unresolved.to_dict() == {'move': None, 'confidence': []}


class _FakeSession:
    def __init__(self, outputs=None, error=None):
        self.outputs = outputs
        self.error = error
        self.feeds = []

    def run(self, output_names, feeds):
        self.feeds.append(feeds)
        if self.error:
            raise self.error
        return self.outputs


def _loaded_classifier(tmp_path, session):
    classifier = OnnxClassifier(model_path=str(tmp_path / "model.onnx"))
    classifier.session = session
    classifier.input_name = "input"
    return classifier


def test_preprocess_shape_and_range(tmp_path):
    classifier = OnnxClassifier(model_path=str(tmp_path / "model.onnx"), input_size=150)
    frame = np.full((480, 640, 3), 255, dtype=np.uint8)
    tensor = classifier.preprocess(frame)
    assert tensor.shape == (1, 150, 150, 3)
    assert tensor.dtype == np.float32
    assert float(tensor.max()) == pytest.approx(1.0)


def test_preprocess_converts_bgr_to_rgb(tmp_path):
    classifier = OnnxClassifier(model_path=str(tmp_path / "model.onnx"), input_size=4)
    frame = np.zeros((8, 8, 3), dtype=np.uint8)
    frame[:, :, 0] = 255  # 蓝色通道
    tensor = classifier.preprocess(frame)
    assert tensor[0, 0, 0, 2] == pytest.approx(1.0)
    assert tensor[0, 0, 0, 0] == pytest.approx(0.0)


def test_load_missing_model_raises(tmp_path):
    classifier = OnnxClassifier(model_path=str(tmp_path / "missing.onnx"))
    with pytest.raises(ModelLoadException):
        classifier.load()
    assert not classifier.is_ready()


def test_load_corrupt_model_raises(tmp_path):
    path = tmp_path / "broken.onnx"
    path.write_bytes(b"not a model")
    classifier = OnnxClassifier(model_path=str(path))
    with pytest.raises(ModelLoadException):
        classifier.load()
    assert not classifier.is_ready()


def test_classify_before_load_raises(tmp_path, frame):
    classifier = OnnxClassifier(model_path=str(tmp_path / "model.onnx"))
    with pytest.raises(PredictionException):
        classifier.classify(frame)


def test_classify_takes_argmax_of_first_row(tmp_path, frame):
    session = _FakeSession(outputs=[np.array([[0.1, 0.7, 0.2]], dtype=np.float32)])
    classifier = _loaded_classifier(tmp_path, session)

    result = classifier.classify(frame)

    assert result.move is Move.PAPER
    assert result.confidence == pytest.approx((0.1, 0.7, 0.2))
    assert session.feeds[0]["input"].shape == (1, 150, 150, 3)


def test_classify_empty_output_is_unresolved(tmp_path, frame):
    session = _FakeSession(outputs=[np.zeros((1, 0), dtype=np.float32)])
    result = _loaded_classifier(tmp_path, session).classify(frame)
    assert result.move is None


def test_classify_inference_error_raises(tmp_path, frame):
    session = _FakeSession(error=RuntimeError("bad input"))
    with pytest.raises(PredictionException):
        _loaded_classifier(tmp_path, session).classify(frame)


def test_factory_builds_onnx_classifier(tmp_path):
    classifier = ClassifierFactory.create_from_config(
        {'type': 'onnx', 'model_path': 'models/rps.onnx', 'input_size': 96},
        base_dir=tmp_path
    )
    assert isinstance(classifier, OnnxClassifier)
    assert classifier.model_path == tmp_path / "models" / "rps.onnx"
    assert classifier.input_size == 96
    assert not classifier.is_ready()


def test_factory_rejects_unknown_type():
    with pytest.raises(ConfigurationException) as exc_info:
        ClassifierFactory.create_from_config({'type': 'yolo', 'model_path': 'x.pt'})
    assert exc_info.value.config_key == "classifier.type"


def test_factory_requires_model_path():
    with pytest.raises(ConfigurationException):
        ClassifierFactory.create_from_config({'type': 'onnx', 'model_path': None})
