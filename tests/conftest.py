"""
测试公共组件
Shared Test Fixtures
"""
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np
import pytest

# 添加 src 目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from gesture_rps.game import GameSession, TimerScheduler  # noqa: E402
from gesture_rps.game.game_logic import Move  # noqa: E402
from gesture_rps.game.gesture_recognition import Classifier, ClassificationResult, select_move  # noqa: E402
from gesture_rps.hardware.base.video_source import VideoSource  # noqa: E402
from gesture_rps.utils.exceptions import ModelLoadException, PredictionException  # noqa: E402


class ManualClock:
    """手动推进的时钟"""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FakeVideoSource(VideoSource):
    """返回固定帧的视频源，frame=None 模拟摄像头从未出画面"""

    def __init__(self, frame: Optional[np.ndarray] = None, connected: bool = True):
        self.frame = frame
        self.connected = connected
        self.playing = True
        self.play_calls = 0
        self.pause_calls = 0

    def connect(self) -> bool:
        return self.connected

    def disconnect(self) -> bool:
        self.connected = False
        return True

    def is_connected(self) -> bool:
        return self.connected

    def play(self):
        self.play_calls += 1
        self.playing = True

    def pause(self):
        self.pause_calls += 1
        self.playing = False

    def is_playing(self) -> bool:
        return self.playing

    def current_frame(self) -> Optional[np.ndarray]:
        return None if self.frame is None else self.frame.copy()

    def get_resolution(self) -> tuple:
        if self.frame is None:
            return (640, 480)
        return (self.frame.shape[1], self.frame.shape[0])


def scores_for(move: Move) -> List[float]:
    """给定出拳的 one-hot 置信度"""
    return [0.9 if m is move else 0.05 for m in Move]


class ScriptedClassifier(Classifier):
    """按顺序返回预设置信度的分类器"""

    def __init__(self, scores: Sequence[Sequence[float]] = (), ready: bool = True,
                 fail_load: bool = False, raise_on_classify: bool = False):
        self.scores = [list(s) for s in scores]
        self.ready = ready
        self.fail_load = fail_load
        self.raise_on_classify = raise_on_classify
        self.load_calls = 0
        self.frames: List[np.ndarray] = []
        self.events: Optional[list] = None

    def load(self):
        self.load_calls += 1
        if self.fail_load:
            raise ModelLoadException("missing model", model_path="models/none.onnx")
        self.ready = True

    def is_ready(self) -> bool:
        return self.ready

    def classify(self, frame: np.ndarray) -> ClassificationResult:
        self.frames.append(frame)
        if self.events is not None:
            self.events.append("classify")
        if self.raise_on_classify:
            raise PredictionException("inference crashed")
        scores = self.scores.pop(0) if self.scores else []
        return ClassificationResult(move=select_move(scores), confidence=tuple(scores))


class FixedOpponent:
    """按顺序出拳，并记录抽取次数"""

    def __init__(self, *moves: Move):
        self.moves = list(moves)
        self.calls = 0

    def __call__(self) -> Move:
        move = self.moves[self.calls % len(self.moves)]
        self.calls += 1
        return move


class Harness:
    """把时钟、调度器与会话组合在一起的测试辅助类"""

    def __init__(self, classifier: ScriptedClassifier, opponent: FixedOpponent,
                 video: FakeVideoSource):
        self.clock = ManualClock()
        self.scheduler = TimerScheduler(clock=self.clock)
        self.classifier = classifier
        self.opponent = opponent
        self.video = video
        self.session = GameSession(
            scheduler=self.scheduler,
            video_source=video,
            classifier=classifier,
            opponent=opponent,
            countdown_seconds=3,
            tick_interval=1.0,
            result_display_seconds=5.0
        )

    @property
    def controller(self):
        return self.session.controller

    def step(self, seconds: float = 1.0):
        """推进时间并执行到期任务"""
        self.clock.advance(seconds)
        self.scheduler.run_pending()

    def flush(self):
        """执行 call_soon 安排的任务"""
        self.scheduler.run_pending()

    def play_round(self):
        """开始一回合并走到结果显示"""
        assert self.session.start_round()
        for _ in range(3):
            self.step(1.0)
        self.flush()


@pytest.fixture
def frame():
    return np.full((480, 640, 3), 127, dtype=np.uint8)


_DEFAULT_FRAME = object()


@pytest.fixture
def make_harness(frame):
    def _make(player_scores=(), opponent_moves=(Move.PAPER,), ready=True,
              fail_load=False, raise_on_classify=False, video_frame=_DEFAULT_FRAME):
        classifier = ScriptedClassifier(player_scores, ready=ready, fail_load=fail_load,
                                        raise_on_classify=raise_on_classify)
        video = FakeVideoSource(frame if video_frame is _DEFAULT_FRAME else video_frame)
        return Harness(classifier, FixedOpponent(*opponent_moves), video)
    return _make
