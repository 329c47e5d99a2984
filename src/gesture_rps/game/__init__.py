"""
游戏逻辑模块
Game Module
"""
from .game_session import GameSession, SessionView
from .round_controller import RoundController
from .scheduler import TimerScheduler, TimerHandle
from .notices import Notice, NoticeKind
from .game_logic import Move, MoveCatalog, Outcome, ScoreBoard, RoundResult, RandomOpponent
from .state_machine import RoundState, RoundStateMachine
from .gesture_recognition import Classifier, ClassificationResult, OnnxClassifier, ClassifierFactory

__all__ = [
    'GameSession',
    'SessionView',
    'RoundController',
    'TimerScheduler',
    'TimerHandle',
    'Notice',
    'NoticeKind',
    'Move',
    'MoveCatalog',
    'Outcome',
    'ScoreBoard',
    'RoundResult',
    'RandomOpponent',
    'RoundState',
    'RoundStateMachine',
    'Classifier',
    'ClassificationResult',
    'OnnxClassifier',
    'ClassifierFactory'
]
