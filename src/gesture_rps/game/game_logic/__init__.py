"""
游戏逻辑模块
Game Logic Module
"""
from .move import Move, LABELS
from .move_catalog import MoveCatalog, Outcome, OPPONENT_PLACEHOLDER
from .scoreboard import ScoreBoard, RoundResult
from .opponent import RandomOpponent

__all__ = [
    'Move',
    'LABELS',
    'MoveCatalog',
    'Outcome',
    'OPPONENT_PLACEHOLDER',
    'ScoreBoard',
    'RoundResult',
    'RandomOpponent'
]
