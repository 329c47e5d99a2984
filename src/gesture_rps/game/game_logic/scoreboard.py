"""
计分板与回合结果
Score Board and Round Result
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Sequence
from .move import Move
from .move_catalog import Outcome
from ...utils.logger import setup_logger

logger = setup_logger("GestureRPS.ScoreBoard")


@dataclass(frozen=True)
class RoundResult:
    """回合结果数据类，只存在于显示期间，不做持久化"""
    round_number: int
    player_move: Move
    opponent_move: Move
    outcome: Outcome
    confidence: Sequence[float] = ()
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'round_number': self.round_number,
            'player_move': self.player_move.value,
            'opponent_move': self.opponent_move.value,
            'outcome': self.outcome.value,
            'confidence': list(self.confidence),
            'timestamp': self.timestamp.isoformat()
        }


@dataclass
class ScoreBoard:
    """累计胜场，只在回合结算时增加，重置时归零"""
    player_wins: int = 0
    opponent_wins: int = 0

    def record_outcome(self, outcome: Outcome):
        """
        记录一回合的结果，平局不计分

        Args:
            outcome: 回合结果
        """
        if outcome is Outcome.PLAYER_WIN:
            self.player_wins += 1
        elif outcome is Outcome.OPPONENT_WIN:
            self.opponent_wins += 1
        logger.debug(f"比分: 玩家 {self.player_wins} - 电脑 {self.opponent_wins}")

    def reset(self):
        """比分归零"""
        self.player_wins = 0
        self.opponent_wins = 0
        logger.info("比分已重置")

    def to_dict(self) -> dict:
        return {
            'player_wins': self.player_wins,
            'opponent_wins': self.opponent_wins
        }
