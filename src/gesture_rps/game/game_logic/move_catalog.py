"""
出拳目录与胜负规则
Move Catalog and Rules
"""
from enum import Enum
from typing import Dict
from .move import Move
from ...utils.logger import setup_logger

logger = setup_logger("GestureRPS.MoveCatalog")

# 电脑出拳未揭晓时显示的占位符
OPPONENT_PLACEHOLDER = "??"


class Outcome(Enum):
    """回合结果枚举"""
    PLAYER_WIN = "player_win"      # 玩家获胜
    OPPONENT_WIN = "opponent_win"  # 电脑获胜
    TIE = "tie"                    # 平局

    @property
    def banner(self) -> str:
        """结果横幅文字"""
        return _BANNERS[self]


_BANNERS = {
    Outcome.PLAYER_WIN: "You won!",
    Outcome.OPPONENT_WIN: "Computer won! 🤖",
    Outcome.TIE: "It's a tie!",
}


class MoveCatalog:
    """出拳目录：显示符号与胜负关系，无可变状态"""

    GLYPHS: Dict[Move, str] = {
        Move.ROCK: "✊🏽",
        Move.PAPER: "✋🏽",
        Move.SCISSORS: "✌🏽",
    }

    # 胜负规则：key胜value
    WIN_RULES: Dict[Move, Move] = {
        Move.ROCK: Move.SCISSORS,      # 石头胜剪刀
        Move.SCISSORS: Move.PAPER,     # 剪刀胜布
        Move.PAPER: Move.ROCK,         # 布胜石头
    }

    @staticmethod
    def beats(a: Move, b: Move) -> bool:
        """a 是否战胜 b"""
        return MoveCatalog.WIN_RULES[a] is b

    @staticmethod
    def display_glyph(move: Move) -> str:
        """出拳的显示符号"""
        return MoveCatalog.GLYPHS[move]

    @staticmethod
    def judge(player_move: Move, opponent_move: Move) -> Outcome:
        """
        判断回合结果

        Args:
            player_move: 玩家出拳
            opponent_move: 电脑出拳

        Returns:
            Outcome: 回合结果
        """
        if player_move is opponent_move:
            logger.debug(f"平局: {player_move}")
            return Outcome.TIE

        if MoveCatalog.beats(player_move, opponent_move):
            logger.debug(f"玩家获胜: {player_move} 胜 {opponent_move}")
            return Outcome.PLAYER_WIN

        logger.debug(f"电脑获胜: {opponent_move} 胜 {player_move}")
        return Outcome.OPPONENT_WIN

    @staticmethod
    def winning_move(move: Move) -> Move:
        """能战胜 move 的出拳"""
        for winner, loser in MoveCatalog.WIN_RULES.items():
            if loser is move:
                return winner
        raise KeyError(move)

    @staticmethod
    def losing_move(move: Move) -> Move:
        """会被 move 战胜的出拳"""
        return MoveCatalog.WIN_RULES[move]
