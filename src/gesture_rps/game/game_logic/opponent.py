"""
电脑出拳来源
Opponent Move Source
"""
import random
from typing import Optional
from .move import Move


class RandomOpponent:
    """从三种出拳中等概率抽取，可注入随机数生成器以便复现"""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._moves = list(Move)

    def __call__(self) -> Move:
        return self._rng.choice(self._moves)
