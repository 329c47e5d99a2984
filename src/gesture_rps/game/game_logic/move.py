"""
出拳枚举类型
Move Enumeration
"""
from enum import Enum
from typing import Optional


class Move(Enum):
    """出拳类型枚举，声明顺序即模型标签顺序"""
    ROCK = "rock"          # 石头
    PAPER = "paper"        # 布
    SCISSORS = "scissors"  # 剪刀

    def __str__(self):
        return self.value

    @classmethod
    def from_string(cls, value: str) -> Optional["Move"]:
        """
        从字符串创建出拳枚举

        Args:
            value: 出拳字符串（rock, paper, scissors），不区分大小写

        Returns:
            Optional[Move]: 出拳枚举值，无法识别时返回 None
        """
        value_lower = value.strip().lower()
        for move in cls:
            if move.value == value_lower:
                return move
        return None


# 模型输出的标签顺序
LABELS = tuple(move.value for move in Move)
