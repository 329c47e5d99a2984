"""
回合状态枚举
Round State Enumeration
"""
from enum import Enum, auto


class RoundState(Enum):
    """回合状态枚举"""
    IDLE = auto()            # 空闲
    COUNTDOWN = auto()       # 倒计时
    CAPTURING = auto()       # 抓拍并识别
    RESOLVING = auto()       # 判定胜负
    SHOWING_RESULT = auto()  # 显示结果

    def __str__(self):
        return self.name
