"""
回合状态机
Round State Machine
"""
from typing import Optional, Callable, Dict, List
from .round_state import RoundState
from ...utils.logger import setup_logger

logger = setup_logger("GestureRPS.RoundStateMachine")


class RoundStateMachine:
    """回合状态机类"""

    # 状态转换规则，任意状态都可以通过 reset() 回到 IDLE
    VALID_TRANSITIONS: Dict[RoundState, List[RoundState]] = {
        RoundState.IDLE: [RoundState.COUNTDOWN],
        RoundState.COUNTDOWN: [RoundState.CAPTURING, RoundState.IDLE],
        RoundState.CAPTURING: [RoundState.RESOLVING, RoundState.IDLE],
        RoundState.RESOLVING: [RoundState.SHOWING_RESULT, RoundState.IDLE],
        RoundState.SHOWING_RESULT: [RoundState.IDLE, RoundState.COUNTDOWN],
    }

    def __init__(self, initial_state: RoundState = RoundState.IDLE):
        """
        初始化状态机

        Args:
            initial_state: 初始状态
        """
        self.current_state = initial_state
        self.previous_state: Optional[RoundState] = None
        self.listeners: List[Callable[[RoundState, RoundState], None]] = []

        logger.info(f"回合状态机初始化，初始状态: {self.current_state}")

    def add_listener(self, listener: Callable[[RoundState, RoundState], None]):
        """
        注册状态变化监听函数

        Args:
            listener: listener(old_state, new_state)
        """
        self.listeners.append(listener)

    def transition_to(self, new_state: RoundState) -> bool:
        """
        转换到新状态

        Args:
            new_state: 新状态

        Returns:
            bool: 转换是否成功
        """
        if new_state not in self.VALID_TRANSITIONS.get(self.current_state, []):
            logger.warning(f"无效的状态转换: {self.current_state} -> {new_state}")
            return False

        self._set_state(new_state)
        return True

    def can_transition_to(self, state: RoundState) -> bool:
        return state in self.VALID_TRANSITIONS.get(self.current_state, [])

    def reset(self, state: RoundState = RoundState.IDLE):
        """
        强制设置状态（忽略转换规则）

        Args:
            state: 重置后的状态
        """
        if self.current_state == state:
            logger.debug(f"状态未改变: {state}")
            return
        self._set_state(state)
        logger.info(f"状态机已重置到: {state}")

    def _set_state(self, new_state: RoundState):
        old_state = self.current_state
        self.previous_state = old_state
        self.current_state = new_state

        logger.info(f"状态转换: {old_state} -> {new_state}")

        for listener in list(self.listeners):
            try:
                listener(old_state, new_state)
            except Exception as e:
                logger.error(f"状态监听函数执行异常: {e}", exc_info=True)

    def get_current_state(self) -> RoundState:
        """获取当前状态"""
        return self.current_state

    def get_previous_state(self) -> Optional[RoundState]:
        """获取上一个状态"""
        return self.previous_state

    def is_in_state(self, *states: RoundState) -> bool:
        """当前是否处于给定状态之一"""
        return self.current_state in states
