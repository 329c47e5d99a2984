"""
单线程定时器调度
Single-threaded Timer Scheduler

所有回调都在调用 run_pending() 的线程上执行，主循环每帧调用一次。
"""
import heapq
import itertools
import time
from typing import Callable, List, Optional
from ..utils.logger import setup_logger

logger = setup_logger("GestureRPS.Scheduler")


class TimerHandle:
    """可取消的定时任务句柄"""

    def __init__(self, deadline: float, seq: int, callback: Callable[[], None],
                 interval: Optional[float] = None, name: str = ""):
        self.deadline = deadline
        self.seq = seq
        self.callback = callback
        self.interval = interval
        self.name = name or getattr(callback, '__name__', 'timer')
        self._cancelled = False

    def cancel(self):
        """取消任务，已取消的任务不会再被执行"""
        if not self._cancelled:
            logger.debug(f"取消定时任务: {self.name}")
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def repeating(self) -> bool:
        return self.interval is not None

    def __lt__(self, other: "TimerHandle") -> bool:
        return (self.deadline, self.seq) < (other.deadline, other.seq)

    def __repr__(self):
        state = "cancelled" if self._cancelled else f"at={self.deadline:.3f}"
        return f"<TimerHandle {self.name} {state}>"


class TimerScheduler:
    """定时器调度器，时钟可注入（默认 time.monotonic）"""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._queue: List[TimerHandle] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self.clock()

    def call_soon(self, callback: Callable[[], None], name: str = "") -> TimerHandle:
        """下一次 run_pending() 时执行"""
        return self.call_later(0.0, callback, name=name)

    def call_later(self, delay: float, callback: Callable[[], None], name: str = "") -> TimerHandle:
        """
        延迟执行一次

        Args:
            delay: 延迟秒数
            callback: 回调函数
            name: 任务名称（用于日志）

        Returns:
            TimerHandle: 任务句柄
        """
        handle = TimerHandle(self.now() + max(0.0, delay), next(self._counter), callback, name=name)
        heapq.heappush(self._queue, handle)
        logger.debug(f"安排定时任务: {handle}")
        return handle

    def call_every(self, interval: float, callback: Callable[[], None], name: str = "") -> TimerHandle:
        """
        每隔 interval 秒执行一次，第一次在 interval 秒后

        Raises:
            ValueError: interval 不是正数
        """
        if interval <= 0:
            raise ValueError(f"重复间隔必须是正数: {interval}")
        handle = TimerHandle(self.now() + interval, next(self._counter), callback,
                             interval=interval, name=name)
        heapq.heappush(self._queue, handle)
        logger.debug(f"安排重复任务: {handle}, 间隔 {interval}s")
        return handle

    def run_pending(self) -> int:
        """
        执行所有已到期的任务

        本次调用期间新安排的任务留到下一次调用执行，重复任务每次调用最多执行一次。

        Returns:
            int: 实际执行的任务数
        """
        now = self.now()
        due: List[TimerHandle] = []
        while self._queue and self._queue[0].deadline <= now:
            handle = heapq.heappop(self._queue)
            if not handle.cancelled:
                due.append(handle)

        executed = 0
        for handle in due:
            if handle.cancelled:
                continue
            if handle.repeating:
                handle.deadline += handle.interval
                handle.seq = next(self._counter)
                heapq.heappush(self._queue, handle)
            try:
                handle.callback()
            except Exception as e:
                logger.error(f"定时任务 {handle.name} 执行异常: {e}", exc_info=True)
            executed += 1
        return executed

    def pending_count(self) -> int:
        """未取消的待执行任务数"""
        return sum(1 for handle in self._queue if not handle.cancelled)

    def clear(self):
        """取消全部任务"""
        for handle in self._queue:
            handle.cancel()
        self._queue.clear()
