"""
回合控制器
Round Controller - 倒计时、抓拍识别、胜负判定与计分
"""
from typing import Optional, Callable
from .scheduler import TimerScheduler, TimerHandle
from .notices import Notice, NoticeKind
from .state_machine import RoundState, RoundStateMachine
from .game_logic import Move, MoveCatalog, ScoreBoard, RoundResult, RandomOpponent
from .gesture_recognition import Classifier
from ..hardware.base.video_source import VideoSource
from ..utils.exceptions import HardwareException, PredictionException
from ..utils.logger import setup_logger

logger = setup_logger("GestureRPS.RoundController")


class RoundController:
    """
    回合控制器，独占回合状态与显示状态

    所有状态只在本类的方法和它安排的定时回调中修改。每个定时回调都绑定到
    安排它的回合令牌，新回合开始或重置后旧回调即使触发也不会生效。
    """

    def __init__(self,
                 scheduler: TimerScheduler,
                 video_source: VideoSource,
                 classifier: Classifier,
                 scoreboard: Optional[ScoreBoard] = None,
                 opponent: Optional[Callable[[], Move]] = None,
                 countdown_seconds: int = 3,
                 tick_interval: float = 1.0,
                 result_display_seconds: float = 5.0):
        """
        初始化回合控制器

        Args:
            scheduler: 定时器调度器
            video_source: 视频源
            classifier: 手势分类器
            scoreboard: 计分板
            opponent: 电脑出拳来源，默认等概率随机
            countdown_seconds: 倒计时起始值
            tick_interval: 倒计时每跳间隔（秒）
            result_display_seconds: 结果横幅显示时长（秒）
        """
        self.scheduler = scheduler
        self.video_source = video_source
        self.classifier = classifier
        self.scoreboard = scoreboard or ScoreBoard()
        self.opponent = opponent or RandomOpponent()
        self.countdown_seconds = countdown_seconds
        self.tick_interval = tick_interval
        self.result_display_seconds = result_display_seconds

        self.state_machine = RoundStateMachine(initial_state=RoundState.IDLE)

        # 显示状态
        self.countdown = countdown_seconds
        self.countdown_visible = False
        self.show_moves = False
        self.winner_visible = False
        self.player_move: Optional[Move] = None
        self.opponent_move: Optional[Move] = None
        self.last_result: Optional[RoundResult] = None

        self.round_number = 0
        self._token = 0
        self._countdown_timer: Optional[TimerHandle] = None
        self._capture_timer: Optional[TimerHandle] = None
        self._hide_timer: Optional[TimerHandle] = None
        self._camera_failure_reported = False

        # 回调函数
        self.on_notice: Optional[Callable[[Notice], None]] = None
        self.on_result: Optional[Callable[[RoundResult], None]] = None

        logger.info(f"回合控制器初始化完成，倒计时 {countdown_seconds} 跳，"
                    f"间隔 {tick_interval}s，结果显示 {result_display_seconds}s")

    @property
    def state(self) -> RoundState:
        return self.state_machine.get_current_state()

    def can_start(self) -> bool:
        """是否可以开始新回合（空闲或正在显示上一回合结果）"""
        return self.state_machine.is_in_state(RoundState.IDLE, RoundState.SHOWING_RESULT)

    def start_round(self) -> bool:
        """
        开始新回合：重置显示状态，恢复视频并启动倒计时

        Returns:
            bool: 是否开始；回合进行中调用不做任何改变并返回 False
        """
        if not self.can_start():
            logger.warning(f"回合进行中（{self.state}），忽略开始请求")
            return False

        self._cancel_timers()
        self._token += 1
        self.round_number += 1
        token = self._token

        self.player_move = None
        self.opponent_move = None
        self.show_moves = False
        self.winner_visible = False
        self.last_result = None
        self.video_source.play()

        self.countdown = self.countdown_seconds
        self.countdown_visible = True
        self.state_machine.transition_to(RoundState.COUNTDOWN)
        logger.info(f"回合 {self.round_number} 开始，倒计时 {self.countdown}")

        self._countdown_timer = self.scheduler.call_every(
            self.tick_interval, lambda: self._on_tick(token), name=f"countdown#{self.round_number}"
        )
        return True

    def reset_game(self):
        """任意状态下重置：取消定时任务、比分归零、清空出拳、恢复视频"""
        self._cancel_timers()
        self._token += 1

        self.scoreboard.reset()
        self.countdown = self.countdown_seconds
        self.countdown_visible = False
        self.show_moves = False
        self.winner_visible = False
        self.player_move = None
        self.opponent_move = None
        self.last_result = None
        self.video_source.play()

        self.state_machine.reset(RoundState.IDLE)
        logger.info("游戏已重置")

    def _is_current(self, token: int) -> bool:
        if token != self._token:
            logger.debug(f"忽略过期回调（令牌 {token}，当前 {self._token}）")
            return False
        return True

    def _on_tick(self, token: int):
        if not self._is_current(token) or not self.state_machine.is_in_state(RoundState.COUNTDOWN):
            return

        self.countdown -= 1
        logger.debug(f"倒计时: {self.countdown}")
        if self.countdown > 0:
            return

        self._cancel(self._countdown_timer)
        self._countdown_timer = None
        self.countdown_visible = False

        if not self.classifier.is_ready():
            self._abort(NoticeKind.MODEL_NOT_READY, "模型未就绪，无法抓拍")
            return

        # 倒计时结束时才抽取电脑出拳
        self.opponent_move = self.opponent()
        logger.debug(f"电脑出拳: {self.opponent_move}")
        self.state_machine.transition_to(RoundState.CAPTURING)

        self._capture_timer = self.scheduler.call_soon(
            lambda: self._capture(token), name=f"capture#{self.round_number}"
        )

    def _capture(self, token: int):
        if not self._is_current(token) or not self.state_machine.is_in_state(RoundState.CAPTURING):
            return
        self._capture_timer = None

        try:
            self.video_source.pause()
            frame = self.video_source.current_frame()
        except HardwareException as e:
            logger.error(f"读取摄像头画面失败: {e.message}", exc_info=True)
            self._camera_failed("摄像头读取异常")
            return

        if frame is None:
            self._camera_failed("摄像头没有画面")
            return

        try:
            result = self.classifier.classify(frame)
        except PredictionException as e:
            logger.warning(f"识别出错: {e.message}")
            self._abort(NoticeKind.PREDICTION_FAILURE, "识别出错")
            return
        except Exception as e:
            logger.error(f"识别过程异常: {e}", exc_info=True)
            self._abort(NoticeKind.PREDICTION_FAILURE, "识别过程异常")
            return

        if not result.is_resolved:
            self._abort(NoticeKind.PREDICTION_FAILURE, f"无法从置信度确定手势: {list(result.confidence)}")
            return

        self.player_move = result.move
        self.state_machine.transition_to(RoundState.RESOLVING)
        self._resolve(token, tuple(result.confidence))

    def _camera_failed(self, reason: str):
        # 摄像头不可用只提示一次
        kind = None if self._camera_failure_reported else NoticeKind.CAMERA_UNAVAILABLE
        self._camera_failure_reported = True
        self._abort(kind, reason)

    def _resolve(self, token: int, confidence: tuple):
        outcome = MoveCatalog.judge(self.player_move, self.opponent_move)
        self.scoreboard.record_outcome(outcome)

        self.last_result = RoundResult(
            round_number=self.round_number,
            player_move=self.player_move,
            opponent_move=self.opponent_move,
            outcome=outcome,
            confidence=confidence
        )
        self.show_moves = True
        self.winner_visible = True
        self.state_machine.transition_to(RoundState.SHOWING_RESULT)

        logger.info(f"回合 {self.round_number}: 玩家={self.player_move}, "
                    f"电脑={self.opponent_move}, 结果={outcome.value}")

        self._hide_timer = self.scheduler.call_later(
            self.result_display_seconds, lambda: self._hide_result(token),
            name=f"hide-result#{self.round_number}"
        )

        if self.on_result:
            self.on_result(self.last_result)

    def _hide_result(self, token: int):
        if not self._is_current(token):
            return
        self._hide_timer = None
        self.winner_visible = False
        if self.state_machine.is_in_state(RoundState.SHOWING_RESULT):
            self.state_machine.transition_to(RoundState.IDLE)

    def _abort(self, kind: Optional[NoticeKind], reason: str):
        """回合失败：回到空闲状态，不计分，视频保持暂停"""
        logger.warning(f"回合 {self.round_number} 中止: {reason}")
        self._cancel_timers()
        self.countdown_visible = False
        self.show_moves = False
        self.state_machine.transition_to(RoundState.IDLE)
        if kind is not None:
            self._notify(Notice.of(kind))

    def _notify(self, notice: Notice):
        if self.on_notice:
            self.on_notice(notice)

    @staticmethod
    def _cancel(handle: Optional[TimerHandle]):
        if handle is not None:
            handle.cancel()

    def _cancel_timers(self):
        for handle in (self._countdown_timer, self._capture_timer, self._hide_timer):
            self._cancel(handle)
        self._countdown_timer = None
        self._capture_timer = None
        self._hide_timer = None
