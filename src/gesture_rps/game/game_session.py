"""
游戏会话
Game Session - 展示层调用的命令与可观察状态
"""
from collections import deque
from dataclasses import dataclass
from typing import Optional, Callable, List, Deque
from .round_controller import RoundController
from .scheduler import TimerScheduler
from .notices import Notice, NoticeKind
from .state_machine import RoundState
from .game_logic import Move, MoveCatalog, ScoreBoard, RoundResult, OPPONENT_PLACEHOLDER
from .gesture_recognition import Classifier
from ..hardware.base.video_source import VideoSource
from ..utils.exceptions import ModelLoadException
from ..utils.logger import setup_logger

logger = setup_logger("GestureRPS.GameSession")


@dataclass(frozen=True)
class SessionView:
    """每一帧渲染所需的只读状态快照"""
    state: RoundState
    countdown: int
    countdown_visible: bool
    show_moves: bool
    player_glyph: str
    opponent_glyph: str
    player_score: int
    opponent_score: int
    winner_visible: bool
    winner_statement: str
    model_loading: bool
    model_ready: bool
    can_start: bool


class GameSession:
    """游戏会话外观类，组合回合控制器与计分板"""

    def __init__(self,
                 scheduler: TimerScheduler,
                 video_source: VideoSource,
                 classifier: Classifier,
                 scoreboard: Optional[ScoreBoard] = None,
                 opponent: Optional[Callable[[], Move]] = None,
                 countdown_seconds: int = 3,
                 tick_interval: float = 1.0,
                 result_display_seconds: float = 5.0,
                 max_notices: int = 50):
        self.scheduler = scheduler
        self.classifier = classifier
        self.scoreboard = scoreboard or ScoreBoard()
        self.controller = RoundController(
            scheduler=scheduler,
            video_source=video_source,
            classifier=classifier,
            scoreboard=self.scoreboard,
            opponent=opponent,
            countdown_seconds=countdown_seconds,
            tick_interval=tick_interval,
            result_display_seconds=result_display_seconds
        )
        self.controller.on_notice = self._publish_notice
        self.controller.on_result = self._publish_result

        self.notices: Deque[Notice] = deque(maxlen=max_notices)
        self.notice_listeners: List[Callable[[Notice], None]] = []
        self.result_listeners: List[Callable[[RoundResult], None]] = []

        self._model_loading = not classifier.is_ready()
        self._model_failed = False

        logger.info("游戏会话初始化完成")

    def load_classifier(self) -> bool:
        """
        加载识别模型，只尝试一次，失败后不再允许开始回合

        Returns:
            bool: 模型是否可用
        """
        if self.classifier.is_ready():
            self._model_loading = False
            return True
        if self._model_failed:
            return False

        self._model_loading = True
        try:
            self.classifier.load()
        except ModelLoadException as e:
            logger.error(f"模型加载失败: {e.message}")
            self._model_failed = True
            self._publish_notice(Notice.of(NoticeKind.MODEL_LOAD_FAILURE))
        finally:
            self._model_loading = False

        return self.classifier.is_ready()

    def start_round(self) -> bool:
        """
        开始新回合

        Returns:
            bool: 是否真正开始；回合进行中或模型不可用时返回 False
        """
        if not self.controller.can_start():
            logger.debug(f"当前状态 {self.controller.state} 不能开始新回合")
            return False

        if not self.classifier.is_ready():
            logger.warning("模型未就绪，拒绝开始回合")
            self._publish_notice(Notice.of(NoticeKind.MODEL_NOT_READY))
            return False

        return self.controller.start_round()

    def reset_game(self):
        self.controller.reset_game()

    @property
    def state(self) -> RoundState:
        return self.controller.state

    @property
    def model_failed(self) -> bool:
        return self._model_failed

    @property
    def view(self) -> SessionView:
        c = self.controller
        show = c.show_moves
        result = c.last_result
        return SessionView(
            state=c.state,
            countdown=c.countdown,
            countdown_visible=c.countdown_visible,
            show_moves=show,
            player_glyph=MoveCatalog.display_glyph(c.player_move) if show and c.player_move else "",
            opponent_glyph=MoveCatalog.display_glyph(c.opponent_move) if show and c.opponent_move else OPPONENT_PLACEHOLDER,
            player_score=self.scoreboard.player_wins,
            opponent_score=self.scoreboard.opponent_wins,
            winner_visible=c.winner_visible,
            winner_statement=result.outcome.banner if result else "",
            model_loading=self._model_loading,
            model_ready=self.classifier.is_ready(),
            can_start=c.can_start() and self.classifier.is_ready()
        )

    def _publish_notice(self, notice: Notice):
        logger.warning(f"提示 [{notice.kind.value}]: {notice.message}")
        self.notices.append(notice)
        for listener in list(self.notice_listeners):
            listener(notice)

    def _publish_result(self, result: RoundResult):
        for listener in list(self.result_listeners):
            listener(result)
