"""
应用程序主类
Application Main Class
"""
import signal
from typing import Optional
import cv2
import numpy as np
from .game import GameSession, SessionView, TimerScheduler, Notice, RoundResult, ClassifierFactory
from .game.game_logic import MoveCatalog
from .hardware import HardwareFactory, VideoSource
from .utils.config_loader import ConfigLoader
from .utils.error_handler import global_error_handler
from .utils.exceptions import CameraException, ConfigurationException
from .utils.logger import setup_logger, setup_logger_from_config

logger = setup_logger("GestureRPS.App")

WINDOW_NAME = "Rock Paper Scissors"
NOTICE_SECONDS = 3.0
KEY_ESC = 27

_GLYPH_LABELS = {glyph: move.value.upper() for move, glyph in MoveCatalog.GLYPHS.items()}


def _ascii(text: str) -> str:
    """OpenCV 的 Hershey 字体只能绘制 ASCII"""
    return text.encode('ascii', 'ignore').decode().strip()


class Application:
    """应用程序主类：摄像头、模型、会话与 OpenCV 窗口"""

    def __init__(self, config_path: Optional[str] = None, log_level: Optional[str] = None):
        """
        初始化应用程序

        Args:
            config_path: 配置文件路径，None 时使用默认配置
            log_level: 覆盖配置中的日志级别
        """
        self.config_path = config_path
        self.log_level = log_level
        self.config: dict = {}

        self.camera: Optional[VideoSource] = None
        self.scheduler: Optional[TimerScheduler] = None
        self.session: Optional[GameSession] = None

        self.is_running = False
        self.should_exit = False
        self._notice: Optional[Notice] = None
        self._notice_until = 0.0
        self._camera_error_logged = False

        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

    def _signal_handler(self, signum, frame):
        logger.info(f"收到信号 {signum}，准备退出")
        self.should_exit = True

    def initialize(self) -> bool:
        """
        初始化所有组件

        Returns:
            bool: 初始化是否成功
        """
        try:
            self.config = ConfigLoader.load_config(self.config_path)
            logging_config = dict(ConfigLoader.get_logging_config(self.config))
            if self.log_level:
                logging_config['level'] = self.log_level
            setup_logger_from_config(logging_config)

            game_config = ConfigLoader.get_game_config(self.config)
            self.camera = self._create_camera()

            classifier = ClassifierFactory.create_from_config(
                ConfigLoader.get_classifier_config(self.config)
            )

            self.scheduler = TimerScheduler()
            self.session = GameSession(
                scheduler=self.scheduler,
                video_source=self.camera,
                classifier=classifier,
                countdown_seconds=int(game_config.get('countdown_seconds', 3)),
                tick_interval=float(game_config.get('tick_interval', 1.0)),
                result_display_seconds=float(game_config.get('result_display_seconds', 5.0))
            )
            self.session.notice_listeners.append(self._on_notice)
            self.session.result_listeners.append(self._on_round_result)

            # 窗口先出来，模型在第一次循环时加载
            self.scheduler.call_soon(self.session.load_classifier, name="load-model")

            logger.info("✓ 应用程序初始化成功")
            return True

        except FileNotFoundError as e:
            logger.error(f"配置文件不存在: {e}")
            return False
        except ConfigurationException as e:
            global_error_handler.handle(e, "初始化")
            return False

    def _create_camera(self) -> VideoSource:
        camera_config = dict(ConfigLoader.get_camera_config(self.config))
        camera_type = camera_config.pop('type', 'usb')
        camera = HardwareFactory.create_camera(camera_type, camera_config)

        if camera.connect():
            logger.info("✓ 摄像头连接成功")
        else:
            # 没有画面时回合会在抓拍阶段失败并提示一次
            global_error_handler.handle(
                CameraException("摄像头连接失败", device_id=camera_config.get('device_id')),
                "连接摄像头"
            )
        return camera

    def _on_notice(self, notice: Notice):
        self._notice = notice
        self._notice_until = self.scheduler.now() + NOTICE_SECONDS

    def _on_round_result(self, round_result: RoundResult):
        logger.info(f"回合结果: {round_result.to_dict()}, 比分: {self.session.scoreboard.to_dict()}")

    def render(self, frame: Optional[np.ndarray], view: SessionView) -> np.ndarray:
        """
        在画面上绘制比分、倒计时、出拳和结果

        Args:
            frame: 当前帧，None 时使用黑色背景
            view: 会话状态快照

        Returns:
            np.ndarray: 绘制后的图像
        """
        if frame is None:
            width, height = self.camera.get_resolution() if self.camera else (640, 480)
            canvas = np.zeros((height or 480, width or 640, 3), dtype=np.uint8)
        else:
            canvas = frame.copy()
        h, w = canvas.shape[:2]

        cv2.putText(canvas, f"You {view.player_score} : {view.opponent_score} Computer",
                    (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.8, (255, 255, 255), 2)

        opponent = _GLYPH_LABELS.get(view.opponent_glyph, view.opponent_glyph)
        player = _GLYPH_LABELS.get(view.player_glyph, view.player_glyph)
        cv2.putText(canvas, f"Computer: {opponent}", (10, 60),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 255, 255), 2)
        if view.show_moves:
            cv2.putText(canvas, f"You: {player}", (10, 85),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 255, 255), 2)

        if view.countdown_visible:
            cv2.putText(canvas, str(view.countdown), (w // 2 - 30, h // 2 + 30),
                        cv2.FONT_HERSHEY_SIMPLEX, 3, (0, 0, 255), 6)

        if view.winner_visible:
            cv2.putText(canvas, _ascii(view.winner_statement), (w // 2 - 120, h // 2),
                        cv2.FONT_HERSHEY_SIMPLEX, 1.2, (0, 255, 0), 3)

        if view.model_loading:
            status = "Loading model..."
        elif view.can_start:
            status = "SPACE: play   R: reset   Q: quit"
        else:
            status = "R: reset   Q: quit"
        cv2.putText(canvas, status, (10, h - 15), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (200, 200, 200), 1)

        if self._notice and self.scheduler.now() < self._notice_until:
            cv2.putText(canvas, _ascii(self._notice.message), (10, h - 40),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 0, 255), 2)

        return canvas

    def _read_frame(self) -> Optional[np.ndarray]:
        try:
            return self.camera.current_frame()
        except CameraException as e:
            if not self._camera_error_logged:
                global_error_handler.handle(e, "读取画面")
                self._camera_error_logged = True
            return None

    def handle_key(self, key: int):
        """处理键盘命令"""
        if key in (ord('q'), KEY_ESC):
            self.should_exit = True
        elif key in (ord(' '), ord('s')):
            self.session.start_round()
        elif key == ord('r'):
            self.session.reset_game()

    def run(self):
        """运行应用程序主循环"""
        if not self.is_running:
            logger.error("应用程序未初始化，无法运行")
            return

        logger.info("应用程序主循环启动")
        cv2.namedWindow(WINDOW_NAME)

        try:
            while not self.should_exit:
                self.scheduler.run_pending()
                frame = self._read_frame()
                cv2.imshow(WINDOW_NAME, self.render(frame, self.session.view))

                key = cv2.waitKey(15) & 0xFF
                if key != 0xFF:
                    self.handle_key(key)

        except KeyboardInterrupt:
            logger.info("收到中断信号")
        finally:
            self.cleanup()

    def cleanup(self):
        """清理资源"""
        logger.info("开始清理资源...")

        if self.scheduler:
            self.scheduler.clear()

        if self.camera and self.camera.is_connected():
            self.camera.disconnect()
            logger.info("✓ 摄像头已断开")

        cv2.destroyAllWindows()
        self.is_running = False
        logger.info("资源清理完成")

    def start(self) -> bool:
        """
        启动应用程序

        Returns:
            bool: 启动是否成功
        """
        if not self.initialize():
            logger.error("应用程序启动失败")
            return False

        self.is_running = True
        self.run()
        return True
