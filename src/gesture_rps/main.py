"""
剪刀石头布游戏主程序入口
Rock Paper Scissors Game Main Entry
"""
import sys
import argparse
from .app import Application
from .utils.logger import setup_logger

logger = setup_logger("GestureRPS.Main")


def main():
    """主函数"""
    parser = argparse.ArgumentParser(description='手势识别剪刀石头布')
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='配置文件路径（默认使用内置配置）'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='日志级别（覆盖配置文件）'
    )

    args = parser.parse_args()

    logger.info("=" * 50)
    logger.info("Rock Paper Scissors Game Starting")
    logger.info("=" * 50)

    app = Application(config_path=args.config, log_level=args.log_level)

    try:
        if not app.start():
            sys.exit(1)
    except Exception as e:
        logger.error(f"程序异常退出: {e}", exc_info=True)
        sys.exit(1)
    finally:
        logger.info("Program Exited")


if __name__ == "__main__":
    main()
