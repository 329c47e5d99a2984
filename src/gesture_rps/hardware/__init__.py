"""
硬件抽象层模块
Hardware Abstraction Layer
"""
from .base import VideoSource
from .factory import HardwareFactory
from .implementations import USBCamera

__all__ = [
    'VideoSource',
    'HardwareFactory',
    'USBCamera'
]
