"""
硬件抽象基类
Hardware Base Classes
"""
from .video_source import VideoSource

__all__ = ['VideoSource']
