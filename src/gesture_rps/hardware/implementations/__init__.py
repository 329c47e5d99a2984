"""
硬件实现模块
Hardware Implementations
"""
from .camera import USBCamera

__all__ = ['USBCamera']
