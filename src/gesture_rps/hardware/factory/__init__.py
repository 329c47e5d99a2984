"""
硬件工厂
Hardware Factory
"""
from .hardware_factory import HardwareFactory

__all__ = ['HardwareFactory']
