"""
手势识别剪刀石头布
Gesture Rock Paper Scissors
"""
__version__ = "0.1.0"
