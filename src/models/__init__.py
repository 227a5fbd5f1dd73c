"""
Models package - Data models for the overlay engine
"""

from .enums import OverlayKind, LoopState, RevealMode, CaptionMode, EffectKind, Trend, LogLevel, LogCategory
from .color import Color

__all__ = [
    'OverlayKind',
    'LoopState',
    'RevealMode',
    'CaptionMode',
    'EffectKind',
    'Trend',
    'LogLevel',
    'LogCategory',
    'Color',
]
