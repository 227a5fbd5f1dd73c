"""
Overlay kinds

Each overlay owns its timers and produces declarative frames from sample(t).
"""

from typing import Dict, Type

from models.enums import OverlayKind

from .base import BaseOverlay, LoopingOverlay
from .text import TextOverlay
from .cta import CTAOverlay
from .socials import SocialsOverlay
from .border import BorderOverlay
from .counter import CounterOverlay

OVERLAY_CLASSES: Dict[OverlayKind, Type[BaseOverlay]] = {
    OverlayKind.TEXT: TextOverlay,
    OverlayKind.CTA: CTAOverlay,
    OverlayKind.SOCIALS: SocialsOverlay,
    OverlayKind.BORDER: BorderOverlay,
    OverlayKind.COUNTER: CounterOverlay,
}

__all__ = [
    "BaseOverlay",
    "LoopingOverlay",
    "TextOverlay",
    "CTAOverlay",
    "SocialsOverlay",
    "BorderOverlay",
    "CounterOverlay",
    "OVERLAY_CLASSES",
]
