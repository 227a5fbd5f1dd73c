"""
Enums for the overlay engine
"""

from enum import Enum, auto


class OverlayKind(Enum):
    """Overlay types that can be mounted and sampled"""
    TEXT = "text"
    CTA = "cta"
    SOCIALS = "socials"
    BORDER = "border"
    COUNTER = "counter"


class LoopState(Enum):
    """
    Visibility states of a looping overlay

    ENTERING → VISIBLE → EXITING → HIDDEN → ENTERING (cycle += 1)
    """
    ENTERING = "entering"
    VISIBLE = "visible"
    EXITING = "exiting"
    HIDDEN = "hidden"


class RevealMode(Enum):
    """How a sequenced item list is revealed"""
    ALL_AT_ONCE = auto()   # Every item flips visible together
    STAGGER = auto()       # Item i flips visible at i * step
    ONE_BY_ONE = auto()    # Exactly one item visible, cycling


class CaptionMode(Enum):
    """Fallback rule for free-text caption parameters"""
    GENERIC = auto()   # override > preset > default
    OR = auto()        # override || preset || fallback (empty values skipped)
    EXPLICIT = auto()  # present override wins even when empty


class EffectKind(Enum):
    """Groups of registered keyframe effects"""
    ENTRANCE = auto()
    EXIT = auto()
    ICON = auto()
    DECORATION = auto()
    LINE = auto()


class Trend(Enum):
    """Direction of the last counter target change"""
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    RESOLVER = auto()    # Parameter resolution, preset lookup
    PALETTE = auto()     # Gradient/theme lookup, color modes
    TIMING = auto()      # Visibility state machine, delayed exit
    SEQUENCE = auto()    # Stagger / one-by-one reveal
    EFFECT = auto()      # Effect registry, continuous effects
    OVERLAY = auto()     # Overlay mount/unmount
    RENDER_ENGINE = auto()

    API = auto()
    SYSTEM = auto()      # Startup, shutdown, errors
    TASK = auto()
    SHUTDOWN = auto()

    GENERAL = auto()     # Default general category
