"""Domain models - Config and state objects"""

from models.domain.resolved_config import ResolvedConfig
from models.domain.theme import ThemeColors, PlatformInfo
from models.domain.sequenced_item import SequencedItem

__all__ = [
    "ResolvedConfig",
    "ThemeColors",
    "PlatformInfo",
    "SequencedItem",
]
