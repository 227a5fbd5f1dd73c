"""Theme and platform lookup models"""

from dataclasses import dataclass, asdict
from typing import Dict


@dataclass(frozen=True)
class ThemeColors:
    """Immutable named theme (hex color strings)"""
    name: str
    bg: str
    bg_alt: str
    surface: str
    border: str
    text: str
    text_muted: str
    text_dim: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class PlatformInfo:
    """Social platform metadata: display name, brand color, handle prefix"""
    id: str
    name: str
    color: str
    prefix: str = ""
