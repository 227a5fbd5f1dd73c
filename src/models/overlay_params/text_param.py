from __future__ import annotations
from typing import Any, Dict, Optional
from models.enums import CaptionMode
from .base import OverlayParam


class TextParam(OverlayParam):
    """
    Free-text parameter.

    caption selects the fallback rule used by the resolver:
    GENERIC  - override > preset > default
    OR       - override || preset || fallback (empty values skipped)
    EXPLICIT - a present override wins even when empty, else preset || fallback
    """

    type_name = "string"

    def __init__(
        self,
        default: str = "",
        *,
        caption: CaptionMode = CaptionMode.GENERIC,
        fallback: Optional[str] = None,
    ):
        super().__init__(default)
        self.caption = caption
        self.fallback = default if fallback is None else fallback

    def parse(self, raw: str) -> Optional[str]:
        return raw

    def accept(self, value: Any) -> Optional[str]:
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return str(value)
        return None

    def clamp(self, value: Any) -> str:
        return str(value)

    def describe(self) -> Dict[str, Any]:
        info = super().describe()
        if self.caption is not CaptionMode.GENERIC:
            info["caption"] = self.caption.name.lower()
        return info
