from __future__ import annotations
from typing import Any, Optional
from .base import OverlayParam

FALSE_STRINGS = ("false", "0")


class BoolParam(OverlayParam):
    """Boolean parameter: 'false' and '0' are false, any other value is true."""

    type_name = "boolean"

    def parse(self, raw: str) -> Optional[bool]:
        return raw.strip() not in FALSE_STRINGS

    def accept(self, value: Any) -> Optional[bool]:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return value != 0
        return None

    def clamp(self, value: Any) -> bool:
        return bool(value)
