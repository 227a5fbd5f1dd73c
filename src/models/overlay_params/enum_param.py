from __future__ import annotations
from typing import Any, Dict, Optional, Sequence
from .base import OverlayParam


class EnumParam(OverlayParam):
    """
    Parameter restricted to a fixed set of string values.

    Matching is case-sensitive; unknown values are rejected so the
    resolver falls back to the preset or default.
    """

    type_name = "enum"

    def __init__(self, default: str, values: Sequence[str]):
        if default not in values:
            raise ValueError(f"Default '{default}' not in allowed values {list(values)}")
        super().__init__(default)
        self.values = tuple(values)

    def parse(self, raw: str) -> Optional[str]:
        return self.accept(raw.strip())

    def accept(self, value: Any) -> Optional[str]:
        if value not in self.values:
            return None
        return value

    def clamp(self, value: Any) -> Any:
        if value not in self.values:
            return self.default
        return value

    def describe(self) -> Dict[str, Any]:
        info = super().describe()
        info["values"] = list(self.values)
        return info
