from __future__ import annotations
import math
import re
from typing import Any, Dict, Optional
from .base import OverlayParam

# Leading numeric prefix, as a browser's parseFloat reads it ("12px" -> 12)
_NUMBER_PREFIX = re.compile(r'^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')


class NumberParam(OverlayParam):
    """Numeric parameter with optional min/max bounds - stateless definition."""

    type_name = "number"

    def __init__(
        self,
        default: float,
        *,
        min_value: Optional[float] = None,
        max_value: Optional[float] = None,
        integer: bool = False,
    ):
        super().__init__(default)
        self.min = min_value
        self.max = max_value
        self.integer = integer

    def parse(self, raw: str) -> Optional[float]:
        match = _NUMBER_PREFIX.match(raw)
        if not match:
            return None
        return self.accept(float(match.group(0)))

    def accept(self, value: Any) -> Optional[float]:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        if not math.isfinite(value):
            return None
        return self.clamp(value)

    def clamp(self, value: float) -> float:
        """Clamp to [min, max]"""
        if self.min is not None:
            value = max(self.min, value)
        if self.max is not None:
            value = min(self.max, value)
        if self.integer:
            return int(round(value))
        return value

    def describe(self) -> Dict[str, Any]:
        info = super().describe()
        info.update({"min": self.min, "max": self.max, "integer": self.integer})
        return info


class DurationParam(NumberParam):
    """Seconds; never negative."""

    def __init__(self, default: float):
        super().__init__(default, min_value=0.0)
