from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class OverlayParam(ABC):
    """
    Base class for all overlay parameters.

    Param = one recognized key of an overlay's parameter table.
    This class defines:
    - the built-in default value
    - how a raw query-string value is parsed
    - how a typed preset value is accepted
    - how a value is clamped to its valid range

    parse()/accept() return None when the input is unusable, which makes
    the resolver fall through to the next layer (preset, then default).
    """

    type_name: str = "any"

    def __init__(self, default: Any):
        self.default = default

    @staticmethod
    def is_empty(value: Any) -> bool:
        """Absent or blank values never override lower layers"""
        return value is None or (isinstance(value, str) and value.strip() == "")

    @abstractmethod
    def parse(self, raw: str) -> Optional[Any]:
        """Parse a raw string value, None if unusable"""
        ...

    @abstractmethod
    def clamp(self, value: Any) -> Any:
        """Clamp value to valid range"""
        ...

    def accept(self, value: Any) -> Optional[Any]:
        """Accept an already-typed value (from a preset table), None if unusable"""
        return self.clamp(value)

    def coerce(self, value: Any) -> Optional[Any]:
        if value is None:
            return None
        if isinstance(value, str):
            return self.parse(value)
        return self.accept(value)

    def describe(self) -> Dict[str, Any]:
        """Metadata for API listings"""
        default = list(self.default) if isinstance(self.default, tuple) else self.default
        return {"type": self.type_name, "default": default}
