from __future__ import annotations
from typing import Any, Optional, Sequence, Tuple
from .base import OverlayParam


def split_list(raw: str) -> Tuple[str, ...]:
    """Split a comma list, trimming entries and dropping empty ones"""
    return tuple(part.strip() for part in raw.split(",") if part.strip())


class ListParam(OverlayParam):
    """Comma-delimited list of strings, resolved to an immutable tuple."""

    type_name = "list"

    def __init__(self, default: Sequence[str] = ()):
        super().__init__(tuple(default))

    def parse(self, raw: str) -> Optional[Tuple[str, ...]]:
        items = split_list(raw)
        return items or None

    def accept(self, value: Any) -> Optional[Tuple[str, ...]]:
        if isinstance(value, (list, tuple)):
            items = tuple(str(v).strip() for v in value if str(v).strip())
            return items or None
        return None

    def clamp(self, value: Any) -> Tuple[str, ...]:
        return tuple(value)
