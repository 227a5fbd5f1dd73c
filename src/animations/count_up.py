"""
Count-Up Animation

Tweens a displayed number from its previous value to a new target with a
cubic ease-out, and formats numbers the way the counter overlay shows them.
"""

from typing import Optional

from models.easing import ease_out_cubic
from models.enums import Trend

_ABBREVIATIONS = (
    (1_000_000_000, "B"),
    (1_000_000, "M"),
    (1_000, "K"),
)
_COMPACT_SUFFIXES = ("", "K", "M", "B", "T")


class CountUp:
    """
    Count-up tween driven by clock samples

    Example:
        counter = CountUp(0, duration=2.0)
        counter.set_target(1000, now=0.0)
        counter.value_at(1.0)   # 875.0 (ease-out cubic at t=0.5)
        counter.trend           # Trend.UP
    """

    def __init__(self, initial: float = 0.0, duration: float = 2.0, animate: bool = True):
        self.duration = max(0.0, duration)
        self.animate = animate
        self.start_value = float(initial)
        self.target = float(initial)
        self.started_at: Optional[float] = None
        self.trend = Trend.NEUTRAL

    def set_target(self, target: float, now: float) -> None:
        """Start tweening from the value shown at `now` towards `target`"""
        target = float(target)
        current = self.value_at(now)
        if target > current:
            self.trend = Trend.UP
        elif target < current:
            self.trend = Trend.DOWN
        else:
            self.trend = Trend.NEUTRAL
        self.start_value = current
        self.target = target
        self.started_at = now

    def progress_at(self, now: float) -> float:
        if self.started_at is None or not self.animate or self.duration <= 0:
            return 1.0
        return max(0.0, min(1.0, (now - self.started_at) / self.duration))

    def value_at(self, now: float) -> float:
        progress = self.progress_at(now)
        if progress >= 1.0:
            return self.target
        return self.start_value + (self.target - self.start_value) * ease_out_cubic(progress)

    def done_at(self, now: float) -> bool:
        return self.progress_at(now) >= 1.0


def _compact(value: float, decimals: int) -> str:
    tier = 0
    scaled = value
    while abs(scaled) >= 1000 and tier < len(_COMPACT_SUFFIXES) - 1:
        scaled /= 1000
        tier += 1
    # Rounding can carry into the next tier (999_999 -> "1000K")
    if abs(float(f"{scaled:.{decimals}f}")) >= 1000 and tier < len(_COMPACT_SUFFIXES) - 1:
        scaled /= 1000
        tier += 1
    return f"{scaled:.{decimals}f}{_COMPACT_SUFFIXES[tier]}"


def _scientific(value: float, decimals: int) -> str:
    mantissa, _, exponent = f"{value:.{decimals}E}".partition("E")
    return f"{mantissa}E{int(exponent)}"


def format_number(
    value: float,
    separator: bool = True,
    decimals: int = 0,
    abbreviate: bool = False,
    notation: str = "standard",
) -> str:
    """
    Format a counter value

    Args:
        value: Number to format
        separator: Thousands grouping (standard notation only)
        decimals: Fraction digits
        abbreviate: K/M/B suffixes for |value| >= 1000 (wins over notation)
        notation: standard, compact or scientific

    Example:
        format_number(1234567)                    # "1,234,567"
        format_number(1234567, abbreviate=True, decimals=1)   # "1.2M"
        format_number(1234, notation="scientific", decimals=2)   # "1.23E3"
    """
    decimals = max(0, int(decimals))

    if abbreviate:
        for threshold, suffix in _ABBREVIATIONS:
            if abs(value) >= threshold:
                return f"{value / threshold:.{decimals}f}{suffix}"

    if notation == "compact":
        return _compact(value, decimals)
    if notation == "scientific":
        return _scientific(value, decimals)
    if separator:
        return f"{value:,.{decimals}f}"
    return f"{value:.{decimals}f}"
