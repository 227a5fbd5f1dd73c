"""
Animation Clock

Single time authority of an overlay instance. Continuous effects derive
their progress from a sampled timestamp as (t mod period) / period, so a
missed frame never causes drift: the next sample is simply correct.
"""

import time
from abc import ABC, abstractmethod


def cycle_progress(t: float, period: float) -> float:
    """
    Progress through a repeating period

    Args:
        t: Timestamp in seconds
        period: Period in seconds (non-positive periods freeze at 0)

    Returns:
        Fraction in [0, 1)
    """
    if period <= 0:
        return 0.0
    return (t % period) / period


class Clock(ABC):
    """Source of monotonic timestamps in seconds"""

    @abstractmethod
    def now(self) -> float:
        ...


class MonotonicClock(Clock):
    """Wall clock backed by time.monotonic()"""

    def now(self) -> float:
        return time.monotonic()


class ManualClock(Clock):
    """
    Clock moved explicitly by tests and deterministic frame rendering

    Example:
        clock = ManualClock()
        clock.advance(1.5)
        clock.now()   # 1.5
    """

    def __init__(self, start: float = 0.0):
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def set(self, t: float) -> None:
        if t < self._now:
            raise ValueError(f"ManualClock cannot go backwards ({t} < {self._now})")
        self._now = float(t)

    def advance(self, dt: float) -> None:
        self.set(self._now + max(0.0, dt))
