"""
Breathe Animation

Smooth glow size modulation: sinusoidal between 50% and 100% of the
configured glow size, so the glow never disappears completely.
"""

import math

from engine.animation_clock import cycle_progress

BREATHE_FLOOR = 0.5


def breathe_size(t: float, period: float, size: float) -> float:
    """
    Glow size at time t

    Returns:
        size * (0.5 + 0.5 * (sin(2π·progress) + 1) / 2)
    """
    wave = (math.sin(2 * math.pi * cycle_progress(t, period)) + 1) / 2
    return size * (BREATHE_FLOOR + (1 - BREATHE_FLOOR) * wave)
