"""
Pulse Animation

Sinusoidal opacity between 30% and 100% of the base opacity.
"""

import math

from engine.animation_clock import cycle_progress

PULSE_FLOOR = 0.3


def pulse_opacity(t: float, period: float, base: float = 1.0) -> float:
    """
    Opacity at time t

    Returns:
        base * (0.3 + 0.7 * (sin(2π·progress) + 1) / 2)

    Example:
        pulse_opacity(0.0, 4.0, base=0.8)   # 0.8 * 0.65 = 0.52
    """
    wave = (math.sin(2 * math.pi * cycle_progress(t, period)) + 1) / 2
    return base * (PULSE_FLOOR + (1 - PULSE_FLOOR) * wave)
