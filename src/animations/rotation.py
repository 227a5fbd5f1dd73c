"""Gradient rotation: linear angle over one period"""

from engine.animation_clock import cycle_progress

# Gradient direction when rotation is off
DEFAULT_ANGLE = 90.0


def rotation_angle(t: float, period: float) -> float:
    """
    Angle in degrees at time t

    Args:
        t: Clock sample in seconds
        period: Seconds per full turn

    Returns:
        360 * progress, in [0, 360)
    """
    return 360.0 * cycle_progress(t, period)
