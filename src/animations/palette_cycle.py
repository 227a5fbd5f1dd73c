"""
Palette Cycle Animation

Cycles through K named palettes over one period, interpolating from
palette[index] to palette[(index + 1) mod K] within each segment.
Colorshift is the same computation on its own (usually slower) period.
"""

import math
from typing import List, Optional, Sequence

from animations.interpolation import lerp_palette
from engine.animation_clock import cycle_progress
from models.color import Color


def palette_position(progress: float, count: int):
    """
    Segment index and local progress

    Returns:
        (index, next_index, local_progress) with
        index = floor(progress * K), local = (progress * K) mod 1
    """
    scaled = progress * count
    index = int(math.floor(scaled)) % count
    local = scaled % 1.0
    return index, (index + 1) % count, local


def cycle_palettes(progress: float, palettes: Sequence[Sequence[Color]]) -> List[Color]:
    """
    Interpolated palette at a progress in [0, 1)

    Example:
        cycle_palettes(0.5, [p0, p1, p2, p3])   # == list(p2)
    """
    if not palettes:
        return []
    index, next_index, local = palette_position(progress, len(palettes))
    return lerp_palette(palettes[index], palettes[next_index], local)


def palette_at(
    t: float,
    base: Sequence[Color],
    palettes: Sequence[Sequence[Color]],
    multicolor: bool = False,
    colorshift: bool = False,
    speed: float = 4.0,
    shift_speed: float = 10.0,
) -> List[Color]:
    """
    Current palette of a border at time t

    Multicolor cycles on `speed`; colorshift cycles on `shift_speed`.
    Multicolor wins when both are enabled; neither returns the base palette.
    """
    period: Optional[float] = None
    if multicolor:
        period = speed
    elif colorshift:
        period = shift_speed

    if period is None or not palettes:
        return list(base)
    return cycle_palettes(cycle_progress(t, period), palettes)
