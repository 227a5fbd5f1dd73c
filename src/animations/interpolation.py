"""
Color interpolation

Per-channel linear interpolation in RGB byte space. Channels are rounded
half-up, t is clamped to [0, 1].
"""

from typing import List, Sequence

from models.color import Color


def lerp_color(a: Color, b: Color, t: float) -> Color:
    """
    Interpolate between two colors

    Example:
        lerp_color(Color.from_hex("#000000"), Color.from_hex("#ffffff"), 0.5).to_hex()
        # "#808080"
    """
    return a.lerp(b, t)


def lerp_palette(pa: Sequence[Color], pb: Sequence[Color], t: float) -> List[Color]:
    """
    Interpolate two palettes index-wise

    The result has len(pa) entries; indices beyond pb reuse pb[0].
    An empty pb leaves pa unchanged.
    """
    if not pb:
        return list(pa)
    return [lerp_color(color, pb[i] if i < len(pb) else pb[0], t) for i, color in enumerate(pa)]
