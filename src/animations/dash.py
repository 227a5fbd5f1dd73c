"""
Dash Animation

Perimeter-based stroke dash math for the border shape. The shape box is
the viewport minus BORDER_INSET on every side; the stroke is centred on
the box edge, so the stroked path is the box shrunk by the thickness.
"""

import math
from typing import Optional, Tuple

from engine.animation_clock import cycle_progress

BORDER_INSET = 2.0

DASHED_FRACTION = 0.05
DOTTED_GAP_FACTOR = 2


def circle_radius(width: float, height: float, thickness: float) -> float:
    """Radius of the border circle inside a width x height viewport"""
    return max(0.0, min(width, height) / 2 - thickness - BORDER_INSET)


def circle_perimeter(radius: float) -> float:
    return 2 * math.pi * max(0.0, radius)


def rect_perimeter(width: float, height: float, thickness: float, radius: float = 0.0) -> float:
    """
    Perimeter of a (rounded) rectangle stroke

    Args:
        width, height: Shape box
        thickness: Stroke width
        radius: Corner radius; four quarter arcs make one full circle

    Returns:
        2*((w-2r)+(h-2r)) + 2πr with w = width - thickness, h = height - thickness;
        2*(w+h) when radius is 0
    """
    w = width - thickness
    h = height - thickness
    if radius > 0:
        return 2 * ((w - 2 * radius) + (h - 2 * radius)) + 2 * math.pi * radius
    return 2 * (w + h)


def shape_perimeter(shape: str, width: float, height: float, thickness: float, radius: float = 0.0) -> float:
    """
    Perimeter of the border shape in a width x height viewport

    Example:
        shape_perimeter("rect", 1920, 1080, 2)   # 2 * (1914 + 1074) = 5976
    """
    if shape == "circle":
        return circle_perimeter(circle_radius(width, height, thickness))
    inset = 2 * BORDER_INSET
    return rect_perimeter(width - inset, height - inset, thickness, radius)


def dash_offset(t: float, period: float, perimeter: float) -> float:
    """Stroke dash offset at time t: -progress * perimeter"""
    return -cycle_progress(t, period) * perimeter


def dash_array(
    style: str,
    perimeter: float,
    thickness: float,
    dash: float = 0.3,
    animated: bool = False,
) -> Optional[Tuple[float, float]]:
    """
    Stroke dash array (dash length, gap length) for a border style

    - dashed: 5% of the perimeter on, 5% off
    - dotted: thickness on, twice the thickness off
    - solid/neon/double: a single `dash` fraction of the perimeter when the
      dash animation runs, else no dash array (None)
    """
    if style == "dashed":
        segment = perimeter * DASHED_FRACTION
        return (segment, segment)
    if style == "dotted":
        return (thickness, thickness * DOTTED_GAP_FACTOR)
    if animated:
        visible = perimeter * max(0.0, min(1.0, dash))
        return (visible, perimeter - visible)
    return None
