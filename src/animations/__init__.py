"""
Continuous effect computers

Pure functions of a clock sample and static parameters:
- rotation: gradient angle
- pulse: opacity
- breathe: glow size
- dash: perimeter and dash offset
- palette_cycle: multi-palette cycling / colorshift
- count_up: counter tween and number formatting
"""

from .interpolation import lerp_color, lerp_palette
from .rotation import rotation_angle, DEFAULT_ANGLE
from .pulse import pulse_opacity
from .breathe import breathe_size
from .dash import (
    BORDER_INSET, circle_radius, circle_perimeter, rect_perimeter, shape_perimeter,
    dash_offset, dash_array,
)
from .palette_cycle import palette_position, cycle_palettes, palette_at
from .count_up import CountUp, format_number

__all__ = [
    "lerp_color",
    "lerp_palette",
    "rotation_angle",
    "DEFAULT_ANGLE",
    "pulse_opacity",
    "breathe_size",
    "BORDER_INSET",
    "circle_radius",
    "circle_perimeter",
    "rect_perimeter",
    "shape_perimeter",
    "dash_offset",
    "dash_array",
    "palette_position",
    "cycle_palettes",
    "palette_at",
    "CountUp",
    "format_number",
]
