"""
Utility functions for the overlay engine
"""

from .colors import (
    parse_hex,
    format_hex,
    rgb_to_hsl,
    hsl_to_rgb,
    shift_lightness,
    COLOR_MODE_SHIFTS,
)

__all__ = [
    'parse_hex',
    'format_hex',
    'rgb_to_hsl',
    'hsl_to_rgb',
    'shift_lightness',
    'COLOR_MODE_SHIFTS',
]
