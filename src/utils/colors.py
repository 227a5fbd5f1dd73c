"""
Color conversion utilities

Pure functions for hex parsing, HSL conversion and lightness shifting.
Named palettes and themes are loaded from config/brand.yaml via BrandManager.
"""

import colorsys
import re
from typing import Dict, Optional, Tuple

_HEX_RE = re.compile(r'^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$')

# Lightness shift (percentage points) per color mode
COLOR_MODE_SHIFTS: Dict[str, int] = {
    'darker': -30,
    'dark': -15,
    'normal': 0,
    'light': 15,
    'lighter': 30,
}


def round_half_up(value: float) -> int:
    """Round to nearest integer, halves away from zero for non-negative input"""
    return int(value + 0.5)


def clamp_byte(value: float) -> int:
    return max(0, min(255, round_half_up(value)))


def parse_hex(text: str) -> Optional[Tuple[int, int, int, float]]:
    """
    Parse a hex color string to (r, g, b, alpha)

    Accepts 3, 6 or 8 hex digits, with or without a leading '#'.
    8-digit strings carry alpha in the last byte.

    Args:
        text: Hex string (e.g. "#6366f1", "f43", "FF000080")

    Returns:
        (r, g, b, a) with r/g/b 0-255 and a 0.0-1.0, or None if malformed

    Example:
        parse_hex("#ff0000")    # (255, 0, 0, 1.0)
        parse_hex("FF000080")   # (255, 0, 0, 0.502)
        parse_hex("nope")       # None
    """
    if not isinstance(text, str):
        return None
    match = _HEX_RE.match(text.strip())
    if not match:
        return None

    digits = match.group(1)
    if len(digits) == 3:
        digits = ''.join(c * 2 for c in digits)

    r = int(digits[0:2], 16)
    g = int(digits[2:4], 16)
    b = int(digits[4:6], 16)
    a = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0
    return (r, g, b, a)


def format_hex(r: int, g: int, b: int, a: float = 1.0) -> str:
    """
    Format RGBA as lowercase hex

    Returns 6-digit "#rrggbb" when fully opaque, else 8-digit "#rrggbbaa".
    """
    base = f"#{r:02x}{g:02x}{b:02x}"
    if a >= 1.0:
        return base
    alpha = clamp_byte(max(0.0, a) * 255)
    return f"{base}{alpha:02x}"


def rgb_to_hsl(r: int, g: int, b: int) -> Tuple[float, float, float]:
    """
    Convert RGB (0-255) to HSL

    Returns:
        (h 0-360, s 0-100, l 0-100)
    """
    h, l, s = colorsys.rgb_to_hls(r / 255.0, g / 255.0, b / 255.0)
    return (h * 360.0, s * 100.0, l * 100.0)


def hsl_to_rgb(h: float, s: float, l: float) -> Tuple[int, int, int]:
    """
    Convert HSL (h 0-360, s 0-100, l 0-100) to RGB (0-255)
    """
    r, g, b = colorsys.hls_to_rgb((h % 360.0) / 360.0, l / 100.0, s / 100.0)
    return (clamp_byte(r * 255), clamp_byte(g * 255), clamp_byte(b * 255))


def shift_lightness(r: int, g: int, b: int, delta: float) -> Tuple[int, int, int]:
    """
    Shift HSL lightness by delta percentage points, clamped to [0, 100]

    Example:
        shift_lightness(99, 102, 241, -15)   # darker indigo
    """
    if delta == 0:
        return (r, g, b)
    h, s, l = rgb_to_hsl(r, g, b)
    return hsl_to_rgb(h, s, max(0.0, min(100.0, l + delta)))


def lerp_channel(a: float, b: float, t: float) -> float:
    """Linear interpolation of a single channel, t expected in [0, 1]"""
    return a + (b - a) * t
