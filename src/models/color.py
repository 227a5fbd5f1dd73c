"""
Color model - Immutable RGBA color

Colors arrive as hex strings (brand tables, query parameters) and leave as hex
strings (declarative frame output). Conversion math lives in utils.colors.
"""

from dataclasses import dataclass
from typing import Optional, Tuple
from utils.colors import (
    parse_hex, format_hex, shift_lightness, lerp_channel, clamp_byte, COLOR_MODE_SHIFTS
)


@dataclass(frozen=True)
class Color:
    """
    Immutable 8-bit RGB color with alpha

    Examples:
        # Create from hex
        color = Color.from_hex("#6366f1")

        # Create from RGB
        color = Color.from_rgb(255, 0, 0)

        # Render
        color.to_hex()       # "#ff0000"
        r, g, b = color.to_rgb()

        # Derive
        darker = color.with_lightness_shift(-15)
    """

    r: int
    g: int
    b: int
    a: float = 1.0

    # === CONSTRUCTORS ===

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int, a: float = 1.0) -> 'Color':
        """
        Create from RGB values, clamped to 0-255

        Args:
            r, g, b: RGB values (0-255)
            a: Alpha (0.0-1.0)
        """
        return cls(clamp_byte(r), clamp_byte(g), clamp_byte(b), max(0.0, min(1.0, float(a))))

    @classmethod
    def from_hex(cls, text: str) -> Optional['Color']:
        """
        Create from a hex string

        Returns:
            Color, or None if the string is not a valid hex color
        """
        parsed = parse_hex(text)
        if parsed is None:
            return None
        return cls(*parsed)

    # === RENDERING ===

    def to_rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        return format_hex(self.r, self.g, self.b, self.a)

    # === DERIVED COLORS ===

    def lerp(self, other: 'Color', t: float) -> 'Color':
        """
        Per-channel linear interpolation towards another color

        Args:
            other: Target color
            t: Progress, clamped to [0, 1]

        Returns:
            New Color with channels rounded half-up to integers
        """
        t = max(0.0, min(1.0, t))
        if t == 0.0:
            return self
        if t == 1.0:
            return other
        return Color(
            clamp_byte(lerp_channel(self.r, other.r, t)),
            clamp_byte(lerp_channel(self.g, other.g, t)),
            clamp_byte(lerp_channel(self.b, other.b, t)),
            lerp_channel(self.a, other.a, t),
        )

    def with_lightness_shift(self, delta: float) -> 'Color':
        """Shift HSL lightness by delta percentage points (alpha preserved)"""
        r, g, b = shift_lightness(self.r, self.g, self.b, delta)
        return Color(r, g, b, self.a)

    def with_color_mode(self, mode: str) -> 'Color':
        """Apply a named color mode (darker, dark, normal, light, lighter)"""
        return self.with_lightness_shift(COLOR_MODE_SHIFTS.get(mode, 0))

    def __str__(self) -> str:
        return self.to_hex()
