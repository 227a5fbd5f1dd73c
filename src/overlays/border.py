"""
Border Overlay

Animated gradient frame around the whole viewport (screen or camera
borders). Everything here is computed per sample; the only discrete state
is the cached palette.
"""

from typing import Any, Dict, List, Optional

from animations.breathe import breathe_size
from animations.dash import (
    BORDER_INSET, circle_radius, dash_array, dash_offset, shape_perimeter
)
from animations.palette_cycle import palette_at
from animations.pulse import pulse_opacity
from animations.rotation import DEFAULT_ANGLE, rotation_angle
from models.enums import OverlayKind
from overlays.base import BaseOverlay, Frame

DEFAULT_VIEWPORT = (1920, 1080)

# Gap between the two strokes of the double style, in thicknesses
DOUBLE_GAP_FACTOR = 3


class BorderOverlay(BaseOverlay):
    """
    Border overlay

    Example:
        border = BorderOverlay(cfg, brand, scheduler, effects, width=1280, height=720)
        frame = border.sample(1.5)
        frame["dash_offset"]   # -progress * perimeter
    """

    KIND = OverlayKind.BORDER

    def __init__(self, *args, width: float = DEFAULT_VIEWPORT[0], height: float = DEFAULT_VIEWPORT[1], **kwargs):
        super().__init__(*args, **kwargs)
        self.width = width
        self.height = height

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height

    # ------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------

    @property
    def perimeter(self) -> float:
        config = self.config
        return shape_perimeter(config["shape"], self.width, self.height, config["thickness"], config["r"])

    def shapes(self) -> List[Dict[str, Any]]:
        """Stroke geometry; the double style adds an inner rectangle"""
        config = self.config
        thickness = config["thickness"]
        if config["shape"] == "circle":
            return [{
                "type": "circle",
                "cx": self.width / 2,
                "cy": self.height / 2,
                "r": circle_radius(self.width, self.height, thickness),
            }]

        offset = thickness / 2 + BORDER_INSET
        rect_width = self.width - thickness - 2 * BORDER_INSET
        rect_height = self.height - thickness - 2 * BORDER_INSET
        shapes = [{
            "type": "rect", "x": offset, "y": offset,
            "width": rect_width, "height": rect_height, "rx": config["r"],
        }]
        if config["style"] == "double":
            gap = thickness * DOUBLE_GAP_FACTOR
            shapes.append({
                "type": "rect",
                "x": offset + gap,
                "y": offset + gap,
                "width": rect_width - gap * 2,
                "height": rect_height - gap * 2,
                "rx": max(0.0, config["r"] - gap),
            })
        return shapes

    def dash_array(self) -> Optional[List[float]]:
        config = self.config
        dashes = dash_array(
            config["style"], self.perimeter, config["thickness"], config["dash"],
            animated=config["animation"] == "dash",
        )
        return list(dashes) if dashes else None

    # ------------------------------------------------------------
    # Sampling
    # ------------------------------------------------------------

    def glow_layers(self, glow_size: float) -> List[Dict[str, Any]]:
        config = self.config
        if not config["glow"]:
            return []
        thickness = config["thickness"]
        neon = config["style"] == "neon"
        layers = [{
            "opacity": 0.7 if neon else 0.4,
            "blur": glow_size * 2 if neon else glow_size,
            "stroke_width": thickness * 3 if neon else thickness,
        }]
        if neon:
            layers.append({"opacity": 0.3, "blur": glow_size * 4, "stroke_width": thickness * 5})
        return layers

    def sample(self, t: float) -> Frame:
        config = self.config
        animation = config["animation"]
        speed = config["speed"]

        palette = palette_at(
            t, self.palette, self.brand.palettes,
            multicolor=config["multicolor"], colorshift=config["colorshift"],
            speed=speed, shift_speed=config["shiftspeed"],
        )
        perimeter = self.perimeter
        opacity = pulse_opacity(t, speed, config["opacity"]) if animation == "pulse" else config["opacity"]
        glow_size = breathe_size(t, speed, config["glowsize"]) if animation == "breathe" else config["glowsize"]

        frame = self.base_frame(t)
        frame.update({
            "palette": self.palette_hex(palette),
            "viewport": {"width": self.width, "height": self.height},
            "shape": config["shape"],
            "style": config["style"],
            "animation": animation,
            "shapes": self.shapes(),
            "perimeter": perimeter,
            "stroke_width": config["thickness"],
            "line_cap": "round" if config["style"] == "dotted" else "butt",
            "dash_array": self.dash_array(),
            "dash_offset": dash_offset(t, speed, perimeter) if animation == "dash" else 0.0,
            "angle": rotation_angle(t, speed) if animation == "rotate" else DEFAULT_ANGLE,
            "opacity": opacity,
            "glow_size": glow_size,
            "glow": self.glow_layers(glow_size),
        })
        return frame
