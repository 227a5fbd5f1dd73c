"""
CTA Overlay

Call-to-action pill (subscribe, like, follow, ...) with an animated icon
and a decoration under the text.
"""

from typing import Any, Dict, Optional

from models.enums import EffectKind, OverlayKind
from overlays.base import Frame, LoopingOverlay

# Without loop the CTA exits on its own after this many seconds
CTA_EXIT_AFTER = 10.0

FLEX_DIRECTIONS = {
    "left": "row",
    "right": "row-reverse",
    "top": "column",
    "bottom": "column-reverse",
}


class CTAOverlay(LoopingOverlay):
    """
    Call-to-action overlay

    Content stays mounted during the exit effect (visible in entering,
    visible and exiting).
    """

    KIND = OverlayKind.CTA
    VISIBLE_WHILE_EXITING = True

    def exit_after(self) -> float:
        return CTA_EXIT_AFTER

    def icon_size(self) -> float:
        return self.config["iconsize"] or round(self.config["size"] * 1.1)

    def icon_frame(self) -> Optional[Dict[str, Any]]:
        config = self.config
        if config["icon"] == "none" and not config["customicon"]:
            return None
        return {
            "name": config["icon"],
            "custom": config["customicon"] or None,
            "size": self.icon_size(),
            "color": config["iconcolor"] or self.primary_color,
            "position": config["iconpos"],
            "effect": self.effect(EffectKind.ICON, config["iconanim"], self.cycle),
        }

    def decoration_frame(self) -> Optional[Dict[str, Any]]:
        config = self.config
        if config["decoration"] == "none":
            return None
        return {
            "style": config["decoration"],
            "color": config["decorationcolor"] or self.primary_color,
            "effect": self.effect(EffectKind.DECORATION, config["decoration"], self.cycle),
        }

    def sample(self, t: float) -> Frame:
        config = self.config
        frame = self.base_frame(t)
        frame.update(self.visibility_frame())
        frame.update({
            "text": config["text"],
            "sub": config["sub"] or None,
            "font": self.font_family(),
            "size": config["size"],
            "sub_size": config["size"] * 0.6,
            "text_color": self.theme.text,
            "sub_color": self.theme.text_muted,
            "letter_spacing": config["letterspacing"],
            "line_height": config["lineheight"],
            "text_padding": {"x": config["textpadx"], "y": config["textpady"]},
            "direction": FLEX_DIRECTIONS.get(config["iconpos"], "row"),
            "align": config["align"],
            "valign": config["valign"],
            "panel": config["bg"],
            "icon": self.icon_frame(),
            "decoration": self.decoration_frame(),
        })
        return frame
