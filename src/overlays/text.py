"""
Text Overlay

Name plates, lower thirds and stream screens (BRB, starting soon, ...)
with an optional signature line.
"""

from typing import Any, Dict, Optional

from models.enums import EffectKind, OverlayKind
from overlays.base import Frame, LoopingOverlay


class TextOverlay(LoopingOverlay):
    """
    Text overlay

    Loop mode cycles entering/visible/exiting/hidden; content is shown in
    entering and visible only. Without loop the exit effect fires once
    after `exitafter` seconds (0 keeps the text up).
    """

    KIND = OverlayKind.TEXT

    def padding(self):
        """(x, y) padding: padx/pady when set, else pad"""
        config = self.config
        pad_x = config["padx"] if config["padx"] > 0 else config["pad"]
        pad_y = config["pady"] if config["pady"] > 0 else config["pad"]
        return pad_x, pad_y

    def text_color(self) -> str:
        return self.config["textcolor"] or self.theme.text

    def sub_color(self) -> str:
        return self.config["subcolor"] or self.theme.text_muted

    def line_frame(self, position: str) -> Optional[Dict[str, Any]]:
        """Signature line at `position` (top/bottom), None when not drawn there"""
        config = self.config
        if not config["line"]:
            return None
        if config["linepos"] not in (position, "both"):
            return None
        return {
            "style": config["linestyle"],
            "length": config["linelength"],
            "width": config["linewidth"],
            "color": self.primary_color,
            "gradient": self.palette_hex(),
            "effect": self.effect(EffectKind.LINE, config["lineanim"], self.cycle, duration=config["linespeed"]),
        }

    def sample(self, t: float) -> Frame:
        config = self.config
        pad_x, pad_y = self.padding()
        frame = self.base_frame(t)
        frame.update(self.visibility_frame())
        frame.update({
            "text": config["text"],
            "sub": config["sub"] or None,
            "font": self.font_family(),
            "size": config["size"],
            "subsize": config["subsize"],
            "weight": config["weight"],
            "text_color": None if config["textgradient"] else self.text_color(),
            "text_gradient": self.palette_hex() if config["textgradient"] else None,
            "sub_color": self.sub_color(),
            "align": config["align"],
            "valign": config["valign"],
            "max_width": None if config["maxwidth"] == "auto" else config["maxwidth"],
            "padding": {"x": pad_x, "y": pad_y},
            "margin": {"x": config["marginx"], "y": config["marginy"]},
            "offset": {"x": config["offsetx"], "y": config["offsety"]},
            "panel": config["bg"],
            "line_top": self.line_frame("top"),
            "line_bottom": self.line_frame("bottom"),
        })
        return frame
