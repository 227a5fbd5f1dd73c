"""
Counter Overlay

Animated number (followers, viewers, goals) with icon, label and a trend
arrow. The target value is an input: `value` from the config or
set_target() from whatever feeds live numbers.
"""

from typing import Optional

from animations.count_up import CountUp, format_number
from models.domain.resolved_config import ResolvedConfig
from models.enums import OverlayKind, Trend
from overlays.base import BaseOverlay, Frame

ICON_SCALE = 0.8


class CounterOverlay(BaseOverlay):
    """
    Counter overlay

    Example:
        counter = CounterOverlay(cfg, brand, scheduler, effects)
        counter.mount()               # counts up from 0 to cfg.value
        counter.set_target(1500)      # counts from the shown value to 1500
    """

    KIND = OverlayKind.COUNTER

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.count = CountUp(0.0, duration=self.config["duration"], animate=self.config["animate"])

    def _on_mount(self, elapsed: float) -> None:
        self.set_target(self.config["value"], now=self.scheduler.now() - elapsed)

    def _on_update(self, previous: ResolvedConfig) -> None:
        self.count.duration = max(0.0, self.config["duration"])
        self.count.animate = self.config["animate"]
        if self.mounted and previous["value"] != self.config["value"]:
            self.set_target(self.config["value"])

    def set_target(self, value: float, now: Optional[float] = None) -> None:
        """Count from the currently shown value towards `value`"""
        self.count.set_target(value, self.scheduler.now() if now is None else now)

    @property
    def trend(self) -> Trend:
        return self.count.trend

    def format(self, value: float) -> str:
        config = self.config
        return format_number(
            value,
            separator=config["separator"],
            decimals=config["decimals"],
            abbreviate=config["abbreviate"],
            notation=config["notation"],
        )

    def sample(self, t: float) -> Frame:
        config = self.config
        value = self.count.value_at(t)
        show_trend = config["trend"] and self.trend is not Trend.NEUTRAL
        frame = self.base_frame(t)
        frame.update({
            "value": value,
            "target": self.count.target,
            "text": self.format(value),
            "prefix": config["prefix"] or None,
            "suffix": config["suffix"] or None,
            "label": config["label"] or None,
            "font": self.font_family(),
            "size": config["size"],
            "label_size": config["labelsize"],
            "number_color": config["numbercolor"] or self.theme.text,
            "label_color": self.theme.text_muted,
            "icon": None if config["icon"] == "none" else {
                "name": config["icon"],
                "size": config["size"] * ICON_SCALE,
                "color": config["iconcolor"] or self.primary_color,
            },
            "trend": {"direction": self.trend.value, "color": config["trendcolor"]} if show_trend else None,
            "layout": config["layout"],
            "direction": "column" if config["layout"] == "stack" else "row",
            "align": config["align"],
            "padding": {"x": config["counterpadx"], "y": config["counterpady"]},
            "width": None if config["width"] == "auto" else config["width"],
            "height": None if config["height"] == "auto" else config["height"],
            "done": self.count.done_at(t),
            "panel": self.panel_frame(),
        })
        return frame
