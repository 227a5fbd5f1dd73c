"""
Socials Overlay

Row or column of social platform handles revealed all at once, staggered
or one at a time.
"""

from typing import Dict, List, Tuple

from engine.sequenced_reveal import (
    OneByOneReveal, SequencedRevealController, StaggerReveal, order_items, parse_priority
)
from engine.visibility import DelayedExit
from models.domain.resolved_config import ResolvedConfig
from models.domain.sequenced_item import SequencedItem
from models.enums import EffectKind, OverlayKind, RevealMode
from overlays.base import BaseOverlay, Frame
from utils.query import parse_pairs

# (icon px, handle font px) per size preset
SIZE_MAP: Dict[str, Tuple[int, int]] = {
    "sm": (20, 13),
    "md": (24, 15),
    "lg": (32, 18),
    "xl": (40, 22),
}
WHITE = "#ffffff"

MODE_KEYS = ("onebyone", "loop", "entrance")
ITEM_KEYS = ("show", "order", "priority", "handles")
TIMING_KEYS = ("delay", "hold", "pause", "each", "eachpause")


class SocialsOverlay(BaseOverlay):
    """
    Socials overlay

    Platforms come from the `show` list (unknown ids dropped) or from the
    brand socials with a handle. With order=priority they are stably sorted
    by the `priority` ranks.
    """

    KIND = OverlayKind.SOCIALS

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.reveal: SequencedRevealController = self._build_reveal()
        self.delayed_exit = DelayedExit(self.scheduler, self.config["exitafter"], name=self.name)

    # ------------------------------------------------------------
    # Items
    # ------------------------------------------------------------

    def platforms(self) -> List[str]:
        config = self.config
        if config["show"]:
            platforms = [pid for pid in config["show"] if self.brand.is_platform(pid)]
            dropped = [pid for pid in config["show"] if not self.brand.is_platform(pid)]
            if dropped:
                self.log.debug("Dropping unknown platforms", platforms=dropped)
        else:
            platforms = [
                pid for pid, handle in self.brand.socials.items()
                if handle and self.brand.is_platform(pid)
            ]

        if config["order"] == "priority" and config["priority"]:
            platforms = order_items(platforms, parse_priority(config["priority"]))
        return platforms

    def build_items(self) -> List[SequencedItem]:
        overrides = parse_pairs(self.config["handles"])
        socials = self.brand.socials
        return [
            SequencedItem(pid, overrides.get(pid) or socials.get(pid) or pid)
            for pid in self.platforms()
        ]

    @property
    def reveal_mode(self) -> RevealMode:
        if self.config["onebyone"]:
            return RevealMode.ONE_BY_ONE
        if self.config["entrance"] == "stagger":
            return RevealMode.STAGGER
        return RevealMode.ALL_AT_ONCE

    def _build_reveal(self) -> SequencedRevealController:
        config = self.config
        items = self.build_items()
        if self.reveal_mode is RevealMode.ONE_BY_ONE:
            return OneByOneReveal(
                self.scheduler, items,
                delay=config["delay"], each=config["each"], each_pause=config["eachpause"],
                name=self.name,
            )
        return StaggerReveal(
            self.scheduler, items,
            delay=config["delay"],
            stagger=self.reveal_mode is RevealMode.STAGGER,
            loop=config["loop"],
            hold=config["hold"],
            pause=config["pause"],
            name=self.name,
        )

    def _timing(self) -> dict:
        config = self.config
        if self.reveal_mode is RevealMode.ONE_BY_ONE:
            return {"delay": config["delay"], "each": config["each"], "each_pause": config["eachpause"]}
        return {"delay": config["delay"], "hold": config["hold"], "pause": config["pause"]}

    @property
    def uses_delayed_exit(self) -> bool:
        return not self.config["loop"] and not self.config["onebyone"]

    # ------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------

    def _on_mount(self, elapsed: float) -> None:
        self.reveal.start(elapsed)
        if self.uses_delayed_exit:
            self.delayed_exit.start(elapsed)

    def _on_unmount(self) -> None:
        self.reveal.stop()
        self.delayed_exit.cancel()

    def _on_update(self, previous: ResolvedConfig) -> None:
        timing_changed = self._changed(previous, TIMING_KEYS)
        if self._changed(previous, MODE_KEYS):
            self.reveal.stop()
            self.reveal = self._build_reveal()
            if self.mounted:
                self.reveal.start()
        else:
            if timing_changed:
                self.reveal.configure(**self._timing())
            # update_items and restart only start timers on a running controller
            if self._changed(previous, ITEM_KEYS):
                self.reveal.update_items(self.build_items())
            elif timing_changed:
                self.reveal.restart()

        if not self.mounted:
            self.delayed_exit.after = max(0.0, self.config["exitafter"])
        elif not self.uses_delayed_exit:
            self.delayed_exit.cancel()
        elif previous["exitafter"] != self.config["exitafter"] or self._changed(previous, ("loop", "onebyone")):
            self.delayed_exit.update(self.config["exitafter"])

    # ------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------

    def icon_color(self, platform_id: str, index: int) -> str:
        mode = self.config["iconcolor"]
        if mode == "platform":
            platform = self.brand.get_platform(platform_id)
            return platform.color if platform else self.primary_color
        if mode == "white":
            return WHITE
        if mode == "gradient":
            palette = self.palette
            return palette[index % len(palette)].to_hex()
        return self.primary_color

    def sizes(self) -> Tuple[float, float]:
        icon, handle = SIZE_MAP.get(self.config["size"], SIZE_MAP["md"])
        return (self.config["iconsize"] or icon, self.config["fontsize"] or handle)

    def item_frames(self) -> List[dict]:
        icons = parse_pairs(self.config["icons"])
        frames = []
        for index, item in enumerate(self.reveal.items):
            platform = self.brand.get_platform(item.identity)
            icon = icons.get(item.identity, item.identity)
            if not self.brand.is_platform(icon):
                icon = item.identity
            frames.append({
                "platform": item.identity,
                "name": platform.name if platform else item.identity,
                "handle": f"{platform.prefix if platform else ''}{item.display_text}",
                "icon": icon,
                "icon_color": self.icon_color(item.identity, index),
                "visible": item.visible,
            })
        return frames

    def sample(self, t: float) -> Frame:
        config = self.config
        icon_size, handle_size = self.sizes()
        exiting = (
            self.uses_delayed_exit
            and self.delayed_exit.should_exit
            and config["exit"] != "none"
        )
        frame = self.base_frame(t)
        frame.update({
            "mode": self.reveal_mode.name.lower(),
            "phase": self.reveal.phase.value,
            "exiting": exiting,
            "exit": self.effect(EffectKind.EXIT, config["exit"], 0, duration=config["exitspeed"]),
            "layout": config["layout"],
            "direction": "column" if config["layout"] == "vertical" else "row",
            "gap": config["spacing"] or config["gap"],
            "icon_size": icon_size,
            "handle_size": handle_size,
            "show_text": config["showtext"],
            "font": self.font_family(),
            "font_weight": config["fontweight"],
            "letter_spacing": config["letterspacing"],
            "text_color": self.theme.text,
            "item_speed": config["speed"],
            "border_radius": config["borderradius"],
            "padding": config["iconpadding"] or 16,
            "panel": self.panel_frame(),
            "items": self.item_frames(),
        })
        return frame
