"""
Base Overlay Class

One overlay instance = one resolved config + its own scheduler timers.
Subclasses implement sample(t), a pure function of the clock sample and
the instance's discrete state, returning a declarative frame dict.
"""

import random
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from engine.effect_registry import EffectRegistry
from engine.scheduler import Scheduler, TimerGroup
from engine.visibility import DelayedExit, LoopTiming, VisibilityStateMachine
from managers.brand_manager import BrandManager
from models.color import Color
from models.domain.resolved_config import ResolvedConfig
from models.domain.theme import ThemeColors
from models.enums import EffectKind, LoopState, OverlayKind
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.OVERLAY)

Frame = Dict[str, Any]

# Config keys that change the palette of an instance
PALETTE_KEYS = ("gradient", "colors", "colormode", "random")
TIMING_KEYS = ("delay", "entrancespeed", "hold", "exitspeed", "pause")


class BaseOverlay(ABC):
    """
    Base class for all overlays

    Lifecycle:
        overlay.mount()      # start timers
        overlay.sample(t)    # any number of times, once per frame
        overlay.update(cfg)  # reconfigure; cancels stale timers
        overlay.unmount()    # cancel every timer

    The random palette choice uses random.Random(seed) created once per
    instance, so it stays fixed for the instance's lifetime.
    """

    KIND: OverlayKind

    def __init__(
        self,
        config: ResolvedConfig,
        brand: BrandManager,
        scheduler: Scheduler,
        effects: EffectRegistry,
        seed: Optional[int] = None,
        name: Optional[str] = None,
    ):
        self.config = config
        self.brand = brand
        self.scheduler = scheduler
        self.effects = effects
        self.seed = seed
        self.rng = random.Random(seed)
        self.name = name or self.KIND.value
        self.log = log.bind(overlay=self.name)
        self.timers = TimerGroup(scheduler)
        self.mounted = False

        self.theme: ThemeColors = brand.resolve_theme(config["theme"])
        self._palette: Optional[List[Color]] = None

    # ------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------

    def mount(self, elapsed: float = 0.0) -> None:
        """
        Start the overlay's timers

        `elapsed` mounts the overlay as it would be that many seconds after
        mounting, without replaying every timer in between.
        """
        if self.mounted:
            self.log.warn("Overlay already mounted")
            return
        self.mounted = True
        self._on_mount(max(0.0, elapsed))
        self.log.info("Overlay mounted", kind=self.KIND.value, elapsed=elapsed)

    def unmount(self) -> None:
        if not self.mounted:
            return
        self._on_unmount()
        cancelled = self.timers.cancel_all()
        self.mounted = False
        self.log.info("Overlay unmounted", cancelled_timers=cancelled)

    def update(self, config: ResolvedConfig) -> None:
        """Apply a new resolved config"""
        previous = self.config
        self.config = config
        if config["theme"] != previous["theme"]:
            self.theme = self.brand.resolve_theme(config["theme"])
        if self._changed(previous, PALETTE_KEYS):
            self._palette = None
        self._on_update(previous)
        self.log.debug("Overlay updated")

    def _on_mount(self, elapsed: float) -> None:
        pass

    def _on_unmount(self) -> None:
        pass

    def _on_update(self, previous: ResolvedConfig) -> None:
        """Apply a config change; called mounted or not, timers start only while mounted"""

    def _changed(self, previous: ResolvedConfig, keys) -> bool:
        return any(previous.get(key) != self.config.get(key) for key in keys)

    # ------------------------------------------------------------
    # Brand
    # ------------------------------------------------------------

    @property
    def palette(self) -> List[Color]:
        """Resolved gradient palette (cached, never empty)"""
        if self._palette is None:
            self._palette = self.brand.resolve_gradient(
                self.config["gradient"],
                explicit_colors=self.config["colors"],
                random_mode=bool(self.config.get("random", False)),
                color_mode=self.config["colormode"],
                rng=self.rng,
            )
        return self._palette

    @property
    def primary_color(self) -> str:
        return self.palette[0].to_hex()

    def palette_hex(self, palette: Optional[List[Color]] = None) -> List[str]:
        return [color.to_hex() for color in (palette if palette is not None else self.palette)]

    def font_family(self) -> str:
        return self.brand.font_family(self.config["font"])

    # ------------------------------------------------------------
    # Effects
    # ------------------------------------------------------------

    def effect(self, kind: EffectKind, name: str, cycle: int = 0, **overrides: Any) -> Optional[Dict[str, Any]]:
        """Effect declaration, None for 'none' or unknown names"""
        if name == "none":
            return None
        declaration = self.effects.declaration(kind, name, cycle, **overrides)
        if declaration is None:
            self.log.debug("Unknown effect", kind=kind.name, effect=name)
        return declaration

    # ------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------

    def base_frame(self, t: float) -> Frame:
        return {
            "kind": self.KIND.value,
            "name": self.name,
            "t": t,
            "theme": self.theme.to_dict(),
            "palette": self.palette_hex(),
        }

    def panel_frame(self) -> Optional[Dict[str, Any]]:
        """
        Background panel: custom bgcolor or theme surface at bgopacity

        Returns None when the overlay has no panel (bg off).
        """
        config = self.config
        if not config["bg"]:
            return None
        opacity = config["bgopacity"]
        base = Color.from_hex(config["bgcolor"]) if config["bgcolor"] else None
        if base is None:
            base = Color.from_hex(self.theme.surface) or Color(0, 0, 0)
        return {
            "background": Color(base.r, base.g, base.b, opacity).to_hex(),
            "shadow": config["bgshadow"],
            "border": None if config["bgshadow"] == "none" else self.theme.border,
            "blur": config["bgblur"],
            "radius": config["bgradius"],
        }

    @abstractmethod
    def sample(self, t: float) -> Frame:
        """Declarative frame at clock time t"""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, mounted={self.mounted})"


class LoopingOverlay(BaseOverlay):
    """
    Overlay with entrance/hold/exit visibility

    Loop mode runs a VisibilityStateMachine; otherwise a DelayedExit fires
    once after exit_after() seconds.
    """

    # CTA keeps its content mounted while the exit effect plays
    VISIBLE_WHILE_EXITING = False

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.visibility = VisibilityStateMachine(
            self.scheduler,
            LoopTiming.from_config(self.config),
            loop=bool(self.config["loop"]),
            name=self.name,
        )
        self.delayed_exit = DelayedExit(self.scheduler, self.exit_after(), name=self.name)

    def exit_after(self) -> float:
        return float(self.config["exitafter"])

    @property
    def looping(self) -> bool:
        return bool(self.config["loop"])

    def _on_mount(self, elapsed: float) -> None:
        if self.looping:
            self.visibility.start(elapsed)
        else:
            self.delayed_exit.start(elapsed)

    def _on_unmount(self) -> None:
        self.visibility.stop()
        self.delayed_exit.cancel()

    def _on_update(self, previous: ResolvedConfig) -> None:
        if not self.mounted:
            self.visibility.update(timing=LoopTiming.from_config(self.config), loop=self.looping)
            self.delayed_exit.after = max(0.0, self.exit_after())
            return

        was_looping = bool(previous["loop"])
        if self.looping and not was_looping:
            self.delayed_exit.cancel()
            self.visibility.loop = True
            self.visibility.timing = LoopTiming.from_config(self.config)
            self.visibility.start()
        elif was_looping and not self.looping:
            self.visibility.update(loop=False)
            self.visibility.stop()
            self.delayed_exit.start()
        elif self.looping:
            self.visibility.update(timing=LoopTiming.from_config(self.config))
        elif self.exit_after() != self.delayed_exit.after:
            self.delayed_exit.update(self.exit_after())

    # --- Visibility ---

    @property
    def cycle(self) -> int:
        return self.visibility.cycle if self.looping else 0

    @property
    def loop_state(self) -> Optional[LoopState]:
        return self.visibility.state if self.looping else None

    def is_visible(self) -> bool:
        if not self.looping:
            return True
        return self.visibility.is_visible(include_exiting=self.VISIBLE_WHILE_EXITING)

    def trigger_exit(self) -> bool:
        if self.looping:
            return self.visibility.state is LoopState.EXITING
        return self.delayed_exit.should_exit and self.config["exit"] != "none"

    def visibility_frame(self) -> Frame:
        cycle = self.cycle
        config = self.config
        return {
            "visible": self.is_visible(),
            "state": self.loop_state.value if self.loop_state else None,
            "cycle": cycle,
            "exiting": self.trigger_exit(),
            "entrance": self.effect(
                EffectKind.ENTRANCE, config["entrance"], cycle,
                duration=config["entrancespeed"], delay=config["delay"],
            ),
            "exit": self.effect(EffectKind.EXIT, config["exit"], cycle, duration=config["exitspeed"]),
        }
