"""
Overlay Service

Creates overlay instances from raw parameters and renders deterministic
frames: a frame at time t is computed by mounting a fresh instance on a
ManualScheduler whose clock already reads t. Mounting with elapsed=t seeks
every timing engine to where it would be after t seconds (loop states via
advance_loop, reveal loops folded over their cycle length) and schedules
only what is still to come, so the cost does not grow with t.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from engine.animation_clock import Clock
from engine.effect_registry import EffectRegistry
from engine.frame_sampler import FrameSampler
from engine.scheduler import AsyncioScheduler, LoopClock, ManualScheduler, Scheduler
from managers.brand_manager import BrandManager
from managers.preset_manager import PresetManager
from models.domain.resolved_config import ResolvedConfig
from models.enums import OverlayKind
from overlays import OVERLAY_CLASSES, BaseOverlay
from services.overlay_definitions import get_definition
from services.parameter_resolver import ParameterResolver
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.OVERLAY)


def parse_kind(value: str) -> Optional[OverlayKind]:
    """Overlay kind from its identifier, None if unknown"""
    try:
        return OverlayKind(value)
    except ValueError:
        return None


@dataclass
class OverlaySession:
    """A live overlay: instance + per-frame sampler on the running loop"""
    overlay: BaseOverlay
    sampler: FrameSampler
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])

    @property
    def kind(self) -> OverlayKind:
        return self.overlay.KIND

    def latest_frame(self) -> Dict[str, Any]:
        """Last sampled frame, sampling once if the loop has not run yet"""
        return self.sampler.latest_frame or self.sampler.sample_once()

    async def start(self) -> None:
        self.overlay.mount()
        await self.sampler.start()

    async def stop(self) -> None:
        await self.sampler.stop()
        self.overlay.unmount()


class OverlayService:
    """
    Overlay creation and frame rendering

    Example:
        service = OverlayService(resolver, brand_manager, preset_manager, effects)
        frame = service.render_frame(OverlayKind.TEXT, {"preset": "brb"}, t=2.0)
        frame["visible"]   # True
    """

    def __init__(
        self,
        resolver: ParameterResolver,
        brand_manager: BrandManager,
        preset_manager: PresetManager,
        effects: EffectRegistry,
    ):
        self.resolver = resolver
        self.brand_manager = brand_manager
        self.preset_manager = preset_manager
        self.effects = effects

    # === Discovery ===

    def list_kinds(self) -> List[Dict[str, Any]]:
        kinds = []
        for kind in OverlayKind:
            definition = get_definition(kind)
            presets = self.preset_manager.preset_names(kind.value) if definition.has_presets else []
            kinds.append({"kind": kind.value, "presets": presets, "params": definition.keys})
        return kinds

    # === Creation ===

    def resolve(self, kind: OverlayKind, raw: Mapping[str, str]) -> ResolvedConfig:
        return self.resolver.resolve(kind, raw)

    def create(
        self,
        kind: OverlayKind,
        raw: Mapping[str, str],
        scheduler: Scheduler,
        seed: Optional[int] = None,
        **options: Any,
    ) -> BaseOverlay:
        """
        Build an unmounted overlay

        Args:
            options: Extra constructor arguments (border: width, height)
        """
        config = self.resolve(kind, raw)
        overlay_class = OVERLAY_CLASSES[kind]
        overlay = overlay_class(config, self.brand_manager, scheduler, self.effects, seed=seed, **options)
        log.debug(f"Created {kind.value} overlay", seed=seed)
        return overlay

    # === Rendering ===

    def render_frame(
        self,
        kind: OverlayKind,
        raw: Mapping[str, str],
        t: float,
        seed: Optional[int] = None,
        **options: Any,
    ) -> Dict[str, Any]:
        """Declarative frame `t` seconds after mount"""
        t = max(0.0, t)
        scheduler = ManualScheduler()
        scheduler.advance_to(t)
        overlay = self.create(kind, raw, scheduler, seed=seed, **options)
        overlay.mount(elapsed=t)
        try:
            return overlay.sample(t)
        finally:
            overlay.unmount()

    def open_session(
        self,
        kind: OverlayKind,
        raw: Mapping[str, str],
        seed: Optional[int] = None,
        fps: int = 60,
        clock: Optional[Clock] = None,
        **options: Any,
    ) -> OverlaySession:
        """Live overlay driven by the running event loop"""
        scheduler = AsyncioScheduler()
        overlay = self.create(kind, raw, scheduler, seed=seed, **options)
        sampler = FrameSampler(overlay, clock or LoopClock(scheduler), fps=fps)
        return OverlaySession(overlay=overlay, sampler=sampler)
