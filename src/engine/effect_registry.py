"""
Effect Registry

Named, declarative animation effects (entrance, exit, icon, decoration,
line). Effects are registered once per process and looked up by name;
overlays turn them into declarations carrying a replay key so that a new
loop cycle restarts the effect on the rendering surface.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from models.enums import EffectKind
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EFFECT)

SIGNATURE_EASING = "cubic-bezier(0.4, 0, 0.2, 1)"


@dataclass(frozen=True)
class EffectSpec:
    """One named effect and its default timing"""
    name: str
    kind: EffectKind
    duration: float
    easing: str = "ease-out"
    delay: float = 0.0
    iterations: Optional[int] = 1      # None = infinite
    fill: str = "both"

    @property
    def infinite(self) -> bool:
        return self.iterations is None

    def to_declaration(self, cycle: int = 0, **overrides: Any) -> Dict[str, Any]:
        """
        Declarative effect for the rendering surface

        Args:
            cycle: Loop cycle the effect belongs to; part of the replay key
            overrides: duration / delay / easing replacing the defaults
        """
        declaration = {
            "name": self.name,
            "kind": self.kind.name.lower(),
            "duration": self.duration,
            "easing": self.easing,
            "delay": self.delay,
            "iterations": "infinite" if self.infinite else self.iterations,
            "fill": self.fill,
        }
        unknown = set(overrides) - {"duration", "delay", "easing"}
        if unknown:
            raise ValueError(f"Unsupported effect overrides: {sorted(unknown)}")
        declaration.update(overrides)
        declaration["key"] = f"{self.kind.name.lower()}-{self.name}-{cycle}"
        return declaration


class EffectRegistry:
    """
    Effects by (kind, name)

    Registration is idempotent: the first registration of a name wins and
    later ones are ignored with a debug message.
    """

    def __init__(self):
        self._effects: Dict[EffectKind, Dict[str, EffectSpec]] = {kind: {} for kind in EffectKind}

    def register(self, spec: EffectSpec) -> EffectSpec:
        bucket = self._effects[spec.kind]
        existing = bucket.get(spec.name)
        if existing is not None:
            log.debug("Effect already registered", kind=spec.kind.name, effect=spec.name)
            return existing
        bucket[spec.name] = spec
        return spec

    def get(self, kind: EffectKind, name: str) -> Optional[EffectSpec]:
        """Look up an effect; 'none' and unknown names return None"""
        return self._effects[kind].get(name)

    def names(self, kind: EffectKind) -> List[str]:
        return list(self._effects[kind].keys())

    def contains(self, kind: EffectKind, name: str) -> bool:
        return name in self._effects[kind]

    def declaration(self, kind: EffectKind, name: str, cycle: int = 0, **overrides: Any) -> Optional[Dict[str, Any]]:
        spec = self.get(kind, name)
        if spec is None:
            return None
        return spec.to_declaration(cycle, **overrides)

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._effects.values())


ENTRANCE_NAMES = (
    "fade", "slideUp", "slideDown", "slideLeft", "slideRight", "scale", "bounce",
    "typewriter", "flipIn", "zoomBounce", "rotateIn", "zoomIn", "stagger",
)
EXIT_NAMES = (
    "fade", "slideDown", "slideUp", "slideLeft", "slideRight", "scale",
    "fadeLeft", "zoomOut", "rotateOut", "flipOut",
)


def register_default_effects(registry: EffectRegistry) -> EffectRegistry:
    """Register the built-in effect catalogue (safe to call repeatedly)"""
    for name in ENTRANCE_NAMES:
        registry.register(EffectSpec(name, EffectKind.ENTRANCE, duration=0.6))
    for name in EXIT_NAMES:
        registry.register(EffectSpec(name, EffectKind.EXIT, duration=0.5, easing="ease-in", fill="forwards"))

    # Icon attention effects
    registry.register(EffectSpec("bounce", EffectKind.ICON, 0.6, "ease-out", delay=0.4))
    registry.register(EffectSpec("shake", EffectKind.ICON, 0.5, "ease-out", delay=0.4))
    registry.register(EffectSpec("pulse", EffectKind.ICON, 1.5, "ease-in-out", iterations=None))
    registry.register(EffectSpec("spin", EffectKind.ICON, 0.8, "ease-out", delay=0.4))
    registry.register(EffectSpec("wiggle", EffectKind.ICON, 0.5, "ease-in-out", delay=0.4))
    registry.register(EffectSpec("flip", EffectKind.ICON, 0.6, "ease-out", delay=0.4))
    registry.register(EffectSpec("heartbeat", EffectKind.ICON, 1.2, "ease-in-out", iterations=None))

    registry.register(EffectSpec("line", EffectKind.DECORATION, 0.6, "ease-out", delay=0.4))
    registry.register(EffectSpec("slant", EffectKind.DECORATION, 0.6, "ease-out", delay=0.4))

    # Signature line; duration comes from linespeed
    registry.register(EffectSpec("slide", EffectKind.LINE, 2.0, SIGNATURE_EASING, fill="forwards"))
    registry.register(EffectSpec("grow", EffectKind.LINE, 2.0, SIGNATURE_EASING, fill="forwards"))
    registry.register(EffectSpec("pulse", EffectKind.LINE, 2.0, "ease-in-out", iterations=None, fill="none"))

    log.debug("Default effects registered", count=len(registry))
    return registry
