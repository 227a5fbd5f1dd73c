"""Service Container - Dependency injection container for all core services"""

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from engine.effect_registry import EffectRegistry, register_default_effects
from managers.brand_manager import BrandManager
from managers.config_manager import ConfigManager
from managers.preset_manager import PresetManager
from models.enums import OverlayKind
from services.overlay_service import OverlayService, OverlaySession
from services.parameter_resolver import ParameterResolver
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.OVERLAY)

DEFAULT_FPS = 60


@dataclass
class ServiceContainer:
    """
    Centralized container for the managers and services shared by the API
    and the process entry point.

    Usage:
        config_manager = ConfigManager()
        config_manager.load()
        services = ServiceContainer.build(config_manager)

        @router.get("/overlays")
        async def list_overlays(services: ServiceContainer = Depends(get_service_container)):
            return services.overlay_service.list_kinds()
    """

    config_manager: ConfigManager
    brand_manager: BrandManager
    preset_manager: PresetManager
    resolver: ParameterResolver
    effects: EffectRegistry
    overlay_service: OverlayService
    sessions: List[OverlaySession] = field(default_factory=list)

    @classmethod
    def build(cls, config_manager: ConfigManager) -> "ServiceContainer":
        """Wire services from a loaded ConfigManager"""
        effects = EffectRegistry()
        register_default_effects(effects)
        resolver = ParameterResolver(config_manager.preset_manager)
        overlay_service = OverlayService(
            resolver, config_manager.brand_manager, config_manager.preset_manager, effects
        )
        return cls(
            config_manager=config_manager,
            brand_manager=config_manager.brand_manager,
            preset_manager=config_manager.preset_manager,
            resolver=resolver,
            effects=effects,
            overlay_service=overlay_service,
        )

    # === Live sessions ===

    @property
    def fps(self) -> int:
        server = self.config_manager.get("server") or {}
        return int(server.get("fps", DEFAULT_FPS))

    async def start_session(
        self,
        kind: OverlayKind,
        raw: Mapping[str, str],
        seed: Optional[int] = None,
        fps: Optional[int] = None,
        **options: Any,
    ) -> OverlaySession:
        """Mount an overlay on the running loop and start sampling it"""
        session = self.overlay_service.open_session(kind, raw, seed=seed, fps=fps or self.fps, **options)
        await session.start()
        self.sessions.append(session)
        log.info("Session started", session=session.id, kind=kind.value, fps=session.sampler.fps)
        return session

    def get_session(self, session_id: str) -> Optional[OverlaySession]:
        for session in self.sessions:
            if session.id == session_id:
                return session
        return None

    async def stop_session(self, session_id: str) -> bool:
        """Stop and forget a session, False if the id is unknown"""
        session = self.get_session(session_id)
        if session is None:
            return False
        self.sessions.remove(session)
        await session.stop()
        log.info("Session stopped", session=session_id)
        return True
