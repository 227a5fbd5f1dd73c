"""Services layer"""

from .overlay_service import OverlayService, OverlaySession, parse_kind
from .parameter_resolver import ParameterResolver
from .service_container import ServiceContainer

__all__ = [
    "OverlayService",
    "OverlaySession",
    "ParameterResolver",
    "ServiceContainer",
    "parse_kind",
]
