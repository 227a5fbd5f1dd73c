"""
Overlay Endpoints - resolved configs and deterministic frames

The query string of a request is the overlay's raw parameter set, exactly
as a browser source URL would carry it. The frame endpoint reserves
t, seed, width and height for itself.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies import get_service_container
from api.middleware.error_handler import OverlayKindNotFoundError
from api.schemas.overlay import (
    OverlayConfigResponse, OverlayFrameResponse, OverlayKindListResponse, OverlayKindResponse
)
from models.enums import OverlayKind
from services.overlay_service import parse_kind
from services.service_container import ServiceContainer
from utils.logger import get_logger, LogCategory
from utils.query import RawParams, parse_query

log = get_logger().for_category(LogCategory.API)

router = APIRouter(prefix="/overlays", tags=["Overlays"])

FRAME_KEYS = ("t", "seed", "width", "height")


def _kind_or_404(kind: str) -> OverlayKind:
    overlay_kind = parse_kind(kind)
    if overlay_kind is None:
        raise OverlayKindNotFoundError(kind, [k.value for k in OverlayKind])
    return overlay_kind


def _raw_params(request: Request, exclude=()) -> RawParams:
    raw = parse_query(str(request.url.query))
    return {key: value for key, value in raw.items() if key not in exclude}


@router.get(
    "",
    response_model=OverlayKindListResponse,
    summary="List overlay kinds",
)
async def list_overlays(
    services: ServiceContainer = Depends(get_service_container)
) -> OverlayKindListResponse:
    kinds = [OverlayKindResponse(**entry) for entry in services.overlay_service.list_kinds()]
    return OverlayKindListResponse(kinds=kinds, count=len(kinds))


@router.get(
    "/{kind}/config",
    response_model=OverlayConfigResponse,
    summary="Resolve overlay parameters",
    description="Resolve the query string against presets and defaults",
)
async def get_config(
    kind: str,
    request: Request,
    services: ServiceContainer = Depends(get_service_container)
) -> OverlayConfigResponse:
    """
    Resolved configuration for a query string.

    **Example:** `/api/v1/overlays/text/config?preset=brb&hold=6`

    **Errors:**
    - 404: Unknown overlay kind
    """
    overlay_kind = _kind_or_404(kind)
    config = services.overlay_service.resolve(overlay_kind, _raw_params(request))
    return OverlayConfigResponse(kind=overlay_kind.value, config=config.to_dict())


@router.get(
    "/{kind}/frame",
    response_model=OverlayFrameResponse,
    summary="Render a frame",
    description="Declarative frame t seconds after mount, computed on a simulated clock",
)
async def get_frame(
    kind: str,
    request: Request,
    t: float = Query(0.0, ge=0, description="Seconds since mount"),
    seed: Optional[int] = Query(None, description="Seed for the random palette choice"),
    width: float = Query(1920, gt=0, description="Viewport width (border only)"),
    height: float = Query(1080, gt=0, description="Viewport height (border only)"),
    services: ServiceContainer = Depends(get_service_container)
) -> OverlayFrameResponse:
    """
    Frame of an overlay instance at time `t`.

    The same query, `t` and `seed` always give the same frame.

    **Errors:**
    - 404: Unknown overlay kind
    - 422: Invalid t, seed, width or height
    """
    overlay_kind = _kind_or_404(kind)
    options = {"width": width, "height": height} if overlay_kind is OverlayKind.BORDER else {}
    frame = services.overlay_service.render_frame(
        overlay_kind, _raw_params(request, FRAME_KEYS), t, seed=seed, **options
    )
    log.debug("Frame rendered", kind=overlay_kind.value, t=t)
    return OverlayFrameResponse(kind=overlay_kind.value, t=t, seed=seed, frame=frame)
