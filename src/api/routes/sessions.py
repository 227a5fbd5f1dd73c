"""
Session Endpoints - live overlays sampled on the server's event loop

A session mounts an overlay with real timers (AsyncioScheduler) and a
FrameSampler task; the latest frame can be polled until the session is
deleted or the process shuts down.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies import get_service_container
from api.middleware.error_handler import OverlayKindNotFoundError, SessionNotFoundError
from api.schemas.overlay import SessionFrameResponse, SessionListResponse, SessionResponse
from models.enums import OverlayKind
from services.overlay_service import OverlaySession, parse_kind
from services.service_container import ServiceContainer
from utils.logger import get_logger, LogCategory
from utils.query import parse_query

log = get_logger().for_category(LogCategory.API)

router = APIRouter(prefix="/sessions", tags=["Sessions"])

SESSION_KEYS = ("seed", "fps", "width", "height")


def _describe(session: OverlaySession) -> SessionResponse:
    return SessionResponse(
        id=session.id,
        kind=session.kind.value,
        fps=session.sampler.fps,
        frames_sampled=session.sampler.frames_sampled,
        sample_errors=session.sampler.sample_errors,
    )


def _session_or_404(services: ServiceContainer, session_id: str) -> OverlaySession:
    session = services.get_session(session_id)
    if session is None:
        raise SessionNotFoundError(session_id)
    return session


@router.get("", response_model=SessionListResponse, summary="List live sessions")
async def list_sessions(
    services: ServiceContainer = Depends(get_service_container)
) -> SessionListResponse:
    sessions = [_describe(session) for session in services.sessions]
    return SessionListResponse(sessions=sessions, count=len(sessions))


@router.post(
    "/{kind}",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start a live session",
)
async def start_session(
    kind: str,
    request: Request,
    seed: Optional[int] = Query(None),
    fps: Optional[int] = Query(None, ge=1, le=240),
    width: float = Query(1920, gt=0),
    height: float = Query(1080, gt=0),
    services: ServiceContainer = Depends(get_service_container)
) -> SessionResponse:
    """
    Mount an overlay from the query string and start sampling it.

    **Errors:**
    - 404: Unknown overlay kind
    """
    overlay_kind = parse_kind(kind)
    if overlay_kind is None:
        raise OverlayKindNotFoundError(kind, [k.value for k in OverlayKind])

    raw = {k: v for k, v in parse_query(str(request.url.query)).items() if k not in SESSION_KEYS}
    options = {"width": width, "height": height} if overlay_kind is OverlayKind.BORDER else {}
    session = await services.start_session(overlay_kind, raw, seed=seed, fps=fps, **options)
    return _describe(session)


@router.get("/{session_id}/frame", response_model=SessionFrameResponse, summary="Latest frame")
async def get_session_frame(
    session_id: str,
    services: ServiceContainer = Depends(get_service_container)
) -> SessionFrameResponse:
    session = _session_or_404(services, session_id)
    return SessionFrameResponse(id=session.id, kind=session.kind.value, frame=session.latest_frame())


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Stop a session")
async def stop_session(
    session_id: str,
    services: ServiceContainer = Depends(get_service_container)
) -> None:
    if not await services.stop_session(session_id):
        raise SessionNotFoundError(session_id)
    log.debug("Session deleted", session=session_id)
