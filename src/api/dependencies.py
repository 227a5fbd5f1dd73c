"""
API Dependencies - Service container access for FastAPI endpoints

Pattern:
1. main_asyncio.py builds the ServiceContainer during initialization
2. main_asyncio.py calls set_service_container()
3. Endpoints receive it through Depends(get_service_container)

Example:
    @router.get("/overlays")
    async def list_overlays(services: ServiceContainer = Depends(get_service_container)):
        return services.overlay_service.list_kinds()
"""

from typing import Optional

from fastapi import HTTPException, status

from services.service_container import ServiceContainer

_service_container: Optional[ServiceContainer] = None


def set_service_container(services: Optional[ServiceContainer]) -> None:
    """Store (or clear, with None) the container used by the endpoints"""
    global _service_container
    _service_container = services


async def get_service_container() -> ServiceContainer:
    """
    FastAPI dependency for accessing the service container.

    Raises:
        HTTPException: 503 Service Unavailable if services are not initialized
    """
    if _service_container is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service container not initialized. Overlay engine may still be starting."
        )
    return _service_container


def current_service_container() -> Optional[ServiceContainer]:
    """The container if set, for endpoints that work without it"""
    return _service_container
