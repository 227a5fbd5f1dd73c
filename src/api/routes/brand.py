"""
Brand Endpoints - palette and theme tables
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_service_container
from api.schemas.brand import GradientListResponse, ThemeListResponse
from services.service_container import ServiceContainer

router = APIRouter(prefix="/brand", tags=["Brand"])


@router.get("/gradients", response_model=GradientListResponse, summary="List named palettes")
async def list_gradients(
    services: ServiceContainer = Depends(get_service_container)
) -> GradientListResponse:
    brand = services.brand_manager
    gradients = {
        name: [color.to_hex() for color in brand.get_gradient(name) or []]
        for name in brand.gradient_names
    }
    return GradientListResponse(gradients=gradients, count=len(gradients))


@router.get("/themes", response_model=ThemeListResponse, summary="List themes")
async def list_themes(
    services: ServiceContainer = Depends(get_service_container)
) -> ThemeListResponse:
    brand = services.brand_manager
    themes = {}
    for name in brand.theme_names:
        colors = brand.resolve_theme(name).to_dict()
        colors.pop("name", None)
        themes[name] = colors
    return ThemeListResponse(themes=themes, count=len(themes))
