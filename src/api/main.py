"""
FastAPI Application Factory

HTTP surface of the overlay engine: overlay discovery, resolved configs,
deterministic frames, live sessions, brand tables and task introspection,
all under /api/v1, plus /api/health.

The same factory is used by main_asyncio.py and by the tests.
"""

from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import dependencies
from api.middleware.error_handler import register_exception_handlers
from api.routes import brand, overlays, sessions, system
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)

API_PREFIX = "/api/v1"
ROUTERS = (overlays.router, sessions.router, brand.router, system.router)

# Browser sources load overlays from local dev servers
DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]


def create_app(
    title: str = "Stream Overlay Engine",
    version: str = "1.0.0",
    docs_enabled: bool = True,
    cors_origins: Optional[List[str]] = None
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        title: API title (shown in docs)
        version: API version
        docs_enabled: Enable /docs and /redoc
        cors_origins: CORS allowed origins (default: local dev servers)
    """
    app = FastAPI(
        title=title,
        description="Resolved configs and declarative frames for stream overlays",
        version=version,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None
    )

    origins = cors_origins or DEFAULT_CORS_ORIGINS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    for router in ROUTERS:
        app.include_router(router, prefix=API_PREFIX)
    log.info(
        f"Created FastAPI app: {title} v{version}",
        routes=", ".join(router.prefix for router in ROUTERS),
        cors=len(origins),
    )

    @app.get("/api/health", tags=["System"], summary="Health check")
    async def health_check():
        """Liveness plus the number of live overlay sessions (None before startup)"""
        container = dependencies.current_service_container()
        return {
            "status": "healthy",
            "service": "overlay-engine",
            "version": version,
            "sessions": len(container.sessions) if container else None,
        }

    @app.get("/", include_in_schema=False)
    async def root():
        return {"message": title, "docs": "/docs", "health": "/api/health", "api": API_PREFIX}

    return app
