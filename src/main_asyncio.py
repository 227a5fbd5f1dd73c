"""
main_asyncio.py - Application entry point for the overlay engine
-----------------------------------------------------------------

Responsible for:
- loading configuration and building the service container
- serving the HTTP API with uvicorn
- graceful shutdown on Ctrl+C, SIGTERM or a failed critical task
"""

import asyncio
import sys
from typing import Any, Dict

from api.dependencies import set_service_container
from api.main import create_app
from lifecycle import ShutdownCoordinator
from lifecycle.api_server_wrapper import APIServerWrapper
from lifecycle.handlers import (
    AllTasksCancellationHandler, APIServerShutdownHandler, SessionShutdownHandler
)
from lifecycle.task_registry import create_tracked_task, TaskCategory
from managers import ConfigManager
from models.enums import LogCategory, LogLevel
from services import ServiceContainer
from utils.logger import configure_logger, get_logger

# Set UTF-8 encoding for output (tree and level symbols in log lines)
if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore
if hasattr(sys.stderr, 'reconfigure') and sys.stderr.encoding != 'UTF-8':
    sys.stderr.reconfigure(encoding='utf-8')  # type: ignore

log = get_logger().for_category(LogCategory.SYSTEM)

DEFAULT_SERVER: Dict[str, Any] = {"host": "0.0.0.0", "port": 8000, "log_level": "info", "cors_origins": None}


def server_settings(config_manager: ConfigManager) -> Dict[str, Any]:
    """`server:` table of the configuration over the built-in defaults"""
    settings = dict(DEFAULT_SERVER)
    settings.update(config_manager.get("server") or {})
    return settings


async def main() -> None:
    # ========================================================================
    # 1. CONFIGURATION & SERVICES
    # ========================================================================

    log.info("Loading configuration...")
    config_manager = ConfigManager()
    config_manager.load()

    services = ServiceContainer.build(config_manager)
    set_service_container(services)
    log.info(
        "Services ready",
        effects=len(services.effects),
        gradients=len(services.brand_manager.gradient_names),
    )

    # ========================================================================
    # 2. API SERVER
    # ========================================================================

    settings = server_settings(config_manager)
    api_server = APIServerWrapper(
        create_app(cors_origins=settings.get("cors_origins")),
        host=settings["host"],
        port=int(settings["port"]),
        log_level=settings["log_level"],
    )
    api_task = create_tracked_task(
        api_server.start(),
        category=TaskCategory.API,
        description="FastAPI/Uvicorn Server"
    )

    # ========================================================================
    # 3. SHUTDOWN COORDINATOR
    # ========================================================================

    coordinator = ShutdownCoordinator()
    coordinator.register(SessionShutdownHandler(services.sessions))
    coordinator.register(APIServerShutdownHandler(api_server))
    coordinator.register(AllTasksCancellationHandler(exclude_tasks=[api_task]))

    coordinator.setup_signal_handlers(asyncio.get_running_loop())

    log.info("Overlay engine initialized. Waiting for exit signal...")
    await coordinator.wait_for_shutdown()
    await coordinator.shutdown_all()

    set_service_container(None)
    log.info("Overlay engine shut down cleanly.")


def run() -> None:
    """Console script entry point"""
    configure_logger(LogLevel.INFO)
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")
    except Exception as e:
        log.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    run()
