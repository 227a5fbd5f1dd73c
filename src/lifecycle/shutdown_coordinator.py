"""
Shutdown coordinator that orchestrates graceful shutdown of all components.

Manages signal handlers, waits for a shutdown trigger (signal, explicit
request or failure of a critical task) and runs the registered handlers in
priority order with per-handler and total timeouts.
"""

import asyncio
import signal
from typing import Dict, List, Optional, Set

from lifecycle.task_registry import TaskRegistry
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)

# Task categories whose failure brings the process down
CRITICAL_CATEGORIES: Set[str] = {"API", "RENDER"}


class ShutdownCoordinator:
    """
    Coordinates graceful shutdown of multiple components.

    Example:
        coordinator = ShutdownCoordinator()
        coordinator.register(SessionShutdownHandler(sessions))
        coordinator.register(APIServerShutdownHandler(api_server))

        coordinator.setup_signal_handlers(loop)
        await coordinator.wait_for_shutdown()
        await coordinator.shutdown_all()
    """

    def __init__(self, timeout_per_handler: float = 5.0, total_timeout: float = 15.0, poll_interval: float = 0.2):
        """
        Args:
            timeout_per_handler: Timeout for each individual handler (seconds)
            total_timeout: Total timeout for the entire shutdown sequence (seconds)
            poll_interval: How often critical tasks are checked while waiting
        """
        self._handlers: List = []
        self._shutdown_event = asyncio.Event()
        self._timeout_per_handler = timeout_per_handler
        self._total_timeout = total_timeout
        self._poll_interval = poll_interval
        self._shutdown_trigger: Dict[str, Optional[str]] = {"reason": None}

    @property
    def reason(self) -> Optional[str]:
        return self._shutdown_trigger["reason"]

    def register(self, handler) -> None:
        """
        Register a shutdown handler.

        Handler must have a shutdown_priority property (int) and an async
        shutdown() method.
        """
        if not hasattr(handler, "shutdown_priority"):
            raise ValueError(f"Handler {handler} missing shutdown_priority property")
        if not hasattr(handler, "shutdown"):
            raise ValueError(f"Handler {handler} missing shutdown() method")

        self._handlers.append(handler)
        log.debug(f"Registered shutdown handler: {handler.__class__.__name__}")

    def setup_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        """Install SIGINT/SIGTERM handlers that trigger shutdown."""
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda s=sig: self.request_shutdown(s.name))
        log.info("Signal handlers installed (SIGINT, SIGTERM)")

    def request_shutdown(self, reason: str) -> None:
        if self._shutdown_event.is_set():
            return
        self._shutdown_trigger["reason"] = reason
        log.info(f"Shutdown requested: {reason}")
        self._shutdown_event.set()

    def _check_critical_task_failures(self) -> bool:
        for record in TaskRegistry.instance().failed():
            if record.info.category.name in CRITICAL_CATEGORIES:
                log.error(
                    f"Critical task failed: {record.info.description} "
                    f"(category: {record.info.category.name})"
                )
                self._shutdown_trigger["reason"] = f"Task failure: {record.info.description}"
                return True
        return False

    async def wait_for_shutdown(self) -> None:
        """
        Wait for a shutdown request or a critical task failure.

        Critical tasks are the TaskRegistry records in CRITICAL_CATEGORIES.
        """
        while not self._shutdown_event.is_set():
            if self._check_critical_task_failures():
                return
            try:
                await asyncio.wait_for(self._shutdown_event.wait(), timeout=self._poll_interval)
            except asyncio.TimeoutError:
                continue
        log.debug("Shutdown triggered", reason=self.reason)

    async def shutdown_all(self) -> None:
        """
        Execute graceful shutdown of all handlers in priority order.

        A failing or hanging handler is logged and skipped; the remaining
        handlers still run.
        """
        log.info("Initiating graceful shutdown sequence...", reason=self.reason or "UNKNOWN")

        sorted_handlers = sorted(self._handlers, key=lambda h: h.shutdown_priority, reverse=True)
        loop = asyncio.get_running_loop()
        start_time = loop.time()

        for handler in sorted_handlers:
            handler_name = handler.__class__.__name__

            elapsed = loop.time() - start_time
            if elapsed > self._total_timeout:
                log.error(f"Total shutdown timeout exceeded ({elapsed:.1f}s > {self._total_timeout}s)")
                break

            try:
                log.debug(f"Shutting down {handler_name} (priority={handler.shutdown_priority})...")
                await asyncio.wait_for(handler.shutdown(), timeout=self._timeout_per_handler)
                log.debug(f"{handler_name} shutdown complete")
            except asyncio.TimeoutError:
                log.error(f"{handler_name} shutdown timeout ({self._timeout_per_handler}s)")
            except asyncio.CancelledError:
                log.debug(f"{handler_name} shutdown was cancelled")
                raise
            except Exception as e:
                log.error(f"Error shutting down {handler_name}: {e}", exc_info=True)

        log.info("Shutdown sequence complete", tasks=TaskRegistry.instance().summary())

    def get_handler(self, handler_type: type):
        for handler in self._handlers:
            if isinstance(handler, handler_type):
                return handler
        return None
