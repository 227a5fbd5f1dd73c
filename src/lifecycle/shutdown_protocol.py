"""
Shutdown handler protocol for component-based graceful shutdown.

Each component that owns timers, tasks or sockets implements
IShutdownHandler to take part in the shutdown sequence.
"""

from typing import Protocol


class IShutdownHandler(Protocol):
    """
    Protocol for components that need graceful shutdown.

    The ShutdownCoordinator calls shutdown() on each handler in
    descending priority order.

    Example:
        class SessionShutdownHandler:
            @property
            def shutdown_priority(self) -> int:
                return 100  # Stop overlay sessions first

            async def shutdown(self) -> None:
                for session in self.sessions:
                    await session.stop()
    """

    @property
    def shutdown_priority(self) -> int:
        """Higher priority shuts down earlier."""
        ...

    async def shutdown(self) -> None:
        """Called during coordinated shutdown."""
        ...
