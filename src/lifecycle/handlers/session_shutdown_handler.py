from __future__ import annotations

from typing import TYPE_CHECKING, List

from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from services.overlay_service import OverlaySession

log = get_logger().for_category(LogCategory.SHUTDOWN)


class SessionShutdownHandler:
    """
    Stops live overlay sessions: sampler tasks first, then every pending
    overlay timer via unmount.

    Priority: 100 (first, so no timer fires into a half-stopped process)
    """

    def __init__(self, sessions: List["OverlaySession"]):
        self.sessions = sessions

    @property
    def shutdown_priority(self) -> int:
        return 100

    async def shutdown(self) -> None:
        if not self.sessions:
            log.debug("No overlay sessions to stop")
            return

        log.info(f"Stopping {len(self.sessions)} overlay session(s)")
        for session in list(self.sessions):
            try:
                await session.stop()
            except Exception as e:
                log.error(f"Error stopping session {session.overlay.name}: {e}", exc_info=True)
        self.sessions.clear()
