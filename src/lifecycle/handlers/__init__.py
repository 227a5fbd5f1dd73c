from .all_tasks_cancellation_handler import AllTasksCancellationHandler
from .api_server_shutdown_handler import APIServerShutdownHandler
from .session_shutdown_handler import SessionShutdownHandler

__all__ = [
    "AllTasksCancellationHandler",
    "APIServerShutdownHandler",
    "SessionShutdownHandler",
]
