"""
Lifecycle subsystem
-------------------

Task tracking and coordinated shutdown:
    from lifecycle import TaskRegistry, create_tracked_task, ShutdownCoordinator
"""

from .shutdown_coordinator import ShutdownCoordinator
from .shutdown_protocol import IShutdownHandler
from .task_registry import TaskRegistry, TaskCategory, TaskInfo, create_tracked_task

__all__ = [
    "IShutdownHandler",
    "ShutdownCoordinator",
    "TaskRegistry",
    "TaskCategory",
    "TaskInfo",
    "create_tracked_task",
]
