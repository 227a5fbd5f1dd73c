"""
Task Registry
-------------

Every long-lived asyncio task of the engine (the API server, one frame
sampler per live overlay session) is created through create_tracked_task()
and recorded here with its category, a description and the overlay that
owns it. The shutdown coordinator watches the failures, the system API
lists the records and the final shutdown handler cancels what is left.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum, auto
from typing import Dict, Iterable, List, Optional

from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.TASK)


class TaskCategory(Enum):
    """Logical grouping of asynchronous tasks."""
    API = auto()
    RENDER = auto()       # Per-frame sampling loops
    OVERLAY = auto()      # Overlay session lifetimes
    SYSTEM = auto()
    GENERAL = auto()


@dataclass(frozen=True)
class TaskInfo:
    """Metadata captured when the task is registered"""
    id: int
    category: TaskCategory
    description: str
    created_at: str  # ISO UTC string
    created_timestamp: float
    owner: Optional[str] = None  # overlay name for render tasks


@dataclass
class TaskRecord:
    task: asyncio.Task
    info: TaskInfo
    cancelled: bool = False
    finished_with_error: Optional[BaseException] = None
    finished_at: Optional[str] = None

    @property
    def status(self) -> str:
        if not self.task.done():
            return "running"
        if self.cancelled:
            return "cancelled"
        if self.finished_with_error is not None:
            return "failed"
        return "completed"


class TaskRegistry:
    """
    Process-wide record of tracked tasks

    Records stay after their task finishes (so failures can be inspected)
    until prune_finished() drops them.
    """

    _instance: Optional["TaskRegistry"] = None

    def __init__(self) -> None:
        self._records: Dict[asyncio.Task, TaskRecord] = {}
        self._next_id = 1

    @classmethod
    def instance(cls) -> "TaskRegistry":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def register(
        self,
        task: asyncio.Task,
        category: TaskCategory,
        description: str,
        owner: Optional[str] = None,
    ) -> int:
        now = datetime.now(timezone.utc)
        info = TaskInfo(
            id=self._next_id,
            category=category,
            description=description,
            created_at=now.isoformat(),
            created_timestamp=now.timestamp(),
            owner=owner,
        )
        self._next_id += 1
        self._records[task] = TaskRecord(task=task, info=info)
        task.add_done_callback(self._on_task_done)
        log.debug(f"[Task {info.id}] Registered ({category.name}) - {description}", owner=owner)
        return info.id

    def _on_task_done(self, task: asyncio.Task) -> None:
        record = self._records.get(task)
        if record is None:
            return
        record.finished_at = datetime.now(timezone.utc).isoformat()

        if task.cancelled():
            record.cancelled = True
            log.debug(f"[Task {record.info.id}] Cancelled")
            return

        exc = task.exception()
        if exc is None:
            log.debug(f"[Task {record.info.id}] Completed")
            return
        record.finished_with_error = exc
        log.error(
            f"[Task {record.info.id}] FAILED: {exc}",
            description=record.info.description,
            owner=record.info.owner,
            error_type=type(exc).__name__,
        )

    # -----------------------------
    # Queries
    # -----------------------------

    def list_all(self, category: Optional[TaskCategory] = None) -> List[TaskRecord]:
        records = list(self._records.values())
        if category is not None:
            records = [r for r in records if r.info.category is category]
        return records

    def active(self) -> List[TaskRecord]:
        return [r for r in self._records.values() if not r.task.done()]

    def failed(self) -> List[TaskRecord]:
        return [r for r in self._records.values() if r.finished_with_error is not None]

    def cancelled(self) -> List[TaskRecord]:
        return [r for r in self._records.values() if r.cancelled]

    def summary(self) -> str:
        return (
            f"Tasks: total={len(self._records)}, running={len(self.active())}, "
            f"failed={len(self.failed())}, cancelled={len(self.cancelled())}"
        )

    # -----------------------------
    # Maintenance
    # -----------------------------

    def prune_finished(self) -> int:
        """Forget finished tasks, returns how many were dropped"""
        finished = [task for task in self._records if task.done()]
        for task in finished:
            del self._records[task]
        return len(finished)

    def get_tasks_for_shutdown(self, exclude: Optional[Iterable[asyncio.Task]] = None) -> List[asyncio.Task]:
        """Running tasks, minus the ones the caller stops by other means"""
        excluded = set(exclude or ())
        tasks = [task for task in self._records if not task.done() and task not in excluded]
        log.debug(f"Shutdown: {len(tasks)} tasks to cancel")
        return tasks


def create_tracked_task(
    coro,
    *,
    category: TaskCategory,
    description: str,
    owner: Optional[str] = None,
    loop: Optional[asyncio.AbstractEventLoop] = None
) -> asyncio.Task:
    """Create a task on the running loop and register it"""
    loop = loop or asyncio.get_running_loop()
    task = loop.create_task(coro)
    TaskRegistry.instance().register(task, category=category, description=description, owner=owner)
    return task
