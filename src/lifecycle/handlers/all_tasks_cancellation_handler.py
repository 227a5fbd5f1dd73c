import asyncio
from typing import List, Optional

from lifecycle.task_registry import TaskRegistry
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class AllTasksCancellationHandler:
    """
    Cancels every tracked task still running, except the task executing
    the shutdown and any explicitly excluded ones.

    Priority: 30 (last)
    """

    shutdown_priority = 30

    def __init__(self, exclude_tasks: Optional[List[asyncio.Task]] = None, grace: float = 0.05):
        self.exclude_tasks = exclude_tasks or []
        self.grace = grace

    async def shutdown(self) -> None:
        current = asyncio.current_task()
        exclude = [current] if current else []
        exclude.extend(self.exclude_tasks)

        tasks = TaskRegistry.instance().get_tasks_for_shutdown(exclude=exclude)
        if not tasks:
            log.debug("No tracked tasks left to cancel")
            return

        log.info(f"Cancelling {len(tasks)} tracked task(s)")
        for task in tasks:
            task.cancel(msg="shutdown")

        await asyncio.wait(tasks, timeout=self.grace)
        log.info("Tracked tasks cancelled", remaining=sum(1 for t in tasks if not t.done()))
