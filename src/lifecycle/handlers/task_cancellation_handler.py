import asyncio
from typing import List, Optional

from lifecycle.shutdown_protocol import IShutdownHandler
from lifecycle.task_registry import TaskRegistry
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class TaskCancellationHandler(IShutdownHandler):
    """
    Cancels all tracked asyncio tasks except the task running this handler
    and any explicitly excluded tasks.

    Priority: 30 (last)
    """

    shutdown_priority = 30

    def __init__(self, exclude_tasks: Optional[List[asyncio.Task]] = None, grace_period: float = 0.05):
        """
        Args:
            exclude_tasks: Tasks that must not be cancelled. The current task
                is always excluded automatically.
            grace_period: Time given to cancellations to propagate (seconds)
        """
        self.exclude_tasks = exclude_tasks or []
        self.grace_period = grace_period

    async def shutdown(self) -> None:
        current = asyncio.current_task()

        exclude = list(self.exclude_tasks)
        if current:
            exclude.append(current)

        tasks = TaskRegistry.instance().get_tasks_for_shutdown(exclude=exclude)

        if not tasks:
            log.debug("No tracked tasks to cancel")
            return

        log.info(f"Cancelling {len(tasks)} background tasks", excluded=len(exclude))

        for task in tasks:
            if not task.done():
                task.cancel(msg="shutdown")

        await asyncio.wait(tasks, timeout=self.grace_period)

        log.info("Task cancellation complete", tasks=TaskRegistry.instance().summary())
