"""
Cadence - periodic callback on its own asyncio task

Drives the timer tick (1 s) and the final-message blink (0.5 s). Each cadence
is started or stopped by its owner to match an enabling predicate; a stopped
cadence leaves no task behind.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Awaitable, Callable, Optional, Union

from lifecycle.task_registry import create_tracked_task, TaskCategory
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CADENCE)

CadenceCallback = Callable[[], Union[None, Awaitable[None]]]


class Cadence:
    """
    Independently cancellable periodic callback.

    Each start() spawns a fresh tracked task, so a cadence that is stopped
    and started again begins a full interval from the restart instead of
    resuming a stale schedule.

    Design:
    - owner decides when it should run (reconcile(predicate))
    - one task at a time, cancelled on stop()
    - callback errors are logged, the cadence keeps going

    Example:
        tick = Cadence(1.0, controller.tick, description="Timer tick")
        tick.reconcile(status == TimerStatus.RUNNING)
        ...
        await tick.stop_async()
    """

    def __init__(
        self,
        interval: float,
        callback: CadenceCallback,
        description: str,
        category: TaskCategory = TaskCategory.CADENCE,
    ):
        if interval <= 0:
            raise ValueError(f"Cadence interval must be positive, got {interval}")

        self.interval = interval
        self.description = description
        self._callback = callback
        self._category = category

        self._task: Optional[asyncio.Task] = None
        self._generation: int = 0

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def generation(self) -> int:
        """Number of times the cadence has been (re)started"""
        return self._generation

    # ------------------------------------------------------------------
    # Task lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        if self.running:
            return

        self._generation += 1
        log.debug(f"{self.description} cadence starting", interval=self.interval, generation=self._generation)
        self._task = create_tracked_task(
            self._loop(self._generation),
            category=self._category,
            description=self.description
        )

    def stop(self) -> None:
        if self._task is None:
            return

        task = self._task
        self._task = None
        # The loop may be stopping itself from inside its own callback
        if task is not asyncio.current_task():
            task.cancel()
        log.debug(f"{self.description} cadence stopped")

    async def stop_async(self) -> None:
        task = self._task
        self.stop()
        if task is not None and task is not asyncio.current_task():
            try:
                await task
            except asyncio.CancelledError:
                pass

    def reconcile(self, should_run: bool) -> None:
        """Start or stop so that running == should_run."""
        if should_run and not self.running:
            self.start()
        elif not should_run and self.running:
            self.stop()

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    async def _loop(self, generation: int) -> None:
        while self._generation == generation and self._task is not None:
            await asyncio.sleep(self.interval)

            # Stopped (or restarted) while sleeping
            if self._generation != generation or self._task is None:
                return

            try:
                result = self._callback()
                if inspect.isawaitable(result):
                    await result
            except asyncio.CancelledError:
                raise
            except Exception as e:
                log.error(
                    f"{self.description} callback failed: {e}",
                    error_type=type(e).__name__
                )
