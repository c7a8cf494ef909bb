"""
TimerController - run/pause/stop/reset state machine

Owns the elapsed-time counter. An external cadence calls tick() once per
interval; the four transport operations are the only other mutators.

States: IDLE (initial) -> RUNNING <-> PAUSED, stop() returns to IDLE from
anywhere. There is no terminal state: reaching the limit is a display
condition and the controller keeps counting until stopped.
"""

from __future__ import annotations

from models.enums import TimerStatus, LogCategory
from models.timer_state import TimerRuntimeState
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.TIMER)


class TimerController:
    """
    Elapsed-time state machine

    All operations are total: calling one in a state where it does not
    apply is a silent no-op. Each returns True when the state changed.

    Example:
        controller = TimerController()
        controller.start()
        controller.tick()        # elapsed 1
        controller.pause()
        controller.tick()        # ignored, still 1
        controller.reset()       # elapsed 0, still PAUSED
        controller.stop()        # elapsed 0, IDLE
    """

    def __init__(self):
        self._state = TimerRuntimeState()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def state(self) -> TimerRuntimeState:
        """Snapshot of the runtime state"""
        return self._state.snapshot()

    @property
    def status(self) -> TimerStatus:
        return self._state.status

    @property
    def elapsed_seconds(self) -> int:
        return self._state.elapsed_seconds

    # ------------------------------------------------------------------
    # Transport operations
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """IDLE/PAUSED -> RUNNING. Elapsed time is kept."""
        if self._state.status == TimerStatus.RUNNING:
            return False

        previous = self._state.status
        self._state.status = TimerStatus.RUNNING
        log.info("Timer started", previous=previous.name, elapsed=self._state.elapsed_seconds)
        return True

    def pause(self) -> bool:
        """RUNNING -> PAUSED. Elapsed time is kept."""
        if self._state.status != TimerStatus.RUNNING:
            return False

        self._state.status = TimerStatus.PAUSED
        log.info("Timer paused", elapsed=self._state.elapsed_seconds)
        return True

    def stop(self) -> bool:
        """Any state -> IDLE with elapsed 0."""
        changed = (
            self._state.status != TimerStatus.IDLE
            or self._state.elapsed_seconds != 0
        )
        self._state.status = TimerStatus.IDLE
        self._state.elapsed_seconds = 0
        log.info("Timer stopped")
        return changed

    def reset(self) -> bool:
        """
        Elapsed 0, status unchanged.

        A running timer continues from 0, a paused one stays paused at 0.
        """
        changed = self._state.elapsed_seconds != 0
        self._state.elapsed_seconds = 0
        log.info("Timer reset", status=self._state.status.name)
        return changed

    def tick(self) -> bool:
        """
        Advance by exactly one second while RUNNING.

        Ticks in any other state are ignored. No catch-up for missed ticks.
        """
        if self._state.status != TimerStatus.RUNNING:
            return False

        self._state.elapsed_seconds += 1
        log.debug("Tick", elapsed=self._state.elapsed_seconds)
        return True
