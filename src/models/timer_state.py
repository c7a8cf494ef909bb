"""
TimerRuntimeState - transient runtime state of the timer

Owned exclusively by TimerController. Never persisted.
"""

from dataclasses import dataclass, replace

from models.enums import TimerStatus


@dataclass
class TimerRuntimeState:
    """
    Elapsed time and transport status

    Attributes:
        elapsed_seconds: Seconds counted while RUNNING (>= 0)
        status: IDLE, RUNNING or PAUSED
    """

    elapsed_seconds: int = 0
    status: TimerStatus = TimerStatus.IDLE

    @property
    def is_running(self) -> bool:
        return self.status == TimerStatus.RUNNING

    def snapshot(self) -> 'TimerRuntimeState':
        """Detached copy for readers (API, renderers)"""
        return replace(self)

    def to_dict(self) -> dict:
        return {
            "elapsed_seconds": self.elapsed_seconds,
            "status": self.status.name,
        }
