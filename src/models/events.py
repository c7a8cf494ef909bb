"""
Event system for the progressive timer

Timer state, frames and config edits are published as events so the
Socket.IO push channel and other observers stay decoupled from the
preview controller.
"""

from dataclasses import dataclass
import time
from enum import Enum, auto
from typing import Any, Dict, Generic, TypeVar

from models.display_frame import DisplayFrame
from models.enums import EventSource, TransportAction
from models.timer_config import TimerConfig
from models.timer_state import TimerRuntimeState


class EventType(Enum):
    """Event types in the system"""
    TIMER_STATE_CHANGED = auto()
    FRAME_CHANGED = auto()
    CONFIG_CHANGED = auto()
    TRANSPORT_COMMAND = auto()


TSource = TypeVar("TSource", bound=Enum)


@dataclass
class Event(Generic[TSource]):
    """
    Base event class

    All events inherit from this and must specify:
    - type: EventType (what kind of event)
    - source: Enum (where it came from)
    - data: dict (event-specific payload)
    - timestamp: float (when it happened)
    """
    type: EventType
    source: TSource | None
    data: Dict[str, Any]
    timestamp: float


@dataclass
class TimerStateChangedEvent(Event[EventSource]):
    """Transport operation or tick changed the runtime state"""

    def __init__(self, state: TimerRuntimeState, reason: str):
        """
        Args:
            state: Snapshot of the runtime state after the change
            reason: What caused it ("start", "tick", ...)
        """
        super().__init__(
            type=EventType.TIMER_STATE_CHANGED,
            source=EventSource.TIMER,
            data={"state": state, "reason": reason},
            timestamp=time.time()
        )

    @property
    def state(self) -> TimerRuntimeState:
        return self.data["state"]

    @property
    def reason(self) -> str:
        return self.data["reason"]


@dataclass
class FrameChangedEvent(Event[EventSource]):
    """A new display frame was computed"""

    def __init__(self, frame: DisplayFrame):
        super().__init__(
            type=EventType.FRAME_CHANGED,
            source=EventSource.TIMER,
            data={"frame": frame},
            timestamp=time.time()
        )

    @property
    def frame(self) -> DisplayFrame:
        return self.data["frame"]


@dataclass
class ConfigChangedEvent(Event[EventSource]):
    """The live TimerConfig was edited"""

    def __init__(self, config: TimerConfig, changed_fields: list):
        super().__init__(
            type=EventType.CONFIG_CHANGED,
            source=EventSource.CONFIG,
            data={"config": config, "changed_fields": changed_fields},
            timestamp=time.time()
        )

    @property
    def config(self) -> TimerConfig:
        return self.data["config"]

    @property
    def changed_fields(self) -> list:
        return self.data["changed_fields"]


@dataclass
class TransportCommandEvent(Event[EventSource]):
    """Request to run a transport operation (from API or Socket.IO clients)"""

    def __init__(self, action: TransportAction, source: EventSource = EventSource.API):
        super().__init__(
            type=EventType.TRANSPORT_COMMAND,
            source=source,
            data={"action": action},
            timestamp=time.time()
        )

    @property
    def action(self) -> TransportAction:
        return self.data["action"]
