"""
Enums for the progressive timer state machine
"""

from enum import Enum, auto
from typing import Optional


class TimerStatus(Enum):
    """
    Runtime status of the timer controller

    IDLE: stopped, elapsed time is zero
    RUNNING: elapsed time advances on every tick
    PAUSED: elapsed time is frozen until started again

    There is no FINISHED status: reaching the limit is a display condition,
    the controller keeps counting until stopped.
    """
    IDLE = auto()
    RUNNING = auto()
    PAUSED = auto()


class ColorBand(Enum):
    """
    Remaining-time color bands

    Value is the band threshold in seconds (remaining <= threshold).
    DEFAULT has no threshold.
    """
    DEFAULT = None
    BAND_30S = 30
    BAND_15S = 15
    BAND_10S = 10
    BAND_5S = 5


class TransportAction(Enum):
    """Transport operations, the only mutators of runtime state"""
    START = "start"
    PAUSE = "pause"
    STOP = "stop"
    RESET = "reset"

    @classmethod
    def parse(cls, value) -> Optional['TransportAction']:
        """Case-insensitive lookup by value; None for unknown actions"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class EventSource(Enum):
    """Event source identifiers for application events"""
    TIMER = auto()        # TimerPreviewController
    CONFIG = auto()       # ConfigService edits
    API = auto()          # REST endpoints
    SOCKETIO = auto()     # Socket.IO clients
    APPLICATION = auto()  # Generic application events


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    TIMER = auto()       # Transport operations, ticks
    DISPLAY = auto()     # Frame mapping, blink phase
    CADENCE = auto()     # Periodic task start/stop
    EVENT = auto()       # Event bus events and handling
    EXPORT = auto()      # Prompt export

    API = auto()
    SOCKETIO = auto()

    SHUTDOWN = auto()
    LIFECYCLE = auto()
    TASK = auto()
    SYSTEM = auto()      # Startup, shutdown, errors

    GENERAL = auto()    # Default general category
