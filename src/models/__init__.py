"""
Models package - Data models for the progressive timer
"""

from .enums import TimerStatus, ColorBand, TransportAction, EventSource, LogLevel, LogCategory
from .color import Color
from .timer_config import TimerConfig
from .timer_state import TimerRuntimeState
from .display_frame import DisplayFrame

__all__ = [
    'TimerStatus',
    'ColorBand',
    'TransportAction',
    'EventSource',
    'LogLevel',
    'LogCategory',
    'Color',
    'TimerConfig',
    'TimerRuntimeState',
    'DisplayFrame',
]
