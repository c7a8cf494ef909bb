"""
Timer engine - state machine, frame mapping and cadences
"""

from .timer_controller import TimerController
from .display_mapper import compute_frame, should_blink, format_elapsed, select_band
from .cadence import Cadence

__all__ = [
    'TimerController',
    'compute_frame',
    'should_blink',
    'format_elapsed',
    'select_band',
    'Cadence',
]
