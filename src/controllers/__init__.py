from .timer_preview_controller import TimerPreviewController

__all__ = [
    'TimerPreviewController',
]
