from .api_server_shutdown_handler import APIServerShutdownHandler
from .preview_shutdown_handler import PreviewShutdownHandler
from .task_cancellation_handler import TaskCancellationHandler

__all__ = [
    "APIServerShutdownHandler",
    "PreviewShutdownHandler",
    "TaskCancellationHandler",
]
