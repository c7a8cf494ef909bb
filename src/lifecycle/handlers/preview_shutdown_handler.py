from __future__ import annotations
from typing import TYPE_CHECKING, Optional

from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from controllers.timer_preview_controller import TimerPreviewController
    from services.config_service import ConfigService

log = get_logger().for_category(LogCategory.SHUTDOWN)


class PreviewShutdownHandler(IShutdownHandler):
    """
    Shutdown handler for the timer preview.

    Stops the tick and blink cadences so no frame is emitted while the API
    goes down, then writes any pending config edit to the state file.

    Priority: 100 (shutdown first)
    """

    def __init__(self, preview: "TimerPreviewController", config_service: Optional["ConfigService"] = None):
        self.preview = preview
        self.config_service = config_service

    @property
    def shutdown_priority(self) -> int:
        return 100

    async def shutdown(self) -> None:
        log.info("Stopping timer preview...")
        await self.preview.shutdown()

        if self.config_service:
            try:
                await self.config_service.flush()
            except OSError as e:
                log.error(f"Failed to flush config state: {e}")
