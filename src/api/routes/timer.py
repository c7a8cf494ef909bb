"""
Timer Endpoints - transport operations, runtime state and frames

Transport operations are the only way runtime state changes from outside.
Each one returns the new state plus the frame the overlay should draw.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_preview_controller
from api.middleware.error_handler import UnknownTransportActionError
from api.schemas.timer import DisplayFrameResponse, TimerStateResponse, TransportResponse
from controllers.timer_preview_controller import TimerPreviewController
from models.enums import LogCategory, TransportAction
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)

router = APIRouter(prefix="/timer", tags=["Timer"])


@router.get(
    "/state",
    response_model=TimerStateResponse,
    summary="Get timer state",
    description="Current transport status and elapsed seconds"
)
async def get_state(
    preview: TimerPreviewController = Depends(get_preview_controller)
) -> TimerStateResponse:
    return TimerStateResponse.from_state(preview.state)


@router.get(
    "/frame",
    response_model=DisplayFrameResponse,
    summary="Get current frame",
    description="Text, color and visibility for the current state and live config"
)
async def get_frame(
    preview: TimerPreviewController = Depends(get_preview_controller)
) -> DisplayFrameResponse:
    return DisplayFrameResponse.from_frame(preview.current_frame())


@router.post(
    "/{action}",
    response_model=TransportResponse,
    summary="Run a transport operation",
    description="start, pause, stop or reset"
)
async def run_transport(
    action: str,
    preview: TimerPreviewController = Depends(get_preview_controller)
) -> TransportResponse:
    """
    Run a transport operation.

    **Parameters:**
    - `action`: start | pause | stop | reset

    Operations are total: start while running, or pause while idle,
    succeed without changing anything.

    **Errors:**
    - 404: Unknown action
    """
    parsed = TransportAction.parse(action)
    if parsed is None:
        raise UnknownTransportActionError(action)

    frame = await preview.apply(parsed)
    log.info(f"Transport: {parsed.value}", status=preview.state.status.name)

    return TransportResponse(
        action=parsed.value,
        state=TimerStateResponse.from_state(preview.state),
        frame=DisplayFrameResponse.from_frame(frame)
    )
