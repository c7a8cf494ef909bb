"""
Config Endpoints - the configuration editor's backend

Edits take effect on the next rendered frame; the preview controller
listens for ConfigChangedEvent and re-renders immediately.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_config_service, get_service_container
from api.schemas.config import FontListResponse, TimerConfigRequest, TimerConfigResponse
from models.enums import LogCategory
from services.config_service import ConfigService
from services.service_container import ServiceContainer
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)

router = APIRouter(prefix="/config", tags=["Config"])


def _note_unlisted_font(request: TimerConfigRequest, services: ServiceContainer) -> None:
    # Any font name is accepted; the configured list only feeds the editor's picker
    if request.font_family is not None and request.font_family not in services.config_manager.available_fonts:
        log.info(f"Using font outside the configured list: {request.font_family}")


@router.get("", response_model=TimerConfigResponse, summary="Get live config")
async def get_config(
    config_service: ConfigService = Depends(get_config_service)
) -> TimerConfigResponse:
    return TimerConfigResponse.from_config(config_service.get_config())


@router.patch(
    "",
    response_model=TimerConfigResponse,
    summary="Edit config",
    description="Change only the given fields"
)
async def patch_config(
    request: TimerConfigRequest,
    services: ServiceContainer = Depends(get_service_container)
) -> TimerConfigResponse:
    _note_unlisted_font(request, services)
    config = await services.config_service.update(request.changes())
    return TimerConfigResponse.from_config(config)


@router.put(
    "",
    response_model=TimerConfigResponse,
    summary="Replace config",
    description="Replace the whole config; missing fields take the YAML defaults"
)
async def put_config(
    request: TimerConfigRequest,
    services: ServiceContainer = Depends(get_service_container)
) -> TimerConfigResponse:
    _note_unlisted_font(request, services)
    config = await services.config_service.replace(request.changes())
    return TimerConfigResponse.from_config(config)


@router.post("/reset", response_model=TimerConfigResponse, summary="Reset config to defaults")
async def reset_config(
    config_service: ConfigService = Depends(get_config_service)
) -> TimerConfigResponse:
    config = await config_service.reset_to_defaults()
    log.info("Config reset to defaults")
    return TimerConfigResponse.from_config(config)


@router.get("/fonts", response_model=FontListResponse, summary="List available fonts")
async def list_fonts(
    services: ServiceContainer = Depends(get_service_container)
) -> FontListResponse:
    current = services.config_service.get_config().font_family
    fonts = services.config_manager.fonts_including(current)
    return FontListResponse(
        fonts=fonts,
        count=len(fonts),
        current=current
    )
