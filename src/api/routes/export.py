"""
Export Endpoints - code-generation prompt for the current config
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_config_service
from api.schemas.config import PromptExportResponse
from services.config_service import ConfigService
from services.prompt_export_service import PLUGIN_ID, PLUGIN_NAME, build_plugin_prompt

router = APIRouter(prefix="/export", tags=["Export"])


@router.get(
    "/prompt",
    response_model=PromptExportResponse,
    summary="Get plugin prompt",
    description="Prompt text embedding the live limit, final message and band colors"
)
async def get_prompt(
    config_service: ConfigService = Depends(get_config_service)
) -> PromptExportResponse:
    config = config_service.get_config()
    return PromptExportResponse(
        plugin_name=PLUGIN_NAME,
        plugin_id=PLUGIN_ID,
        limit_seconds=config.limit_seconds,
        prompt=build_plugin_prompt(config)
    )
