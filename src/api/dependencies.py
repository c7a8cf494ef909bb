"""
API Dependencies - Service container access for FastAPI endpoints

Pattern:
1. main_asyncio.py creates ServiceContainer during initialization
2. main_asyncio.py calls set_service_container() after creation
3. API endpoints use get_service_container() dependency via Depends()

Example:
    @router.get("/timer/state")
    async def get_state(services: ServiceContainer = Depends(get_service_container)):
        return services.preview_controller.state.to_dict()
"""

from typing import Optional
from api.middleware.error_handler import ServiceNotReadyError
from controllers.timer_preview_controller import TimerPreviewController
from services.config_service import ConfigService
from services.service_container import ServiceContainer


# Global service container (set by main_asyncio.py during initialization)
_service_container: Optional[ServiceContainer] = None


def set_service_container(services: Optional[ServiceContainer]) -> None:
    """
    Store the service container for API access (None clears it).
    """
    global _service_container
    _service_container = services


async def get_service_container() -> ServiceContainer:
    """
    FastAPI dependency for accessing service container.

    Raises:
        ServiceNotReadyError: 503 if services not initialized
    """
    if _service_container is None:
        raise ServiceNotReadyError()
    return _service_container


async def get_preview_controller() -> TimerPreviewController:
    return (await get_service_container()).preview_controller


async def get_config_service() -> ConfigService:
    return (await get_service_container()).config_service
