"""Service Container - Dependency injection container for all core services"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from controllers.timer_preview_controller import TimerPreviewController
    from managers.config_manager import ConfigManager
    from services.config_service import ConfigService
    from services.event_bus import EventBus


@dataclass
class ServiceContainer:
    """
    Centralized dependency injection container for the core services.

    Services included:
    - config_service: Live TimerConfig edited from the API / editor
    - preview_controller: Timer runtime, cadences and frames
    - event_bus: Pub-sub event routing for decoupling components

    Managers included:
    - config_manager: YAML settings (fonts, API, preview intervals)

    Usage:
        services = ServiceContainer(
            config_manager=config_manager,
            config_service=config_service,
            event_bus=event_bus,
            preview_controller=preview_controller
        )

        @router.get("/timer/state")
        async def get_state(services: ServiceContainer = Depends(get_services)):
            return services.preview_controller.state.to_dict()
    """

    config_manager: ConfigManager
    config_service: ConfigService
    event_bus: EventBus
    preview_controller: TimerPreviewController
