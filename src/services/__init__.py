"""Services layer"""

from .event_bus import EventBus
from .config_service import ConfigService
from .prompt_export_service import build_plugin_prompt
from .service_container import ServiceContainer

__all__ = [
    "EventBus",
    "ConfigService",
    "build_plugin_prompt",
    "ServiceContainer",
]
