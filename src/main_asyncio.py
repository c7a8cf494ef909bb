"""
main_asyncio.py - Application entry point for the progressive timer
------------------------------------------------------------------

Responsible for:
- loading YAML configuration
- initializing services and the preview controller
- wiring dependencies (Dependency Injection)
- running the API + Socket.IO server in the event loop
- graceful shutdown on Ctrl+C, SIGTERM or a failed critical task
"""

import sys

# Set UTF-8 encoding for output before logging starts (tree/level symbols)
if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore
if hasattr(sys.stderr, 'reconfigure') and sys.stderr.encoding != 'UTF-8':
    sys.stderr.reconfigure(encoding='utf-8')  # type: ignore

import asyncio

from api.dependencies import set_service_container
from api.main import create_app
from api.socketio import create_socketio_server, register_socketio, wrap_app_with_socketio
from controllers import TimerPreviewController
from lifecycle import APIServerWrapper, ShutdownCoordinator
from lifecycle.handlers import APIServerShutdownHandler, PreviewShutdownHandler, TaskCancellationHandler
from lifecycle.task_registry import create_tracked_task, TaskCategory
from managers import ConfigManager
from models.enums import LogCategory
from services import ConfigService, EventBus, ServiceContainer
from services.middleware import log_middleware
from utils.logger import get_logger, configure_logger

log = get_logger().for_category(LogCategory.SYSTEM)


async def main():
    """Main async entry point (dependency injection and event loop startup)."""

    log.info("Starting progressive timer...")

    # ========================================================================
    # 1. CONFIGURATION
    # ========================================================================

    config_manager = ConfigManager()
    config_manager.load()

    logging_settings = config_manager.logging_settings
    configure_logger(logging_settings.level, logging_settings.use_colors)

    preview_settings = config_manager.preview_settings
    api_settings = config_manager.api_settings

    # ========================================================================
    # 2. SERVICES
    # ========================================================================

    event_bus = EventBus()
    event_bus.add_middleware(log_middleware)

    config_service = ConfigService(
        defaults=config_manager.timer_config,
        event_bus=event_bus,
        state_path=config_manager.resolve_path(preview_settings.state_file),
        save_on_change=preview_settings.persist_config,
    )

    preview = TimerPreviewController(
        config_service=config_service,
        event_bus=event_bus,
        tick_interval=preview_settings.tick_interval,
        blink_interval=preview_settings.blink_interval,
    )

    services = ServiceContainer(
        config_manager=config_manager,
        config_service=config_service,
        event_bus=event_bus,
        preview_controller=preview,
    )

    set_service_container(services)
    log.info("Service container registered with API")

    # ========================================================================
    # 3. API SERVER (FastAPI + Socket.IO)
    # ========================================================================

    app = create_app(
        docs_enabled=api_settings.docs_enabled,
        cors_origins=api_settings.cors_origins,
    )

    sio = create_socketio_server(api_settings.cors_origins)
    register_socketio(sio, services)
    asgi_app = wrap_app_with_socketio(app, sio)

    api_wrapper = APIServerWrapper(asgi_app, host=api_settings.host, port=api_settings.port)
    api_task = create_tracked_task(
        api_wrapper.start(),
        category=TaskCategory.API,
        description="FastAPI/Uvicorn Server"
    )

    # ========================================================================
    # 4. SHUTDOWN COORDINATOR
    # ========================================================================

    coordinator = ShutdownCoordinator()
    coordinator.register(PreviewShutdownHandler(preview, config_service))
    coordinator.register(APIServerShutdownHandler(api_wrapper))
    coordinator.register(TaskCancellationHandler())

    loop = asyncio.get_running_loop()
    coordinator.setup_signal_handlers(loop)

    log.info(
        "Application initialized. Waiting for exit signal...",
        api=f"http://{api_settings.host}:{api_settings.port}",
        tick=f"{preview_settings.tick_interval}s",
        blink=f"{preview_settings.blink_interval}s"
    )

    await coordinator.wait_for_shutdown()
    await coordinator.shutdown_all()

    if api_task.done() and not api_task.cancelled() and api_task.exception():
        log.error("API server task failed", error=repr(api_task.exception()))

    set_service_container(None)
    log.info("Progressive timer shut down cleanly.")


# ---------------------------------------------------------------------------
# ENTRY POINT
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")
