from models.events import (
    ConfigChangedEvent, EventType, FrameChangedEvent, TimerStateChangedEvent
)
from services.service_container import ServiceContainer


def register_timer_broadcaster(sio, services: ServiceContainer):
    """Forward timer, frame and config events to every connected client"""
    bus = services.event_bus

    async def on_frame_changed(event: FrameChangedEvent):
        await sio.emit("timer:frame", event.frame.to_dict())

    async def on_state_changed(event: TimerStateChangedEvent):
        payload = event.state.to_dict()
        payload["reason"] = event.reason
        await sio.emit("timer:state", payload)

    async def on_config_changed(event: ConfigChangedEvent):
        await sio.emit("config:changed", {
            "config": event.config.to_dict(),
            "changed_fields": event.changed_fields,
        })

    bus.subscribe(EventType.FRAME_CHANGED, on_frame_changed)  # type: ignore
    bus.subscribe(EventType.TIMER_STATE_CHANGED, on_state_changed)  # type: ignore
    bus.subscribe(EventType.CONFIG_CHANGED, on_config_changed)  # type: ignore
