"""
Middleware for EventBus

Middleware = pipeline functions that process events before handlers.
Can modify events, block events, or log/validate events.
"""

from models.events import Event, EventType
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EVENT)


def log_middleware(event: Event) -> Event:
    """
    Log all events for debugging

    Usage:
        event_bus.add_middleware(log_middleware)
    """
    source_str = event.source.name if event.source else None

    # Frames arrive twice a second while blinking; keep them compact
    if event.type == EventType.FRAME_CHANGED:
        frame = event.data["frame"]
        data_str = f"text={frame.text!r} visible={frame.visible} band={frame.band.name}"
    elif event.type == EventType.TIMER_STATE_CHANGED:
        state = event.data["state"]
        data_str = f"{event.data['reason']} status={state.status.name} elapsed={state.elapsed_seconds}"
    elif event.type == EventType.CONFIG_CHANGED:
        data_str = f"fields={event.data['changed_fields']}"
    else:
        data_str = str(event.data)

    log.debug(f"Event: {event.type.name} from {source_str} | {data_str}")
    return event
