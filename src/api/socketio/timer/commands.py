from models.enums import EventSource, TransportAction
from models.events import TransportCommandEvent
from services.service_container import ServiceContainer
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SOCKETIO)


def register_timer_commands(sio, services: ServiceContainer):
    """
    Accepts transport commands from clients:

        socket.emit("timer:command", {"action": "start"}, ack)

    The ack receives {"ok": true, "state": {...}} or {"ok": false, "error": "..."}.
    """

    @sio.on("timer:command")
    async def timer_command(sid, data):
        raw = data.get("action") if isinstance(data, dict) else data
        action = TransportAction.parse(raw)

        if action is None:
            log.warn(f"Unknown transport action from {sid}", action=str(raw))
            return {
                "ok": False,
                "error": f"Unknown action '{raw}'",
                "valid_actions": [a.value for a in TransportAction],
            }

        log.debug(f"Transport command from {sid}", action=action.value)
        await services.event_bus.publish(TransportCommandEvent(action, source=EventSource.SOCKETIO))
        return {"ok": True, "state": services.preview_controller.state.to_dict()}
