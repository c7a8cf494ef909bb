from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SOCKETIO)


def register_on_connect(sio, services):
    """
    Registers connection lifecycle handlers for Socket.IO.
    Sends the current state and frame on client connect so a render
    surface can draw immediately instead of waiting for the next tick.
    """

    @sio.event
    async def connect(sid, environ, auth=None):
        client_ip = environ.get('REMOTE_ADDR', 'unknown')
        log.info(f"Client connected: {sid} from {client_ip}")

        preview = services.preview_controller
        await sio.emit("timer:state", preview.state.to_dict(), room=sid)
        await sio.emit("timer:frame", preview.current_frame().to_dict(), room=sid)

    @sio.event
    async def disconnect(sid, *args):
        log.info(f"Client disconnected: {sid}")
