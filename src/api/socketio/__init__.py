from api.socketio.server import create_socketio_server, wrap_app_with_socketio
from api.socketio.registry import register_socketio

__all__ = ["create_socketio_server", "wrap_app_with_socketio", "register_socketio"]
