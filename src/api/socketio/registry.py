from api.socketio.on_connect import register_on_connect
from api.socketio.timer.broadcaster import register_timer_broadcaster
from api.socketio.timer.commands import register_timer_commands


def register_socketio(sio, services):
    register_on_connect(sio, services)
    register_timer_broadcaster(sio, services)
    register_timer_commands(sio, services)
