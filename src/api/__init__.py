"""
Progressive Timer - API Layer

Provides REST and Socket.IO interfaces over the timer preview and the
configuration editor.

Structure:
- routes/     : Endpoint handlers
- schemas/    : Pydantic request/response models
- middleware/ : Error handling
- socketio/   : Real-time frame push and transport commands
"""

from api.main import create_app

__all__ = ["create_app"]
