"""
API Middleware - Request/response processing

Exception handlers and the domain error hierarchy used by the routes.
"""

from api.middleware.error_handler import (
    DomainError, ServiceNotReadyError,
    UnknownTransportActionError, register_exception_handlers
)

__all__ = [
    "DomainError",
    "ServiceNotReadyError",
    "UnknownTransportActionError",
    "register_exception_handlers",
]
