"""
API Middleware - exception handlers that turn errors into JSON envelopes
"""

from .error_handler import (
    DomainError, OverlayKindNotFoundError, SessionNotFoundError, register_exception_handlers
)

__all__ = ["DomainError", "OverlayKindNotFoundError", "SessionNotFoundError", "register_exception_handlers"]
