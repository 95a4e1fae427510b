"""API utilities and dependencies.

This package contains shared API utilities:
- deps: FastAPI dependency injection functions
"""

from .deps import build_context, get_handler_context, sanitize_error_message

__all__ = [
    "build_context",
    "get_handler_context",
    "sanitize_error_message",
]
