"""FastAPI dependency injection functions.

This module contains shared dependencies for API endpoints:
- Service construction and the per-app handler context
- Error sanitization
"""

import logging

from fastapi import HTTPException, Request

from ..engine.handlers import HandlerContext
from ..services.corpus import CorpusSource
from ..services.documentation import DocumentationService
from ..services.npm import NpmService

logger = logging.getLogger(__name__)


# ============ ERROR SANITIZATION ============


def sanitize_error_message(error: Exception) -> str:
    """
    Sanitize error messages to prevent information disclosure.

    Returns a generic message for unexpected errors while preserving
    useful information for known error types.
    """
    error_str = str(error)

    # Known safe error patterns that can be returned to client
    safe_patterns = [
        "Failed to fetch documentation",
        "not found on npm registry",
        "Failed to fetch package info",
        "Unknown tool",
        "Invalid parameter",
        "Timed out fetching documentation",
    ]

    for pattern in safe_patterns:
        if pattern.lower() in error_str.lower():
            return error_str

    # Log the actual error for debugging
    logger.error(f"Tool execution error: {error}", exc_info=True)

    # Return generic message for unknown errors
    return "An error occurred processing your request. Please try again."


# ============ SERVICES ============


def build_context() -> HandlerContext:
    """Create the services shared by all tool handlers, using settings."""
    return HandlerContext(
        docs=DocumentationService(CorpusSource()),
        npm=NpmService(),
    )


def get_handler_context(request: Request) -> HandlerContext:
    """Handler context installed on the app during startup."""
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise HTTPException(status_code=503, detail="Server is starting up")
    return context
