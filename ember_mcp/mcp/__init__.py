"""MCP (Model Context Protocol) transport module.

This module contains the pieces of the MCP Streamable HTTP transport that
do not depend on FastAPI:
- Tool definitions for tools/list
- JSON-RPC 2.0 envelopes and request checks

The HTTP endpoint and method dispatch live in server.py.
"""

from .jsonrpc import (
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    is_notification,
    is_valid_request,
    jsonrpc_error,
    jsonrpc_response,
    request_params,
    tool_content,
)
from .tool_defs import TOOL_DEFINITIONS

__all__ = [
    # Tool definitions
    "TOOL_DEFINITIONS",
    # Envelopes
    "jsonrpc_response",
    "jsonrpc_error",
    "tool_content",
    # Request checks
    "is_notification",
    "is_valid_request",
    "request_params",
    # Error codes
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
]
