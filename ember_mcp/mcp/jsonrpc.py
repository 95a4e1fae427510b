"""JSON-RPC 2.0 envelopes for the MCP transport.

Builds success/error envelopes and MCP ``tools/call`` content, and checks
the shape of incoming requests. Method dispatch lives in server.py.

See: https://www.jsonrpc.org/specification
"""

from typing import Any

JSONRPC_VERSION = "2.0"

# Error codes used by the transport
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602


def is_valid_request(body: Any) -> bool:
    """Whether a decoded body is a well-formed request or notification."""
    return (
        isinstance(body, dict)
        and body.get("jsonrpc") == JSONRPC_VERSION
        and isinstance(body.get("method"), str)
    )


def is_notification(body: dict) -> bool:
    """A request without an ``id`` member expects no response."""
    return "id" not in body


def request_params(body: dict) -> dict:
    """The request's ``params`` object; positional params are not supported."""
    params = body.get("params")
    return params if isinstance(params, dict) else {}


def jsonrpc_response(id: Any, result: Any) -> dict:
    """Create a success response echoing the request id."""
    return {"jsonrpc": JSONRPC_VERSION, "id": id, "result": result}


def jsonrpc_error(id: Any, code: int, message: str) -> dict:
    """Create an error response.

    Args:
        id: Request ID, or None when it could not be read
        code: One of the error codes above
        message: Human-readable error message

    Returns:
        JSON-RPC 2.0 error response dict
    """
    return {"jsonrpc": JSONRPC_VERSION, "id": id, "error": {"code": code, "message": message}}


def tool_content(text: str, is_error: bool = False) -> dict:
    """Create a tools/call result holding one text block.

    Tool failures are reported in-band with ``isError``; protocol problems
    use JSON-RPC errors.
    """
    result: dict[str, Any] = {"content": [{"type": "text", "text": text}]}
    if is_error:
        result["isError"] = True
    return result
