"""FastAPI MCP Server for Ember.js documentation."""

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Annotated, Any

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from . import __version__
from .api.deps import build_context, get_handler_context, sanitize_error_message
from .config import settings
from .engine.handlers import DOCS_TOOLS, TOOL_HANDLERS, HandlerContext
from .errors import CorpusLoadError, EmberMCPError
from .mcp import (
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    TOOL_DEFINITIONS,
    is_notification,
    is_valid_request,
    jsonrpc_error,
    jsonrpc_response,
    request_params,
    tool_content,
)
from .models import HealthResponse, ReadyResponse, ToolName

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "ember-docs-mcp"


async def _preload_documentation(context: HandlerContext) -> None:
    """Load the corpus in the background so the first tool call is fast."""
    try:
        await context.docs.ensure_loaded()
    except CorpusLoadError as e:
        # The first docs tool call retries the load
        logger.warning(f"Documentation preload failed: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup
    logger.info(f"Starting Ember Docs MCP Server v{__version__}")

    # A context installed before startup (e.g. by tests) is used as-is
    owns_context = getattr(app.state, "context", None) is None
    if owns_context:
        app.state.context = build_context()
    context: HandlerContext = app.state.context

    preload_task: asyncio.Task | None = None
    if settings.preload_docs:
        preload_task = asyncio.create_task(_preload_documentation(context))

    yield
    # Shutdown
    if preload_task is not None and not preload_task.done():
        preload_task.cancel()
        try:
            await preload_task
        except asyncio.CancelledError:
            pass
    await context.docs.close()
    if owns_context:
        app.state.context = None


app = FastAPI(
    title="Ember Docs MCP Server",
    description="MCP endpoint for Ember.js documentation, API references and best practices",
    version=__version__,
    lifespan=lifespan,
)


# ============ EXCEPTION HANDLERS ============


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with consistent response format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with sanitized error messages."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "An internal server error occurred. Please try again.",
        },
    )


# ============ HEALTH ENDPOINTS ============


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check() -> HealthResponse:
    """Health check endpoint (lightweight liveness check)."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.now(timezone.utc),
    )


@app.get("/ready", tags=["Health"])
async def readiness_check(
    context: Annotated[HandlerContext, Depends(get_handler_context)],
):
    """Readiness check - documentation must be loaded; embeddings are optional."""
    docs = context.docs
    stats = docs.stats()

    checks = {
        "documentation": docs.loaded,
        "embeddings": stats["embeddings_ready"] or not stats["embeddings_enabled"],
    }
    ready = checks["documentation"]

    response = ReadyResponse(
        status="ready" if ready else "not_ready",
        version=__version__,
        checks=checks,
        stats={
            key: stats[key]
            for key in ("sections", "items", "api_entries", "embedding_entries", "deprecations")
        },
    )
    return JSONResponse(
        content=response.model_dump(mode="json"),
        status_code=200 if ready else 503,
    )


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Ember Docs MCP Server",
        "version": __version__,
        "mcp": "/mcp",
        "docs": "/docs",
        "health": "/health",
    }


# ============ MCP ENDPOINT ============


def _validation_summary(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'arguments'}: {err['msg']}"
        for err in error.errors()
    )


async def _handle_call_tool(id: Any, params: dict, context: HandlerContext) -> dict:
    """Handle MCP tools/call request."""
    tool_name = params.get("name")
    arguments = params.get("arguments") or {}

    if not isinstance(arguments, dict):
        return jsonrpc_error(id, INVALID_PARAMS, "Invalid parameters: arguments must be an object")

    try:
        tool = ToolName(tool_name)
    except ValueError:
        return jsonrpc_error(id, INVALID_PARAMS, f"Unknown tool: {tool_name}")

    start = time.perf_counter()
    try:
        if tool in DOCS_TOOLS:
            await context.docs.ensure_loaded()
        result = await TOOL_HANDLERS[tool](arguments, context)
    except ValidationError as e:
        message = f"Invalid parameters for {tool}: {_validation_summary(e)}"
        return jsonrpc_error(id, INVALID_PARAMS, message)
    except EmberMCPError as e:
        logger.warning(f"Tool {tool} failed: {e}")
        return jsonrpc_response(id, tool_content(f"Error: {e}", is_error=True))
    except Exception as e:
        message = f"Error: {sanitize_error_message(e)}"
        return jsonrpc_response(id, tool_content(message, is_error=True))

    latency_ms = int((time.perf_counter() - start) * 1000)
    logger.info(
        f"Tool {tool} completed in {latency_ms}ms "
        f"(input_tokens={result.input_tokens}, output_tokens={result.output_tokens})"
    )
    return jsonrpc_response(id, tool_content(result.text, result.is_error))


async def _handle_request(body: Any, context: HandlerContext) -> dict | None:
    """Handle a single JSON-RPC request. Returns None for notifications."""
    if not is_valid_request(body):
        request_id = body.get("id") if isinstance(body, dict) else None
        return jsonrpc_error(request_id, INVALID_REQUEST, "Invalid Request")

    method = body["method"]
    id = body.get("id")
    params = request_params(body)

    if is_notification(body):  # Notification - no response
        logger.debug(f"Notification received: {method}")
        return None

    if method == "initialize":
        return jsonrpc_response(
            id,
            {
                "protocolVersion": PROTOCOL_VERSION,
                "serverInfo": {"name": SERVER_NAME, "version": __version__},
                "capabilities": {"tools": {}},
            },
        )
    elif method == "tools/list":
        return jsonrpc_response(id, {"tools": TOOL_DEFINITIONS})
    elif method == "tools/call":
        return await _handle_call_tool(id, params, context)
    elif method == "ping":
        return jsonrpc_response(id, {})
    else:
        return jsonrpc_error(id, METHOD_NOT_FOUND, f"Method not found: {method}")


@app.post("/mcp", tags=["MCP Transport"])
async def mcp_transport_endpoint(
    request: Request,
    context: Annotated[HandlerContext, Depends(get_handler_context)],
):
    """
    MCP Streamable HTTP endpoint (JSON-RPC format).

    Config example (Claude Desktop / any MCP client):
    ```json
    {"mcpServers": {"ember-docs": {"type": "http", "url": "http://127.0.0.1:8765/mcp"}}}
    ```
    """
    # Parse JSON-RPC request
    try:
        body = await request.json()
    except ValueError:
        return JSONResponse(jsonrpc_error(None, PARSE_ERROR, "Parse error"), status_code=400)

    # Handle batch requests
    if isinstance(body, list):
        if not body:
            error = jsonrpc_error(None, INVALID_REQUEST, "Invalid Request")
            return JSONResponse(error, status_code=400)
        responses = []
        for req in body:
            resp = await _handle_request(req, context)
            if resp:  # Skip notifications
                responses.append(resp)
        return JSONResponse(responses) if responses else Response(status_code=202)

    # Handle single request
    response = await _handle_request(body, context)
    return JSONResponse(response) if response else Response(status_code=202)


# ============ MAIN ============


def main():
    """Run the server with uvicorn."""
    import uvicorn

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    uvicorn.run(
        "ember_mcp.server:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
