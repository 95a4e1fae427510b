"""HTTP response models for the Ember Docs MCP Server."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ToolResult(BaseModel):
    """Result of an MCP tool execution.

    ``text`` is what the MCP client sees; ``data`` keeps the structured
    payload for logging and tests.
    """

    text: str = Field(..., description="Formatted tool output")
    data: Any = Field(default=None, description="Structured result payload")
    is_error: bool = Field(default=False, description="Whether the tool failed")
    input_tokens: int = Field(default=0, ge=0, description="Tokens in the tool arguments")
    output_tokens: int = Field(default=0, ge=0, description="Tokens in the tool output")


class HealthResponse(BaseModel):
    """Liveness check response."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Server version")
    timestamp: datetime = Field(..., description="Current server time")


class ReadyResponse(BaseModel):
    """Readiness check response."""

    status: str = Field(..., description="ready or not_ready")
    version: str = Field(..., description="Server version")
    checks: dict[str, bool] = Field(default_factory=dict, description="Component checks")
    stats: dict[str, int] = Field(default_factory=dict, description="Index statistics")
