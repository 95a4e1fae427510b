"""Base infrastructure for tool handlers.

This module provides the common types and utilities used by all handler modules.
Each handler receives a HandlerContext with the shared services and returns a
ToolResult.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Coroutine

from ...models import ToolResult
from ..core.tokens import count_argument_tokens, count_tokens

if TYPE_CHECKING:
    from ...services.documentation import DocumentationService
    from ...services.npm import NpmService


@dataclass
class HandlerContext:
    """Context object passed to all handlers.

    Holds the long-lived services so handlers stay plain functions.
    """

    # Documentation index, search and release info
    docs: "DocumentationService"

    # npm registry client
    npm: "NpmService"


# Type alias for handler functions
HandlerFunc = Callable[
    [dict[str, Any], HandlerContext],
    Coroutine[Any, Any, ToolResult],
]


def make_result(
    params: dict[str, Any],
    text: str,
    data: Any = None,
    is_error: bool = False,
) -> ToolResult:
    """Build a ToolResult with token counts for the call.

    Args:
        params: Tool arguments as received
        text: Markdown text returned to the client
        data: Structured payload (not sent to the client)
        is_error: Whether the tool failed

    Returns:
        ToolResult with input/output token counts filled in
    """
    return ToolResult(
        text=text,
        data=data,
        is_error=is_error,
        input_tokens=count_argument_tokens(params),
        output_tokens=count_tokens(text),
    )
