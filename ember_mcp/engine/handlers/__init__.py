"""Tool handlers for the Ember docs MCP server.

This package contains the tool handlers organized by domain:
- docs: Documentation search, API reference, best practices, version info
- packages: npm registry lookups and package manager detection

Each handler is a standalone async function that takes:
- params: dict[str, Any] - Tool arguments from the MCP call
- ctx: HandlerContext - Shared services (documentation, npm)

And returns:
- ToolResult with text, data, input_tokens, output_tokens

Arguments are validated with the pydantic *Params models; a
``pydantic.ValidationError`` escapes the handler and is reported by the
transport as invalid params.
"""

from ...models import ToolName
from .base import HandlerContext, HandlerFunc, make_result
from .docs import (
    handle_get_api_reference,
    handle_get_best_practices,
    handle_get_version_info,
    handle_search_docs,
)
from .packages import (
    handle_compare_npm_versions,
    handle_detect_package_manager,
    handle_get_npm_package_info,
)

# Tools that read the documentation corpus and need it loaded first
DOCS_TOOLS = frozenset(
    {
        ToolName.SEARCH_EMBER_DOCS,
        ToolName.GET_API_REFERENCE,
        ToolName.GET_BEST_PRACTICES,
        ToolName.GET_EMBER_VERSION_INFO,
    }
)

TOOL_HANDLERS: dict[ToolName, HandlerFunc] = {
    ToolName.SEARCH_EMBER_DOCS: handle_search_docs,
    ToolName.GET_API_REFERENCE: handle_get_api_reference,
    ToolName.GET_BEST_PRACTICES: handle_get_best_practices,
    ToolName.GET_EMBER_VERSION_INFO: handle_get_version_info,
    ToolName.GET_NPM_PACKAGE_INFO: handle_get_npm_package_info,
    ToolName.COMPARE_NPM_VERSIONS: handle_compare_npm_versions,
    ToolName.DETECT_PACKAGE_MANAGER: handle_detect_package_manager,
}

__all__ = [
    # Base
    "HandlerContext",
    "HandlerFunc",
    "make_result",
    # Dispatch
    "DOCS_TOOLS",
    "TOOL_HANDLERS",
    # Documentation handlers
    "handle_search_docs",
    "handle_get_api_reference",
    "handle_get_best_practices",
    "handle_get_version_info",
    # Package handlers
    "handle_get_npm_package_info",
    "handle_compare_npm_versions",
    "handle_detect_package_manager",
]
