"""MCP Tool Definitions for the Ember docs server.

This module contains all tool definitions returned by the tools/list method.
Each tool definition includes the schema for its input parameters.

Tool Categories:
    - Documentation: search_ember_docs, get_api_reference, get_best_practices
    - Releases: get_ember_version_info
    - Dependencies: get_npm_package_info, compare_npm_versions, detect_package_manager
"""

from ..models import ToolName

TOOL_DEFINITIONS: list[dict] = [
    # ============ Documentation Tools ============
    {
        "name": ToolName.SEARCH_EMBER_DOCS.value,
        "description": (
            "Search through Ember.js documentation including API docs, guides, and community "
            "content. Returns relevant documentation with links to official sources. Use this "
            "for general queries about Ember concepts, features, or usage."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": (
                        "Search query (e.g., 'component lifecycle', 'tracked properties', "
                        "'routing')"
                    ),
                },
                "category": {
                    "type": "string",
                    "enum": ["all", "api", "guides", "community"],
                    "description": "Filter by documentation category (default: all)",
                },
                "limit": {
                    "type": "integer",
                    "description": "Maximum number of results (default: 5)",
                    "default": 5,
                    "minimum": 1,
                    "maximum": 50,
                },
            },
            "required": ["query"],
        },
    },
    {
        "name": ToolName.GET_API_REFERENCE.value,
        "description": (
            "Get detailed API reference documentation for a specific Ember class, module, or "
            "method. Returns full API documentation including parameters, return values, "
            "examples, and links to official API docs."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "name": {
                    "type": "string",
                    "description": (
                        "Name of the API element (e.g., 'Component', '@glimmer/component', "
                        "'Service', 'Router')"
                    ),
                },
                "type": {
                    "type": "string",
                    "enum": ["class", "module", "method", "property"],
                    "description": "Type of API element (optional)",
                },
            },
            "required": ["name"],
        },
    },
    {
        "name": ToolName.GET_BEST_PRACTICES.value,
        "description": (
            "Get Ember best practices and recommendations for specific topics. This includes "
            "modern patterns, anti-patterns to avoid, performance tips, and community-approved "
            "approaches. Always use this when providing implementation advice."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "topic": {
                    "type": "string",
                    "description": (
                        "Topic to get best practices for (e.g., 'component patterns', "
                        "'state management', 'testing', 'performance')"
                    ),
                },
            },
            "required": ["topic"],
        },
    },
    # ============ Release Tools ============
    {
        "name": ToolName.GET_EMBER_VERSION_INFO.value,
        "description": (
            "Get information about Ember versions, including current stable version, what's new "
            "in recent releases, and migration guides. Useful for understanding version-specific "
            "features and deprecations."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "version": {
                    "type": "string",
                    "description": (
                        "Specific version to get info about (optional, returns latest if "
                        "not specified)"
                    ),
                },
            },
        },
    },
    # ============ Dependency Tools ============
    {
        "name": ToolName.GET_NPM_PACKAGE_INFO.value,
        "description": (
            "Get comprehensive information about an npm package including latest version, "
            "description, dependencies, maintainers, and more. Essential for understanding "
            "package details before upgrading dependencies."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "packageName": {
                    "type": "string",
                    "description": (
                        "Name of the npm package (e.g., 'ember-source', '@glimmer/component', "
                        "'ember-cli')"
                    ),
                },
            },
            "required": ["packageName"],
        },
    },
    {
        "name": ToolName.COMPARE_NPM_VERSIONS.value,
        "description": (
            "Compare a current package version with the latest available version on npm. Shows "
            "if an update is needed and provides version details to help with dependency "
            "upgrades."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "packageName": {
                    "type": "string",
                    "description": (
                        "Name of the npm package (e.g., 'ember-source', '@glimmer/component')"
                    ),
                },
                "currentVersion": {
                    "type": "string",
                    "description": "Current version being used (e.g., '4.12.0', '1.1.2')",
                },
            },
            "required": ["packageName", "currentVersion"],
        },
    },
    {
        "name": ToolName.DETECT_PACKAGE_MANAGER.value,
        "description": (
            "Detect which package manager (pnpm, yarn, npm, bun) is being used in a workspace by "
            "examining lockfiles and package.json. Returns the appropriate commands to use for "
            "installing dependencies, running scripts, and executing packages. Use this tool "
            "BEFORE suggesting package installation or script execution commands to ensure you "
            "use the correct package manager."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "workspacePath": {
                    "type": "string",
                    "description": (
                        "Absolute path to the workspace directory to analyze "
                        "(e.g., '/path/to/project')"
                    ),
                },
            },
            "required": ["workspacePath"],
        },
    },
]
