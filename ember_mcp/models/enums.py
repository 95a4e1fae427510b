"""Enumeration types for the Ember Docs MCP Server."""

from enum import StrEnum


class ToolName(StrEnum):
    """Available MCP tools."""

    SEARCH_EMBER_DOCS = "search_ember_docs"
    GET_API_REFERENCE = "get_api_reference"
    GET_BEST_PRACTICES = "get_best_practices"
    GET_EMBER_VERSION_INFO = "get_ember_version_info"
    GET_NPM_PACKAGE_INFO = "get_npm_package_info"
    COMPARE_NPM_VERSIONS = "compare_npm_versions"
    DETECT_PACKAGE_MANAGER = "detect_package_manager"


class CategoryFilter(StrEnum):
    """Category filter accepted by search."""

    ALL = "all"
    API = "api"
    GUIDES = "guides"
    COMMUNITY = "community"


class DocCategory(StrEnum):
    """Display category of a search result, derived from its section."""

    API = "API Documentation"
    COMMUNITY = "Community Articles"
    GUIDES = "Guides & Tutorials"


class SearchType(StrEnum):
    """Which ranker(s) produced a search result."""

    KEYWORD = "keyword"
    SEMANTIC = "semantic"
    HYBRID = "hybrid"


class ApiType(StrEnum):
    """API element kinds accepted as a lookup hint."""

    CLASS = "class"
    MODULE = "module"
    METHOD = "method"
    PROPERTY = "property"


class DetectionConfidence(StrEnum):
    """Confidence of a package manager detection."""

    HIGH = "high"
    LOW = "low"
