"""Pydantic models for the Ember Docs MCP Server.

This module re-exports all models. Import from submodules directly for
cleaner imports:

    from ember_mcp.models.enums import ToolName, CategoryFilter
    from ember_mcp.models.results import SearchResult
"""

# ============ ENUMS ============
from .enums import (
    ApiType,
    CategoryFilter,
    DetectionConfidence,
    DocCategory,
    SearchType,
    ToolName,
)

# ============ REQUEST MODELS ============
from .requests import (
    ApiReferenceParams,
    BestPracticesParams,
    CompareVersionsParams,
    DetectPackageManagerParams,
    NpmPackageParams,
    SearchDocsParams,
    VersionInfoParams,
)

# ============ RESPONSE MODELS ============
from .responses import HealthResponse, ReadyResponse, ToolResult

# ============ RESULT MODELS ============
from .results import (
    ApiMethodInfo,
    ApiParamInfo,
    ApiPropertyInfo,
    ApiReference,
    BestPractice,
    DeprecationInfo,
    PackageInfo,
    PackageManagerInfo,
    RecentRelease,
    SearchResult,
    VersionComparison,
    VersionInfo,
)

__all__ = [
    # Enums
    "ApiType",
    "CategoryFilter",
    "DetectionConfidence",
    "DocCategory",
    "SearchType",
    "ToolName",
    # Requests
    "ApiReferenceParams",
    "BestPracticesParams",
    "CompareVersionsParams",
    "DetectPackageManagerParams",
    "NpmPackageParams",
    "SearchDocsParams",
    "VersionInfoParams",
    # Responses
    "HealthResponse",
    "ReadyResponse",
    "ToolResult",
    # Results
    "ApiMethodInfo",
    "ApiParamInfo",
    "ApiPropertyInfo",
    "ApiReference",
    "BestPractice",
    "DeprecationInfo",
    "PackageInfo",
    "PackageManagerInfo",
    "RecentRelease",
    "SearchResult",
    "VersionComparison",
    "VersionInfo",
]
