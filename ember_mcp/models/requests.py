"""Request models (Pydantic *Params classes) for MCP tool arguments."""

from pydantic import BaseModel, ConfigDict, Field

from .enums import ApiType, CategoryFilter


class SearchDocsParams(BaseModel):
    """Parameters for search_ember_docs tool."""

    query: str = Field(..., min_length=1, description="Search query")
    category: CategoryFilter = Field(
        default=CategoryFilter.ALL, description="Documentation category filter"
    )
    limit: int = Field(default=5, ge=1, le=50, description="Maximum results to return")


class ApiReferenceParams(BaseModel):
    """Parameters for get_api_reference tool."""

    name: str = Field(..., min_length=1, description="Name of the API element")
    type: ApiType | None = Field(default=None, description="Type of API element")


class BestPracticesParams(BaseModel):
    """Parameters for get_best_practices tool."""

    topic: str = Field(..., min_length=1, description="Topic to get best practices for")


class VersionInfoParams(BaseModel):
    """Parameters for get_ember_version_info tool."""

    version: str | None = Field(default=None, description="Specific version (latest if omitted)")


class NpmPackageParams(BaseModel):
    """Parameters for get_npm_package_info tool."""

    model_config = ConfigDict(populate_by_name=True)

    package_name: str = Field(..., alias="packageName", min_length=1)


class CompareVersionsParams(BaseModel):
    """Parameters for compare_npm_versions tool."""

    model_config = ConfigDict(populate_by_name=True)

    package_name: str = Field(..., alias="packageName", min_length=1)
    current_version: str = Field(..., alias="currentVersion", min_length=1)


class DetectPackageManagerParams(BaseModel):
    """Parameters for detect_package_manager tool."""

    model_config = ConfigDict(populate_by_name=True)

    workspace_path: str = Field(..., alias="workspacePath", min_length=1)
