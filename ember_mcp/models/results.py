"""Result models returned by the documentation service and tools."""

from typing import Any

from pydantic import BaseModel, Field

from .enums import DetectionConfidence, DocCategory, SearchType

# ============ DEPRECATIONS ============


class DeprecationInfo(BaseModel):
    """Deprecation metadata attached to an API element."""

    name: str = Field(..., description="Deprecated API name")
    message: str = Field(..., description="Deprecation notice text")
    since: str | None = Field(default=None, description="Version the deprecation started")
    until: str | None = Field(default=None, description="Version the API will be removed")
    replacement: str | None = Field(default=None, description="Suggested replacement")


# ============ SEARCH ============


class SearchResult(BaseModel):
    """A ranked documentation search result."""

    title: str = Field(..., description="Result title")
    category: DocCategory = Field(..., description="Display category")
    section: str = Field(..., description="Source section name")
    excerpt: str = Field(..., description="Relevant text window")
    score: float = Field(..., description="Final ranking score")
    url: str = Field(..., description="Canonical documentation URL")
    api_link: str | None = Field(default=None, description="Link to the API docs, if any")
    search_type: SearchType = Field(..., description="Ranker(s) that produced this result")
    keyword_score: float | None = Field(default=None, description="Raw keyword score")
    semantic_score: float | None = Field(default=None, description="Semantic score (0-100)")
    matched_terms: int = Field(default=0, ge=0, description="Distinct query terms matched")
    total_terms: int = Field(default=0, ge=0, description="Distinct query terms")
    deprecation: DeprecationInfo | None = Field(default=None, description="Deprecation info")


class BestPractice(BaseModel):
    """Best-practice guidance extracted from a guide or community article."""

    title: str = Field(..., description="Source item title")
    content: str = Field(..., description="Relevant guidance text")
    examples: list[str] = Field(default_factory=list, description="Fenced code examples")
    anti_patterns: list[str] = Field(default_factory=list, description="Things to avoid")
    references: list[str] = Field(default_factory=list, description="Source URLs")
    score: float = Field(default=0.0, exclude=True, description="Internal ranking score")


# ============ API REFERENCE ============


class ApiParamInfo(BaseModel):
    name: str
    type: str | None = None
    description: str = ""
    optional: bool = False


class ApiMethodInfo(BaseModel):
    name: str
    description: str = ""
    params: list[ApiParamInfo] = Field(default_factory=list)
    return_type: str | None = None
    return_description: str = ""
    static: bool = False
    deprecated: bool = False


class ApiPropertyInfo(BaseModel):
    name: str
    type: str | None = None
    description: str = ""


class ApiReference(BaseModel):
    """API reference documentation for one element."""

    name: str = Field(..., description="API element name")
    type: str | None = Field(default=None, description="Element kind")
    module: str | None = Field(default=None, description="Module path")
    description: str = Field(default="", description="Description")
    file: str | None = Field(default=None, description="Declaring source file")
    line: int | None = Field(default=None, description="Line in source file")
    extends: str | None = Field(default=None, description="Parent class name")
    methods: list[ApiMethodInfo] = Field(default_factory=list)
    properties: list[ApiPropertyInfo] = Field(default_factory=list)
    api_url: str | None = Field(default=None, description="Official API docs URL")
    deprecation: DeprecationInfo | None = Field(default=None, description="Deprecation info")


# ============ VERSIONS ============


class RecentRelease(BaseModel):
    version: str
    date: str | None = None
    url: str | None = None


class VersionInfo(BaseModel):
    """Ember release information."""

    current: str = Field(..., description="Version described")
    release_date: str | None = Field(default=None)
    description: str = Field(default="")
    features: list[str] = Field(default_factory=list)
    bug_fixes: list[str] = Field(default_factory=list)
    breaking_changes: list[str] = Field(default_factory=list)
    release_notes_url: str | None = Field(default=None)
    migration_guide: str = Field(default="")
    blog_post: str | None = Field(default=None)
    links: dict[str, str] = Field(default_factory=dict)
    recent_releases: list[RecentRelease] = Field(default_factory=list)
    note: str | None = Field(default=None)


# ============ NPM / PACKAGE MANAGERS ============


class PackageInfo(BaseModel):
    """Formatted npm package metadata."""

    name: str
    description: str = "No description available"
    latest_version: str = "Unknown"
    dist_tags: dict[str, str] = Field(default_factory=dict)
    homepage: str | None = None
    repository: str | None = None
    license: str = "Unknown"
    author: str | None = None
    maintainers: list[dict[str, Any]] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict)
    peer_dependencies: dict[str, str] = Field(default_factory=dict)
    engines: dict[str, str] = Field(default_factory=dict)
    last_published: str | None = None
    created: str | None = None
    modified: str | None = None


class VersionComparison(BaseModel):
    """Current vs. latest version of an npm package."""

    package_name: str
    current_version: str
    latest_version: str | None = None
    is_latest: bool
    needs_update: bool
    dist_tags: dict[str, str] = Field(default_factory=dict)
    available_versions_count: int = Field(default=0, ge=0)
    release_date: str | None = None
    current_version_release_date: str | None = None


class PackageManagerInfo(BaseModel):
    """Package manager detected for a workspace."""

    manager: str
    lockfile: str | None = None
    runner: str
    detection_method: str
    confidence: DetectionConfidence
