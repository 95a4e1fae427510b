"""Runtime configuration for the Ember Docs MCP Server.

Settings are read from environment variables prefixed with ``EMBER_MCP_``
(or a local ``.env`` file), e.g. ``EMBER_MCP_USE_EMBEDDINGS=false``.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DOCS_URL = "https://nullvoxpopuli.github.io/ember-ai-information-aggregator/llms-full.txt"
API_DOCS_BASE = "https://api.emberjs.com/ember"
GUIDES_BASE = "https://guides.emberjs.com/release"
BLOG_BASE = "https://blog.emberjs.com"
GITHUB_RELEASES_URL = "https://api.github.com/repos/emberjs/ember.js/releases"
NPM_REGISTRY_URL = "https://registry.npmjs.org"


class Settings(BaseSettings):
    """Server settings loaded from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="EMBER_MCP_",
        env_file=".env",
        extra="ignore",
    )

    # Remote sources
    docs_url: str = DOCS_URL
    api_docs_base: str = API_DOCS_BASE
    guides_base: str = GUIDES_BASE
    blog_base: str = BLOG_BASE
    github_releases_url: str = GITHUB_RELEASES_URL
    npm_registry_url: str = NPM_REGISTRY_URL
    http_timeout: float = Field(default=30.0, gt=0)

    # Semantic search
    use_embeddings: bool = True
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    embedding_cache_size: int = Field(default=2048, ge=0)

    # Server
    host: str = "127.0.0.1"
    port: int = 8765
    debug: bool = False
    log_level: str = "INFO"
    preload_docs: bool = True


settings = Settings()
