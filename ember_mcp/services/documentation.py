"""Documentation service: loads the corpus and answers queries over it.

The service owns the current :class:`DocumentationIndex` and swaps it for a
new one on every successful load. The embedding index for semantic search is
built in a background task after each load; queries never wait for it unless
:meth:`DocumentationService.wait_for_embeddings` is called.
"""

import asyncio
import logging
from types import MappingProxyType
from typing import Any, Protocol

from ..engine.core.api_index import build_api_index, parse_api_record
from ..engine.core.constants import API_SECTION
from ..engine.core.document import ApiEntry, DocumentationIndex
from ..engine.core.extract import categorize_section, extract_excerpt
from ..engine.core.parser import parse_documentation
from ..engine.scoring.best_practices import find_best_practices
from ..engine.scoring.constants import DEFAULT_LIMIT, HYBRID_HEADROOM
from ..engine.scoring.fusion import merge_results
from ..engine.scoring.keyword_scorer import KeywordHit, extract_terms, keyword_search
from ..engine.scoring.semantic_scorer import (
    EmbeddingIndex,
    SemanticHit,
    build_embedding_index,
    semantic_search,
)
from ..models.enums import ApiType, CategoryFilter, SearchType
from ..models.results import (
    ApiMethodInfo,
    ApiParamInfo,
    ApiPropertyInfo,
    ApiReference,
    BestPractice,
    DeprecationInfo,
    SearchResult,
    VersionInfo,
)
from .deprecations import DeprecationManager
from .embeddings import EmbeddingProvider, create_embedding_provider
from .releases import ReleaseService
from .url_builder import generate_api_link, generate_api_url, generate_url

logger = logging.getLogger(__name__)


class CorpusFetcher(Protocol):
    """Anything that can supply the raw corpus text."""

    async def fetch(self) -> str: ...


def api_reference_from_entry(
    entry: ApiEntry,
    api_url: str | None = None,
    deprecation: DeprecationInfo | None = None,
) -> ApiReference:
    """Convert an indexed API entry into its response model."""
    return ApiReference(
        name=entry.name,
        type=entry.type,
        module=entry.module,
        description=entry.description,
        file=entry.file,
        line=entry.line,
        extends=entry.extends,
        methods=[
            ApiMethodInfo(
                name=m.name,
                description=m.description,
                params=[
                    ApiParamInfo(
                        name=p.name,
                        type=p.type,
                        description=p.description,
                        optional=p.optional,
                    )
                    for p in m.params
                ],
                return_type=m.returns.type if m.returns else None,
                return_description=m.returns.description if m.returns else "",
                static=m.static,
                deprecated=m.deprecated,
            )
            for m in entry.methods
        ],
        properties=[
            ApiPropertyInfo(name=p.name, type=p.type, description=p.description)
            for p in entry.properties
        ],
        api_url=api_url or generate_api_url(entry.name, entry.type),
        deprecation=deprecation,
    )


class DocumentationService:
    """Loads, indexes and searches the Ember documentation corpus."""

    def __init__(
        self,
        source: CorpusFetcher,
        embeddings: EmbeddingProvider | None = None,
        deprecations: DeprecationManager | None = None,
        releases: ReleaseService | None = None,
    ):
        """Initialize the service without loading anything.

        Args:
            source: Corpus source.
            embeddings: Embedding capability. Defaults to the provider
                selected by settings.
            deprecations: Deprecation registry shared with formatters.
            releases: GitHub release reader for version info.
        """
        self.source = source
        self.embeddings = embeddings if embeddings is not None else create_embedding_provider()
        self.deprecations = deprecations or DeprecationManager()
        self.releases = releases or ReleaseService()

        self.index = DocumentationIndex()
        self.embedding_index = EmbeddingIndex()
        self.loaded = False

        self._load_lock = asyncio.Lock()
        self._embedding_task: asyncio.Task | None = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def build_index(self, text: str) -> DocumentationIndex:
        """Parse corpus text and build a fresh index (synchronous).

        Deprecations are re-detected from scratch for the new corpus.
        """
        sections = parse_documentation(text)
        self.deprecations.clear()
        api_index = build_api_index(sections.get(API_SECTION, []), self.deprecations)
        self.deprecations.analyze_documentation(sections)

        return DocumentationIndex(
            sections=MappingProxyType({name: tuple(items) for name, items in sections.items()}),
            api_index=MappingProxyType(api_index),
            total_chars=len(text),
        )

    async def load(self) -> DocumentationIndex:
        """Fetch, parse and index the corpus, then start the embedding build.

        On failure the previous index stays in place and the service is not
        marked loaded.

        Raises:
            CorpusLoadError: If the corpus cannot be fetched.
        """
        logger.info("Loading Ember documentation...")
        text = await self.source.fetch()
        index = self.build_index(text)

        self.index = index
        self.loaded = True
        logger.info(
            f"Documentation loaded: {len(index.sections)} sections, "
            f"{index.item_count} items, {index.api_entry_count} API entries"
        )

        self._start_embedding_build(index)
        return index

    async def ensure_loaded(self) -> None:
        """Load the corpus once; concurrent callers share the same load."""
        if self.loaded:
            return
        async with self._load_lock:
            if not self.loaded:
                await self.load()

    async def reload(self) -> DocumentationIndex:
        """Discard the current index and build a new one."""
        async with self._load_lock:
            return await self.load()

    def _start_embedding_build(self, index: DocumentationIndex) -> None:
        if self._embedding_task is not None and not self._embedding_task.done():
            self._embedding_task.cancel()

        target = EmbeddingIndex()
        self.embedding_index = target
        self._embedding_task = asyncio.create_task(self._build_embeddings(index, target))

    async def _build_embeddings(self, index: DocumentationIndex, target: EmbeddingIndex) -> None:
        try:
            await build_embedding_index(index, self.embeddings, target)
        except asyncio.CancelledError:
            logger.info("Embedding build cancelled by a reload")
            raise
        except Exception as e:
            # Semantic search is optional; keyword search keeps working
            logger.error(f"Error building embedding index: {e}", exc_info=True)

    async def wait_for_embeddings(self, timeout: float) -> bool:
        """Wait, at most ``timeout`` seconds, for the embedding build to finish."""
        return await self.embedding_index.wait_ready(timeout)

    async def close(self) -> None:
        if self._embedding_task is not None and not self._embedding_task.done():
            self._embedding_task.cancel()
            try:
                await self._embedding_task
            except asyncio.CancelledError:
                pass

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def _keyword_result(self, hit: KeywordHit, terms: list[str]) -> SearchResult:
        content = hit.item.content
        return SearchResult(
            title=hit.title,
            category=categorize_section(hit.section),
            section=hit.section,
            excerpt=extract_excerpt(content, terms, hit.positions),
            score=hit.score,
            url=generate_url(hit.section, hit.title),
            api_link=generate_api_link(content),
            search_type=SearchType.KEYWORD,
            keyword_score=hit.score,
            matched_terms=hit.matched_terms,
            total_terms=hit.total_terms,
            deprecation=self.deprecations.check_search_result(hit.title, content),
        )

    def _semantic_result(self, hit: SemanticHit, terms: list[str]) -> SearchResult:
        entry = hit.entry
        return SearchResult(
            title=entry.title,
            category=categorize_section(entry.section_name),
            section=entry.section_name,
            excerpt=extract_excerpt(entry.content, terms),
            score=hit.score,
            url=generate_url(entry.section_name, entry.title),
            api_link=generate_api_link(entry.content),
            search_type=SearchType.SEMANTIC,
            semantic_score=hit.score,
            total_terms=len(terms),
            deprecation=self.deprecations.check_search_result(entry.title, entry.content),
        )

    def keyword_results(
        self,
        query: str,
        category: CategoryFilter | str = CategoryFilter.ALL,
        limit: int = DEFAULT_LIMIT,
    ) -> list[SearchResult]:
        terms = extract_terms(query)
        hits = keyword_search(self.index, query, category, limit)
        return [self._keyword_result(hit, terms) for hit in hits]

    async def semantic_results(
        self,
        query: str,
        category: CategoryFilter | str = CategoryFilter.ALL,
        limit: int = DEFAULT_LIMIT,
    ) -> list[SearchResult]:
        terms = extract_terms(query)
        hits = await semantic_search(
            self.embedding_index.snapshot(), self.embeddings, query, category, limit
        )
        return [self._semantic_result(hit, terms) for hit in hits]

    async def search(
        self,
        query: str,
        category: CategoryFilter | str = CategoryFilter.ALL,
        limit: int = DEFAULT_LIMIT,
    ) -> list[SearchResult]:
        """Search the documentation with hybrid keyword + semantic ranking.

        Each ranker is asked for twice the limit before merging. When no
        embeddings are available yet, keyword results are returned alone.

        Args:
            query: Search query.
            category: ``all``, ``api``, ``guides`` or ``community``.
            limit: Maximum number of results.

        Returns:
            Ranked results, possibly empty.
        """
        headroom = limit * HYBRID_HEADROOM
        keyword = self.keyword_results(query, category, headroom)

        if not self.embeddings.is_enabled or len(self.embedding_index) == 0:
            return keyword[:limit]

        semantic = await self.semantic_results(query, category, headroom)
        return merge_results(keyword, semantic)[:limit]

    # ------------------------------------------------------------------
    # API reference
    # ------------------------------------------------------------------

    def _fallback_entry(self, key: str, type_hint: str | None) -> ApiEntry | None:
        matches: list[ApiEntry] = []
        for item in self.index.sections.get(API_SECTION, ()):
            if key not in item.content.lower():
                continue
            entry = parse_api_record(item.content)
            if entry is not None:
                matches.append(entry)

        if not matches:
            return None
        if type_hint:
            for entry in matches:
                if entry.type == type_hint:
                    return entry
        return matches[0]

    async def get_api_reference(
        self,
        name: str,
        type_hint: ApiType | str | None = None,
    ) -> ApiReference | None:
        """Look up API reference documentation by name.

        Lookup is case-insensitive on the name, module path or last dotted
        segment. On a miss, a single API-category search decides whether a
        content scan is worthwhile. ``type_hint`` only breaks ties between
        several scanned records.

        Args:
            name: API element name, e.g. ``Component`` or ``@glimmer/component``.
            type_hint: Optional element kind.

        Returns:
            The reference, or None when nothing matches.
        """
        key = name.strip().lower()
        if not key:
            return None

        entry = self.index.api_index.get(key)
        api_url = None

        if entry is None:
            results = await self.search(name, CategoryFilter.API, 1)
            if not results or not results[0].api_link:
                return None
            entry = self._fallback_entry(key, str(type_hint) if type_hint else None)
            if entry is None:
                return None
            api_url = results[0].api_link

        return api_reference_from_entry(
            entry,
            api_url=api_url,
            deprecation=self.deprecations.get(entry.name),
        )

    # ------------------------------------------------------------------
    # Best practices & versions
    # ------------------------------------------------------------------

    async def get_best_practices(self, topic: str) -> list[BestPractice]:
        """Best-practice guidance for a topic, at most five entries."""
        return find_best_practices(self.index, topic)

    async def get_version_info(self, version: str | None = None) -> VersionInfo:
        return await self.releases.get_version_info(
            version, self.index.sections.get(API_SECTION, ())
        )

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def stats(self) -> dict[str, Any]:
        return {
            "loaded": self.loaded,
            "sections": len(self.index.sections),
            "items": self.index.item_count,
            "api_entries": self.index.api_entry_count,
            "total_chars": self.index.total_chars,
            "embeddings_enabled": self.embeddings.is_enabled,
            "embedding_entries": len(self.embedding_index),
            "embeddings_ready": self.embedding_index.is_ready,
            "deprecations": len(self.deprecations),
        }
