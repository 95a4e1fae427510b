"""Semantic scoring for the documentation search engine.

This module provides embedding-based similarity ranking. The embedding
index is built in the background after a corpus load and only ever grows,
so queries read a snapshot of whatever has been appended so far. A query
issued before the build starts simply sees zero semantic matches.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from ...errors import DimensionMismatchError
from ...models.enums import CategoryFilter
from ..core.document import DocumentationIndex
from ..core.extract import extract_title, section_matches_category
from .constants import (
    DEFAULT_LIMIT,
    EMBEDDING_TEXT_LIMIT,
    SEMANTIC_MIN_SIMILARITY,
    SEMANTIC_SCORE_SCALE,
)

if TYPE_CHECKING:
    from ...services.embeddings import EmbeddingProvider

logger = logging.getLogger(__name__)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Calculate cosine similarity between two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        Similarity in [-1, 1]. 0.0 when either vector has zero magnitude.

    Raises:
        DimensionMismatchError: If the vectors differ in length.
    """
    if len(a) != len(b):
        raise DimensionMismatchError(len(a), len(b))

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)

    if norm_a == 0 or norm_b == 0:
        return 0.0

    return float(np.dot(va, vb) / (norm_a * norm_b))


def searchable_text(title: str, content: str) -> str:
    """Text embedded for an item: title plus a bounded content prefix."""
    return f"{title}\n{content[:EMBEDDING_TEXT_LIMIT]}"


@dataclass(frozen=True)
class EmbeddingEntry:
    """An item's embedded text with its vector and metadata."""

    text: str
    vector: tuple[float, ...]
    section_name: str
    title: str
    content: str
    start_line: int


@dataclass
class SemanticHit:
    """A semantic match above the similarity floor."""

    entry: EmbeddingEntry
    similarity: float

    @property
    def score(self) -> float:
        return self.similarity * SEMANTIC_SCORE_SCALE


class EmbeddingIndex:
    """Append-only embedding index with a readiness signal.

    Entries are never mutated or removed. Readers call :meth:`snapshot` and
    work on the returned tuple, so a concurrent build can only make later
    snapshots longer.
    """

    def __init__(self) -> None:
        self._entries: list[EmbeddingEntry] = []
        self._ready = asyncio.Event()

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, entry: EmbeddingEntry) -> None:
        self._entries.append(entry)

    def snapshot(self) -> tuple[EmbeddingEntry, ...]:
        return tuple(self._entries)

    @property
    def is_ready(self) -> bool:
        """True once the build has finished, successfully or not."""
        return self._ready.is_set()

    def mark_ready(self) -> None:
        self._ready.set()

    async def wait_ready(self, timeout: float) -> bool:
        """Wait for the build to finish.

        Args:
            timeout: Hard upper bound in seconds.

        Returns:
            True if the build finished within the timeout.
        """
        try:
            await asyncio.wait_for(self._ready.wait(), timeout)
        except asyncio.TimeoutError:
            return False
        return True


async def build_embedding_index(
    index: DocumentationIndex,
    provider: EmbeddingProvider,
    target: EmbeddingIndex,
) -> int:
    """Embed every item of the corpus into ``target``.

    Items whose embedding comes back as None are skipped. The target is
    marked ready when the build ends, including when the provider is
    disabled or the build is cancelled.

    Args:
        index: The loaded documentation index.
        provider: Embedding capability.
        target: Index to append entries to.

    Returns:
        Number of entries appended.
    """
    added = 0
    try:
        await provider.initialize()
        if not provider.is_enabled:
            logger.info("Embeddings disabled, semantic search will return no results")
            return 0

        logger.info(f"Building embedding index for {index.item_count} items...")
        for section_name, items in index.sections.items():
            for item in items:
                title = extract_title(item.content)
                text = searchable_text(title, item.content)
                vector = await provider.embed(text)
                if vector is None:
                    continue
                target.append(
                    EmbeddingEntry(
                        text=text,
                        vector=tuple(vector),
                        section_name=section_name,
                        title=title,
                        content=item.content,
                        start_line=item.start_line,
                    )
                )
                added += 1

        if added:
            logger.info(f"Embedding index built with {added} entries")
        else:
            logger.warning("Embedding index is empty, semantic search will return no results")
        return added
    finally:
        target.mark_ready()


async def semantic_search(
    entries: Sequence[EmbeddingEntry],
    provider: EmbeddingProvider,
    query: str,
    category: CategoryFilter | str = CategoryFilter.ALL,
    limit: int = DEFAULT_LIMIT,
) -> list[SemanticHit]:
    """Rank embedded items by cosine similarity to the query.

    Args:
        entries: Snapshot of the embedding index.
        provider: Embedding capability used for the query vector.
        query: The search query string.
        category: Category filter on the entries' sections.
        limit: Maximum number of hits to return.

    Returns:
        Hits with similarity above 0.1, sorted by descending similarity.
        Empty when the provider is disabled or the snapshot is empty.

    Raises:
        DimensionMismatchError: If the query vector and an indexed vector
            differ in length.
    """
    if not provider.is_enabled or not entries:
        return []

    query_vector = await provider.embed(query)
    if query_vector is None:
        return []

    hits = []
    for entry in entries:
        if not section_matches_category(entry.section_name, category):
            continue
        similarity = cosine_similarity(query_vector, entry.vector)
        if similarity > SEMANTIC_MIN_SIMILARITY:
            hits.append(SemanticHit(entry=entry, similarity=similarity))

    hits.sort(key=lambda h: h.similarity, reverse=True)
    return hits[:limit]
