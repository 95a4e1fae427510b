"""Tests for cosine similarity and semantic ranking."""

import asyncio

import pytest

from ember_mcp.engine.scoring.semantic_scorer import (
    EmbeddingEntry,
    EmbeddingIndex,
    build_embedding_index,
    cosine_similarity,
    semantic_search,
)
from ember_mcp.errors import DimensionMismatchError
from ember_mcp.services.embeddings import DisabledEmbeddings
from tests.conftest import FakeEmbeddings


class TestCosineSimilarity:
    def test_identical_unit_vectors(self):
        assert cosine_similarity([1.0, 0.0], [1.0, 0.0]) == pytest.approx(1.0, abs=1e-5)

    def test_orthogonal_vectors(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0, abs=1e-5)

    def test_opposite_vectors(self):
        assert cosine_similarity([1.0, 2.0], [-1.0, -2.0]) == pytest.approx(-1.0, abs=1e-5)

    def test_length_mismatch_raises(self):
        with pytest.raises(DimensionMismatchError):
            cosine_similarity([1.0, 0.0], [1.0, 0.0, 0.0])

    def test_mismatch_is_a_value_error(self):
        with pytest.raises(ValueError):
            cosine_similarity([1.0], [1.0, 2.0])

    def test_zero_vector(self):
        assert cosine_similarity([0.0, 0.0], [1.0, 1.0]) == 0.0


def _entry(section: str, title: str, vector: list[float]) -> EmbeddingEntry:
    return EmbeddingEntry(
        text=title,
        vector=tuple(vector),
        section_name=section,
        title=title,
        content=title,
        start_line=0,
    )


class TestEmbeddingIndex:
    def test_snapshot_is_stable_while_appending(self):
        index = EmbeddingIndex()
        index.append(_entry("guides", "a", [1.0]))
        snapshot = index.snapshot()

        index.append(_entry("guides", "b", [1.0]))

        assert len(snapshot) == 1
        assert len(index) == 2

    @pytest.mark.asyncio
    async def test_wait_ready_times_out(self):
        index = EmbeddingIndex()
        assert await index.wait_ready(0.01) is False
        assert not index.is_ready

    @pytest.mark.asyncio
    async def test_wait_ready_after_mark(self):
        index = EmbeddingIndex()
        asyncio.get_running_loop().call_soon(index.mark_ready)
        assert await index.wait_ready(1.0) is True


@pytest.mark.asyncio
async def test_build_embedding_index(doc_index):
    provider = FakeEmbeddings()
    target = EmbeddingIndex()

    added = await build_embedding_index(doc_index, provider, target)

    assert provider.initialized
    assert added == doc_index.item_count
    assert len(target) == added
    assert target.is_ready


@pytest.mark.asyncio
async def test_build_with_disabled_provider_is_ready_and_empty(doc_index):
    target = EmbeddingIndex()

    added = await build_embedding_index(doc_index, DisabledEmbeddings(), target)

    assert added == 0
    assert len(target) == 0
    assert target.is_ready


@pytest.mark.asyncio
async def test_semantic_search_ranks_by_similarity():
    entries = [
        _entry("guides", "route", [0.0, 0.0, 0.0, 1.0, 0.0]),
        _entry("guides", "tracked", [0.0, 1.0, 0.0, 0.0, 0.0]),
        _entry("guides", "both", [0.0, 1.0, 0.0, 1.0, 0.0]),
    ]

    hits = await semantic_search(entries, FakeEmbeddings(), "tracked tracked")

    assert [h.entry.title for h in hits] == ["tracked", "both"]
    assert hits[0].score == pytest.approx(100.0)


@pytest.mark.asyncio
async def test_semantic_search_respects_category():
    entries = [
        _entry("api-docs", "api", [1.0, 0.0, 0.0, 0.0, 0.0]),
        _entry("guides", "guide", [1.0, 0.0, 0.0, 0.0, 0.0]),
    ]

    hits = await semantic_search(entries, FakeEmbeddings(), "component", category="api")

    assert [h.entry.section_name for h in hits] == ["api-docs"]


@pytest.mark.asyncio
async def test_semantic_search_empty_when_disabled_or_empty():
    entries = [_entry("guides", "x", [1.0, 0.0, 0.0, 0.0, 0.0])]
    assert await semantic_search(entries, DisabledEmbeddings(), "component") == []
    assert await semantic_search((), FakeEmbeddings(), "component") == []


@pytest.mark.asyncio
async def test_semantic_search_dimension_mismatch_propagates():
    entries = [_entry("guides", "x", [1.0, 0.0])]
    with pytest.raises(DimensionMismatchError):
        await semantic_search(entries, FakeEmbeddings(), "component")
