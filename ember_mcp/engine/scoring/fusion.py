"""Weighted score fusion for hybrid search.

Keyword and semantic results are combined by a fixed linear blend rather
than renormalised: an item found by only one ranker keeps only that
ranker's weighted share, so a semantic-only match always scores below a
keyword match of the same raw strength.
"""

from ...models.enums import SearchType
from ...models.results import SearchResult
from .constants import HYBRID_KEYWORD_WEIGHT, HYBRID_SEMANTIC_WEIGHT


def result_key(result: SearchResult) -> tuple[str, str]:
    """Identity of a result across rankers."""
    return (result.title, result.url)


def merge_results(
    keyword_results: list[SearchResult],
    semantic_results: list[SearchResult],
    keyword_weight: float = HYBRID_KEYWORD_WEIGHT,
    semantic_weight: float = HYBRID_SEMANTIC_WEIGHT,
) -> list[SearchResult]:
    """Merge keyword and semantic results into one ranked list.

    Combined score = keyword_weight * keyword score + semantic_weight *
    semantic score, with an absent side contributing 0. Results found by
    both rankers keep the keyword result's excerpt and are tagged hybrid.

    The caller applies the final cap after merging, so each ranker should
    be asked for extra headroom.

    Args:
        keyword_results: Results from the keyword ranker.
        semantic_results: Results from the semantic ranker.
        keyword_weight: Weight of the keyword score.
        semantic_weight: Weight of the semantic score.

    Returns:
        New result objects sorted by descending combined score. Equal scores
        keep first-seen order (keyword results first).
    """
    merged: dict[tuple[str, str], SearchResult] = {}

    for result in keyword_results:
        keyword_score = result.keyword_score if result.keyword_score is not None else result.score
        merged[result_key(result)] = result.model_copy(
            update={
                "keyword_score": keyword_score,
                "score": keyword_score * keyword_weight,
            }
        )

    for result in semantic_results:
        semantic_score = (
            result.semantic_score if result.semantic_score is not None else result.score
        )
        key = result_key(result)
        existing = merged.get(key)
        if existing is not None:
            merged[key] = existing.model_copy(
                update={
                    "semantic_score": semantic_score,
                    "score": existing.score + semantic_score * semantic_weight,
                    "search_type": SearchType.HYBRID,
                }
            )
        else:
            merged[key] = result.model_copy(
                update={
                    "semantic_score": semantic_score,
                    "score": semantic_score * semantic_weight,
                }
            )

    return sorted(merged.values(), key=lambda r: r.score, reverse=True)
