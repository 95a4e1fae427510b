"""Scoring engine for documentation search.

This package provides the ranking algorithms:
- Keyword scoring with exact-phrase, title, frequency and proximity signals
- Semantic scoring via sentence embeddings
- Weighted score fusion for hybrid search
- Topic-scoped best-practice extraction

Usage:
    from ember_mcp.engine.scoring import (
        keyword_search,
        semantic_search,
        merge_results,
        find_best_practices,
    )
"""

from .best_practices import (
    extract_best_practice_sections,
    find_best_practices,
    score_practice,
    topic_terms,
)
from .constants import (
    ALL_TERMS_BONUS,
    EXACT_PHRASE_BONUS,
    HYBRID_HEADROOM,
    HYBRID_KEYWORD_WEIGHT,
    HYBRID_SEMANTIC_WEIGHT,
    MIN_SCORE,
    MIN_SCORE_SINGLE_TERM,
)
from .fusion import merge_results, result_key
from .keyword_scorer import (
    KeywordHit,
    calculate_keyword_score,
    extract_terms,
    keyword_search,
    passes_gate,
)
from .semantic_scorer import (
    EmbeddingEntry,
    EmbeddingIndex,
    SemanticHit,
    build_embedding_index,
    cosine_similarity,
    searchable_text,
    semantic_search,
)
from .stemmer import matches_with_inflection, pluralize, singularize, term_variants

__all__ = [
    # Constants
    "ALL_TERMS_BONUS",
    "EXACT_PHRASE_BONUS",
    "HYBRID_HEADROOM",
    "HYBRID_KEYWORD_WEIGHT",
    "HYBRID_SEMANTIC_WEIGHT",
    "MIN_SCORE",
    "MIN_SCORE_SINGLE_TERM",
    # Inflection
    "matches_with_inflection",
    "pluralize",
    "singularize",
    "term_variants",
    # Keyword scorer
    "KeywordHit",
    "calculate_keyword_score",
    "extract_terms",
    "keyword_search",
    "passes_gate",
    # Semantic scorer
    "EmbeddingEntry",
    "EmbeddingIndex",
    "SemanticHit",
    "build_embedding_index",
    "cosine_similarity",
    "searchable_text",
    "semantic_search",
    # Fusion
    "merge_results",
    "result_key",
    # Best practices
    "extract_best_practice_sections",
    "find_best_practices",
    "score_practice",
    "topic_terms",
]
