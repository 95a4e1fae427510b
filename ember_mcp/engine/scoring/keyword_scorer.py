"""Keyword scoring for the documentation search engine.

This module provides lexical relevance scoring using:
- Exact phrase matching
- Title vs content weighting
- Raw term frequency
- All-terms bonus with a proximity bonus for tight clusters
"""

import logging
from dataclasses import dataclass, field

from ...models.enums import CategoryFilter
from ..core.document import DocumentationIndex, Item
from ..core.extract import extract_title, sections_for_category
from .constants import (
    ALL_TERMS_BONUS,
    DEFAULT_LIMIT,
    EXACT_PHRASE_BONUS,
    MIN_SCORE,
    MIN_SCORE_SINGLE_TERM,
    PROXIMITY_BONUS_DIVISOR,
    PROXIMITY_THRESHOLD,
    TERM_MATCH_WEIGHT,
    TITLE_MATCH_BONUS,
)

logger = logging.getLogger(__name__)


@dataclass
class KeywordHit:
    """An item that passed the keyword gate.

    Attributes:
        section: Name of the section the item belongs to
        item: The matched item
        title: Extracted title of the item
        score: Additive keyword score
        matched_terms: Number of distinct query terms present
        total_terms: Number of distinct query terms
        positions: First-occurrence offset of each matched term, used to
            centre the excerpt
    """

    section: str
    item: Item
    title: str
    score: int
    matched_terms: int
    total_terms: int
    positions: list[int] = field(default_factory=list)


def extract_terms(query: str) -> list[str]:
    """Split a query into lower-cased terms, de-duplicated in order.

    Args:
        query: The search query string.

    Returns:
        Distinct whitespace-separated terms.
    """
    return list(dict.fromkeys(query.lower().split()))


def calculate_keyword_score(
    content: str,
    title: str,
    query: str,
    terms: list[str],
) -> tuple[int, int, list[int]]:
    """Calculate the keyword relevance score of one item.

    Scoring factors:
    - Exact phrase: +50 when the whole lower-cased query occurs verbatim
    - Title: +15 per term that occurs in the title
    - Frequency: +2 per occurrence of each term
    - All terms present: +20, plus floor((500 - span) / 50) when the first
      occurrences of the terms lie within 500 characters of each other

    Args:
        content: Raw item text.
        title: Extracted title of the item.
        query: The search query string.
        terms: Distinct lower-cased query terms.

    Returns:
        Tuple of (score, matched distinct terms, first-occurrence positions).
    """
    content_lower = content.lower()
    title_lower = title.lower()
    query_lower = query.lower().strip()

    score = 0
    matched = 0
    positions: list[int] = []

    if query_lower and query_lower in content_lower:
        score += EXACT_PHRASE_BONUS

    for term in terms:
        occurrences = content_lower.count(term)
        if occurrences == 0:
            continue

        matched += 1
        if term in title_lower:
            score += TITLE_MATCH_BONUS
        score += occurrences * TERM_MATCH_WEIGHT
        positions.append(content_lower.find(term))

    if terms and matched == len(terms):
        score += ALL_TERMS_BONUS

        if len(positions) > 1:
            span = max(positions) - min(positions)
            if span < PROXIMITY_THRESHOLD:
                score += (PROXIMITY_THRESHOLD - span) // PROXIMITY_BONUS_DIVISOR

    return score, matched, positions


def passes_gate(score: int, matched_terms: int) -> bool:
    """Check the two-part inclusion gate.

    A result needs MIN_SCORE and either two distinct matched terms or the
    stricter single-term minimum.
    """
    return score >= MIN_SCORE and (matched_terms >= 2 or score >= MIN_SCORE_SINGLE_TERM)


def keyword_search(
    index: DocumentationIndex,
    query: str,
    category: CategoryFilter | str = CategoryFilter.ALL,
    limit: int = DEFAULT_LIMIT,
) -> list[KeywordHit]:
    """Rank corpus items against a query by lexical relevance.

    Items are scanned section by section in corpus order. The sort is
    stable, so equal scores keep discovery order.

    Args:
        index: The loaded documentation index.
        query: The search query string.
        category: Category filter restricting the sections scanned.
        limit: Maximum number of hits to return.

    Returns:
        Hits sorted by descending score. Empty when nothing passes the gate.
    """
    terms = extract_terms(query)
    if not terms:
        return []

    section_names = sections_for_category(list(index.sections), category)
    hits: list[KeywordHit] = []

    for section_name, item in index.items_in(section_names):
        title = extract_title(item.content)
        score, matched, positions = calculate_keyword_score(
            item.content, title, query, terms
        )
        if not passes_gate(score, matched):
            continue

        hits.append(
            KeywordHit(
                section=section_name,
                item=item,
                title=title,
                score=score,
                matched_terms=matched,
                total_terms=len(terms),
                positions=positions,
            )
        )

    hits.sort(key=lambda h: h.score, reverse=True)
    logger.debug(f"Keyword search '{query}': {len(hits)} hits, returning {min(len(hits), limit)}")
    return hits[:limit]
