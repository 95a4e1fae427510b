"""Best-practice extraction for a topic.

A topic-scoped variant of keyword ranking: items from community articles
and guides are scored on topic-term coverage and on best-practice phrasing,
then the relevant part of each surviving item is cut out together with its
code examples and anti-pattern statements.
"""

import logging
import re
from dataclasses import dataclass, field

from ...models.results import BestPractice
from ...services.url_builder import generate_url
from ..core.constants import API_SECTION, COMMUNITY_SECTION
from ..core.document import DocumentationIndex, Item
from ..core.extract import extract_title
from .constants import (
    ANTI_PATTERN_MARKERS,
    ANTI_PATTERN_MAX_LENGTH,
    ANTI_PATTERN_MIN_LENGTH,
    BEST_PRACTICES_STRONG_KEYWORDS,
    BEST_PRACTICES_WEAK_KEYWORDS,
    BP_ALL_TERMS_BONUS,
    BP_MIN_TERM_LENGTH,
    BP_MIN_THRESHOLD,
    BP_STRONG_KEYWORD_WEIGHT,
    BP_TERM_MATCH_WEIGHT,
    BP_WEAK_KEYWORD_WEIGHT,
    MAX_ANTI_PATTERNS,
    MAX_BEST_PRACTICES,
    MAX_EXAMPLES,
    MAX_RELEVANT_CONTENT_LINES,
    MAX_RELEVANT_SECTION_LINES,
)
from .stemmer import matches_with_inflection

logger = logging.getLogger(__name__)

_STRUCTURAL_LINE_RE = re.compile(r"^[#\-=]+$")
_TOP_LEVEL_HEADER_RE = re.compile(r"^# [^#]")

# Lines of context joined after an anti-pattern marker line
_ANTI_PATTERN_CONTEXT = 3


@dataclass
class PracticeSections:
    """Parts of an item relevant to a topic."""

    content: str = ""
    examples: list[str] = field(default_factory=list)
    anti_patterns: list[str] = field(default_factory=list)


def topic_terms(topic: str) -> list[str]:
    """Lower-cased topic terms longer than two characters."""
    return [t for t in topic.lower().split() if len(t) >= BP_MIN_TERM_LENGTH]


def score_practice(content_lower: str, terms: list[str]) -> tuple[int, int]:
    """Score an item's content for a topic.

    Args:
        content_lower: Lower-cased item text.
        terms: Topic terms.

    Returns:
        Tuple of (score, matched term count). A zero match count means the
        item is not about the topic at all.
    """
    matched = sum(1 for term in terms if matches_with_inflection(term, content_lower))
    if matched == 0:
        return 0, 0

    score = matched * BP_TERM_MATCH_WEIGHT
    if matched == len(terms):
        score += BP_ALL_TERMS_BONUS

    strong = sum(1 for kw in BEST_PRACTICES_STRONG_KEYWORDS if kw in content_lower)
    score += strong * BP_STRONG_KEYWORD_WEIGHT

    # Weak phrasing only counts in text that already reads as guidance
    if strong > 0:
        weak = sum(1 for kw in BEST_PRACTICES_WEAK_KEYWORDS if kw in content_lower)
        score += weak * BP_WEAK_KEYWORD_WEIGHT

    return score, matched


def extract_best_practice_sections(content: str, terms: list[str]) -> PracticeSections:
    """Cut the topic-relevant part out of an item.

    Collection starts at the first line mentioning a topic term and stops
    at the next top-level ``# `` header. Fenced code blocks closed after
    that point become examples; lines with negative guidance become
    anti-patterns (joined with the next two lines).

    Args:
        content: Raw item text.
        terms: Topic terms.

    Returns:
        The extracted parts. ``content`` is empty when no line mentions
        the topic.
    """
    lines = content.split("\n")
    relevant: list[str] = []
    examples: list[str] = []
    anti_patterns: list[str] = []
    current_example: list[str] = []
    in_code_block = False
    found_relevant = False

    for i, line in enumerate(lines):
        stripped = line.strip()

        if stripped.startswith("```"):
            if not in_code_block:
                in_code_block = True
                current_example = [line]
            else:
                in_code_block = False
                current_example.append(line)
                if found_relevant and len(current_example) > 2:
                    examples.append("\n".join(current_example))
                current_example = []
            continue

        if in_code_block:
            current_example.append(line)
            continue

        line_lower = line.lower()
        if found_relevant and _TOP_LEVEL_HEADER_RE.match(line):
            break

        if not found_relevant:
            found_relevant = any(matches_with_inflection(t, line_lower) for t in terms)

        if not found_relevant or len(relevant) >= MAX_RELEVANT_CONTENT_LINES:
            continue

        if any(marker in line_lower for marker in ANTI_PATTERN_MARKERS):
            snippet = " ".join(lines[i : i + _ANTI_PATTERN_CONTEXT]).strip()
            if ANTI_PATTERN_MIN_LENGTH < len(snippet) < ANTI_PATTERN_MAX_LENGTH:
                anti_patterns.append(snippet)

        if stripped and not _STRUCTURAL_LINE_RE.match(line) and not stripped.startswith("{"):
            relevant.append(line)

    return PracticeSections(
        content="\n".join(relevant[:MAX_RELEVANT_SECTION_LINES]).strip(),
        examples=examples[:MAX_EXAMPLES],
        anti_patterns=list(dict.fromkeys(anti_patterns))[:MAX_ANTI_PATTERNS],
    )


def _candidate_items(index: DocumentationIndex) -> list[Item]:
    items = list(index.sections.get(COMMUNITY_SECTION, ()))
    for name, section_items in index.sections.items():
        if name not in (API_SECTION, COMMUNITY_SECTION):
            items.extend(section_items)
    return items


def find_best_practices(index: DocumentationIndex, topic: str) -> list[BestPractice]:
    """Find best-practice guidance for a topic.

    Community articles are scanned first, then every other non-API section,
    so community titles win duplicate suppression.

    Args:
        index: The loaded documentation index.
        topic: Free-text topic, e.g. "component testing".

    Returns:
        Up to five practices sorted by descending score.
    """
    terms = topic_terms(topic)
    if not terms:
        return []

    practices: list[BestPractice] = []
    seen_titles: set[str] = set()

    for item in _candidate_items(index):
        score, matched = score_practice(item.content.lower(), terms)
        if matched == 0 or score < BP_MIN_THRESHOLD:
            continue

        title = extract_title(item.content)
        if title.lower() in seen_titles:
            continue
        seen_titles.add(title.lower())

        sections = extract_best_practice_sections(item.content, terms)
        if not sections.content:
            continue

        practices.append(
            BestPractice(
                title=title,
                content=sections.content,
                examples=sections.examples,
                anti_patterns=sections.anti_patterns,
                references=[generate_url(COMMUNITY_SECTION, title)],
                score=score,
            )
        )

    practices.sort(key=lambda p: p.score, reverse=True)
    logger.debug(f"Best practices for '{topic}': {len(practices)} candidates")
    return practices[:MAX_BEST_PRACTICES]
