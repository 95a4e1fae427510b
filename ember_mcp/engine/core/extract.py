"""Title and excerpt extraction for corpus items.

Items in the aggregated corpus rarely carry a clean title: some start with
YAML front matter, some with a generic header ("For all components"),
API items are raw JSON. Titles are resolved through a first-match-wins
chain; excerpts are cut around the densest cluster of query-term hits.
"""

import logging
import re
from collections.abc import Mapping, Sequence

from ...models.enums import CategoryFilter, DocCategory
from .constants import (
    API_SECTION,
    COMMUNITY_SECTION,
    EXCERPT_AFTER_CONTEXT,
    EXCERPT_BEFORE_CONTEXT,
    EXCERPT_BOUNDARY_SLACK,
    EXCERPT_CLUSTER_WINDOW,
    EXCERPT_MAX_LENGTH,
    EXCERPT_MIN_LINE_LENGTH,
    EXCERPT_TERM_AFTER_CONTEXT,
    EXCERPT_TERM_BEFORE_CONTEXT,
    GENERIC_TITLE_PATTERNS,
    NO_PREVIEW,
    NON_GUIDE_SECTIONS,
    SECTION_HEADER_RE,
    TITLE_MAX_LENGTH,
    TITLE_MIN_HEADER_LENGTH,
    TITLE_MIN_LINE_LENGTH,
    UNTITLED,
)
from .api_index import decode_record

logger = logging.getLogger(__name__)

_FRONTMATTER_TITLE_RE = re.compile(
    r"^---\s*\n(?:.*\n)*?title:\s*[\"']?([^\"'\n]+)[\"']?\s*\n(?:.*\n)*?---",
    re.IGNORECASE,
)
_HEADER_RE = re.compile(r"^#+\s+(.+)$")
_RULE_RE = re.compile(r"^[-=]+$")
_URL_RE = re.compile(r"^https?://", re.IGNORECASE)
_FIRST_SENTENCE_RE = re.compile(r"^([^.!?]+[.!?])")
_STRUCTURAL_LINE_RE = re.compile(r"^[#\-=]+")

_API_DATA_RE = re.compile(r"\{[\s\S]*?\"data\"[\s\S]*?\}")
_CODE_BLOCK_RE = re.compile(r"```[\s\S]*?```")
_BLANK_RUN_RE = re.compile(r"\n{3,}")


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


def categorize_section(section_name: str) -> DocCategory:
    """Map a section name to its display category."""
    if section_name == API_SECTION:
        return DocCategory.API
    if section_name == COMMUNITY_SECTION:
        return DocCategory.COMMUNITY
    return DocCategory.GUIDES


def section_matches_category(section_name: str, category: CategoryFilter | str) -> bool:
    """Check whether a section belongs to a search category filter.

    Unknown filter values match nothing.
    """
    if category == CategoryFilter.ALL:
        return True
    if category == CategoryFilter.API:
        return section_name == API_SECTION
    if category == CategoryFilter.COMMUNITY:
        return section_name == COMMUNITY_SECTION
    if category == CategoryFilter.GUIDES:
        return section_name not in NON_GUIDE_SECTIONS
    return False


def sections_for_category(
    section_names: Sequence[str], category: CategoryFilter | str
) -> list[str]:
    """Filter section names by category, keeping their order."""
    return [name for name in section_names if section_matches_category(name, category)]


# ---------------------------------------------------------------------------
# Titles
# ---------------------------------------------------------------------------


def is_generic_title(text: str) -> bool:
    return any(pattern.search(text) for pattern in GENERIC_TITLE_PATTERNS)


def _single_line(title: str) -> str:
    return " ".join(title.split())[:TITLE_MAX_LENGTH]


def extract_title(content: str) -> str:
    """Derive a human-readable title for an item.

    Resolution order (first match wins): front-matter ``title:``, first
    non-generic markdown header, record name from embedded JSON, first
    meaningful line (first sentence if long), ``"Untitled"``.

    The section header that opens a section's first item (``# guides``) is
    not considered a title.

    Args:
        content: Raw item text.

    Returns:
        A non-empty single-line title of at most 100 characters.
    """
    frontmatter = _FRONTMATTER_TITLE_RE.match(content)
    if frontmatter:
        title = _single_line(frontmatter.group(1).strip())
        if title:
            return title

    lines = content.split("\n")
    if lines and SECTION_HEADER_RE.match(lines[0]):
        lines = lines[1:]

    for line in lines:
        header = _HEADER_RE.match(line)
        if header:
            title = header.group(1).strip()
            if not is_generic_title(title) and len(title) > TITLE_MIN_HEADER_LENGTH:
                return _single_line(title)

    if '"data"' in content:
        data = decode_record(content)
        attrs = data.get("attributes") if data is not None else None
        name = attrs.get("name") if isinstance(attrs, Mapping) else None
        if isinstance(name, str) and name.strip():
            return _single_line(name)

    for line in lines:
        trimmed = line.strip()
        if (
            not trimmed
            or _RULE_RE.match(trimmed)
            or trimmed.startswith(("{", "[", "```"))
            or _URL_RE.match(trimmed)
            or is_generic_title(trimmed)
        ):
            continue

        if len(trimmed) > TITLE_MIN_LINE_LENGTH:
            sentence = _FIRST_SENTENCE_RE.match(trimmed)
            if sentence:
                return _single_line(sentence.group(1).strip())
            return _single_line(trimmed)

    return UNTITLED


# ---------------------------------------------------------------------------
# Excerpts
# ---------------------------------------------------------------------------


def _clean_excerpt(excerpt: str) -> str:
    excerpt = _API_DATA_RE.sub("[API Data]", excerpt)
    excerpt = _CODE_BLOCK_RE.sub("[Code Example]", excerpt)
    excerpt = _BLANK_RUN_RE.sub("\n\n", excerpt)
    return excerpt.strip()


def densest_cluster_start(positions: Sequence[int]) -> int:
    """Return the start of the run of positions with the most members.

    A run starts at a position and includes every following position less
    than 500 characters after it. Earlier runs win ties.
    """
    ordered = sorted(positions)
    best_start = ordered[0]
    best_density = 1

    for i, start in enumerate(ordered):
        size = 1
        for pos in ordered[i + 1 :]:
            if pos - start < EXCERPT_CLUSTER_WINDOW:
                size += 1
            else:
                break
        if size > best_density:
            best_density = size
            best_start = start

    return best_start


def _window_around_cluster(content: str, positions: Sequence[int]) -> str:
    anchor = densest_cluster_start(positions)
    start = max(0, anchor - EXCERPT_BEFORE_CONTEXT)
    end = min(len(content), anchor + EXCERPT_AFTER_CONTEXT)
    excerpt = content[start:end]

    if start > 0:
        space = excerpt.find(" ")
        if 0 < space < EXCERPT_BOUNDARY_SLACK:
            excerpt = excerpt[space + 1 :]
        excerpt = "..." + excerpt

    if end < len(content):
        last_space = excerpt.rfind(" ")
        if last_space > len(excerpt) - EXCERPT_BOUNDARY_SLACK:
            excerpt = excerpt[:last_space]
        excerpt = excerpt + "..."

    return _clean_excerpt(excerpt)


def _window_around_term(content: str, terms: Sequence[str]) -> str | None:
    content_lower = content.lower()
    for term in terms:
        if not term:
            continue
        index = content_lower.find(term.lower())
        if index == -1:
            continue
        start = max(0, index - EXCERPT_TERM_BEFORE_CONTEXT)
        end = min(len(content), index + EXCERPT_TERM_AFTER_CONTEXT)
        excerpt = content[start:end]
        if start > 0:
            excerpt = "..." + excerpt
        if end < len(content):
            excerpt = excerpt + "..."
        return _clean_excerpt(excerpt)
    return None


def _first_meaningful_line(content: str) -> str | None:
    for line in content.split("\n"):
        trimmed = line.strip()
        if (
            len(trimmed) > EXCERPT_MIN_LINE_LENGTH
            and not _STRUCTURAL_LINE_RE.match(trimmed)
            and not trimmed.startswith("{")
        ):
            return trimmed[:EXCERPT_MAX_LENGTH]
    return None


def extract_excerpt(
    content: str,
    terms: Sequence[str],
    positions: Sequence[int] | None = None,
) -> str:
    """Cut a preview window out of an item for a query.

    Args:
        content: Raw item text.
        terms: Query terms.
        positions: Character offsets of term hits found while ranking. When
            given, the window is centred on the densest cluster of hits.

    Returns:
        The excerpt, or ``"No preview available"``. Never raises.
    """
    if positions:
        return _window_around_cluster(content, positions)

    excerpt = _window_around_term(content, terms)
    if excerpt:
        return excerpt

    return _first_meaningful_line(content) or NO_PREVIEW
