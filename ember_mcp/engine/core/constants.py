"""Corpus layout and extraction constants.

- Section names and the header / separator line patterns
- Title resolution limits and generic-title patterns
- Excerpt window sizes
"""

import re

# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------
API_SECTION = "api-docs"
COMMUNITY_SECTION = "community-bloggers"
NON_GUIDE_SECTIONS = frozenset({API_SECTION, COMMUNITY_SECTION})

SECTION_HEADER_RE = re.compile(r"^# [a-z-]+$")
ITEM_SEPARATOR_RE = re.compile(r"^-{3,}$")


# ---------------------------------------------------------------------------
# Titles
# ---------------------------------------------------------------------------
TITLE_MAX_LENGTH = 100
TITLE_MIN_HEADER_LENGTH = 3
TITLE_MIN_LINE_LENGTH = 10
UNTITLED = "Untitled"

# Headers that are sentence fragments or boilerplate rather than titles
GENERIC_TITLE_PATTERNS = (
    re.compile(r"^for (all|any|most|some)", re.IGNORECASE),
    re.compile(r"^in (this|these|all|any)", re.IGNORECASE),
    re.compile(r"^with (this|these|all|any)", re.IGNORECASE),
    re.compile(r"^using (this|these|all|any)", re.IGNORECASE),
    re.compile(r"^(note|warning|tip|important):", re.IGNORECASE),
    re.compile(r"^(here|there|this|that) (is|are)", re.IGNORECASE),
    re.compile(r"^https?://", re.IGNORECASE),
    re.compile(r"^[0-9.]+$"),
    re.compile(r"^[-*+]\s"),
)


# ---------------------------------------------------------------------------
# Excerpts
# ---------------------------------------------------------------------------
EXCERPT_CLUSTER_WINDOW = 500
EXCERPT_BEFORE_CONTEXT = 150
EXCERPT_AFTER_CONTEXT = 400
EXCERPT_TERM_BEFORE_CONTEXT = 100
EXCERPT_TERM_AFTER_CONTEXT = 300
EXCERPT_BOUNDARY_SLACK = 50
EXCERPT_MIN_LINE_LENGTH = 30
EXCERPT_MAX_LENGTH = 350
NO_PREVIEW = "No preview available"
