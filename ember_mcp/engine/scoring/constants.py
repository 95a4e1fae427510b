"""Scoring constants for the documentation search engine.

This module contains all constants used by ranking and display:
- Keyword scoring weights and inclusion thresholds
- Semantic / hybrid weights
- Best-practice keyword lists
- Display caps for API references

Corpus layout and extraction constants live in ``engine/core/constants.py``.
"""

# ---------------------------------------------------------------------------
# Keyword scoring
# ---------------------------------------------------------------------------
EXACT_PHRASE_BONUS = 50
TITLE_MATCH_BONUS = 15
TERM_MATCH_WEIGHT = 2
ALL_TERMS_BONUS = 20
PROXIMITY_THRESHOLD = 500
PROXIMITY_BONUS_DIVISOR = 50

# A result needs MIN_SCORE and either 2+ matched terms or MIN_SCORE_SINGLE_TERM.
# Single coincidental matches stay out; strong single-term hits get through.
MIN_SCORE = 10
MIN_SCORE_SINGLE_TERM = 20

DEFAULT_LIMIT = 5


# ---------------------------------------------------------------------------
# Semantic & hybrid search
# ---------------------------------------------------------------------------
EMBEDDING_TEXT_LIMIT = 1000  # content characters embedded per item
EMBEDDING_CACHE_KEY_CHARS = 500  # prefix length hashed for cache keys
SEMANTIC_MIN_SIMILARITY = 0.1
SEMANTIC_SCORE_SCALE = 100

HYBRID_KEYWORD_WEIGHT = 0.6
HYBRID_SEMANTIC_WEIGHT = 0.4
# Each ranker is asked for limit * HYBRID_HEADROOM before merging
HYBRID_HEADROOM = 2


# ---------------------------------------------------------------------------
# Best practices
# ---------------------------------------------------------------------------
BP_TERM_MATCH_WEIGHT = 15
BP_ALL_TERMS_BONUS = 20
BP_STRONG_KEYWORD_WEIGHT = 5
BP_WEAK_KEYWORD_WEIGHT = 2
BP_MIN_THRESHOLD = 10
BP_MIN_TERM_LENGTH = 3

MAX_BEST_PRACTICES = 5
MAX_EXAMPLES = 3
MAX_ANTI_PATTERNS = 3
MAX_RELEVANT_CONTENT_LINES = 50
MAX_RELEVANT_SECTION_LINES = 30
ANTI_PATTERN_MIN_LENGTH = 10
ANTI_PATTERN_MAX_LENGTH = 200

BEST_PRACTICES_STRONG_KEYWORDS = (
    "best practice",
    "recommended approach",
    "modern pattern",
    "idiomatic",
    "anti-pattern",
    "avoid",
    "prefer",
    "migration guide",
)

# Only counted when at least one strong keyword is present
BEST_PRACTICES_WEAK_KEYWORDS = (
    "tip",
    "performance",
    "recommended",
    "should",
    "modern",
)

ANTI_PATTERN_MARKERS = ("avoid", "don't", "anti-pattern", "bad practice")


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------
MAX_METHODS_DISPLAYED = 10
MAX_PROPERTIES_DISPLAYED = 10
