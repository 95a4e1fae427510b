"""Engine core module.

This module contains the core data structures and text utilities:
- Corpus layout constants (sections, title and excerpt limits)
- Document data structures (items, API entries, the corpus index)
- Corpus parsing and API indexing
- Title / excerpt extraction and category helpers
- Token counting
"""

from .api_index import build_api_index, decode_record, lookup_keys, parse_api_record
from .document import (
    ApiEntry,
    ApiMethod,
    ApiParam,
    ApiProperty,
    ApiReturn,
    DocumentationIndex,
    Item,
)
from .extract import (
    categorize_section,
    extract_excerpt,
    extract_title,
    section_matches_category,
    sections_for_category,
)
from .parser import parse_documentation
from .tokens import count_argument_tokens, count_tokens, get_encoder

__all__ = [
    # Document structures
    "ApiEntry",
    "ApiMethod",
    "ApiParam",
    "ApiProperty",
    "ApiReturn",
    "DocumentationIndex",
    "Item",
    # Parsing & indexing
    "parse_documentation",
    "build_api_index",
    "decode_record",
    "lookup_keys",
    "parse_api_record",
    # Extraction
    "categorize_section",
    "extract_excerpt",
    "extract_title",
    "section_matches_category",
    "sections_for_category",
    # Token utilities
    "get_encoder",
    "count_argument_tokens",
    "count_tokens",
]
