"""Singular/plural inflection for topic matching.

This module provides lightweight English inflection so that a topic like
"templates" also matches "template" (and vice versa) without pulling in a
full NLP dependency. Rules are ordered; the first matching suffix wins.
"""

import re

# Treated as both singular and plural
UNCOUNTABLE = frozenset(
    {
        "data",
        "metadata",
        "information",
        "equipment",
        "feedback",
        "news",
        "series",
        "species",
        "software",
        "middleware",
    }
)

IRREGULAR_PLURALS = {
    "child": "children",
    "person": "people",
    "man": "men",
    "woman": "women",
    "mouse": "mice",
    "index": "indices",
    "matrix": "matrices",
    "vertex": "vertices",
    "appendix": "appendices",
    "criterion": "criteria",
    "schema": "schemas",
}
IRREGULAR_SINGULARS = {plural: singular for singular, plural in IRREGULAR_PLURALS.items()}

# (pattern, replacement) pairs, most specific first
SINGULAR_RULES = (
    (re.compile(r"caches$"), "cache"),
    (re.compile(r"(quiz)zes$"), r"\1"),
    (re.compile(r"(alias|status|bus|canvas)es$"), r"\1"),
    (re.compile(r"(ss|sh|ch|x|z)es$"), r"\1"),
    (re.compile(r"([^aeiou])ies$"), r"\1y"),
    (re.compile(r"([lr])ves$"), r"\1f"),
    (re.compile(r"(hive|tive|curve)s$"), r"\1"),
    (re.compile(r"(us|ss|is)$"), r"\1"),
    (re.compile(r"([^s])s$"), r"\1"),
)

PLURAL_RULES = (
    (re.compile(r"(quiz)$"), r"\1zes"),
    (re.compile(r"(alias|status|bus|canvas)$"), r"\1es"),
    (re.compile(r"(ss|sh|ch|x|z)$"), r"\1es"),
    (re.compile(r"([^aeiou])y$"), r"\1ies"),
    (re.compile(r"s$"), "s"),
    (re.compile(r"$"), "s"),
)


def _apply(word: str, rules: tuple) -> str:
    for pattern, replacement in rules:
        if pattern.search(word):
            return pattern.sub(replacement, word, count=1)
    return word


def singularize(word: str) -> str:
    """Return the singular form of a lower-case word.

    Uncountable words are returned unchanged, as are words that do not look
    plural.

    Examples:
        >>> singularize("templates")
        'template'
        >>> singularize("classes")
        'class'
        >>> singularize("caches")
        'cache'
    """
    word = word.lower()
    if not word or word in UNCOUNTABLE:
        return word
    if word in IRREGULAR_SINGULARS:
        return IRREGULAR_SINGULARS[word]
    if word in IRREGULAR_PLURALS:
        return word
    return _apply(word, SINGULAR_RULES)


def pluralize(word: str) -> str:
    """Return the plural form of a lower-case word.

    Words that already end in a plural ``s`` are returned unchanged.

    Examples:
        >>> pluralize("template")
        'templates'
        >>> pluralize("dependency")
        'dependencies'
    """
    word = word.lower()
    if not word or word in UNCOUNTABLE:
        return word
    if word in IRREGULAR_PLURALS:
        return IRREGULAR_PLURALS[word]
    if word in IRREGULAR_SINGULARS:
        return word
    return _apply(word, PLURAL_RULES)


def term_variants(term: str) -> list[str]:
    """Return the exact, singular and plural forms of a term, de-duplicated.

    The exact form always comes first.
    """
    variants = [term]
    for form in (singularize(term), pluralize(term)):
        if form and form not in variants:
            variants.append(form)
    return variants


def matches_with_inflection(term: str, text: str) -> bool:
    """Check whether the term, or its singular or plural, occurs in text."""
    return any(form in text for form in term_variants(term))
