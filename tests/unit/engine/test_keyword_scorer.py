"""Tests for keyword ranking."""

from ember_mcp.engine.core.document import DocumentationIndex, Item
from ember_mcp.engine.scoring.keyword_scorer import (
    calculate_keyword_score,
    extract_terms,
    keyword_search,
    passes_gate,
)


def _index(**sections: list[str]) -> DocumentationIndex:
    return DocumentationIndex(
        sections={
            name.replace("_", "-"): tuple(
                Item(content=content, start_line=i) for i, content in enumerate(items)
            )
            for name, items in sections.items()
        }
    )


def test_extract_terms_lowercases_and_deduplicates():
    assert extract_terms("Tracked  tracked Properties") == ["tracked", "properties"]
    assert extract_terms("   ") == []


def test_relevant_item_ranks_first(doc_index):
    query = "proxy deprecation modern replacement tracked"
    hits = keyword_search(doc_index, query, limit=5)

    assert hits[0].title == "Proxy deprecation"
    assert hits[0].score > 20
    assert hits[0].matched_terms >= 3
    assert hits[0].total_terms == 5


def test_unrelated_item_is_excluded():
    index = _index(
        guides=[
            "## Proxy deprecation\nThe proxy deprecation has a modern replacement using tracked.",
            "## Routing\nThe router maps URLs to route handlers.",
        ]
    )
    hits = keyword_search(index, "proxy deprecation modern replacement tracked")

    assert [h.title for h in hits] == ["Proxy deprecation"]


def test_single_low_frequency_match_is_excluded():
    index = _index(guides=["## Helpers\nA helper may wrap a proxy object in rare cases."])
    assert keyword_search(index, "proxy unrelatedterm") == []


def test_strong_single_term_match_is_included():
    index = _index(guides=["## Proxy objects\nproxy proxy proxy"])
    hits = keyword_search(index, "proxy")
    assert len(hits) == 1
    assert hits[0].matched_terms == 1


def test_gate():
    assert not passes_gate(9, 3)
    assert passes_gate(10, 2)
    assert not passes_gate(19, 1)
    assert passes_gate(20, 1)


def test_score_components():
    content = "tracked properties are great. tracked state."
    score, matched, positions = calculate_keyword_score(
        content, "Tracked Properties", "tracked properties", ["tracked", "properties"]
    )
    # phrase 50 + title 2*15 + occurrences (2+1)*2 + all terms 20 + proximity (500-8)//50
    assert score == 50 + 30 + 6 + 20 + 9
    assert matched == 2
    assert positions == [0, 8]


def test_single_term_exact_phrase():
    content = "tracked"
    once = calculate_keyword_score(content, "", "tracked", ["tracked"])
    assert once == (50 + 2 + 20, 1, [0])


def test_category_filter_api_only(doc_index):
    hits = keyword_search(doc_index, "component", category="api", limit=10)
    assert hits
    assert all(h.section == "api-docs" for h in hits)


def test_category_filter_guides_excludes_api_and_community(doc_index):
    hits = keyword_search(doc_index, "tracked properties", category="guides", limit=10)
    assert hits
    assert all(h.section == "guides" for h in hits)


def test_limit_and_descending_order(doc_index):
    hits = keyword_search(doc_index, "component", limit=2)
    assert len(hits) <= 2
    scores = [h.score for h in hits]
    assert scores == sorted(scores, reverse=True)


def test_empty_query_returns_nothing(doc_index):
    assert keyword_search(doc_index, "   ") == []


def test_equal_scores_keep_corpus_order():
    index = _index(guides=["## Alpha tracked\ntracked", "## Beta tracked\ntracked"])
    hits = keyword_search(index, "tracked")
    assert [h.title for h in hits] == ["Alpha tracked", "Beta tracked"]
