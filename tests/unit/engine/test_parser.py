"""Tests for the corpus parser."""

import json

from ember_mcp.engine.core.api_index import build_api_index
from ember_mcp.engine.core.parser import parse_documentation


def test_empty_input_has_no_sections():
    assert parse_documentation("") == {}


def test_text_before_first_header_is_discarded():
    sections = parse_documentation("preamble\nmore preamble\n# guides\nBody text")
    assert list(sections) == ["guides"]
    assert sections["guides"][0].content == "# guides\nBody text"


def test_parsing_is_idempotent(sample_corpus):
    assert parse_documentation(sample_corpus) == parse_documentation(sample_corpus)


def test_sections_and_item_counts(sample_corpus):
    sections = parse_documentation(sample_corpus)

    assert list(sections) == ["api-docs", "community-bloggers", "guides"]
    assert len(sections["api-docs"]) == 4
    assert len(sections["community-bloggers"]) == 2
    assert len(sections["guides"]) == 4


def test_header_is_first_line_of_first_item():
    sections = parse_documentation("# guides\nfirst\n---\nsecond")
    items = sections["guides"]

    assert items[0].content == "# guides\nfirst"
    assert items[0].start_line == 0
    assert items[1].content == "second"
    assert items[1].start_line == 3


def test_separator_right_after_header_is_content():
    sections = parse_documentation("# guides\n---\ntext\n---\nnext")
    items = sections["guides"]

    assert len(items) == 2
    assert items[0].content == "# guides\n---\ntext"


def test_consecutive_separators_do_not_create_empty_items():
    sections = parse_documentation("# guides\nfirst\n---\n---\nsecond")
    assert all(item.content.strip() for item in sections["guides"])


def test_repeated_header_appends_to_section():
    sections = parse_documentation("# guides\none\n# api-docs\n{}\n# guides\ntwo")
    assert [item.content for item in sections["guides"]] == ["# guides\none", "# guides\ntwo"]


def test_header_requires_lowercase_slug():
    sections = parse_documentation("# guides\n# Not A Section\ntext")
    assert list(sections) == ["guides"]
    assert "# Not A Section" in sections["guides"][0].content


def test_single_line_items_split_on_each_separator():
    sections = parse_documentation("# api-docs\n{A}\n---\n{B}\n---\n{C}")
    items = sections["api-docs"]

    assert [item.content for item in items] == ["# api-docs\n{A}", "{B}", "{C}"]
    assert [item.start_line for item in items] == [0, 3, 5]


def test_single_line_records_are_each_indexed():
    records = [
        json.dumps({"data": {"id": name, "attributes": {"name": name}}})
        for name in ("Ember.A", "Ember.B", "Ember.C")
    ]
    text = "# api-docs\n" + "\n---\n".join(records)

    index = build_api_index(parse_documentation(text)["api-docs"])

    assert {"ember.a", "ember.b", "ember.c"} <= set(index)


def test_separator_after_blank_line_is_content():
    sections = parse_documentation("# guides\nfirst\n---\n\n---\nsecond")
    assert [item.content for item in sections["guides"]] == ["# guides\nfirst", "\n---\nsecond"]
