"""Tests for canonical URL generation."""

import json

import pytest

from ember_mcp.services.url_builder import (
    generate_api_link,
    generate_api_url,
    generate_blog_post_url,
    generate_release_notes_url,
    generate_upgrade_guide_url,
    generate_url,
    slugify,
)
from tests.conftest import COMPONENT_RECORD, GLIMMER_RECORD


@pytest.mark.parametrize(
    "title,slug",
    [
        ("Understanding Tracked Properties", "understanding-tracked-properties"),
        ("What's new in Octane?", "whats-new-in-octane"),
        ("  snake_case and--dashes  ", "snakecase-and-dashes"),
        ("!!!", ""),
    ],
)
def test_slugify(title, slug):
    assert slugify(title) == slug


def test_generate_url_by_section():
    assert generate_url("api-docs", "Ember.Component") == "https://api.emberjs.com/ember"
    assert generate_url("community-bloggers", "Post") == "https://guides.emberjs.com/release"
    assert (
        generate_url("guides", "Routing Basics")
        == "https://guides.emberjs.com/release/routing-basics/"
    )
    assert generate_url("guides", "???") == "https://guides.emberjs.com/release"


def test_generate_api_url():
    assert (
        generate_api_url("Ember.Component")
        == "https://api.emberjs.com/ember/release/classes/Ember.Component"
    )
    assert (
        generate_api_url("@ember/routing", "module")
        == "https://api.emberjs.com/ember/release/modules/@ember%2Frouting"
    )


def test_generate_api_link_from_record():
    assert generate_api_link(json.dumps(COMPONENT_RECORD)).endswith("/classes/Ember.Component")
    assert generate_api_link(json.dumps(GLIMMER_RECORD)).endswith("/modules/@glimmer%2Fcomponent")
    assert generate_api_link("plain guide text") is None
    assert generate_api_link('{"data": "broken') is None


def test_release_urls():
    assert generate_release_notes_url("v6.1.0").endswith("/releases/tag/v6.1.0")
    assert generate_blog_post_url("6.1.2") == "https://blog.emberjs.com/ember-6-1-released/"
    assert generate_upgrade_guide_url("6.1.2") == "https://guides.emberjs.com/v6.1.0/upgrading/"
    assert generate_upgrade_guide_url() == "https://guides.emberjs.com/release/upgrading/"
