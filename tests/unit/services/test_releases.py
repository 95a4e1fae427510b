"""Tests for GitHub release parsing and version info."""

import httpx
import pytest

from ember_mcp.engine.core.document import Item
from ember_mcp.services.releases import (
    ReleaseService,
    fallback_version_info,
    format_release_info,
    parse_release_body,
)

RELEASE_BODY = """\
Ember 6.1 brings new template features.

## Features
- [#20001](https://github.com/emberjs/ember.js/pull/20001) Add `array` helper improvements
- [BUGFIX] Fix tracked property invalidation

### Bug Fixes
- Fix router transition leak

## Breaking Changes
- Remove deprecated `Ember.Mixin` support

## Notes
- Untagged note under an unknown header
"""

RELEASES = [
    {"tag_name": "v6.2.0-beta.1", "prerelease": True, "body": ""},
    {
        "tag_name": "v6.1.0",
        "name": "v6.1.0",
        "published_at": "2024-12-01T12:00:00Z",
        "html_url": "https://github.com/emberjs/ember.js/releases/tag/v6.1.0",
        "body": RELEASE_BODY,
    },
    {"tag_name": "v6.0.0", "published_at": "2024-11-01T12:00:00Z", "body": ""},
    {"tag_name": "v5.12.0", "draft": True, "body": ""},
    {"tag_name": "v5.11.0", "published_at": "2024-09-01T12:00:00Z", "body": ""},
]


def _service(handler) -> ReleaseService:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ReleaseService(releases_url="https://github.test/releases", client=client)


def _ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json=RELEASES)


def test_parse_release_body_categories():
    parsed = parse_release_body(RELEASE_BODY)

    assert parsed["features"] == ["Add `array` helper improvements"]
    assert parsed["bug_fixes"] == [
        "Fix tracked property invalidation",
        "Fix router transition leak",
    ]
    assert parsed["breaking_changes"] == ["Remove deprecated `Ember.Mixin` support"]


def test_parse_release_body_caps_each_category():
    body = "## Features\n" + "\n".join(f"- feature {i}" for i in range(15))
    assert len(parse_release_body(body)["features"]) == 10


def test_parse_empty_body():
    assert parse_release_body("") == {"features": [], "bug_fixes": [], "breaking_changes": []}


def test_format_release_info():
    info = format_release_info(RELEASES[1], "6.1.0")

    assert info.current == "6.1.0"
    assert info.release_date == "2024-12-01"
    assert info.description == "Ember 6.1 brings new template features."
    assert info.blog_post == "https://blog.emberjs.com/ember-6-1-released/"
    assert info.migration_guide.endswith("https://guides.emberjs.com/v6.1.0/upgrading/")
    assert "deprecations" in info.links


@pytest.mark.asyncio
async def test_latest_stable_release():
    info = await _service(_ok).get_version_info()

    assert info.current == "6.1.0"
    assert [r.version for r in info.recent_releases] == ["6.0.0", "5.11.0"]
    assert info.recent_releases[0].date == "2024-11-01"


@pytest.mark.asyncio
async def test_requested_version_with_v_prefix():
    info = await _service(_ok).get_version_info("v6.0.0")

    assert info.current == "6.0.0"
    assert info.release_date == "2024-11-01"
    assert info.description == "Ember.js 6.0.0"


@pytest.mark.asyncio
async def test_unknown_version():
    info = await _service(_ok).get_version_info("3.28.0")

    assert info.current == "3.28.0"
    assert "not found in recent releases" in info.description
    assert info.note is not None
    assert info.release_notes_url.endswith("/tag/v3.28.0")


@pytest.mark.asyncio
async def test_github_failure_uses_fallback_version():
    items = [Item(content='{"data": {"id": "ember-6.1.0-Ember.Component"}}', start_line=0)]
    service = _service(lambda request: httpx.Response(403))

    info = await service.get_version_info(api_items=items)

    assert info.current == "6.1.0"
    assert info.description == "Unable to fetch release information from GitHub."
    assert info.note is not None


@pytest.mark.asyncio
async def test_non_list_response_uses_fallback():
    service = _service(lambda request: httpx.Response(200, json={"message": "rate limited"}))
    info = await service.get_version_info("6.1.0")
    assert info.current == "6.1.0"
    assert info.description.startswith("Unable to fetch")


def test_fallback_without_markers():
    info = fallback_version_info()

    assert info.current == "unknown"
    assert info.release_notes_url is None
    assert info.migration_guide.endswith("https://guides.emberjs.com/release/upgrading/")
