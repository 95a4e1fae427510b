"""Canonical URL generation for documentation results, API entries and releases."""

import re
from urllib.parse import quote

from ..config import settings
from ..engine.core.api_index import decode_record
from ..engine.core.constants import API_SECTION, COMMUNITY_SECTION

_SLUG_STRIP_RE = re.compile(r"[^a-z0-9\s-]")
_SLUG_SPACE_RE = re.compile(r"[\s_-]+")


def slugify(title: str) -> str:
    """Lower-case a title and collapse it into a hyphenated path segment."""
    slug = _SLUG_STRIP_RE.sub("", title.lower())
    return _SLUG_SPACE_RE.sub("-", slug).strip("-")


def generate_url(section_name: str, title: str) -> str:
    """Return the canonical URL for a search result.

    API results link to the API docs root and community articles to the
    guides root; other guide items get a slug of their title appended.
    """
    if section_name == API_SECTION:
        return settings.api_docs_base
    if section_name == COMMUNITY_SECTION:
        return settings.guides_base
    slug = slugify(title)
    return f"{settings.guides_base}/{slug}/" if slug else settings.guides_base


def generate_api_url(name: str, api_type: str | None = None) -> str:
    """Return the API docs URL for a class or module."""
    kind = "modules" if api_type == "module" else "classes"
    return f"{settings.api_docs_base}/release/{kind}/{quote(name, safe='@')}"


def generate_api_link(content: str) -> str | None:
    """Return the API docs URL for an item embedding an API record, if any."""
    if '"data"' not in content:
        return None
    data = decode_record(content)
    if data is None:
        return None
    attrs = data.get("attributes")
    if not isinstance(attrs, dict):
        return None
    name = attrs.get("name") or attrs.get("shortname")
    if not isinstance(name, str) or not name.strip():
        return None
    api_type = data.get("type")
    return generate_api_url(name, api_type if isinstance(api_type, str) else None)


def _minor(version: str) -> str:
    parts = version.lstrip("v").split(".")
    return ".".join(parts[:2]) if len(parts) >= 2 else version.lstrip("v")


def generate_upgrade_guide_url(version: str | None = None) -> str:
    if not version:
        return f"{settings.guides_base}/upgrading/"
    return f"https://guides.emberjs.com/v{_minor(version)}.0/upgrading/"


def generate_release_notes_url(version: str) -> str:
    return f"https://github.com/emberjs/ember.js/releases/tag/v{version.lstrip('v')}"


def generate_blog_post_url(version: str) -> str:
    """Return the release announcement post for a minor version."""
    slug = _minor(version).replace(".", "-")
    return f"{settings.blog_base}/ember-{slug}-released/"


def generate_version_links() -> dict[str, str]:
    return {
        "releases": "https://github.com/emberjs/ember.js/releases",
        "blog": f"{settings.blog_base}/tags/releases/",
        "upgrade_guide": f"{settings.guides_base}/upgrading/",
        "deprecations": "https://deprecations.emberjs.com/",
        "changelog": "https://github.com/emberjs/ember.js/blob/main/CHANGELOG.md",
    }
