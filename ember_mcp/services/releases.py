"""Ember release information from GitHub releases.

Release bodies are parsed into features, bug fixes and breaking changes.
When GitHub is unreachable the version is recovered from the corpus's API
section (``ember-X.Y.Z`` markers) and only static links are returned.
"""

import logging
import re
from collections.abc import Sequence
from typing import Any

import httpx

from ..config import settings
from ..engine.core.document import Item
from ..models.results import RecentRelease, VersionInfo
from .url_builder import (
    generate_blog_post_url,
    generate_release_notes_url,
    generate_upgrade_guide_url,
    generate_version_links,
)

logger = logging.getLogger(__name__)

MAX_RECENT_RELEASES = 3
MAX_ITEMS_PER_CATEGORY = 10

_HEADER_RE = re.compile(r"^#{1,6}\s*(.+?)\s*#*$")
_BULLET_RE = re.compile(r"^\s*[-*+]\s+(.+)$")
_TAG_RE = re.compile(r"\[(FEATURE|ENHANCEMENT|BUGFIX|BREAKING)\]", re.IGNORECASE)
_PR_LINK_RE = re.compile(r"\[#\d+\]\([^)]*\)\s*")
_FALLBACK_VERSION_RE = re.compile(r"ember-(\d+\.\d+\.\d+)", re.IGNORECASE)

_TAG_BUCKETS = {
    "feature": "features",
    "enhancement": "features",
    "bugfix": "bug_fixes",
    "breaking": "breaking_changes",
}


def _bucket_for_header(header: str) -> str | None:
    header = header.lower()
    if "breaking" in header:
        return "breaking_changes"
    if "bug" in header or "fix" in header:
        return "bug_fixes"
    if "feature" in header or "enhancement" in header or "added" in header:
        return "features"
    return None


def parse_release_body(body: str) -> dict[str, list[str]]:
    """Split a release body into features, bug fixes and breaking changes.

    A bullet is categorised by its ``[FEATURE]``/``[BUGFIX]``/``[BREAKING]``
    tag when it has one, otherwise by the nearest preceding header.

    Args:
        body: Markdown release notes.

    Returns:
        Mapping with ``features``, ``bug_fixes`` and ``breaking_changes``,
        each capped at ten entries.
    """
    buckets: dict[str, list[str]] = {"features": [], "bug_fixes": [], "breaking_changes": []}
    current: str | None = None

    for line in (body or "").splitlines():
        header = _HEADER_RE.match(line)
        if header:
            current = _bucket_for_header(header.group(1))
            continue

        bullet = _BULLET_RE.match(line)
        if not bullet:
            continue

        text = _PR_LINK_RE.sub("", bullet.group(1)).strip()
        tag = _TAG_RE.search(text)
        bucket = _TAG_BUCKETS[tag.group(1).lower()] if tag else current
        if bucket is None:
            continue

        text = _TAG_RE.sub("", text).strip()
        if text and len(buckets[bucket]) < MAX_ITEMS_PER_CATEGORY:
            buckets[bucket].append(text)

    return buckets


def _description(release: dict[str, Any], version: str) -> str:
    body = release.get("body") or ""
    for paragraph in body.split("\n\n"):
        text = paragraph.strip()
        if text and not text.startswith(("#", "-", "*", "+")):
            return " ".join(text.split())[:300]
    name = release.get("name")
    if isinstance(name, str) and name.strip():
        return name.strip()
    return f"Ember.js {version}"


def _strip_v(tag: str) -> str:
    return tag[1:] if tag.startswith("v") else tag


def format_release_info(
    release: dict[str, Any],
    version: str,
    recent: Sequence[dict[str, Any]] = (),
) -> VersionInfo:
    """Build version info from a GitHub release object."""
    parsed = parse_release_body(release.get("body") or "")
    published = release.get("published_at")

    return VersionInfo(
        current=version,
        release_date=published[:10] if isinstance(published, str) else None,
        description=_description(release, version),
        features=parsed["features"],
        bug_fixes=parsed["bug_fixes"],
        breaking_changes=parsed["breaking_changes"],
        release_notes_url=release.get("html_url") or generate_release_notes_url(version),
        migration_guide=f"For migration guides, see {generate_upgrade_guide_url(version)}",
        blog_post=generate_blog_post_url(version),
        links=generate_version_links(),
        recent_releases=[
            RecentRelease(
                version=_strip_v(str(r.get("tag_name") or "")),
                date=r["published_at"][:10] if isinstance(r.get("published_at"), str) else None,
                url=r.get("html_url"),
            )
            for r in recent
        ],
    )


def fallback_version_info(
    version: str | None = None,
    api_items: Sequence[Item] = (),
) -> VersionInfo:
    """Version info when GitHub cannot be reached.

    Without a requested version, the first ``ember-X.Y.Z`` marker in the
    API section is reported as current.
    """
    current = version or "unknown"
    if not version:
        for item in api_items:
            match = _FALLBACK_VERSION_RE.search(item.content)
            if match:
                current = match.group(1)
                break

    return VersionInfo(
        current=current,
        description="Unable to fetch release information from GitHub.",
        migration_guide=f"For migration guides, see {generate_upgrade_guide_url(version)}",
        release_notes_url=generate_release_notes_url(version) if version else None,
        links=generate_version_links(),
        note=(
            "Release information is currently unavailable. "
            "Please check the links below for detailed version information."
        ),
    )


class ReleaseService:
    """Reads Ember releases from the GitHub API."""

    def __init__(
        self,
        releases_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self.releases_url = releases_url or settings.github_releases_url
        self.client = client
        self.timeout = timeout if timeout is not None else settings.http_timeout

    async def _get(self) -> httpx.Response:
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "ember-docs-mcp",
        }
        if self.client is not None:
            return await self.client.get(self.releases_url, headers=headers)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.get(self.releases_url, headers=headers)

    async def fetch_stable_releases(self) -> list[dict[str, Any]] | None:
        """Fetch non-draft, non-prerelease releases, newest first.

        Returns:
            The releases, or None when the request fails.
        """
        try:
            response = await self._get()
        except httpx.RequestError as e:
            logger.warning(f"Failed to fetch releases: {e}")
            return None

        if not response.is_success:
            logger.warning(f"Failed to fetch releases: HTTP {response.status_code}")
            return None

        try:
            releases = response.json()
        except ValueError as e:
            logger.warning(f"Invalid releases response: {e}")
            return None
        if not isinstance(releases, list):
            return None

        return [
            r
            for r in releases
            if isinstance(r, dict) and not r.get("prerelease") and not r.get("draft")
        ]

    async def get_version_info(
        self,
        version: str | None = None,
        api_items: Sequence[Item] = (),
    ) -> VersionInfo:
        """Describe a release, or the latest stable release.

        Args:
            version: Version to describe (``6.1.0`` or ``v6.1.0``). Latest
                stable when omitted.
            api_items: API section items, used for the offline fallback.

        Returns:
            Version info. Never raises for network or data problems.
        """
        releases = await self.fetch_stable_releases()
        if not releases:
            return fallback_version_info(version, api_items)

        if version:
            wanted = _strip_v(version)
            for release in releases:
                if release.get("tag_name") in (f"v{wanted}", wanted):
                    return format_release_info(release, wanted)

            return VersionInfo(
                current=wanted,
                description=f"Version {wanted} not found in recent releases",
                migration_guide=f"For migration guides, see {generate_upgrade_guide_url(wanted)}",
                release_notes_url=generate_release_notes_url(wanted),
                links=generate_version_links(),
                note=(
                    "Version not found in recent GitHub releases. It may be an older "
                    "version or the version number may be incorrect."
                ),
            )

        latest = releases[0]
        return format_release_info(
            latest,
            _strip_v(str(latest.get("tag_name") or "")),
            releases[1 : 1 + MAX_RECENT_RELEASES],
        )
