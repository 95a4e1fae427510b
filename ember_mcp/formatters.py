"""Markdown rendering of tool results.

Every tool answers with a single Markdown text block; these functions turn
the result models into that text.
"""

from datetime import datetime

from .engine.scoring.constants import MAX_METHODS_DISPLAYED, MAX_PROPERTIES_DISPLAYED
from .models.results import (
    ApiReference,
    BestPractice,
    DeprecationInfo,
    PackageInfo,
    SearchResult,
    VersionComparison,
    VersionInfo,
)


def _date(value: str | None) -> str | None:
    """ISO timestamp -> ``YYYY-MM-DD``; unparseable values pass through."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return value


def format_deprecation(info: DeprecationInfo) -> str:
    parts = [f"**Deprecated:** {info.message}"]
    if info.since:
        parts.append(f"(since {info.since})")
    if info.until:
        parts.append(f"(removal planned in {info.until})")
    text = " ".join(parts)
    if info.replacement:
        text += f"\nUse `{info.replacement}` instead."
    return text


def format_search_results(results: list[SearchResult], query: str | None = None) -> str:
    """Render ranked search results."""
    header = f'# Search Results for "{query}"' if query else "# Search Results"
    lines = [header, ""]

    for i, result in enumerate(results, 1):
        lines.append(f"## {i}. {result.title}")
        lines.append("")
        lines.append(
            f"**Category:** {result.category} | **Relevance:** {result.score:.1f} "
            f"({result.search_type})"
        )
        if result.deprecation:
            lines.append("")
            lines.append(format_deprecation(result.deprecation))
        lines.append("")
        lines.append(result.excerpt)
        lines.append("")
        lines.append(f"**Link:** {result.url}")
        if result.api_link:
            lines.append(f"**API Reference:** {result.api_link}")
        lines.append("")
        lines.append("---")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def _first_line(text: str) -> str:
    stripped = text.strip()
    return stripped.splitlines()[0] if stripped else ""


def _format_method(method) -> list[str]:
    prefix = "static " if method.static else ""
    params = ", ".join(
        f"{p.name}{'?' if p.optional else ''}" + (f": {p.type}" if p.type else "")
        for p in method.params
    )
    signature = f"`{prefix}{method.name}({params})`"
    if method.return_type:
        signature += f" → `{method.return_type}`"
    if method.deprecated:
        signature += " *(deprecated)*"

    lines = [f"- {signature}"]
    summary = _first_line(method.description)
    if summary:
        lines.append(f"  {summary}")
    return lines


def format_api_reference(ref: ApiReference) -> str:
    """Render one API reference, capping methods and properties at ten each."""
    lines = [f"# {ref.name}", ""]

    meta = []
    if ref.type:
        meta.append(f"**Type:** {ref.type}")
    if ref.module:
        meta.append(f"**Module:** `{ref.module}`")
    if ref.extends:
        meta.append(f"**Extends:** {ref.extends}")
    if meta:
        lines.append(" | ".join(meta))
        lines.append("")

    if ref.deprecation:
        lines.append(format_deprecation(ref.deprecation))
        lines.append("")

    if ref.description:
        lines.append(ref.description.strip())
        lines.append("")

    if ref.methods:
        lines.append(f"## Methods ({len(ref.methods)})")
        lines.append("")
        for method in ref.methods[:MAX_METHODS_DISPLAYED]:
            lines.extend(_format_method(method))
        if len(ref.methods) > MAX_METHODS_DISPLAYED:
            lines.append(f"- ...and {len(ref.methods) - MAX_METHODS_DISPLAYED} more")
        lines.append("")

    if ref.properties:
        lines.append(f"## Properties ({len(ref.properties)})")
        lines.append("")
        for prop in ref.properties[:MAX_PROPERTIES_DISPLAYED]:
            type_suffix = f": `{prop.type}`" if prop.type else ""
            description = _first_line(prop.description)
            entry = f"- `{prop.name}`{type_suffix}"
            lines.append(f"{entry} - {description}" if description else entry)
        if len(ref.properties) > MAX_PROPERTIES_DISPLAYED:
            lines.append(f"- ...and {len(ref.properties) - MAX_PROPERTIES_DISPLAYED} more")
        lines.append("")

    if ref.file:
        source = f"{ref.file}:{ref.line}" if ref.line is not None else ref.file
        lines.append(f"**Source:** `{source}`")
    if ref.api_url:
        lines.append(f"**API Documentation:** {ref.api_url}")

    return "\n".join(lines).rstrip() + "\n"


def format_best_practices(practices: list[BestPractice], topic: str) -> str:
    """Render best practices for a topic."""
    lines = [f"# Best Practices: {topic}", ""]

    for practice in practices:
        lines.append(f"## {practice.title}")
        lines.append("")
        lines.append(practice.content)
        lines.append("")

        if practice.examples:
            lines.append("### Examples")
            lines.append("")
            for example in practice.examples:
                lines.append(example)
                lines.append("")

        if practice.anti_patterns:
            lines.append("### Anti-patterns to Avoid")
            lines.append("")
            for anti_pattern in practice.anti_patterns:
                lines.append(f"- {anti_pattern}")
            lines.append("")

        if practice.references:
            lines.append("**References:** " + ", ".join(practice.references))
            lines.append("")

        lines.append("---")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def format_version_info(info: VersionInfo) -> str:
    """Render release information."""
    lines = [f"# Ember.js {info.current}", ""]

    if info.release_date:
        lines.append(f"**Released:** {info.release_date}")
        lines.append("")
    if info.description:
        lines.append(info.description)
        lines.append("")

    for heading, entries in (
        ("New Features", info.features),
        ("Bug Fixes", info.bug_fixes),
        ("Breaking Changes", info.breaking_changes),
    ):
        if entries:
            lines.append(f"## {heading}")
            lines.append("")
            lines.extend(f"- {entry}" for entry in entries)
            lines.append("")

    if info.recent_releases:
        lines.append("## Recent Releases")
        lines.append("")
        for release in info.recent_releases:
            date = f" ({release.date})" if release.date else ""
            url = f" - {release.url}" if release.url else ""
            lines.append(f"- {release.version}{date}{url}")
        lines.append("")

    if info.migration_guide:
        lines.append(info.migration_guide)
        lines.append("")
    if info.release_notes_url:
        lines.append(f"**Release Notes:** {info.release_notes_url}")
    if info.blog_post:
        lines.append(f"**Blog Post:** {info.blog_post}")

    if info.links:
        lines.append("")
        lines.append("## Useful Links")
        lines.append("")
        for name, url in info.links.items():
            lines.append(f"- {name.replace('_', ' ').title()}: {url}")

    if info.note:
        lines.append("")
        lines.append(f"*Note: {info.note}*")

    return "\n".join(lines).rstrip() + "\n"


def format_package_info(info: PackageInfo) -> str:
    """Render npm package metadata."""
    lines = [f"# {info.name}", ""]
    lines.append(f"**Description:** {info.description}")
    lines.append("")
    lines.append(f"**Latest Version:** {info.latest_version}")
    lines.append("")

    if info.dist_tags:
        lines.append("**Distribution Tags:**")
        lines.extend(f"  - {tag}: {version}" for tag, version in info.dist_tags.items())
        lines.append("")

    lines.append(f"**License:** {info.license}")
    if info.author:
        lines.append(f"**Author:** {info.author}")
    if info.homepage:
        lines.append(f"**Homepage:** {info.homepage}")
    if info.repository:
        lines.append(f"**Repository:** {info.repository}")

    if info.keywords:
        lines.append("")
        lines.append(f"**Keywords:** {', '.join(info.keywords)}")

    counts = (
        (len(info.dependencies), "runtime dependencies"),
        (len(info.peer_dependencies), "peer dependencies"),
        (len(info.dev_dependencies), "dev dependencies"),
    )
    if any(count for count, _ in counts):
        lines.append("")
        lines.append("**Dependencies:**")
        lines.extend(f"  - {count} {label}" for count, label in counts if count)

    if info.engines:
        lines.append("")
        lines.append("**Engine Requirements:**")
        lines.extend(f"  - {engine}: {version}" for engine, version in info.engines.items())

    created = _date(info.created)
    published = _date(info.last_published)
    if created or published:
        lines.append("")
    if created:
        lines.append(f"**Created:** {created}")
    if published:
        lines.append(f"**Last Published:** {published}")

    if info.maintainers:
        lines.append("")
        lines.append(f"**Maintainers:** {len(info.maintainers)} maintainer(s)")

    return "\n".join(lines).rstrip() + "\n"


def format_version_comparison(comparison: VersionComparison) -> str:
    """Render a current-vs-latest comparison."""
    lines = [f"# Version Comparison: {comparison.package_name}", ""]
    lines.append(f"**Current Version:** {comparison.current_version}")
    lines.append(f"**Latest Version:** {comparison.latest_version or 'Unknown'}")
    lines.append("")

    if comparison.is_latest:
        lines.append("**Status:** You are using the latest version!")
    else:
        lines.append("**Status:** An update is available.")
    lines.append("")

    if comparison.dist_tags:
        lines.append("**Available Tags:**")
        for tag, version in comparison.dist_tags.items():
            current = " (current)" if version == comparison.current_version else ""
            lines.append(f"  - {tag}: {version}{current}")
        lines.append("")

    current_date = _date(comparison.current_version_release_date)
    latest_date = _date(comparison.release_date)
    if current_date:
        lines.append(f"**Current Version Released:** {current_date}")
    if latest_date:
        lines.append(f"**Latest Version Released:** {latest_date}")

    lines.append("")
    lines.append(f"**Total Available Versions:** {comparison.available_versions_count}")

    if comparison.needs_update and comparison.latest_version:
        lines.append("")
        lines.append(
            f"**Recommendation:** Consider updating to version {comparison.latest_version}. "
            "Use `get_npm_package_info` to see more details about the latest version."
        )

    return "\n".join(lines).rstrip() + "\n"
