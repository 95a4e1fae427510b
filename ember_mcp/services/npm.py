"""npm registry client."""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from ..config import settings
from ..errors import PackageNotFoundError, RegistryError
from ..models.results import PackageInfo, VersionComparison

logger = logging.getLogger(__name__)


def _dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def format_author(author: Any) -> str | None:
    """Render an npm author field (string or object) as one line."""
    if not author:
        return None
    if isinstance(author, str):
        return author
    if not isinstance(author, dict):
        return None

    result = author.get("name") or ""
    if author.get("email"):
        result += f" <{author['email']}>"
    if author.get("url"):
        result += f" ({author['url']})"
    return result.strip() or None


def summarize_package(raw: dict[str, Any]) -> PackageInfo:
    """Condense a registry document into the fields shown to users.

    Per-version fields (license, keywords, dependency maps, engines) are
    read from the ``latest`` dist-tag's version entry.
    """
    dist_tags = {k: str(v) for k, v in _dict(raw.get("dist-tags")).items()}
    latest = dist_tags.get("latest")
    latest_data = _dict(_dict(raw.get("versions")).get(latest)) if latest else {}
    times = _dict(raw.get("time"))

    repository = _dict(raw.get("repository")).get("url") or _dict(
        latest_data.get("repository")
    ).get("url")
    maintainers = [m for m in raw.get("maintainers") or [] if isinstance(m, dict)]
    keywords = [k for k in latest_data.get("keywords") or [] if isinstance(k, str)]
    license_name = latest_data.get("license")

    return PackageInfo(
        name=raw.get("name") or "",
        description=raw.get("description") or "No description available",
        latest_version=latest or "Unknown",
        dist_tags=dist_tags,
        homepage=raw.get("homepage") or latest_data.get("homepage"),
        repository=repository,
        license=license_name if isinstance(license_name, str) else "Unknown",
        author=format_author(raw.get("author") or latest_data.get("author")),
        maintainers=maintainers,
        keywords=keywords,
        dependencies=_dict(latest_data.get("dependencies")),
        dev_dependencies=_dict(latest_data.get("devDependencies")),
        peer_dependencies=_dict(latest_data.get("peerDependencies")),
        engines=_dict(latest_data.get("engines")),
        last_published=times.get(latest) if latest else None,
        created=times.get("created"),
        modified=times.get("modified"),
    )


class NpmService:
    """Reads package documents from the npm registry."""

    def __init__(
        self,
        registry_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self.registry_url = (registry_url or settings.npm_registry_url).rstrip("/")
        self.client = client
        self.timeout = timeout if timeout is not None else settings.http_timeout

    def package_url(self, package_name: str) -> str:
        # Scoped names keep their "@" but encode the slash
        return f"{self.registry_url}/{quote(package_name, safe='@')}"

    async def _get(self, url: str) -> httpx.Response:
        if self.client is not None:
            return await self.client.get(url)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.get(url)

    async def get_package_info(self, package_name: str) -> dict[str, Any]:
        """Fetch the raw registry document for a package.

        Raises:
            PackageNotFoundError: If the registry answers 404.
            RegistryError: On any other failure.
        """
        try:
            response = await self._get(self.package_url(package_name))
        except httpx.RequestError as e:
            raise RegistryError(f"Error fetching npm package info: {e}") from e

        if response.status_code == 404:
            raise PackageNotFoundError(package_name)
        if not response.is_success:
            raise RegistryError(
                f"Failed to fetch package info: HTTP {response.status_code} "
                f"{response.reason_phrase}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise RegistryError(f"Invalid registry response for {package_name}: {e}") from e
        if not isinstance(data, dict):
            raise RegistryError(f"Invalid registry response for {package_name}")
        return data

    async def get_latest_version(self, package_name: str) -> str | None:
        raw = await self.get_package_info(package_name)
        return _dict(raw.get("dist-tags")).get("latest")

    async def get_versions(self, package_name: str) -> list[str]:
        raw = await self.get_package_info(package_name)
        return sorted(_dict(raw.get("versions")))

    async def get_version_comparison(
        self, package_name: str, current_version: str
    ) -> VersionComparison:
        """Compare a version in use against the registry's latest.

        Args:
            package_name: npm package name.
            current_version: Version currently used.

        Returns:
            The comparison. ``needs_update`` is simply "not the latest".
        """
        raw = await self.get_package_info(package_name)
        dist_tags = {k: str(v) for k, v in _dict(raw.get("dist-tags")).items()}
        latest = dist_tags.get("latest")
        times = _dict(raw.get("time"))
        is_latest = current_version == latest

        return VersionComparison(
            package_name=package_name,
            current_version=current_version,
            latest_version=latest,
            is_latest=is_latest,
            needs_update=not is_latest,
            dist_tags=dist_tags,
            available_versions_count=len(_dict(raw.get("versions"))),
            release_date=times.get(latest) if latest else None,
            current_version_release_date=times.get(current_version),
        )
