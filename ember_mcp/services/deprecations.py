"""Deprecation detection and lookup.

Deprecation metadata is detected once, while the corpus is indexed, and
stored by lower-cased API name. Search results and API references then
look it up by name instead of re-analysing text.
"""

import logging
import re
from collections.abc import Mapping, Sequence

from ..engine.core.document import Item
from ..engine.core.constants import API_SECTION
from ..models.results import DeprecationInfo

logger = logging.getLogger(__name__)

DEPRECATION_MARKERS = (
    "@deprecated",
    "deprecated",
    "will be removed",
    "no longer supported",
)

_VERSION = r"v?(\d+\.\d+(?:\.\d+)?)"
_SINCE_RE = re.compile(rf"since\s+(?:ember\s+)?{_VERSION}", re.IGNORECASE)
_UNTIL_RE = re.compile(rf"(?:removed\s+in|until)\s+(?:ember\s+)?{_VERSION}", re.IGNORECASE)
_REPLACEMENT_RE = re.compile(
    r"use\s+[`'\"]?([@\w][\w.@/-]*(?:\(\))?)[`'\"]?\s+instead", re.IGNORECASE
)
_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+")
_DEPRECATION_HEADER_RE = re.compile(r"^#+\s+[Dd]eprecat\w*(?:\s+of)?[:\s]+`?([@A-Z][\w.@/-]*)`?")

_MAX_MESSAGE_LENGTH = 200


class DeprecationManager:
    """Registry of deprecated API names."""

    def __init__(self) -> None:
        self._registry: dict[str, DeprecationInfo] = {}

    def __len__(self) -> int:
        return len(self._registry)

    def analyze_content(self, name: str, content: str) -> DeprecationInfo | None:
        """Detect deprecation notices in an API description.

        Args:
            name: API element name.
            content: Free-text description.

        Returns:
            Deprecation info, or None when the text carries no deprecation
            marker.
        """
        if not content:
            return None
        lowered = content.lower()
        if not any(marker in lowered for marker in DEPRECATION_MARKERS):
            return None

        since = _SINCE_RE.search(content)
        until = _UNTIL_RE.search(content)
        replacement = _REPLACEMENT_RE.search(content)

        return DeprecationInfo(
            name=name,
            message=_notice_sentence(content),
            since=since.group(1) if since else None,
            until=until.group(1) if until else None,
            replacement=replacement.group(1) if replacement else None,
        )

    def register(self, name: str, info: DeprecationInfo) -> None:
        self._registry[name.lower()] = info

    def get(self, name: str) -> DeprecationInfo | None:
        return self._registry.get(name.lower())

    def clear(self) -> None:
        self._registry.clear()

    def check_search_result(self, title: str, content: str = "") -> DeprecationInfo | None:
        """Look up deprecation info for a search result.

        The title is matched exactly first, then against every registered
        name it contains. Content is not re-analysed.
        """
        title_lower = title.lower()
        info = self._registry.get(title_lower)
        if info is not None:
            return info
        for name, info in self._registry.items():
            if name in title_lower:
                return info
        return None

    def analyze_documentation(self, sections: Mapping[str, Sequence[Item]]) -> int:
        """Register deprecations announced by headers in guide items.

        A header such as ``## Deprecation of `Ember.Mixin` `` registers the
        named element with details read from the same item.

        Returns:
            Number of names registered.
        """
        registered = 0
        for section_name, items in sections.items():
            if section_name == API_SECTION:
                continue
            for item in items:
                for line in item.content.split("\n"):
                    match = _DEPRECATION_HEADER_RE.match(line)
                    if not match:
                        continue
                    name = match.group(1).rstrip(".")
                    if self.get(name) is not None:
                        continue
                    info = self.analyze_content(name, item.content) or DeprecationInfo(
                        name=name, message=line.lstrip("#").strip()
                    )
                    self.register(name, info)
                    registered += 1

        if registered:
            logger.info(f"Registered {registered} deprecations from guides")
        return registered


def _notice_sentence(content: str) -> str:
    """First sentence that carries a deprecation marker."""
    for sentence in _SENTENCE_SPLIT_RE.split(content.strip()):
        if any(marker in sentence.lower() for marker in DEPRECATION_MARKERS):
            return " ".join(sentence.split())[:_MAX_MESSAGE_LENGTH]
    return " ".join(content.split())[:_MAX_MESSAGE_LENGTH]
