"""API entry indexer for the ``api-docs`` section.

Each item of the API section embeds a JSON:API style record::

    {"data": {"id": "Ember.Component", "type": "class",
              "attributes": {"name": "Ember.Component", "module": "@ember/component",
                             "description": "...", "methods": [...], ...}}}

Records are decoded best-effort: anything that does not decode, or lacks a
usable name or an ``attributes`` object, is skipped without aborting the
indexing pass.
"""

import json
import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, Protocol

from .document import ApiEntry, ApiMethod, ApiParam, ApiProperty, ApiReturn, Item

logger = logging.getLogger(__name__)


class DeprecationRegistry(Protocol):
    """Collaborator that tags API entries as deprecated while indexing."""

    def analyze_content(self, name: str, content: str) -> Any: ...

    def register(self, name: str, info: Any) -> None: ...


# ---------------------------------------------------------------------------
# Guarded accessors
# ---------------------------------------------------------------------------


def _mapping(value: Any) -> Mapping[str, Any] | None:
    return value if isinstance(value, Mapping) else None


def _str(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


def _records(value: Any) -> list[Mapping[str, Any]]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, Mapping)]


def _parse_params(value: Any) -> tuple[ApiParam, ...]:
    params = []
    for raw in _records(value):
        name = _str(raw.get("name"))
        if name is None:
            continue
        params.append(
            ApiParam(
                name=name,
                type=_str(raw.get("type")),
                description=_str(raw.get("description")) or "",
                optional=bool(raw.get("optional", False)),
            )
        )
    return tuple(params)


def _parse_methods(value: Any) -> tuple[ApiMethod, ...]:
    methods = []
    for raw in _records(value):
        name = _str(raw.get("name"))
        if name is None:
            continue
        returns = _mapping(raw.get("return"))
        methods.append(
            ApiMethod(
                name=name,
                description=_str(raw.get("description")) or "",
                params=_parse_params(raw.get("params")),
                returns=(
                    ApiReturn(
                        type=_str(returns.get("type")),
                        description=_str(returns.get("description")) or "",
                    )
                    if returns is not None
                    else None
                ),
                static=bool(raw.get("static", False)),
                deprecated=bool(raw.get("deprecated", False)),
            )
        )
    return tuple(methods)


def _parse_properties(value: Any) -> tuple[ApiProperty, ...]:
    properties = []
    for raw in _records(value):
        name = _str(raw.get("name"))
        if name is None:
            continue
        properties.append(
            ApiProperty(
                name=name,
                type=_str(raw.get("type")),
                description=_str(raw.get("description")) or "",
            )
        )
    return tuple(properties)


# ---------------------------------------------------------------------------
# Record decoding
# ---------------------------------------------------------------------------


def extract_record_json(content: str) -> str | None:
    """Carve the substring from the first ``{`` to the last ``}``."""
    content = content.strip()
    start = content.find("{")
    if start == -1:
        return None
    end = content.rfind("}")
    if end <= start:
        return None
    return content[start : end + 1]


def decode_record(content: str) -> Mapping[str, Any] | None:
    """Decode the embedded record and return its ``data`` object, if any."""
    raw = extract_record_json(content)
    if raw is None:
        return None
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.debug(f"Skipping malformed API record: {e}")
        return None
    root = _mapping(parsed)
    return _mapping(root.get("data")) if root is not None else None


def parse_api_record(content: str) -> ApiEntry | None:
    """Parse one API item into an entry.

    Args:
        content: Raw item text.

    Returns:
        The entry, or None if the record is malformed, has no ``attributes``
        object, or has neither a ``name`` nor a ``shortname``.
    """
    data = decode_record(content)
    if data is None:
        return None

    attrs = _mapping(data.get("attributes"))
    if attrs is None:
        return None

    name = _str(attrs.get("name")) or _str(attrs.get("shortname"))
    if name is None:
        return None

    return ApiEntry(
        name=name,
        type=_str(data.get("type")),
        module=_str(attrs.get("module")),
        description=_str(attrs.get("description")) or "",
        file=_str(attrs.get("file")),
        line=_int(attrs.get("line")),
        extends=_str(attrs.get("extends")),
        methods=_parse_methods(attrs.get("methods")),
        properties=_parse_properties(attrs.get("properties")),
        raw=MappingProxyType(dict(data)),
    )


def lookup_keys(entry: ApiEntry) -> list[str]:
    """Return the lower-cased keys an entry is indexed under.

    Primary name first, then module path, then the last dotted segment of
    the name (``Ember.Component`` -> ``component``).
    """
    keys = [entry.name.lower()]
    if entry.module:
        keys.append(entry.module.lower())
    if "." in entry.name:
        keys.append(entry.name.rsplit(".", 1)[-1].lower())
    return keys


def build_api_index(
    items: Iterable[Item],
    deprecations: DeprecationRegistry | None = None,
) -> dict[str, ApiEntry]:
    """Build the lookup map for the API section.

    Later items overwrite earlier ones on key collisions, so the final
    mapping follows source order.

    Args:
        items: Items of the API section.
        deprecations: Optional collaborator notified of each entry's
            name and description.

    Returns:
        Lower-cased key -> entry. Aliases share the same entry object.
    """
    index: dict[str, ApiEntry] = {}
    skipped = 0

    for item in items:
        entry = parse_api_record(item.content)
        if entry is None:
            skipped += 1
            continue

        if deprecations is not None:
            info = deprecations.analyze_content(entry.name, entry.description)
            if info:
                deprecations.register(entry.name, info)

        for key in lookup_keys(entry):
            index[key] = entry

    if skipped:
        logger.info(f"Skipped {skipped} API items without a usable record")
    logger.info(f"Indexed {len(index)} API keys")
    return index
