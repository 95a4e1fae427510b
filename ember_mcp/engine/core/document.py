"""Document data structures for the documentation engine.

This module contains the core data structures for representing the parsed
corpus: items grouped into named sections, API entries extracted from the
API section, and the index object that owns them.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class Item:
    """One discrete unit of content within a section.

    Attributes:
        content: Raw text of the item (separator lines excluded)
        start_line: 0-indexed line in the source where the item starts.
            Metadata only; ordering is the position in the section list.
    """

    content: str
    start_line: int


@dataclass(frozen=True)
class ApiParam:
    """A single documented method parameter."""

    name: str
    type: str | None = None
    description: str = ""
    optional: bool = False


@dataclass(frozen=True)
class ApiReturn:
    """Documented return value of a method."""

    type: str | None = None
    description: str = ""


@dataclass(frozen=True)
class ApiMethod:
    """A method descriptor from an API record."""

    name: str
    description: str = ""
    params: tuple[ApiParam, ...] = ()
    returns: ApiReturn | None = None
    static: bool = False
    deprecated: bool = False


@dataclass(frozen=True)
class ApiProperty:
    """A property descriptor from an API record."""

    name: str
    type: str | None = None
    description: str = ""


@dataclass(frozen=True)
class ApiEntry:
    """A documented API element (class, module, namespace...).

    Attributes:
        name: Primary name, e.g. ``Ember.Component`` or ``@glimmer/component``
        type: Record kind from the source (``class``, ``module``, ...)
        module: Module path the element belongs to
        description: Free-text description
        file: Source file the element is declared in
        line: Line in ``file``
        extends: Name of the parent class (not resolved to an entry)
        methods: Method descriptors in source order
        properties: Property descriptors in source order
        raw: The decoded ``data`` object, read-only
    """

    name: str
    type: str | None = None
    module: str | None = None
    description: str = ""
    file: str | None = None
    line: int | None = None
    extends: str | None = None
    methods: tuple[ApiMethod, ...] = ()
    properties: tuple[ApiProperty, ...] = ()
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class DocumentationIndex:
    """Index of the loaded documentation corpus.

    Built once per load and never mutated afterwards; a reload builds a new
    index and swaps the reference held by the service.

    Attributes:
        sections: Section name -> items in source order
        api_index: Lower-cased lookup key -> API entry. Several keys may
            point at the same entry object.
        total_chars: Character count of the raw corpus
    """

    sections: Mapping[str, tuple[Item, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    api_index: Mapping[str, ApiEntry] = field(default_factory=lambda: MappingProxyType({}))
    total_chars: int = 0

    @property
    def item_count(self) -> int:
        return sum(len(items) for items in self.sections.values())

    @property
    def api_entry_count(self) -> int:
        """Number of distinct entries (aliases counted once)."""
        return len({id(entry) for entry in self.api_index.values()})

    def items_in(self, section_names: list[str]) -> list[tuple[str, Item]]:
        """Return (section_name, item) pairs for the given sections, in order."""
        return [
            (name, item)
            for name in section_names
            for item in self.sections.get(name, ())
        ]
