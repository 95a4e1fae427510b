"""Corpus parser: split the aggregated docs text into sections and items.

The aggregated corpus is a flat text file where top-level section headers
(``# api-docs``, ``# community-bloggers``, ``# guides``...) open a section and
lines of three or more hyphens separate items inside it::

    # api-docs
    {"data": {...}}
    ----------
    {"data": {...}}
"""

import logging

from .constants import ITEM_SEPARATOR_RE, SECTION_HEADER_RE
from .document import Item

logger = logging.getLogger(__name__)


def parse_documentation(text: str) -> dict[str, list[Item]]:
    """Parse raw corpus text into a section name -> items mapping.

    The header line is kept as the first line of the section's first item.
    A separator splits once a non-blank line other than the header has
    accumulated. A separator right after a header (or another separator)
    is kept as content rather than producing an empty item. Text before the
    first header is discarded. A section header that appears again appends to
    the existing section.

    Args:
        text: Raw corpus text.

    Returns:
        Mapping of section name to items in source order. Empty input gives
        an empty mapping.
    """
    sections: dict[str, list[Item]] = {}
    section_name: str | None = None
    buffer: list[str] = []
    has_content = False
    start_line = 0

    def flush() -> None:
        if section_name is not None and buffer:
            sections.setdefault(section_name, []).append(
                Item(content="\n".join(buffer), start_line=start_line)
            )

    for i, line in enumerate(text.split("\n")):
        if SECTION_HEADER_RE.match(line):
            flush()
            section_name = line[2:].strip()
            start_line = i
            buffer = [line]
            has_content = False
        elif section_name is None:
            continue
        elif ITEM_SEPARATOR_RE.match(line):
            if has_content:
                flush()
                start_line = i + 1
                buffer = []
                has_content = False
            else:
                buffer.append(line)
        else:
            buffer.append(line)
            has_content = has_content or bool(line.strip())

    flush()

    logger.debug(
        f"Parsed {sum(len(items) for items in sections.values())} items "
        f"in {len(sections)} sections"
    )
    return sections
