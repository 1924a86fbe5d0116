r"""Classify documentation markdown into the sections the page template shows.

Pages may carry a ``## Description`` section and a ``## Architecture`` section
whose body is further divided by ``### Arch``, ``### JSON`` and ``### Text``
headings. :func:`split_sections` routes each line into the matching bucket so
the template can present the blocks separately.

Example
-------
>>> from docsgen.markdown_parser import split_sections
>>> buckets = split_sections("## Description\nHello\n## Architecture\n### JSON\n{}\n")
>>> buckets.description, buckets.architecture_json
('Hello\n', '{}\n')
"""

from __future__ import annotations

import dataclasses as dc
import enum

from ._text import split_lines

DESCRIPTION_HEADING = "## description"
ARCHITECTURE_HEADING = "## architecture"
SECTION_PREFIX = "## "
TITLE_PREFIX = "# "


class Section(enum.Enum):
    """Top-level section the splitter is currently inside."""

    NONE = enum.auto()
    DESCRIPTION = enum.auto()
    ARCHITECTURE = enum.auto()


class ArchitectureMode(enum.Enum):
    """Sub-section selected by a ``###`` heading inside ``## Architecture``."""

    NONE = enum.auto()
    ARCH = enum.auto()
    JSON = enum.auto()
    TEXT = enum.auto()


ARCHITECTURE_HEADINGS: dict[str, ArchitectureMode] = {
    "### arch": ArchitectureMode.ARCH,
    "### json": ArchitectureMode.JSON,
    "### text": ArchitectureMode.TEXT,
}


@dc.dataclass(slots=True)
class SectionBuckets:
    """Markdown routed into each page section.

    Attributes
    ----------
    full : str
        The untouched input when no structured section had content,
        otherwise empty.
    description : str
        Body of ``## Description``.
    architecture : str
        Body of ``## Architecture`` outside the JSON and Text sub-sections
        (including ``### Arch``).
    architecture_json : str
        Body of ``### JSON`` under ``## Architecture``.
    architecture_text : str
        Body of ``### Text`` under ``## Architecture``.
    """

    full: str = ""
    description: str = ""
    architecture: str = ""
    architecture_json: str = ""
    architecture_text: str = ""

    @property
    def is_fallback(self) -> bool:
        """Return ``True`` when the splitter found nothing structured."""
        return bool(self.full)


def split_sections(markdown: str) -> SectionBuckets:
    """Split expanded markdown into description and architecture buckets.

    Parameters
    ----------
    markdown : str
        Markdown with includes already expanded.

    Returns
    -------
    SectionBuckets
        Populated buckets. When the description and every architecture
        bucket are blank, only ``full`` is set, holding ``markdown`` as given.
    """
    buckets: dict[str, list[str]] = {
        "description": [],
        "architecture": [],
        "architecture_json": [],
        "architecture_text": [],
    }
    current = Section.NONE
    mode = ArchitectureMode.NONE
    for line in split_lines(markdown):
        lowered = line.strip().lower()
        if lowered == DESCRIPTION_HEADING:
            current, mode = Section.DESCRIPTION, ArchitectureMode.NONE
            continue
        if lowered == ARCHITECTURE_HEADING:
            current, mode = Section.ARCHITECTURE, ArchitectureMode.NONE
            continue
        if current is Section.ARCHITECTURE and lowered in ARCHITECTURE_HEADINGS:
            mode = ARCHITECTURE_HEADINGS[lowered]
            continue
        if lowered.startswith(SECTION_PREFIX):
            current, mode = Section.NONE, ArchitectureMode.NONE

        bucket = _bucket_for(current, mode)
        if bucket is not None:
            buckets[bucket].append(f"{line}\n")

    result = SectionBuckets(**{key: "".join(lines) for key, lines in buckets.items()})
    structured = (
        result.description,
        result.architecture,
        result.architecture_json,
        result.architecture_text,
    )
    if not any(text.strip() for text in structured):
        return SectionBuckets(full=markdown)
    return result


def _bucket_for(current: Section, mode: ArchitectureMode) -> str | None:
    """Return the bucket name lines belong to in the given state."""
    match current:
        case Section.DESCRIPTION:
            return "description"
        case Section.ARCHITECTURE:
            match mode:
                case ArchitectureMode.JSON:
                    return "architecture_json"
                case ArchitectureMode.TEXT:
                    return "architecture_text"
                case ArchitectureMode.NONE | ArchitectureMode.ARCH:
                    return "architecture"
        case Section.NONE:
            return None
    return None


def extract_title(markdown: str) -> str | None:
    """Return the text of the first ``# `` heading, or ``None`` if there is none."""
    for line in split_lines(markdown):
        trimmed = line.strip()
        if trimmed.startswith(TITLE_PREFIX):
            while trimmed.startswith(TITLE_PREFIX):
                trimmed = trimmed[len(TITLE_PREFIX) :]
            return trimmed.strip()
    return None


__all__ = [
    "ArchitectureMode",
    "Section",
    "SectionBuckets",
    "extract_title",
    "split_sections",
]
