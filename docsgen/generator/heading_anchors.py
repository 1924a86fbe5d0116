"""Markdown extension adding in-page anchors to well-known section headings."""

from __future__ import annotations

import typing as typ

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

SECTION_ANCHORS: dict[str, str] = {
    "Description": "description",
    "Architecture": "architecture",
}


class HeadingAnchorExtension(Extension):
    """Give ``<h2>`` headings of known sections a stable ``id``.

    Page templates link to ``#description`` and ``#architecture``; the ids
    are only set on headings whose entire text is the section name and that
    do not already carry one.
    """

    def __init__(self, anchors: cabc.Mapping[str, str] | None = None) -> None:
        super().__init__()
        self.anchors = dict(SECTION_ANCHORS if anchors is None else anchors)

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the heading-anchor treeprocessor on the Markdown instance."""
        processor = HeadingAnchorTreeprocessor(md, self.anchors)
        md.treeprocessors.register(processor, "docsgen_heading_anchors", 15)


class HeadingAnchorTreeprocessor(Treeprocessor):
    """Set ``id`` attributes on matching second-level headings."""

    def __init__(self, md: Markdown, anchors: cabc.Mapping[str, str]) -> None:
        super().__init__(md)
        self.anchors = anchors

    def run(self, root: Element) -> Element:
        """Attach anchors to plain-text ``<h2>`` elements in the parsed tree."""
        for element in root.iter("h2"):
            if element.get("id") or len(element):
                continue
            anchor = self.anchors.get(element.text or "")
            if anchor:
                element.set("id", anchor)
        return root


__all__ = [
    "SECTION_ANCHORS",
    "HeadingAnchorExtension",
    "HeadingAnchorTreeprocessor",
]
