"""Collect headings and attach anchor links while Markdown renders."""

from __future__ import annotations

import html
import re
import typing as typ
from xml.etree.ElementTree import Element

from markdown.extensions import Extension
from markdown.extensions.toc import run_postprocessors, unescape
from markdown.treeprocessors import Treeprocessor

from guide_pages._constants import ANCHOR_LABEL_TEMPLATE, ANCHOR_LINK_CLASS
from guide_pages.sections import HeadingRecord

if typ.TYPE_CHECKING:
    from markdown import Markdown

    from .models import RenderContext

HEADING_TAGS = {f"h{level}": level for level in range(1, 7)}
TITLE_LEVEL = 1
TAG_PATTERN = re.compile(r"<[^>]+>")


class HeadingCollectorExtension(Extension):
    """Register :class:`HeadingTreeprocessor` bound to one render context."""

    def __init__(self, context: RenderContext) -> None:
        super().__init__()
        self.context = context

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Run after inline processing so heading text is final."""
        processor = HeadingTreeprocessor(md, self.context)
        md.treeprocessors.register(processor, "guide_headings", 5)


class HeadingTreeprocessor(Treeprocessor):
    """Assign anchors to headings and record them for the section tree.

    Level-1 headings are the document title: they render unchanged and are
    not recorded. Every other heading receives an ``id`` and a leading empty
    ``a.anchor-link`` whose ``aria-label`` names the section.
    """

    def __init__(self, md: Markdown, context: RenderContext) -> None:
        super().__init__(md)
        self.context = context

    def run(self, root: Element) -> None:
        """Visit headings in document order."""
        for element in list(root.iter()):
            level = HEADING_TAGS.get(element.tag) if isinstance(element.tag, str) else None
            if level is None or level == TITLE_LEVEL:
                continue
            title = self._heading_text(element)
            anchor = self.context.anchorizer.anchorize(title)
            self.context.headings.append(HeadingRecord(level, title, anchor))
            self._decorate(element, title, anchor)

    def _heading_text(self, element: Element) -> str:
        """Return the plain heading text with stashed HTML and escapes resolved."""
        raw = run_postprocessors("".join(element.itertext()), self.md)
        return html.unescape(unescape(TAG_PATTERN.sub("", raw))).strip()

    @staticmethod
    def _decorate(element: Element, title: str, anchor: str) -> None:
        element.set("id", anchor)
        link = Element(
            "a",
            {
                "class": ANCHOR_LINK_CLASS,
                "href": f"#{anchor}",
                "aria-label": ANCHOR_LABEL_TEMPLATE.format(title=title),
            },
        )
        link.tail = element.text
        element.text = None
        element.insert(0, link)


__all__ = ["HeadingCollectorExtension", "HeadingTreeprocessor"]
