"""Table rendering tweaks layered over Python-Markdown's ``tables`` extension.

Tables get the ``table`` CSS class, and a table written with only a header
row renders without a ``<tbody>`` (upstream would emit an empty body row).
"""

from __future__ import annotations

import typing as typ

from markdown.extensions.tables import TableExtension, TableProcessor
from markdown.treeprocessors import Treeprocessor

from guide_pages._constants import TABLE_CLASS

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from xml.etree.ElementTree import Element

    from markdown import Markdown


class HeaderOnlyTableProcessor(TableProcessor):
    """Table block processor that leaves the body empty for header-only tables."""

    def _build_empty_row(  # noqa: PLR6301 - overrides upstream hook
        self, parent: Element, align: cabc.Sequence[str | None]
    ) -> None:
        return None


class GuideTableExtension(TableExtension):
    """Drop-in replacement for ``markdown.extensions.tables``."""

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Swap in the table processor and register the class treeprocessor."""
        super().extendMarkdown(md)
        processor = HeaderOnlyTableProcessor(md.parser, self.getConfigs())
        md.parser.blockprocessors.register(processor, "table", 75)
        md.treeprocessors.register(TableClassTreeprocessor(md), "guide_tables", 6)


class TableClassTreeprocessor(Treeprocessor):
    """Add the table class and drop body groups that hold no rows."""

    def run(self, root: Element) -> None:
        """Decorate every table in the tree."""
        for table in list(root.iter("table")):
            classes = (table.get("class") or "").split()
            if TABLE_CLASS not in classes:
                classes.insert(0, TABLE_CLASS)
            table.set("class", " ".join(classes))
            for group in list(table):
                if group.tag == "tbody" and len(group) == 0:
                    table.remove(group)


__all__ = [
    "GuideTableExtension",
    "HeaderOnlyTableProcessor",
    "TableClassTreeprocessor",
]
