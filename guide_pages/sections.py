r"""Turn a flat heading stream into a nested section tree.

Markdown has no explicit nesting: a ``####`` heading that follows a ``##``
heading simply belongs to it. The renderer records every heading as a
:class:`HeadingRecord` in document order and :func:`build_section_tree`
folds that list into :class:`Section` objects using a stack seeded with a
synthetic level-0 root.

Example
-------
>>> from guide_pages.sections import HeadingRecord, build_section_tree
>>> tree = build_section_tree(
...     [
...         HeadingRecord(2, "Setup", "setup"),
...         HeadingRecord(4, "Linux", "linux"),
...         HeadingRecord(3, "Windows", "windows"),
...     ]
... )
>>> [child.title for child in tree[0].children]
['Linux', 'Windows']
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import re

ROOT_LEVEL = 0
MAX_HEADING_LEVEL = 6
_ANCHOR_STRIP_PATTERN = re.compile(r"[^\w\- ]")


@dc.dataclass(frozen=True, slots=True)
class HeadingRecord:
    """Heading observed while rendering a single document.

    Attributes
    ----------
    level : int
        Heading depth, ``1`` through ``6``.
    title : str
        Plain-text heading content.
    anchor : str
        Fragment identifier assigned to the heading element.
    """

    level: int
    title: str
    anchor: str

    def __post_init__(self) -> None:
        if not 1 <= self.level <= MAX_HEADING_LEVEL:
            msg = f"Heading level must be between 1 and 6, got {self.level}."
            raise ValueError(msg)


@dc.dataclass(slots=True)
class Section:
    """Node of the table-of-contents tree.

    Attributes
    ----------
    level : int
        Heading depth; only the internal root uses ``0``.
    title : str
        Heading text shown in navigation.
    anchor : str
        Fragment identifier used to link to the heading.
    children : list[Section]
        Nested sections, all with a greater level than this one.
    """

    level: int
    title: str
    anchor: str
    children: list[Section] = dc.field(default_factory=list)

    @classmethod
    def from_record(cls, record: HeadingRecord) -> Section:
        """Create an open section for ``record`` with no children yet."""
        return cls(level=record.level, title=record.title, anchor=record.anchor)


class Anchorizer:
    """Produce URL-safe anchors that are unique within one document.

    The first heading with a given slug keeps it; later duplicates receive
    ``-1``, ``-2`` and so on. Instances carry state, so each render pass
    needs its own.
    """

    def __init__(self) -> None:
        self._used: set[str] = set()

    def anchorize(self, title: str) -> str:
        """Return a unique anchor for ``title`` and remember it."""
        base = slugify(title)
        candidate = base
        suffix = 0
        while candidate in self._used:
            suffix += 1
            candidate = f"{base}-{suffix}"
        self._used.add(candidate)
        return candidate


def slugify(title: str) -> str:
    """Lowercase ``title``, drop punctuation and join words with hyphens."""
    stripped = _ANCHOR_STRIP_PATTERN.sub("", title.strip().lower())
    return stripped.replace(" ", "-")


def build_section_tree(records: cabc.Iterable[HeadingRecord]) -> list[Section]:
    """Nest ``records`` into a list of top-level sections.

    Parameters
    ----------
    records : Iterable[HeadingRecord]
        Headings in document order.

    Returns
    -------
    list[Section]
        Children of the synthetic root. Sections that a later heading cannot
        nest under (same or deeper level) are closed before it opens, so
        level jumps such as ``2 -> 4 -> 3`` nest both deeper headings under
        the level-2 section as siblings.
    """
    # The root sits at level 0 and records are 1..6, so it is never popped.
    stack: list[Section] = [Section(level=ROOT_LEVEL, title="", anchor="")]
    for record in records:
        while stack[-1].level >= record.level:
            _close_top(stack)
        stack.append(Section.from_record(record))

    while len(stack) > 1:
        _close_top(stack)
    return stack[0].children


def _close_top(stack: list[Section]) -> None:
    """Pop the innermost open section and attach it to its parent."""
    finished = stack.pop()
    stack[-1].children.append(finished)


def iter_sections(sections: cabc.Iterable[Section]) -> cabc.Iterator[Section]:
    """Yield ``sections`` and their descendants depth-first in document order."""
    for section in sections:
        yield section
        yield from iter_sections(section.children)


__all__ = [
    "Anchorizer",
    "HeadingRecord",
    "Section",
    "build_section_tree",
    "iter_sections",
    "slugify",
]
