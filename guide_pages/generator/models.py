"""Shared dataclasses used by the guide rendering pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from guide_pages._constants import DEFAULT_REFERENCE_BASE_URL, DEFAULT_REFERENCE_ROOT
from guide_pages.sections import Anchorizer, HeadingRecord, Section


@dc.dataclass(frozen=True, slots=True)
class ReferenceSettings:
    """Where API reference links point.

    Attributes
    ----------
    root : str
        Root namespace token that marks a reference (``cot`` in ``cot::a::B``).
    base_url : str
        Reference site origin; the crate name and version follow it.
    """

    root: str = DEFAULT_REFERENCE_ROOT
    base_url: str = DEFAULT_REFERENCE_BASE_URL


@dc.dataclass(slots=True)
class RenderContext:
    """Mutable state owned by exactly one render pass.

    Attributes
    ----------
    anchorizer : Anchorizer
        Tracks anchors already handed out in this document.
    headings : list[HeadingRecord]
        Headings recorded in document order, excluding level-1 titles.
    """

    anchorizer: Anchorizer = dc.field(default_factory=Anchorizer)
    headings: list[HeadingRecord] = dc.field(default_factory=list)


@dc.dataclass(frozen=True, slots=True)
class RenderResult:
    """HTML produced by one render pass plus the headings it saw."""

    html: str
    headings: tuple[HeadingRecord, ...]
    sections: tuple[Section, ...]


@dc.dataclass(frozen=True, slots=True)
class Document:
    """A rendered guide ready to be served.

    Attributes
    ----------
    identifier : str
        Stable slug, also the source file stem.
    title : str
        Title taken from the front matter.
    html : str
        Rendered Markdown body.
    sections : tuple[Section, ...]
        Table-of-contents tree built from the body headings.
    metadata : dict[str, Any]
        Front matter keys other than ``title``.
    """

    identifier: str
    title: str
    html: str
    sections: tuple[Section, ...]
    metadata: dict[str, typ.Any] = dc.field(default_factory=dict)


__all__ = ["Document", "ReferenceSettings", "RenderContext", "RenderResult"]
