"""Resolve compact API reference notation into versioned reference URLs.

Guides link to API items with a short notation instead of full URLs::

    [forms](cot::form)                      module reference
    [Form](struct@cot::form::Form)          item reference
    [see the form]([Form]struct@cot::form::Form)
    `[Form]<cot::form::Form>|struct`        inline code form

:func:`parse_reference` turns the notation into a :class:`LinkReference`;
:class:`LinkResolver` maps it onto ``https://docs.rs/<root>/<major>.<minor>/
<root>/<modules...>/<file>``. Anything that does not parse is left exactly as
written, so ordinary URLs and prose never break a render.
"""

from __future__ import annotations

import dataclasses as dc
import html
import re
import typing as typ
from xml.etree.ElementTree import Element

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from guide_pages._constants import (
    DEFAULT_REFERENCE_ROOT,
    EXTERNAL_LINK_REL,
    NAMESPACE_SEPARATOR,
)

from .models import ReferenceSettings

if typ.TYPE_CHECKING:
    from markdown import Markdown

    from guide_pages.versions import DocVersion

KIND_PATTERN = re.compile(r"[A-Za-z0-9_]*")
SEGMENT_PATTERN = re.compile(r"\w+")


@dc.dataclass(frozen=True, slots=True)
class LinkReference:
    """Parsed API reference.

    Attributes
    ----------
    segments : tuple[str, ...]
        Namespace path including the root, at least two entries.
    kind : str | None
        Item kind such as ``struct`` or ``fn``; ``None`` for module links.
    display : str | None
        Label override taken from a leading ``[...]``.
    """

    segments: tuple[str, ...]
    kind: str | None = None
    display: str | None = None

    @property
    def root(self) -> str:
        """Return the root namespace token."""
        return self.segments[0]

    @property
    def modules(self) -> tuple[str, ...]:
        """Return the path components between the root and the leaf."""
        return self.segments[1:-1]

    @property
    def leaf(self) -> str:
        """Return the referenced item or module name."""
        return self.segments[-1]

    @property
    def path(self) -> str:
        """Return the reference in ``root::a::Item`` form."""
        return NAMESPACE_SEPARATOR.join(self.segments)


def parse_reference(
    text: str, *, root: str = DEFAULT_REFERENCE_ROOT
) -> LinkReference | None:
    """Parse reference notation, returning ``None`` for anything else.

    Parameters
    ----------
    text : str
        Link target or inline code contents.
    root : str, optional
        Namespace token that every reference must start with.

    Returns
    -------
    LinkReference | None
        Parsed fields, or ``None`` when ``text`` is not a well-formed
        reference (callers leave such text untouched).
    """
    remainder = text.strip()
    display: str | None = None
    if remainder.startswith("["):
        closing = remainder.find("]")
        if closing <= 1:
            return None
        display = remainder[1:closing]
        remainder = remainder[closing + 1 :].lstrip()

    if remainder.startswith("<"):
        return _parse_angle_form(remainder, root=root, display=display)

    kind: str | None = None
    if "@" in remainder:
        kind, _, remainder = remainder.partition("@")
        if not KIND_PATTERN.fullmatch(kind):
            return None
    return _build_reference(remainder, root=root, kind=kind, display=display)


def _parse_angle_form(
    text: str, *, root: str, display: str | None
) -> LinkReference | None:
    """Parse ``<root::path>`` optionally followed by ``|kind``."""
    closing = text.find(">")
    if closing == -1:
        return None
    path = text[1:closing]
    suffix = text[closing + 1 :].strip()
    kind: str | None = None
    if suffix:
        if not suffix.startswith("|"):
            return None
        kind = suffix[1:].strip()
        if not KIND_PATTERN.fullmatch(kind):
            return None
    return _build_reference(path, root=root, kind=kind, display=display)


def _build_reference(
    path: str, *, root: str, kind: str | None, display: str | None
) -> LinkReference | None:
    segments = tuple(path.split(NAMESPACE_SEPARATOR))
    if len(segments) < 2 or segments[0] != root:
        return None
    if not all(SEGMENT_PATTERN.fullmatch(segment) for segment in segments):
        return None
    return LinkReference(segments=segments, kind=kind or None, display=display)


class LinkResolver:
    """Build reference URLs for one documentation version.

    The resolver holds no per-render state, so a single instance can be
    shared between concurrent renders of the same version.
    """

    def __init__(
        self, version: DocVersion, settings: ReferenceSettings | None = None
    ) -> None:
        self.version = version
        self.settings = settings or ReferenceSettings()

    def url_for(self, reference: LinkReference) -> str:
        """Return the absolute URL for an already parsed reference."""
        if reference.kind:
            leaf_file = f"{reference.kind}.{reference.leaf}.html"
        else:
            leaf_file = reference.leaf
        parts = [
            self.settings.base_url.rstrip("/"),
            reference.root,
            self.version.short,
            reference.root,
            *reference.modules,
            leaf_file,
        ]
        return "/".join(parts)

    def parse(self, target: str) -> LinkReference | None:
        """Parse ``target`` against the configured root namespace."""
        return parse_reference(target, root=self.settings.root)

    def resolve_url(self, target: str) -> str:
        """Return the reference URL for ``target`` or ``target`` unchanged."""
        reference = self.parse(target)
        if reference is None:
            return target
        return self.url_for(reference)


def resolve_url(
    target: str, version: DocVersion, settings: ReferenceSettings | None = None
) -> str:
    """Resolve ``target`` for ``version`` without keeping a resolver around."""
    return LinkResolver(version, settings).resolve_url(target)


class ReferenceLinkExtension(Extension):
    """Rewrite reference notation in links and inline code to reference URLs.

    Insert this extension into a ``markdown.Markdown`` instance so that
    ``[text](struct@cot::a::Item)`` and `` `<cot::a::Item>|struct` `` both
    render as external links to the API reference for the bound version.
    """

    def __init__(self, resolver: LinkResolver) -> None:
        super().__init__()
        self.resolver = resolver

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the reference treeprocessor on the Markdown instance."""
        processor = ReferenceLinkTreeprocessor(md, self.resolver)
        md.treeprocessors.register(processor, "guide_reference_links", 15)


class ReferenceLinkTreeprocessor(Treeprocessor):
    """Rewrite anchors and inline code that carry reference notation."""

    def __init__(self, md: Markdown, resolver: LinkResolver) -> None:
        super().__init__(md)
        self.resolver = resolver

    def run(self, root: Element) -> None:
        """Rewrite reference links in the parsed markdown tree."""
        for parent in list(root.iter()):
            if parent.tag in {"pre", "a"}:
                continue
            for index, child in enumerate(list(parent)):
                if child.tag == "a":
                    self._rewrite_anchor(child)
                elif child.tag == "code":
                    replacement = self._link_from_code(child)
                    if replacement is not None:
                        parent[index] = replacement

    def _rewrite_anchor(self, element: Element) -> None:
        href = element.get("href")
        if not href:
            return
        reference = self.resolver.parse(href)
        if reference is None:
            return
        _mark_external(element, self.resolver.url_for(reference))
        if reference.display is not None:
            for nested in list(element):
                element.remove(nested)
            element.text = reference.display

    def _link_from_code(self, element: Element) -> Element | None:
        """Return an anchor replacing ``element`` or None when it is plain code."""
        # Inline code text arrives with &, < and > already entity-escaped.
        source = html.unescape(element.text or "")
        if "<" not in source:
            return None
        reference = self.resolver.parse(source)
        if reference is None:
            return None
        link = Element("a")
        _mark_external(link, self.resolver.url_for(reference))
        link.text = reference.display or reference.path
        link.tail = element.tail
        return link


def _mark_external(element: Element, url: str) -> None:
    element.set("href", url)
    element.set("target", "_blank")
    element.set("rel", EXTERNAL_LINK_REL)


__all__ = [
    "LinkReference",
    "LinkResolver",
    "ReferenceLinkExtension",
    "ReferenceLinkTreeprocessor",
    "parse_reference",
    "resolve_url",
]
