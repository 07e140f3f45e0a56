"""Utilities for rendering guide Markdown into HTML and section trees."""

from .headings import HeadingCollectorExtension
from .link_rewriter import (
    LinkReference,
    LinkResolver,
    ReferenceLinkExtension,
    parse_reference,
    resolve_url,
)
from .models import Document, ReferenceSettings, RenderContext, RenderResult
from .renderer import DocumentRenderer
from .tables import GuideTableExtension

__all__ = [
    "Document",
    "DocumentRenderer",
    "GuideTableExtension",
    "HeadingCollectorExtension",
    "LinkReference",
    "LinkResolver",
    "ReferenceLinkExtension",
    "ReferenceSettings",
    "RenderContext",
    "RenderResult",
    "parse_reference",
    "resolve_url",
]
