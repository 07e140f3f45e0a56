"""Render versioned Markdown guides for documentation sites.

This package turns guide sources (YAML front matter plus Markdown) into HTML
bodies, nested section trees for tables of contents, and API reference links
resolved against the guide's documentation version. The ``guides`` console
script renders a whole version to disk.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``DocumentRenderer``: Markdown renderer bound to a documentation version.
- ``GuideRegistry``: Rendered guides with category and prev/next navigation.

Examples
--------
>>> from guide_pages import DocumentRenderer, parse_version
>>> renderer = DocumentRenderer(parse_version("v0.5"))
>>> renderer.render("## Intro").sections[0].anchor
'intro'
"""

from __future__ import annotations

from .cli import app, main
from .generator import DocumentRenderer
from .guides import GuideRegistry
from .versions import parse_version

__all__ = ["DocumentRenderer", "GuideRegistry", "app", "main", "parse_version"]
