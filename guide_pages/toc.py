"""Render a section tree as a nested table-of-contents list."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .sections import Section

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


class TocRenderer:
    """Render sections through the ``toc.jinja`` template."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or TEMPLATES_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("toc.jinja")

    def render(self, sections: cabc.Sequence[Section]) -> str:
        """Return ``<ul class="toc">`` markup, or an empty string for no sections."""
        return self.template.render(sections=list(sections)).strip()


def render_toc(sections: cabc.Sequence[Section]) -> str:
    """Render ``sections`` with the packaged template."""
    return TocRenderer().render(sections)


__all__ = ["TocRenderer", "render_toc"]
