"""Render guide Markdown into HTML, headings, and syntax-highlighted code."""

from __future__ import annotations

import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from guide_pages.front_matter import split_front_matter
from guide_pages.sections import build_section_tree

from .headings import HeadingCollectorExtension
from .link_rewriter import LinkResolver, ReferenceLinkExtension
from .models import Document, ReferenceSettings, RenderContext, RenderResult
from .tables import GuideTableExtension

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown.extensions import Extension

    from guide_pages.versions import DocVersion

FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
CODEHILITE_CLASS = "codehilite"
LANGUAGE_CLASS_PREFIX = "language-"
DEFAULT_CODE_LANGUAGE = "text"


class LanguageHtmlFormatter(HtmlFormatter):
    """Pygments formatter that records the block language on its wrapper div.

    Python-Markdown's ``codehilite`` instantiates the formatter once per code
    block and passes ``lang_str`` (``language-<name>``), for fenced and
    indented blocks alike.
    """

    def __init__(self, lang_str: str = "", **options: typ.Any) -> None:
        super().__init__(**options)
        language = lang_str.removeprefix(LANGUAGE_CLASS_PREFIX)
        self.language = language or DEFAULT_CODE_LANGUAGE

    def _wrap_div(
        self, inner: cabc.Iterable[tuple[int, str]]
    ) -> cabc.Iterator[tuple[int, str]]:
        language = escape(self.language, quote=True)
        yield 0, f'<div class="{self.cssclass}" data-language="{language}">'
        yield from inner
        yield 0, "</div>\n"


class DocumentRenderer:
    """Render guides for one documentation version with consistent styling.

    The renderer itself is stateless between calls: every :meth:`render`
    builds a fresh :class:`RenderContext` and ``Markdown`` instance, so one
    renderer may be shared by worker threads.
    """

    def __init__(
        self,
        version: DocVersion,
        *,
        reference: ReferenceSettings | None = None,
        pygments_style: str = "monokai",
    ) -> None:
        """Initialize a renderer bound to ``version``.

        Parameters
        ----------
        version : DocVersion
            Version used when resolving API reference links.
        reference : ReferenceSettings, optional
            Root namespace and site for reference links; defaults to
            ``cot`` on docs.rs.
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults
            to ``"monokai"``.
        """
        self.version = version
        self.pygments_style = pygments_style
        self.resolver = LinkResolver(version, reference)
        self._formatter = HtmlFormatter(style=pygments_style, cssclass=CODEHILITE_CLASS)

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(f".{CODEHILITE_CLASS}")

    def render(self, text: str) -> RenderResult:
        """Render Markdown ``text`` and build its section tree.

        Parameters
        ----------
        text : str
            Markdown body without front matter.

        Returns
        -------
        RenderResult
            HTML string, the flat heading list, and the nested sections.
        """
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return RenderResult(html="", headings=(), sections=())

        context = RenderContext()
        md = self._build_markdown(context)
        html = md.convert(normalized)
        headings = tuple(context.headings)
        return RenderResult(
            html=html,
            headings=headings,
            sections=tuple(build_section_tree(headings)),
        )

    def render_document(self, identifier: str, source: str) -> Document:
        """Render a full guide source, front matter included, into a Document.

        Raises
        ------
        MissingFrontMatterError
            If ``source`` has no front matter block.
        InvalidMetadataError
            If the front matter cannot be parsed or lacks a title.
        """
        front_matter, body = split_front_matter(source)
        result = self.render(body)
        return Document(
            identifier=identifier,
            title=front_matter.title,
            html=result.html,
            sections=result.sections,
            metadata=dict(front_matter.extra),
        )

    def _build_markdown(self, context: RenderContext) -> Markdown:
        extensions: list[Extension | str] = [
            "fenced_code",
            "codehilite",
            "smarty",
            "sane_lists",
            GuideTableExtension(),
            HeadingCollectorExtension(context),
            ReferenceLinkExtension(self.resolver),
        ]
        return Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": CODEHILITE_CLASS,
                    "lang_prefix": LANGUAGE_CLASS_PREFIX,
                    "pygments_style": self.pygments_style,
                    "pygments_formatter": LanguageHtmlFormatter,
                }
            },
            output_format="html",
        )

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            label = language or ""
            return f"{fence}{label}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


__all__ = ["DocumentRenderer", "LanguageHtmlFormatter"]
