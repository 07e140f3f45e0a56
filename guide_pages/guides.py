"""Load every guide of a version and compute category navigation.

:class:`GuideRegistry` reads ``<source_dir>/<guide>.md`` for each guide a
:class:`~guide_pages.config.VersionConfig` declares, renders them with a
shared :class:`~guide_pages.generator.DocumentRenderer`, and exposes the
category groupings and previous/next links a page template needs.

Typical usage pairs the loader with a site config:

>>> from pathlib import Path
>>> from guide_pages.config import load_site_config
>>> from guide_pages.generator import DocumentRenderer
>>> from guide_pages.guides import GuideRegistry
>>> site = load_site_config(Path("guides.yaml"))  # doctest: +SKIP
>>> version = site.get_version("latest")  # doctest: +SKIP
>>> renderer = DocumentRenderer(version.version, reference=site.reference)  # doctest: +SKIP
>>> registry = GuideRegistry.build(version, renderer)  # doctest: +SKIP
>>> prev, nxt = registry.prev_next("templates")  # doctest: +SKIP
>>> prev.identifier  # doctest: +SKIP
'introduction'

Each document renders with its own context, so a failure in one guide never
affects the others. With ``workers > 1`` guides render on a thread pool;
ordering always follows the configuration.
"""

from __future__ import annotations

import concurrent.futures as cf
import dataclasses as dc
import logging
import typing as typ

from .front_matter import GuideError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import VersionConfig
    from .generator import Document, DocumentRenderer

logger = logging.getLogger(__name__)


class GuideBuildError(RuntimeError):
    """Raised when one or more guides of a version failed to render.

    Attributes
    ----------
    failures : dict[str, Exception]
        Guide identifier mapped to the error that stopped it.
    """

    def __init__(self, failures: dict[str, Exception]) -> None:
        self.failures = failures
        names = ", ".join(sorted(failures))
        super().__init__(f"Failed to render guides: {names}")


@dc.dataclass(frozen=True, slots=True)
class PageLink:
    """Navigation entry pointing at one guide."""

    identifier: str
    title: str


@dc.dataclass(frozen=True, slots=True)
class PageCategory:
    """Guides grouped under a category title, in navigation order."""

    title: str
    guides: tuple[PageLink, ...]


class GuideRegistry:
    """Rendered guides of one version, indexed by identifier."""

    def __init__(
        self, categories: cabc.Sequence[PageCategory], documents: dict[str, Document]
    ) -> None:
        self.categories: tuple[PageCategory, ...] = tuple(categories)
        self._documents = dict(documents)

    @classmethod
    def build(
        cls,
        version_config: VersionConfig,
        renderer: DocumentRenderer,
        *,
        workers: int = 1,
        strict: bool = True,
    ) -> GuideRegistry:
        """Render every configured guide and group them into categories.

        Parameters
        ----------
        version_config : VersionConfig
            Source directory and category declaration for the version.
        renderer : DocumentRenderer
            Renderer bound to the same version.
        workers : int, optional
            Number of threads used for rendering; ``1`` renders inline.
        strict : bool, optional
            When ``True`` (default) any failed guide raises
            :class:`GuideBuildError` once all guides were attempted. When
            ``False`` failed guides are logged and left out of navigation.

        Returns
        -------
        GuideRegistry
            Registry holding the rendered documents.

        Raises
        ------
        GuideBuildError
            If ``strict`` is set and at least one guide failed.
        """
        identifiers = list(dict.fromkeys(version_config.guide_ids()))
        documents, failures = _render_all(version_config, renderer, identifiers, workers)
        if failures:
            for identifier, error in failures.items():
                logger.error("Guide %r (%s) failed: %s", identifier, version_config.key, error)
            if strict:
                raise GuideBuildError(failures)

        categories = [
            PageCategory(
                title=category.title,
                guides=tuple(
                    PageLink(identifier=guide, title=documents[guide].title)
                    for guide in category.guides
                    if guide in documents
                ),
            )
            for category in version_config.categories
        ]
        logger.debug(
            "Built %d guides in %d categories for %s",
            len(documents),
            len(categories),
            version_config.key,
        )
        return cls(categories, documents)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._documents

    def __len__(self) -> int:
        return len(self._documents)

    def get(self, identifier: str) -> Document:
        """Return the rendered guide for ``identifier``.

        Raises
        ------
        KeyError
            If no such guide was rendered.
        """
        try:
            return self._documents[identifier]
        except KeyError as exc:
            available = ", ".join(self._documents)
            msg = f"Unknown guide '{identifier}'. Known guides: {available}"
            raise KeyError(msg) from exc

    def links(self) -> list[PageLink]:
        """Return every link across categories in navigation order."""
        return [link for category in self.categories for link in category.guides]

    def prev_next(self, identifier: str) -> tuple[PageLink | None, PageLink | None]:
        """Return the guides immediately before and after ``identifier``.

        Returns ``(None, None)`` when the identifier is not part of the
        navigation.
        """
        previous: PageLink | None = None
        found = False
        for link in self.links():
            if found:
                return previous, link
            if link.identifier == identifier:
                found = True
            else:
                previous = link
        if not found:
            return None, None
        return previous, None


def _render_all(
    version_config: VersionConfig,
    renderer: DocumentRenderer,
    identifiers: list[str],
    workers: int,
) -> tuple[dict[str, Document], dict[str, Exception]]:
    """Render ``identifiers`` and split results into documents and failures."""
    documents: dict[str, Document] = {}
    failures: dict[str, Exception] = {}

    def _render(identifier: str) -> Document:
        path = version_config.source_dir / f"{identifier}.md"
        logger.debug("Rendering guide %s", path)
        source = path.read_text(encoding="utf-8")
        return renderer.render_document(identifier, source)

    if workers <= 1:
        for identifier in identifiers:
            try:
                documents[identifier] = _render(identifier)
            except (GuideError, OSError, UnicodeDecodeError) as exc:
                failures[identifier] = exc
        return documents, failures

    with cf.ThreadPoolExecutor(max_workers=workers) as pool:
        futures = {identifier: pool.submit(_render, identifier) for identifier in identifiers}
        for identifier, future in futures.items():
            try:
                documents[identifier] = future.result()
            except (GuideError, OSError, UnicodeDecodeError) as exc:
                failures[identifier] = exc
    return documents, failures


__all__ = ["GuideBuildError", "GuideRegistry", "PageCategory", "PageLink"]
