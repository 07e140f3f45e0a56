"""Typed dataclasses describing guide site configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path  # noqa: TC003 - used for runtime type metadata

from guide_pages._constants import LATEST_ALIAS, MASTER_VERSION
from guide_pages.generator.models import ReferenceSettings
from guide_pages.versions import DocVersion  # noqa: TC001


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class CategoryConfig:
    """Named group of guides in navigation order."""

    title: str
    guides: list[str] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class VersionConfig:
    """Guides published for one documentation version.

    Attributes
    ----------
    key : str
        Identifier used in URLs and on disk, e.g. ``"v0.5"``.
    version : DocVersion
        Parsed version used for reference links.
    source_dir : Path
        Directory holding ``<guide>.md`` files for this version.
    categories : list[CategoryConfig]
        Categories in declaration order.
    """

    key: str
    version: DocVersion
    source_dir: Path
    categories: list[CategoryConfig]

    def guide_ids(self) -> list[str]:
        """Return every guide identifier in navigation order."""
        return [guide for category in self.categories for guide in category.guides]


@dc.dataclass(slots=True)
class SiteConfig:
    """Collection of version configs alongside shared reference settings."""

    versions: dict[str, VersionConfig]
    latest: str
    reference: ReferenceSettings = dc.field(default_factory=ReferenceSettings)
    pygments_style: str = "monokai"

    def get_version(self, key: str | None) -> VersionConfig:
        """Return the requested version, resolving ``latest``/``master`` aliases."""
        if key in {None, "", LATEST_ALIAS, MASTER_VERSION}:
            return self.versions[self.latest]
        try:
            return self.versions[key]
        except KeyError as exc:
            available = ", ".join(self.versions)
            msg = f"Unknown version '{key}'. Known versions: {available}"
            raise KeyError(msg) from exc


__all__ = ["CategoryConfig", "SiteConfig", "SiteConfigError", "VersionConfig"]
