"""Load guide site configuration YAML into typed dataclasses."""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from guide_pages._constants import (
    DEFAULT_REFERENCE_BASE_URL,
    DEFAULT_REFERENCE_ROOT,
    LATEST_ALIAS,
    MASTER_VERSION,
)
from guide_pages.generator.models import ReferenceSettings
from guide_pages.versions import InvalidVersionError, parse_version

from .models import CategoryConfig, SiteConfig, SiteConfigError, VersionConfig

logger = logging.getLogger(__name__)

DEFAULT_GUIDE_DIR = "guide"
VERSION_ALIASES = frozenset({MASTER_VERSION, LATEST_ALIAS})


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing versions and guide categories.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``guides.yaml``). Relative ``source_dir`` entries resolve against the
        file's directory.

    Returns
    -------
    SiteConfig
        Parsed configuration with versions in declaration order.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If no versions are defined, a version key cannot be parsed, a
        category is malformed, or ``latest`` names an unknown version.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from guide_pages.config import load_site_config
    >>> config = load_site_config(Path("guides.yaml"))  # doctest: +SKIP
    >>> config.get_version("latest").key  # doctest: +SKIP
    'v0.5'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    reference = _build_reference_settings(raw.get("reference"))

    versions_raw = raw.get("versions") or {}
    if not isinstance(versions_raw, dict) or not versions_raw:
        msg = "No versions defined in guide configuration."
        raise SiteConfigError(msg)

    base_dir = path.parent
    alias_release = _alias_release(versions_raw, raw.get("latest"))
    versions: dict[str, VersionConfig] = {}
    for key, payload in versions_raw.items():
        match payload:
            case dict():
                versions[str(key)] = _build_version_config(
                    key=str(key),
                    payload=payload,
                    base_dir=base_dir,
                    alias_release=alias_release,
                )
            case None:
                versions[str(key)] = _build_version_config(
                    key=str(key),
                    payload={},
                    base_dir=base_dir,
                    alias_release=alias_release,
                )
            case _:
                logger.warning("Ignoring version %r: expected a mapping.", key)
    if not versions:
        msg = "No usable versions defined in guide configuration."
        raise SiteConfigError(msg)

    latest = str(raw.get("latest") or next(iter(versions)))
    if latest not in versions:
        msg = f"Latest version '{latest}' is not among the configured versions."
        raise SiteConfigError(msg)

    logger.debug("Loaded %d guide versions from %s", len(versions), path)
    return SiteConfig(
        versions=versions,
        latest=latest,
        reference=reference,
        pygments_style=str(raw.get("pygments_style", "monokai")),
    )


def _build_reference_settings(value: object) -> ReferenceSettings:
    """Build ReferenceSettings from the optional ``reference`` mapping."""
    match value:
        case None:
            return ReferenceSettings()
        case dict():
            return ReferenceSettings(
                root=str(value.get("root", DEFAULT_REFERENCE_ROOT)),
                base_url=str(value.get("base_url", DEFAULT_REFERENCE_BASE_URL)),
            )
        case _:
            msg = "The 'reference' setting must be a mapping."
            raise SiteConfigError(msg)


def _alias_release(
    versions_raw: typ.Mapping[typ.Any, typ.Any], latest: object
) -> str | None:
    """Return the release that ``master``/``latest`` version entries stand for.

    The entry named by ``latest`` wins, then the first entry in declaration
    order; an explicit ``version`` field beats the entry key.
    """
    for key in (latest, *versions_raw):
        if key is None or not isinstance(key, cabc.Hashable):
            continue
        payload = versions_raw.get(key)
        explicit = payload.get("version") if isinstance(payload, dict) else None
        if explicit is not None:
            return str(explicit)
        if str(key) not in VERSION_ALIASES:
            return str(key)
    return None


def _build_version_config(
    *,
    key: str,
    payload: typ.Mapping[str, typ.Any],
    base_dir: Path,
    alias_release: str | None = None,
) -> VersionConfig:
    """Build a VersionConfig for a single version entry."""
    try:
        version = parse_version(str(payload.get("version", key)), latest=alias_release)
    except InvalidVersionError as exc:
        msg = f"Version '{key}' is not a valid version identifier."
        raise SiteConfigError(msg) from exc

    source_dir = Path(payload.get("source_dir") or Path(DEFAULT_GUIDE_DIR) / key)
    if not source_dir.is_absolute():
        source_dir = base_dir / source_dir

    categories = [
        _build_category(key, entry) for entry in payload.get("categories") or []
    ]
    return VersionConfig(
        key=key, version=version, source_dir=source_dir, categories=categories
    )


def _build_category(version_key: str, entry: object) -> CategoryConfig:
    """Build a CategoryConfig, rejecting entries without a title."""
    if not isinstance(entry, dict) or not entry.get("title"):
        msg = f"Version '{version_key}' has a category without a title."
        raise SiteConfigError(msg)
    guides = [str(guide) for guide in entry.get("guides") or []]
    return CategoryConfig(title=str(entry["title"]), guides=guides)


__all__ = ["DEFAULT_GUIDE_DIR", "load_site_config"]
