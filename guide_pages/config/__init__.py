"""Load and validate guide site configuration YAML.

This subpackage parses the project's ``guides.yaml`` file, resolves each
version's source directory and category order, and produces typed
dataclasses (:class:`SiteConfig`, :class:`VersionConfig`, ...) that the guide
registry consumes. The primary entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from guide_pages.config import load_site_config
>>> site = load_site_config(Path("guides.yaml"))  # doctest: +SKIP
>>> site.get_version("master").version.short  # doctest: +SKIP
'0.5'
"""

from guide_pages.generator.models import ReferenceSettings

from .loader import load_site_config
from .models import CategoryConfig, SiteConfig, SiteConfigError, VersionConfig

__all__ = [
    "CategoryConfig",
    "ReferenceSettings",
    "SiteConfig",
    "SiteConfigError",
    "VersionConfig",
    "load_site_config",
]
