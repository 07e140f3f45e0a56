"""Cyclopts CLI entrypoint for rendering versioned guides to disk.

The ``guides`` console script renders every guide of one documentation
version into HTML body fragments plus a ``guides.json`` manifest carrying
titles, section trees, table-of-contents markup, and previous/next links.
A web layer or static site template consumes those artifacts.

Examples
--------
Render the latest version with the default configuration:

>>> from guide_pages.cli import main
>>> main()  # doctest: +SKIP

Render an older version into a custom directory:

>>> from guide_pages.cli import app
>>> app(["build", "--version", "v0.4", "--output-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import json
import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import GUIDE_MANIFEST_NAME
from .config import load_site_config
from .generator import DocumentRenderer
from .guides import GuideRegistry
from .toc import TocRenderer

if typ.TYPE_CHECKING:
    from .config import VersionConfig

DEFAULT_CONFIG = Path("guides.yaml")
DEFAULT_OUTPUT_DIR = Path("public/guide")
STYLESHEET_NAME = "codehilite.css"

logger = logging.getLogger(__name__)

app = App(name="guides", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Render every guide of one version to HTML and a JSON manifest.")
def build(
    *,
    version: typ.Annotated[
        str, Parameter(help="Version key or 'latest'", env_var="INPUT_VERSION")
    ] = "latest",
    config: typ.Annotated[
        Path, Parameter(help="Path to guide config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path, Parameter(help="Output folder", env_var="INPUT_OUTPUT_DIR")
    ] = DEFAULT_OUTPUT_DIR,
    workers: typ.Annotated[
        int, Parameter(help="Render threads", env_var="INPUT_WORKERS")
    ] = 1,
    log_level: typ.Annotated[
        str, Parameter(help="Logging level", env_var="INPUT_LOG_LEVEL")
    ] = "WARNING",
) -> None:
    """Render the guides of ``version`` into ``output_dir``.

    Parameters
    ----------
    version : str, optional
        Version key from the config, or ``latest``/``master`` for the newest.
    config : Path, optional
        Path to the ``guides.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    output_dir : Path, optional
        Root directory; files land in ``<output_dir>/<version key>/``.
    workers : int, optional
        Number of threads used to render guides.
    log_level : str, optional
        Name of the logging level for diagnostics on stderr.

    Returns
    -------
    None
        Writes rendered artifacts and prints the generated paths.

    Raises
    ------
    GuideBuildError
        If any guide fails to render.
    """
    _configure_logging(log_level)
    site_config = load_site_config(config)
    version_config = site_config.get_version(version)
    renderer = DocumentRenderer(
        version_config.version,
        reference=site_config.reference,
        pygments_style=site_config.pygments_style,
    )
    registry = GuideRegistry.build(version_config, renderer, workers=workers)
    for path in write_registry(registry, version_config, output_dir):
        print(f"wrote {_format_path(path)}")
    stylesheet_path = output_dir / STYLESHEET_NAME
    stylesheet_path.write_text(renderer.stylesheet, encoding="utf-8")
    print(f"wrote {_format_path(stylesheet_path)}")


@app.command(help="List the configured guide versions.")
def versions(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to guide config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Print each configured version key, marking the latest one."""
    site_config = load_site_config(config)
    for key, version_config in site_config.versions.items():
        marker = " (latest)" if key == site_config.latest else ""
        print(f"{key}: {version_config.version}{marker}")


def write_registry(
    registry: GuideRegistry, version_config: VersionConfig, output_dir: Path
) -> list[Path]:
    """Write guide fragments and the manifest, returning the written paths."""
    target_dir = output_dir / version_config.key
    target_dir.mkdir(parents=True, exist_ok=True)
    toc = TocRenderer()
    written: list[Path] = []
    guides: dict[str, dict[str, typ.Any]] = {}
    for link in registry.links():
        document = registry.get(link.identifier)
        path = target_dir / f"{document.identifier}.html"
        path.write_text(document.html, encoding="utf-8")
        written.append(path)
        previous, following = registry.prev_next(document.identifier)
        guides[document.identifier] = {
            "title": document.title,
            "file": path.name,
            "sections": [dc.asdict(section) for section in document.sections],
            "toc_html": toc.render(document.sections),
            "prev": dc.asdict(previous) if previous else None,
            "next": dc.asdict(following) if following else None,
        }

    manifest = {
        "version": version_config.key,
        "release": str(version_config.version),
        "categories": [dc.asdict(category) for category in registry.categories],
        "guides": guides,
    }
    manifest_path = target_dir / GUIDE_MANIFEST_NAME
    manifest_path.write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    written.append(manifest_path)
    logger.info("Wrote %d guides for %s", len(guides), version_config.key)
    return written


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """Invoke the Cyclopts application that powers the ``guides`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
