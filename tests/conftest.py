"""Shared fixtures that lay out a small guide site on disk."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

GUIDES = {
    "introduction": (
        "Introduction",
        "## Overview\n\nWelcome.\n\n### Goals\n\n## Overview\n",
    ),
    "templates": (
        "Templates",
        "## Rendering\n\nSee [Template](trait@cot::Template).\n",
    ),
    "forms": (
        "Forms",
        "## Fields\n\n| Field | Type |\n| ----- | ---- |\n",
    ),
}

CONFIG = """
reference:
  root: cot
pygments_style: monokai
latest: v0.5
versions:
  v0.5:
    categories:
      - title: Getting started
        guides: [introduction, templates]
      - title: Upgrading
        guides: [forms]
  v0.4:
    categories:
      - title: Getting started
        guides: [introduction]
"""


def write_guide(directory: Path, identifier: str, title: str, body: str) -> Path:
    """Write ``<identifier>.md`` with front matter into ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{identifier}.md"
    path.write_text(f"---\ntitle: {title}\n---\n{body}", encoding="utf-8")
    return path


@pytest.fixture
def guide_site(tmp_path: Path) -> Path:
    """Create ``guides.yaml`` plus guide sources and return the config path."""
    config_path = tmp_path / "guides.yaml"
    config_path.write_text(textwrap.dedent(CONFIG).lstrip(), encoding="utf-8")
    for identifier, (title, body) in GUIDES.items():
        write_guide(tmp_path / "guide" / "v0.5", identifier, title, body)
    title, body = GUIDES["introduction"]
    write_guide(tmp_path / "guide" / "v0.4", "introduction", title, body)
    return config_path
