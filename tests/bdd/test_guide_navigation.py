"""Behaviour tests for building a version of the guides.

``guide_navigation.feature`` drives the ``guides build`` command over a
small site created by the ``guide_site`` fixture, then inspects the
``guides.json`` manifest for category order, previous/next links, and the
table of contents.

Usage
-----
Run ``pytest tests/bdd/test_guide_navigation.py -v``. Everything is written
beneath pytest's ``tmp_path``.
"""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from guide_pages import cli
from guide_pages.guides import GuideBuildError

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "guide_navigation.feature"
)
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _manifest(scenario_state: dict[str, object]) -> dict[str, typ.Any]:
    output_dir = typ.cast("Path", scenario_state["output_dir"])
    path = output_dir / "v0.5" / "guides.json"
    return json.loads(path.read_text(encoding="utf-8"))


@given("a guide site with two categories")
def given_site(
    guide_site: Path, tmp_path: Path, scenario_state: dict[str, object]
) -> None:
    """Point the scenario at the fixture site and a fresh output folder."""
    scenario_state["config"] = guide_site
    scenario_state["output_dir"] = tmp_path / "public"


@given(parsers.parse('the "{identifier}" guide has no front matter'))
def given_broken_guide(identifier: str, scenario_state: dict[str, object]) -> None:
    """Overwrite a guide source with Markdown that lacks front matter."""
    config = typ.cast("Path", scenario_state["config"])
    path = config.parent / "guide" / "v0.5" / f"{identifier}.md"
    path.write_text("## Untitled\n", encoding="utf-8")


@when("I build the latest version")
def when_build(scenario_state: dict[str, object]) -> None:
    """Run the build command for the latest version."""
    cli.build(
        config=typ.cast("Path", scenario_state["config"]),
        output_dir=typ.cast("Path", scenario_state["output_dir"]),
    )


@when("I build the latest version expecting a failure")
def when_build_fails(scenario_state: dict[str, object]) -> None:
    """Run the build command and capture the raised error."""
    with pytest.raises(GuideBuildError) as excinfo:
        when_build(scenario_state)
    scenario_state["error"] = excinfo.value


@then("the manifest lists the categories in configuration order")
def then_category_order(scenario_state: dict[str, object]) -> None:
    """Categories and their guides follow ``guides.yaml``."""
    categories = _manifest(scenario_state)["categories"]
    assert [category["title"] for category in categories] == [
        "Getting started",
        "Upgrading",
    ]
    assert [guide["identifier"] for guide in categories[0]["guides"]] == [
        "introduction",
        "templates",
    ]


@then(
    parsers.parse(
        'the "{identifier}" guide links back to "{previous}" and forward to "{following}"'
    )
)
def then_prev_next(
    identifier: str, previous: str, following: str, scenario_state: dict[str, object]
) -> None:
    """Previous and next links cross category boundaries."""
    guide = _manifest(scenario_state)["guides"][identifier]
    assert guide["prev"]["identifier"] == previous
    assert guide["next"]["identifier"] == following


@then(parsers.parse('the "{identifier}" guide has a nested table of contents'))
def then_nested_toc(identifier: str, scenario_state: dict[str, object]) -> None:
    """The TOC markup nests deeper headings inside their parent item."""
    guide = _manifest(scenario_state)["guides"][identifier]
    soup = BeautifulSoup(guide["toc_html"], "html.parser")
    top = soup.find("ul", class_="toc")
    assert top is not None
    items = top.find_all("li", recursive=False)
    assert [item.a["href"] for item in items] == ["#overview", "#overview-1"]
    nested = items[0].find("ul")
    assert nested is not None
    assert [link["href"] for link in nested.find_all("a")] == ["#goals"]


@then(parsers.parse('the failure names the "{identifier}" guide'))
def then_failure_names(identifier: str, scenario_state: dict[str, object]) -> None:
    """The aggregated error lists the broken guide."""
    error = typ.cast("GuideBuildError", scenario_state["error"])
    assert identifier in error.failures
    assert identifier in str(error)
