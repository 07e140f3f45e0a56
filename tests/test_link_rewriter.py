"""Unit tests for API reference notation parsing and URL resolution.

These tests exercise :func:`guide_pages.generator.parse_reference` and
:class:`guide_pages.generator.LinkResolver` directly, without rendering any
Markdown. They pin the URL shapes for module and item references, the
pass-through behaviour for ordinary links and malformed notation, and the
label override carried by a bracketed prefix.

Usage
-----
Run ``pytest tests/test_link_rewriter.py -v``.
"""

from __future__ import annotations

import pytest

from guide_pages.generator import (
    LinkReference,
    LinkResolver,
    ReferenceSettings,
    parse_reference,
    resolve_url,
)
from guide_pages.versions import DocVersion

VERSION = DocVersion(1, 2, 3)
PROJ = ReferenceSettings(root="proj", base_url="https://docs.rs")


@pytest.fixture
def resolver() -> LinkResolver:
    return LinkResolver(VERSION, PROJ)


def test_item_reference_uses_kind_prefixed_html_file(resolver: LinkResolver) -> None:
    actual = resolver.resolve_url("struct@proj::a::b::Name")
    assert actual == "https://docs.rs/proj/1.2/proj/a/b/struct.Name.html"


def test_module_reference_ends_with_bare_leaf(resolver: LinkResolver) -> None:
    actual = resolver.resolve_url("proj::a::b")
    assert actual == "https://docs.rs/proj/1.2/proj/a/b"


def test_two_segment_reference_has_no_empty_segment(resolver: LinkResolver) -> None:
    actual = resolver.resolve_url("proj::name")
    assert actual == "https://docs.rs/proj/1.2/proj/name"
    assert "//proj/name" not in actual


def test_two_segment_item_reference(resolver: LinkResolver) -> None:
    actual = resolver.resolve_url("fn@proj::main")
    assert actual == "https://docs.rs/proj/1.2/proj/fn.main.html"


@pytest.mark.parametrize(
    "target",
    [
        "http://example.com",
        "https://docs.rs/proj/latest/proj/",
        "../guide/forms.md#fields",
        "#anchor",
        "mailto:someone@example.com",
        "other::a::b",
        "proj",
        "proj::",
        "proj::a::",
        "proj::::b",
        "proj:: a",
        "struct@other::a",
        "str-uct@proj::a",
        "[]proj::a",
        "plain prose mentioning proj::a inline",
    ],
)
def test_non_references_pass_through_unchanged(
    resolver: LinkResolver, target: str
) -> None:
    assert resolver.resolve_url(target) == target


def test_empty_kind_is_module_reference(resolver: LinkResolver) -> None:
    reference = parse_reference("@proj::a::Item", root="proj")
    assert reference == LinkReference(segments=("proj", "a", "Item"))
    assert resolver.url_for(reference) == "https://docs.rs/proj/1.2/proj/a/Item"


def test_patch_version_does_not_change_url() -> None:
    first = resolve_url("proj::a", DocVersion(1, 2, 0), PROJ)
    second = resolve_url("proj::a", DocVersion(1, 2, 9), PROJ)
    assert first == second == "https://docs.rs/proj/1.2/proj/a"


def test_resolution_is_deterministic(resolver: LinkResolver) -> None:
    target = "enum@proj::x::Kind"
    results = {resolver.resolve_url(target) for _ in range(5)}
    assert len(results) == 1


def test_bracketed_display_does_not_affect_url(resolver: LinkResolver) -> None:
    plain = resolver.resolve_url("struct@proj::a::Name")
    labelled = resolver.resolve_url("[The name type]struct@proj::a::Name")
    assert plain == labelled
    reference = parse_reference("[The name type]struct@proj::a::Name", root="proj")
    assert reference is not None
    assert reference.display == "The name type"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("<proj::a::Name>", LinkReference(("proj", "a", "Name"))),
        ("<proj::a::Name>|struct", LinkReference(("proj", "a", "Name"), "struct")),
        (
            "[Name]<proj::a::Name>|trait",
            LinkReference(("proj", "a", "Name"), "trait", "Name"),
        ),
        ("  [Name] <proj::Name>  ", LinkReference(("proj", "Name"), None, "Name")),
        ("<proj::a::Name>|", LinkReference(("proj", "a", "Name"))),
    ],
)
def test_angle_form_parses(text: str, expected: LinkReference) -> None:
    assert parse_reference(text, root="proj") == expected


@pytest.mark.parametrize(
    "text",
    ["<proj::a", "<proj::a>struct", "<proj::a>|st ruct", "<other::a>|fn"],
)
def test_malformed_angle_form_is_rejected(text: str) -> None:
    assert parse_reference(text, root="proj") is None


def test_reference_properties() -> None:
    reference = LinkReference(("proj", "a", "b", "Name"), "struct")
    assert reference.root == "proj"
    assert reference.modules == ("a", "b")
    assert reference.leaf == "Name"
    assert reference.path == "proj::a::b::Name"


def test_default_settings_target_cot_on_docs_rs() -> None:
    actual = resolve_url("struct@cot::form::Form", DocVersion(0, 5, 1))
    assert actual == "https://docs.rs/cot/0.5/cot/form/struct.Form.html"


def test_custom_base_url_trailing_slash_is_trimmed() -> None:
    settings = ReferenceSettings(root="proj", base_url="https://docs.example.org/")
    actual = resolve_url("proj::a", VERSION, settings)
    assert actual == "https://docs.example.org/proj/1.2/proj/a"
