"""Tests for splitting guide sources into front matter and Markdown body."""

from __future__ import annotations

import pytest

from guide_pages.front_matter import (
    FrontMatter,
    GuideError,
    InvalidMetadataError,
    MissingFrontMatterError,
    split_front_matter,
)


def test_splits_metadata_and_body() -> None:
    source = "---\ntitle: Forms\n---\n# Forms\n\nBody.\n"
    meta, body = split_front_matter(source)
    assert meta == FrontMatter(title="Forms")
    assert body.strip() == "# Forms\n\nBody."


def test_extra_keys_are_preserved() -> None:
    meta, _ = split_front_matter("---\ntitle: Forms\nauthors: [a, b]\n---\n")
    assert meta.extra == {"authors": ["a", "b"]}


def test_title_is_stripped() -> None:
    meta, _ = split_front_matter("---\ntitle: '  Padded  '\n---\nBody\n")
    assert meta.title == "Padded"


def test_missing_closing_delimiter_yields_empty_body() -> None:
    meta, body = split_front_matter("---\ntitle: Only metadata\n")
    assert meta.title == "Only metadata"
    assert body == ""


def test_later_delimiters_stay_in_body() -> None:
    source = "---\ntitle: Rules\n---\nAbove\n\n---\n\nBelow\n"
    _, body = split_front_matter(source)
    assert "Above" in body
    assert "Below" in body
    assert "---" in body


def test_crlf_line_endings_are_accepted() -> None:
    meta, body = split_front_matter("---\r\ntitle: Windows\r\n---\r\nBody\r\n")
    assert meta.title == "Windows"
    assert "Body" in body


def test_no_delimiter_raises_missing() -> None:
    with pytest.raises(MissingFrontMatterError):
        split_front_matter("# Just markdown\n")


def test_inline_dashes_are_not_delimiters() -> None:
    with pytest.raises(MissingFrontMatterError):
        split_front_matter("title: x --- y\n")


@pytest.mark.parametrize(
    "block",
    [
        "title: [unterminated",
        "- just\n- a list",
        "plain scalar",
        "other: value",
        "title: ''",
        "title: 42",
        "title:",
    ],
)
def test_invalid_metadata_raises(block: str) -> None:
    with pytest.raises(InvalidMetadataError):
        split_front_matter(f"---\n{block}\n---\nBody\n")


def test_errors_share_guide_error_base() -> None:
    assert issubclass(MissingFrontMatterError, GuideError)
    assert issubclass(InvalidMetadataError, GuideError)
    assert issubclass(GuideError, ValueError)
