r"""Split guide sources into YAML front matter and a Markdown body.

Every guide starts with a metadata block fenced by ``---`` lines. The block
must deserialize into a mapping with at least a ``title`` string; the text
after the closing fence is the Markdown rendered by
:class:`~guide_pages.generator.DocumentRenderer`.

Example
-------
>>> from guide_pages.front_matter import split_front_matter
>>> meta, body = split_front_matter("---\ntitle: Forms\n---\n# Forms\n")
>>> meta.title
'Forms'
>>> body.strip()
'# Forms'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ._constants import FRONT_MATTER_DELIMITER

DELIMITER_PATTERN = re.compile(
    rf"^{re.escape(FRONT_MATTER_DELIMITER)}[ \t]*\r?$", re.MULTILINE
)


class GuideError(ValueError):
    """Base class for errors that prevent a single guide from rendering."""


class MissingFrontMatterError(GuideError):
    """Raised when a guide does not start with a delimited metadata block."""


class InvalidMetadataError(GuideError):
    """Raised when the metadata block cannot be parsed or lacks a title."""


@dc.dataclass(frozen=True, slots=True)
class FrontMatter:
    """Metadata declared at the top of a guide.

    Attributes
    ----------
    title : str
        Human-readable guide title used for navigation.
    extra : dict[str, Any]
        Remaining keys, preserved for templates that want them.
    """

    title: str
    extra: dict[str, typ.Any] = dc.field(default_factory=dict)


def split_front_matter(text: str) -> tuple[FrontMatter, str]:
    """Separate ``text`` into parsed front matter and the Markdown body.

    Parameters
    ----------
    text : str
        Complete guide source, expected to begin with a ``---`` line.

    Returns
    -------
    tuple[FrontMatter, str]
        The parsed metadata and the body following the closing delimiter
        (empty when the closing delimiter is absent).

    Raises
    ------
    MissingFrontMatterError
        If no delimiter line is present.
    InvalidMetadataError
        If the metadata is not valid YAML, not a mapping, or has no
        non-empty ``title`` string.
    """
    segments = DELIMITER_PATTERN.split(text, maxsplit=2)
    if len(segments) < 2:
        msg = f"Front matter delimiter {FRONT_MATTER_DELIMITER!r} not found."
        raise MissingFrontMatterError(msg)

    metadata = _parse_metadata(segments[1])
    body = segments[2] if len(segments) > 2 else ""
    return metadata, body


def _parse_metadata(block: str) -> FrontMatter:
    """Deserialize the YAML block into :class:`FrontMatter`."""
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load(block)
    except YAMLError as exc:
        msg = f"Front matter is not valid YAML: {exc}"
        raise InvalidMetadataError(msg) from exc

    if not isinstance(loaded, dict):
        msg = "Front matter must be a mapping of keys to values."
        raise InvalidMetadataError(msg)

    payload: dict[str, typ.Any] = dict(loaded)
    title = payload.pop("title", None)
    if not isinstance(title, str) or not title.strip():
        msg = "Front matter is missing a non-empty 'title' string."
        raise InvalidMetadataError(msg)
    return FrontMatter(title=title.strip(), extra=payload)


__all__ = [
    "FrontMatter",
    "GuideError",
    "InvalidMetadataError",
    "MissingFrontMatterError",
    "split_front_matter",
]
