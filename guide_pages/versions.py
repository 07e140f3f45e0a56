r"""Parse documentation version identifiers.

Guides are published per release line (``v0.5``, ``v0.4``, ...) plus a
``master`` alias that tracks the newest line. Reference links only care about
the ``major.minor`` pair, so :class:`DocVersion` keeps the three numeric
components and exposes the short form used in docs.rs style URLs.

Example
-------
>>> from guide_pages.versions import parse_version
>>> version = parse_version("v0.5")
>>> str(version), version.short
('0.5.0', '0.5')
>>> parse_version("master", latest="v0.4").short
'0.4'
"""

from __future__ import annotations

import dataclasses as dc
import re

from ._constants import LATEST_ALIAS, MASTER_VERSION

VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)\.(\d+)$")


class InvalidVersionError(ValueError):
    """Raised when a version string cannot be interpreted."""


@dc.dataclass(frozen=True, slots=True, order=True)
class DocVersion:
    """Semantic version of a documentation line.

    Attributes
    ----------
    major : int
        Major version component.
    minor : int
        Minor version component.
    patch : int
        Patch version component; never part of reference URLs.
    """

    major: int
    minor: int
    patch: int = 0

    @property
    def short(self) -> str:
        """Return the ``major.minor`` pair used in reference URLs."""
        return f"{self.major}.{self.minor}"

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def canonicalize_version_string(text: str) -> str:
    """Drop a leading ``v`` and pad missing minor/patch components with zeros."""
    stripped = text.strip().lstrip("v")
    parts = stripped.split(".")
    match len(parts):
        case 1:
            return f"{parts[0]}.0.0"
        case 2:
            return f"{parts[0]}.{parts[1]}.0"
        case _:
            return stripped


def parse_version(text: str | None, *, latest: str | None = None) -> DocVersion:
    """Parse ``text`` into a :class:`DocVersion`.

    Parameters
    ----------
    text : str or None
        Version string such as ``"v0.5"``, ``"0.5.1"`` or one of the aliases
        ``"master"``/``"latest"``. Empty values are treated as the latest
        version.
    latest : str, optional
        Version string substituted for aliases and empty input.

    Returns
    -------
    DocVersion
        Parsed version with missing components defaulted to zero.

    Raises
    ------
    InvalidVersionError
        If ``text`` is an alias and no ``latest`` value is provided, or the
        canonical form is not three dot-separated integers.
    """
    candidate = (text or "").strip()
    if candidate in {"", MASTER_VERSION, LATEST_ALIAS}:
        if not latest:
            msg = f"Cannot resolve version alias {candidate!r} without a latest version."
            raise InvalidVersionError(msg)
        candidate = latest

    canonical = canonicalize_version_string(candidate)
    match = VERSION_PATTERN.match(canonical)
    if match is None:
        msg = f"invalid version string: {text!r}"
        raise InvalidVersionError(msg)
    major, minor, patch = (int(group) for group in match.groups())
    return DocVersion(major=major, minor=minor, patch=patch)


__all__ = [
    "DocVersion",
    "InvalidVersionError",
    "canonicalize_version_string",
    "parse_version",
]
