"""Semver helpers for the opt-in comparison mode and index ordering checks."""

from __future__ import annotations

import re
from typing import Any

from packaging.version import Version, InvalidVersion

PRERELEASE_API_VERSION = "prerelease"

# major[.minor[.patch]], an optional "-" prerelease tag and optional "+build".
_SEMVER = re.compile(
    r"^v?(?P<core>\d+(?:\.\d+){0,2})(?:-(?P<pre>[0-9A-Za-z.-]+))?(?:\+[0-9A-Za-z.-]+)?$"
)


def parse_version(v: str) -> Version | None:
    """Parse a version string, returning None on failure."""
    try:
        return Version(v)
    except InvalidVersion:
        # Try stripping leading 'v'
        if v.startswith("v"):
            try:
                return Version(v[1:])
            except InvalidVersion:
                pass
    return None


def _prerelease_part(ident: str) -> tuple[int, int, str]:
    # numeric identifiers sort below alphanumeric ones
    if ident.isdigit():
        return (0, int(ident), "")
    return (1, 0, ident)


def version_key(v: str) -> tuple[Any, ...] | None:
    """Return a sort key following semver precedence, or None if unparsable.

    A semver prerelease (``1.2.3-1``, ``1.2.3-rc.1``) sorts below its release.
    Versions that are not semver-shaped fall back to PEP 440 ordering.
    """
    m = _SEMVER.match(v)
    if m:
        core = Version(m.group("core"))
        pre = m.group("pre")
        if pre is None:
            return (core, 1, ())
        return (core, 0, tuple(_prerelease_part(p) for p in pre.split(".")))
    parsed = parse_version(v)
    if parsed is None:
        return None
    return (parsed, 1, ())


def is_prerelease(version: str, api_version: str = "") -> bool:
    """Return True if an index entry is flagged as a prerelease.

    Entries are flagged either explicitly through an ``apiVersion`` of
    ``prerelease`` or by a semver prerelease tag on the version itself.
    """
    if api_version == PRERELEASE_API_VERSION:
        return True
    m = _SEMVER.match(version)
    return bool(m and m.group("pre"))


def is_at_least(current: str, target: str) -> bool | None:
    """Return True if current >= target, or None if either does not parse."""
    cur = version_key(current)
    tgt = version_key(target)
    if cur is None or tgt is None:
        return None
    return cur >= tgt


def sort_newest_first(versions: list[str]) -> list[int]:
    """Return the indices of ``versions`` ordered newest first.

    Unparsable versions keep their relative order after the parsed ones.
    """
    keyed = [(i, version_key(v)) for i, v in enumerate(versions)]
    good = [(i, k) for i, k in keyed if k is not None]
    bad = [i for i, k in keyed if k is None]
    good.sort(key=lambda x: x[1], reverse=True)
    return [i for i, _ in good] + bad
