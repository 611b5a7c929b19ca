"""Pick the latest published version of a chart and classify a release."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from helm_whatup.models import UpdateStatus
from helm_whatup.models.repo import ChartEntry, RepositoryIndex
from helm_whatup.utils.version_compare import is_at_least

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LatestMatch:
    """The first index that offers an acceptable entry for a chart."""

    index: RepositoryIndex
    entry: ChartEntry

    @property
    def version(self) -> str:
        return self.entry.version

    @property
    def source_url(self) -> str:
        return self.entry.source_url


def select_latest(entries: Sequence[ChartEntry], include_prereleases: bool = False) -> ChartEntry | None:
    """Return the first acceptable entry.

    Entries must already be ordered most-recent-first.
    """
    for entry in entries:
        if entry.prerelease and not include_prereleases:
            continue
        return entry
    return None


def resolve_latest(
    chart_name: str,
    indices: Iterable[RepositoryIndex],
    include_prereleases: bool = False,
) -> LatestMatch | None:
    """Find the latest version of ``chart_name`` in the first index that has one.

    Indices are searched in configured order and the search stops at the first
    acceptable entry. An index that only offers filtered-out prereleases does
    not count as a match.
    """
    if not chart_name:
        return None
    for index in indices:
        entries = index.get(chart_name)
        if not entries:
            continue
        entry = select_latest(entries, include_prereleases)
        if entry is None:
            logger.debug("Only prereleases of %s in %s, skipping", chart_name, index.name or index.identifier)
            continue
        return LatestMatch(index=index, entry=entry)
    return None


def classify(installed: str, latest: str, semver: bool = False) -> UpdateStatus:
    """Compare the installed version with the latest one.

    By default the comparison is exact string equality, so a locally patched
    build that sorts above ``latest`` is still OUTDATED. With ``semver`` an
    installed version at or above ``latest`` counts as up to date; versions
    that do not parse fall back to string equality.
    """
    if installed == latest:
        return UpdateStatus.UPTODATE
    if semver:
        newer_or_equal = is_at_least(installed, latest)
        if newer_or_equal:
            return UpdateStatus.UPTODATE
    return UpdateStatus.OUTDATED
