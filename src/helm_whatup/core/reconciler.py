"""Reconcile installed releases against cached repository indices."""

from __future__ import annotations

import logging
from typing import Sequence

from helm_whatup.config.settings import Settings
from helm_whatup.core.repo_attributor import RepositoryAttributor
from helm_whatup.core.version_resolver import classify, resolve_latest
from helm_whatup.models.release import HelmRelease
from helm_whatup.models.repo import (
    AttributionWarning,
    ReconciliationReport,
    RepositoryConfig,
    RepositoryIndex,
    ResultRecord,
)

logger = logging.getLogger(__name__)


def reconcile(
    releases: Sequence[HelmRelease],
    indices: Sequence[RepositoryIndex],
    repositories: Sequence[RepositoryConfig],
    settings: Settings,
    attributor: RepositoryAttributor | None = None,
) -> ReconciliationReport:
    """Produce one result per release whose chart is found in some index.

    Releases whose chart is in no index produce a warning instead. Records
    and warnings keep the order in which releases were supplied.
    """
    if attributor is None:
        attributor = RepositoryAttributor(repositories, indices)
    report = ReconciliationReport()

    for release in releases:
        chart_name = release.chart_name
        match = resolve_latest(chart_name, indices, settings.include_prereleases)
        if match is None:
            logger.debug("Chart %r of release %s not found in any index", chart_name, release.name)
            report.warnings.append(AttributionWarning(release_name=release.name))
            continue

        repo_name = attributor.attribute(
            release,
            chart_name=chart_name,
            source_url=match.source_url,
            index=match.index,
        )
        report.records.append(ResultRecord(
            release_name=release.name,
            namespace=release.namespace,
            chart_name=chart_name,
            installed_version=release.chart_version,
            latest_version=match.version,
            repo_name=repo_name,
            status=classify(release.chart_version, match.version, semver=settings.semver),
        ))

    logger.debug(
        "Reconciled %d releases: %d results, %d outdated, %d warnings",
        len(releases), len(report.records), len(report.outdated), len(report.warnings),
    )
    return report
