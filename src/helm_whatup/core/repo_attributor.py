"""Work out which configured repository a release's chart came from.

Attribution runs an ordered list of strategies, strongest signal first.
Each strategy looks at an AttributionContext and returns a repository name
or None; the first name wins and no later strategy runs. When every
strategy declines, the release is attributed to "unknown".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Mapping, Sequence

from helm_whatup.core.index_loader import INDEX_SUFFIX
from helm_whatup.models import UNKNOWN_REPO
from helm_whatup.models.release import HelmRelease
from helm_whatup.models.repo import RepositoryConfig, RepositoryIndex

logger = logging.getLogger(__name__)

REPOSITORY_ANNOTATION = "artifacthub.io/repository"
PREFIX_SEPARATOR = "-"


@dataclass(frozen=True)
class AttributionContext:
    release: HelmRelease
    chart_name: str
    repositories: Sequence[RepositoryConfig] = ()
    chart_repo_map: Mapping[str, str] = field(default_factory=dict)
    source_url: str = ""
    index: RepositoryIndex | None = None


Strategy = Callable[[AttributionContext], "str | None"]


def build_chart_repo_map(indices: Iterable[RepositoryIndex]) -> dict[str, str]:
    """Map every chart name found in the indices to its owning repository.

    The first repository to list a chart claims it, unless a later one has a
    name containing the chart name, in which case the later one takes over.
    Unnamed indices are ignored.
    """
    chart_map: dict[str, str] = {}
    for index in indices:
        if not index.name:
            continue
        for chart_name in index.entries:
            if chart_name not in chart_map or chart_name in index.name:
                chart_map[chart_name] = index.name
    return chart_map


def from_annotation(ctx: AttributionContext) -> str | None:
    """Use the repository the chart declares about itself."""
    return ctx.release.annotations.get(REPOSITORY_ANNOTATION) or None


def from_chart_map(ctx: AttributionContext) -> str | None:
    return ctx.chart_repo_map.get(ctx.chart_name) or None


def from_source_url(ctx: AttributionContext) -> str | None:
    """Match the resolved entry's download URL against configured repo URLs."""
    if not ctx.source_url:
        return None
    for repo in ctx.repositories:
        base = repo.url.rstrip("/")
        if base and base in ctx.source_url:
            return repo.name
    return None


def from_name_equality(ctx: AttributionContext) -> str | None:
    for repo in ctx.repositories:
        if repo.name == ctx.chart_name:
            return repo.name
    return None


def from_index_identifier(ctx: AttributionContext) -> str | None:
    """Derive the name from a ``<repo>-index.yaml`` file name."""
    if ctx.index is None or not ctx.index.identifier:
        return None
    identifier = ctx.index.identifier.replace("\\", "/").rsplit("/", 1)[-1]
    if identifier.endswith(INDEX_SUFFIX):
        return identifier[: -len(INDEX_SUFFIX)] or None
    return None


def from_name_prefix(ctx: AttributionContext) -> str | None:
    """Guess from the chart name prefix, e.g. rke2-cilium -> rke2-charts."""
    prefix = ctx.chart_name.split(PREFIX_SEPARATOR, 1)[0]
    if not prefix:
        return None
    for repo in ctx.repositories:
        if repo.name.startswith(prefix):
            return repo.name
    return None


DEFAULT_STRATEGIES: tuple[Strategy, ...] = (
    from_annotation,
    from_chart_map,
    from_source_url,
    from_name_equality,
    from_index_identifier,
    from_name_prefix,
)


class RepositoryAttributor:
    """Runs attribution strategies in order against one run's repositories."""

    def __init__(
        self,
        repositories: Sequence[RepositoryConfig],
        indices: Sequence[RepositoryIndex],
        strategies: Sequence[Strategy] = DEFAULT_STRATEGIES,
    ):
        self.repositories = tuple(repositories)
        self.strategies = tuple(strategies)
        self.chart_repo_map = build_chart_repo_map(indices)

    def attribute(
        self,
        release: HelmRelease,
        chart_name: str | None = None,
        source_url: str = "",
        index: RepositoryIndex | None = None,
    ) -> str:
        ctx = AttributionContext(
            release=release,
            chart_name=chart_name if chart_name is not None else release.chart_name,
            repositories=self.repositories,
            chart_repo_map=self.chart_repo_map,
            source_url=source_url,
            index=index,
        )
        for strategy in self.strategies:
            name = strategy(ctx)
            if name:
                logger.debug(
                    "Attributed %s to %s via %s",
                    release.name, name, getattr(strategy, "__name__", strategy),
                )
                return name
        logger.debug("No repository found for %s", release.name)
        return UNKNOWN_REPO
