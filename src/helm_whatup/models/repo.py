"""Repository, index and reconciliation result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from helm_whatup.models import UpdateStatus
from helm_whatup.utils.version_compare import is_prerelease


@dataclass(frozen=True)
class RepositoryConfig:
    """One entry of Helm's repositories.yaml."""

    name: str
    url: str

    @classmethod
    def from_dict(cls, d: dict) -> RepositoryConfig:
        return cls(name=str(d.get("name", "")), url=str(d.get("url", "")))


@dataclass(frozen=True)
class ChartEntry:
    """One published version of a chart inside a repository index."""

    version: str
    prerelease: bool = False
    urls: tuple[str, ...] = ()
    api_version: str = ""

    @property
    def source_url(self) -> str:
        return self.urls[0] if self.urls else ""

    @classmethod
    def from_dict(cls, d: dict) -> ChartEntry:
        version = str(d.get("version", ""))
        api_version = str(d.get("apiVersion", "") or "")
        urls = d.get("urls") or []
        if not isinstance(urls, list):
            raise TypeError(f"urls of {d.get('name', '')} {version} is not a list")
        return cls(
            version=version,
            prerelease=is_prerelease(version, api_version),
            urls=tuple(str(u) for u in urls),
            api_version=api_version,
        )


@dataclass(frozen=True)
class RepositoryIndex:
    """A cached repository catalog.

    Entries for each chart are ordered most-recent-first, as Helm writes them
    when it refreshes the cache. Nothing downstream re-sorts them.
    """

    name: str = ""
    url: str = ""
    identifier: str = ""
    entries: dict[str, tuple[ChartEntry, ...]] = field(default_factory=dict)

    def get(self, chart_name: str) -> tuple[ChartEntry, ...]:
        return self.entries.get(chart_name, ())

    def __contains__(self, chart_name: object) -> bool:
        return chart_name in self.entries


@dataclass(frozen=True)
class ResultRecord:
    release_name: str
    namespace: str
    chart_name: str
    installed_version: str
    latest_version: str
    repo_name: str
    status: UpdateStatus

    @property
    def is_outdated(self) -> bool:
        return self.status == UpdateStatus.OUTDATED

    def to_dict(self) -> dict[str, Any]:
        return {
            "releaseName": self.release_name,
            "namespace": self.namespace,
            "chartName": self.chart_name,
            "installedVersion": self.installed_version,
            "latestVersion": self.latest_version,
            "repoName": self.repo_name,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class AttributionWarning:
    release_name: str

    @property
    def message(self) -> str:
        return f"The source repository could not be determined for '{self.release_name}'"

    def __str__(self) -> str:
        return self.message


@dataclass
class ReconciliationReport:
    records: list[ResultRecord] = field(default_factory=list)
    warnings: list[AttributionWarning] = field(default_factory=list)

    @property
    def outdated(self) -> list[ResultRecord]:
        return [r for r in self.records if r.is_outdated]

    @property
    def has_outdated(self) -> bool:
        return any(r.is_outdated for r in self.records)
