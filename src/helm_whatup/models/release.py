"""Installed Helm release."""

from __future__ import annotations

from dataclasses import dataclass, field

from helm_whatup.models.chart import ChartMetadata


@dataclass
class HelmRelease:
    """The latest revision of one release, as decoded from Helm storage."""

    name: str = ""
    namespace: str = ""
    revision: int = 0
    chart: ChartMetadata = field(default_factory=ChartMetadata)

    @property
    def chart_name(self) -> str:
        return self.chart.name

    @property
    def chart_version(self) -> str:
        return self.chart.version

    @property
    def annotations(self) -> dict[str, str]:
        return self.chart.annotations

    @classmethod
    def from_dict(cls, d: dict) -> HelmRelease:
        chart_raw = d.get("chart") or {}
        return cls(
            name=d.get("name", ""),
            namespace=d.get("namespace", ""),
            revision=d.get("version", 0),
            chart=ChartMetadata.from_dict(chart_raw.get("metadata") or {}),
        )
