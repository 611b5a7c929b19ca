"""Chart metadata carried by an installed release."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ChartMetadata:
    name: str = ""
    version: str = ""
    annotations: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: dict) -> ChartMetadata:
        if not d:
            return cls()
        return cls(
            name=d.get("name", ""),
            version=d.get("version", ""),
            annotations=d.get("annotations") or {},
        )
