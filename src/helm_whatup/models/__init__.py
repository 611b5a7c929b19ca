"""Data models for Helm Whatup."""

from __future__ import annotations

import enum


class UpdateStatus(enum.Enum):
    UPTODATE = "UPTODATE"
    OUTDATED = "OUTDATED"


class OutputFormat(enum.Enum):
    PLAIN = "plain"
    SHORT = "short"
    JSON = "json"
    YAML = "yaml"
    TABLE = "table"

    @classmethod
    def from_str(cls, s: str) -> OutputFormat | None:
        if s == "yml":
            return cls.YAML
        for member in cls:
            if member.value == s:
                return member
        return None


UNKNOWN_REPO = "unknown"
