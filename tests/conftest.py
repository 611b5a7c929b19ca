"""Shared fixtures and builders for the test suite."""

from __future__ import annotations

import base64
import gzip
import json
from pathlib import Path
from typing import Callable

import pytest
import yaml

from helm_whatup.models.chart import ChartMetadata
from helm_whatup.models.release import HelmRelease
from helm_whatup.models.repo import ChartEntry, RepositoryConfig, RepositoryIndex


def make_release(
    name: str,
    chart: str,
    version: str,
    namespace: str = "default",
    annotations: dict[str, str] | None = None,
) -> HelmRelease:
    return HelmRelease(
        name=name,
        namespace=namespace,
        revision=1,
        chart=ChartMetadata(name=chart, version=version, annotations=annotations or {}),
    )


def entry(version: str, prerelease: bool = False, urls: tuple[str, ...] = ()) -> ChartEntry:
    return ChartEntry(version=version, prerelease=prerelease, urls=urls)


def make_index(name: str, charts: dict[str, list[ChartEntry]], url: str = "", identifier: str = "") -> RepositoryIndex:
    return RepositoryIndex(
        name=name,
        url=url,
        identifier=identifier,
        entries={chart: tuple(entries) for chart, entries in charts.items()},
    )


def encode_release(payload: dict) -> str:
    """Encode a release dict the way Helm stores it (base64 of gzipped JSON)."""
    raw = json.dumps(payload).encode("utf-8")
    return base64.b64encode(gzip.compress(raw)).decode("ascii")


@pytest.fixture
def repositories() -> tuple[RepositoryConfig, ...]:
    return (
        RepositoryConfig(name="bitnami", url="https://charts.bitnami.com/bitnami"),
        RepositoryConfig(name="hashicorp", url="https://helm.releases.hashicorp.com"),
        RepositoryConfig(name="rke2-charts", url="https://rke2-charts.rancher.io"),
    )


@pytest.fixture
def helm_home(tmp_path: Path) -> Callable[..., Path]:
    """Write a repositories.yaml plus cached index files under tmp_path.

    Returns a function taking ``{repo_name: (url, {chart: [entry dicts]})}``
    that returns the cache directory.
    """
    cache_dir = tmp_path / "cache"
    cache_dir.mkdir()

    def _write(repos: dict[str, tuple[str, dict[str, list[dict]]]]) -> Path:
        repo_file = tmp_path / "repositories.yaml"
        repo_file.write_text(
            yaml.safe_dump({
                "apiVersion": "",
                "repositories": [{"name": name, "url": url} for name, (url, _) in repos.items()],
            }),
            encoding="utf-8",
        )
        for name, (_, charts) in repos.items():
            if charts is None:
                continue
            index = {"apiVersion": "v1", "entries": charts}
            (cache_dir / f"{name}-index.yaml").write_text(yaml.safe_dump(index), encoding="utf-8")
        return cache_dir

    return _write
