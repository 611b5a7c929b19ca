"""Tests for repositories.yaml and cached index loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from helm_whatup.core.index_loader import load_index, load_indices, load_repositories
from helm_whatup.errors import RepositoryConfigError
from helm_whatup.models.repo import RepositoryConfig


class TestLoadRepositories:
    def test_loads_in_order(self, tmp_path: Path) -> None:
        path = tmp_path / "repositories.yaml"
        path.write_text(
            "apiVersion: ''\n"
            "repositories:\n"
            "- name: hashicorp\n  url: https://helm.releases.hashicorp.com\n"
            "- name: bitnami\n  url: https://charts.bitnami.com/bitnami\n",
            encoding="utf-8",
        )

        assert load_repositories(path) == (
            RepositoryConfig("hashicorp", "https://helm.releases.hashicorp.com"),
            RepositoryConfig("bitnami", "https://charts.bitnami.com/bitnami"),
        )

    def test_missing_file_is_fatal(self, tmp_path: Path) -> None:
        with pytest.raises(RepositoryConfigError, match="failed to load repository file"):
            load_repositories(tmp_path / "nope.yaml")

    def test_invalid_yaml_is_fatal(self, tmp_path: Path) -> None:
        path = tmp_path / "repositories.yaml"
        path.write_text("repositories: [unclosed\n", encoding="utf-8")

        with pytest.raises(RepositoryConfigError, match="failed to parse"):
            load_repositories(path)

    def test_not_a_mapping_is_fatal(self, tmp_path: Path) -> None:
        path = tmp_path / "repositories.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")

        with pytest.raises(RepositoryConfigError):
            load_repositories(path)

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "repositories.yaml"
        path.write_text("", encoding="utf-8")

        assert load_repositories(path) == ()

    def test_skips_nameless_entries(self, tmp_path: Path) -> None:
        path = tmp_path / "repositories.yaml"
        path.write_text("repositories:\n- url: https://x\n- name: ok\n  url: https://ok\n", encoding="utf-8")

        assert load_repositories(path) == (RepositoryConfig("ok", "https://ok"),)


class TestLoadIndex:
    def test_parses_entries(self, tmp_path: Path) -> None:
        path = tmp_path / "hashicorp-index.yaml"
        path.write_text(
            "apiVersion: v1\n"
            "entries:\n"
            "  redis:\n"
            "  - version: 6.2.0\n"
            "    apiVersion: v2\n"
            "    urls: [https://helm.releases.hashicorp.com/redis-6.2.0.tgz]\n"
            "  - version: 6.1.0-beta\n"
            "    apiVersion: v2\n",
            encoding="utf-8",
        )

        index = load_index(path, "hashicorp", "https://helm.releases.hashicorp.com")

        assert index is not None
        assert index.name == "hashicorp"
        assert index.identifier == "hashicorp-index.yaml"
        assert "redis" in index
        latest, beta = index.get("redis")
        assert latest.version == "6.2.0"
        assert latest.prerelease is False
        assert latest.source_url == "https://helm.releases.hashicorp.com/redis-6.2.0.tgz"
        assert beta.prerelease is True

    def test_missing_file(self, tmp_path: Path) -> None:
        assert load_index(tmp_path / "gone-index.yaml") is None

    def test_unparsable_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bad-index.yaml"
        path.write_text("entries: {redis: [\n", encoding="utf-8")

        assert load_index(path) is None

    def test_no_entries(self, tmp_path: Path) -> None:
        path = tmp_path / "empty-index.yaml"
        path.write_text("apiVersion: v1\n", encoding="utf-8")

        assert load_index(path) is None

    def test_keeps_cached_order(self, tmp_path: Path) -> None:
        path = tmp_path / "r-index.yaml"
        path.write_text("entries:\n  c:\n  - version: 1.0.0\n  - version: 2.0.0\n", encoding="utf-8")

        assert [e.version for e in load_index(path).get("c")] == ["1.0.0", "2.0.0"]

    def test_verify_order_resorts(self, tmp_path: Path) -> None:
        path = tmp_path / "r-index.yaml"
        path.write_text(
            "entries:\n  c:\n  - version: 1.0.0\n  - version: nightly\n  - version: 2.0.0\n",
            encoding="utf-8",
        )

        index = load_index(path, verify_order=True)

        assert [e.version for e in index.get("c")] == ["2.0.0", "1.0.0", "nightly"]

    def test_verify_order_release_before_prerelease(self, tmp_path: Path) -> None:
        path = tmp_path / "r-index.yaml"
        path.write_text("entries:\n  c:\n  - version: 1.2.3-1\n  - version: 1.2.3\n", encoding="utf-8")

        index = load_index(path, verify_order=True)

        assert [e.version for e in index.get("c")] == ["1.2.3", "1.2.3-1"]

    @pytest.mark.parametrize("body", [
        "entries:\n  nginx: 5\n",
        "entries:\n  nginx:\n  - version: 1.0.0\n    urls: 5\n",
        "entries: [nginx]\n",
    ])
    def test_malformed_entries(self, tmp_path: Path, body: str) -> None:
        """Wrongly shaped entries make the index unusable rather than fatal."""
        path = tmp_path / "r-index.yaml"
        path.write_text(body, encoding="utf-8")

        assert load_index(path) is None


class TestLoadIndices:
    def test_skips_unreadable_and_keeps_order(self, helm_home) -> None:
        cache_dir = helm_home({
            "zeta": ("https://zeta", {"a": [{"version": "1.0.0"}]}),
            "missing": ("https://missing", None),
            "alpha": ("https://alpha", {"b": [{"version": "2.0.0"}]}),
        })
        (cache_dir / "broken-index.yaml").write_text(": : :\n", encoding="utf-8")
        repos = load_repositories(cache_dir.parent / "repositories.yaml") + (
            RepositoryConfig("broken", "https://broken"),
        )

        indices = load_indices(repos, cache_dir)

        assert [i.name for i in indices] == ["zeta", "alpha"]
        assert indices[0].url == "https://zeta"

    def test_skips_malformed_index(self, helm_home) -> None:
        cache_dir = helm_home({
            "good": ("https://good", {"a": [{"version": "1.0.0"}]}),
            "bad": ("https://bad", {"nginx": 5}),
        })

        indices = load_indices(load_repositories(cache_dir.parent / "repositories.yaml"), cache_dir)

        assert [i.name for i in indices] == ["good"]
