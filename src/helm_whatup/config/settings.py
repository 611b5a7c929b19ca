"""Run configuration, resolved once at startup and passed explicitly."""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass, field
from pathlib import Path

from helm_whatup.models import OutputFormat


def _default_helm_cache_dir() -> Path:
    """Return the default Helm cache directory for the current platform.

    Checks HELM_REPOSITORY_CACHE and HELM_CACHE_HOME env vars first,
    matching helm's own resolution order.
    """
    repo_cache = os.environ.get("HELM_REPOSITORY_CACHE", "")
    if repo_cache:
        return Path(repo_cache)
    cache_home = os.environ.get("HELM_CACHE_HOME", "")
    if cache_home:
        return Path(cache_home) / "repository"
    system = platform.system()
    if system == "Windows":
        # Helm on Windows uses %TEMP%\helm as default cache home
        temp = os.environ.get("TEMP", "")
        if temp:
            candidate = Path(temp) / "helm" / "repository"
            if candidate.exists():
                return candidate
        appdata = os.environ.get("APPDATA", "")
        if appdata:
            return Path(appdata) / "helm" / "repository"
        return Path.home() / "AppData" / "Roaming" / "helm" / "repository"
    # Linux / macOS
    xdg = os.environ.get("XDG_CACHE_HOME", "")
    if xdg:
        return Path(xdg) / "helm" / "repository"
    return Path.home() / ".cache" / "helm" / "repository"


def _default_helm_config_dir() -> Path:
    config_home = os.environ.get("HELM_CONFIG_HOME", "")
    if config_home:
        return Path(config_home)
    system = platform.system()
    if system == "Windows":
        appdata = os.environ.get("APPDATA", "")
        if appdata:
            return Path(appdata) / "helm"
        return Path.home() / "AppData" / "Roaming" / "helm"
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg:
        return Path(xdg) / "helm"
    return Path.home() / ".config" / "helm"


def _default_repositories_file() -> Path:
    explicit = os.environ.get("HELM_REPOSITORY_CONFIG", "")
    if explicit:
        return Path(explicit)
    return _default_helm_config_dir() / "repositories.yaml"


def _default_storage_driver() -> str:
    # helm accepts "configmap" and "configmaps"; everything else means secrets
    driver = os.environ.get("HELM_DRIVER", "").lower()
    return "configmaps" if driver.startswith("configmap") else "secrets"


@dataclass(frozen=True)
class TLSOptions:
    """Transport settings for reaching the cluster. Never used by the core."""

    enabled: bool = False
    ca_cert: str = ""
    cert: str = ""
    key: str = ""
    hostname: str = ""
    verify: bool = False


@dataclass(frozen=True)
class Settings:
    helm_cache_dir: Path = field(default_factory=_default_helm_cache_dir)
    repositories_file: Path = field(default_factory=_default_repositories_file)
    storage_driver: str = field(default_factory=_default_storage_driver)  # "secrets" or "configmaps"
    helm_label_selector: str = "owner=helm"
    secret_type: str = "helm.sh/release.v1"
    output: str = OutputFormat.TABLE.value
    include_prereleases: bool = False
    semver: bool = False
    verify_index_order: bool = False
    context: str | None = None
    tls: TLSOptions = field(default_factory=TLSOptions)

    @property
    def index_cache_dir(self) -> Path:
        return self.helm_cache_dir
