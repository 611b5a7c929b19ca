"""Load repositories.yaml and the cached repository index files."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from helm_whatup.errors import RepositoryConfigError
from helm_whatup.models.repo import ChartEntry, RepositoryConfig, RepositoryIndex
from helm_whatup.utils.version_compare import sort_newest_first

logger = logging.getLogger(__name__)

# Prefer the C-accelerated YAML loader when available (~10x faster).
_YamlLoader = getattr(yaml, "CSafeLoader", yaml.SafeLoader)

INDEX_SUFFIX = "-index.yaml"


def load_repositories(path: Path) -> tuple[RepositoryConfig, ...]:
    """Load the configured repositories, in file order.

    Raises RepositoryConfigError if the file is missing or cannot be parsed.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise RepositoryConfigError(f"failed to load repository file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise RepositoryConfigError(f"failed to parse repository file {path}: {e}") from e

    if not data:
        return ()
    if not isinstance(data, dict):
        raise RepositoryConfigError(f"repository file {path} is not a mapping")

    repos = data.get("repositories") or []
    return tuple(
        RepositoryConfig.from_dict(r)
        for r in repos
        if isinstance(r, dict) and r.get("name")
    )


def load_index(
    index_path: Path,
    name: str = "",
    url: str = "",
    verify_order: bool = False,
) -> RepositoryIndex | None:
    """Parse a cached index file.

    Returns None when the file is missing or unparsable; callers skip it.
    """
    if not index_path.exists():
        logger.debug("No cached index at %s", index_path)
        return None
    try:
        data = yaml.load(index_path.read_text(encoding="utf-8"), Loader=_YamlLoader)
    except Exception:
        logger.debug("Failed to parse index at %s", index_path, exc_info=True)
        return None
    if not isinstance(data, dict) or not isinstance(data.get("entries"), dict):
        logger.debug("Index at %s has no entries", index_path)
        return None

    try:
        entries = _parse_entries(data["entries"], index_path, verify_order)
    except (TypeError, ValueError, AttributeError):
        logger.debug("Malformed entries in index at %s", index_path, exc_info=True)
        return None

    return RepositoryIndex(
        name=name,
        url=url,
        identifier=index_path.name,
        entries=entries,
    )


def load_indices(
    repositories: tuple[RepositoryConfig, ...],
    cache_dir: Path,
    verify_order: bool = False,
) -> list[RepositoryIndex]:
    """Load one index per configured repository, preserving configured order."""
    indices: list[RepositoryIndex] = []
    for repo in repositories:
        index = load_index(cache_dir / f"{repo.name}{INDEX_SUFFIX}", repo.name, repo.url, verify_order)
        if index is not None:
            indices.append(index)
    logger.debug("Loaded %d of %d repository indices", len(indices), len(repositories))
    return indices


def _reorder(chart_name: str, entries: list[ChartEntry], index_path: Path) -> list[ChartEntry]:
    order = sort_newest_first([e.version for e in entries])
    if order != list(range(len(entries))):
        logger.debug("Entries for %s in %s are not newest-first, re-sorting", chart_name, index_path)
    return [entries[i] for i in order]


def _parse_entries(
    raw: dict,
    index_path: Path,
    verify_order: bool,
) -> dict[str, tuple[ChartEntry, ...]]:
    entries: dict[str, tuple[ChartEntry, ...]] = {}
    for chart_name, chart_entries in raw.items():
        if chart_entries is None:
            chart_entries = []
        if not isinstance(chart_entries, list):
            raise TypeError(f"entries for {chart_name!r} are not a list")
        parsed = [ChartEntry.from_dict(e) for e in chart_entries if isinstance(e, dict) and "version" in e]
        if verify_order:
            parsed = _reorder(str(chart_name), parsed, index_path)
        entries[str(chart_name)] = tuple(parsed)
    return entries
