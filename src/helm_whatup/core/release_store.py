"""List the installed Helm releases from cluster storage."""

from __future__ import annotations

import logging
from collections import defaultdict

from helm_whatup.core.helm_decoder import decode_configmap, decode_secret, quick_metadata_from_labels
from helm_whatup.core.k8s_client import K8sClient
from helm_whatup.errors import ReleaseSourceError
from helm_whatup.models.release import HelmRelease

logger = logging.getLogger(__name__)


class ReleaseStore:
    """Fetches Helm releases from the cluster."""

    def __init__(self, k8s: K8sClient):
        self.k8s = k8s

    def list_releases(self, namespace: str | None = None) -> list[HelmRelease]:
        """List the latest revision of every release, in every state.

        Raises ReleaseSourceError if the cluster cannot be queried.
        """
        driver = self.k8s.settings.storage_driver
        try:
            if driver == "configmaps":
                objects = self.k8s.list_helm_configmaps(namespace=namespace)
                decode_fn = decode_configmap
            else:
                objects = self.k8s.list_helm_secrets(namespace=namespace)
                decode_fn = decode_secret
        except Exception as e:
            raise ReleaseSourceError(f"failed to list releases: {e}") from e

        # Group by (release_name, namespace) and keep only the latest revision
        grouped: dict[tuple[str, str], list] = defaultdict(list)
        for obj in objects:
            meta = quick_metadata_from_labels(obj)
            key = (meta["name"], meta["namespace"])
            grouped[key].append((meta["revision"], obj))

        releases: list[HelmRelease] = []
        for versions in grouped.values():
            versions.sort(key=lambda x: x[0], reverse=True)
            _, latest_obj = versions[0]
            release = decode_fn(latest_obj)
            if release:
                releases.append(release)

        logger.debug("Found %d releases in %d %s", len(releases), len(objects), driver)
        # Sort by namespace, then name
        releases.sort(key=lambda r: (r.namespace, r.name))
        return releases
