"""Decode Helm v3 release data from Kubernetes Secrets or ConfigMaps."""

from __future__ import annotations

import base64
import gzip
import json
import logging
from typing import Any

from helm_whatup.models.release import HelmRelease

logger = logging.getLogger(__name__)

_GZIP_MAGIC = b"\x1f\x8b"


def _unwrap(data: bytes) -> dict:
    """base64 (once or twice) -> gzip -> utf-8 -> json.

    Helm base64-encodes the gzipped release. Secrets add their own base64
    layer, which most kubernetes client versions strip and some do not, so a
    missing gzip header after one decode means there is another layer.
    """
    decoded = base64.b64decode(data)
    if decoded[:2] != _GZIP_MAGIC:
        decoded = base64.b64decode(decoded)
    return json.loads(gzip.decompress(decoded).decode("utf-8"))


def decode_release_secret(data: bytes) -> dict:
    return _unwrap(data)


def decode_release_configmap(data: str) -> dict:
    return _unwrap(data.encode("utf-8"))


def _label_metadata(obj: Any) -> dict[str, str]:
    """Extract Helm labels from a Secret/ConfigMap object."""
    labels = {}
    if hasattr(obj, "metadata") and obj.metadata and obj.metadata.labels:
        labels = dict(obj.metadata.labels)
    return labels


def decode_secret(secret: Any) -> HelmRelease | None:
    """Decode a single Kubernetes Secret into a HelmRelease."""
    try:
        data = secret.data
        if not data or "release" not in data:
            return None
        raw = data["release"]
        if isinstance(raw, str):
            raw = raw.encode("utf-8")
        release = HelmRelease.from_dict(decode_release_secret(raw))
        # Ensure namespace from the secret metadata
        if not release.namespace and secret.metadata:
            release.namespace = secret.metadata.namespace or ""
        return release
    except Exception:
        logger.debug("Failed to decode secret %s", _safe_name(secret), exc_info=True)
        return None


def decode_configmap(cm: Any) -> HelmRelease | None:
    """Decode a single Kubernetes ConfigMap into a HelmRelease."""
    try:
        data = cm.data
        if not data or "release" not in data:
            return None
        release = HelmRelease.from_dict(decode_release_configmap(data["release"]))
        if not release.namespace and cm.metadata:
            release.namespace = cm.metadata.namespace or ""
        return release
    except Exception:
        logger.debug("Failed to decode configmap %s", _safe_name(cm), exc_info=True)
        return None


def quick_metadata_from_labels(obj: Any) -> dict:
    """Extract name, namespace and revision from labels without decoding the payload."""
    labels = _label_metadata(obj)
    ns = ""
    if hasattr(obj, "metadata") and obj.metadata:
        ns = obj.metadata.namespace or ""
    try:
        revision = int(labels.get("version", "0"))
    except ValueError:
        revision = 0
    return {
        "name": labels.get("name", ""),
        "namespace": ns,
        "revision": revision,
    }


def _safe_name(obj: Any) -> str:
    if hasattr(obj, "metadata") and obj.metadata:
        return obj.metadata.name or "<unknown>"
    return "<unknown>"
