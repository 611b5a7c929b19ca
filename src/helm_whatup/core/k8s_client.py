"""Kubernetes API wrapper."""

from __future__ import annotations

import logging
from typing import Any

from kubernetes import client, config

from helm_whatup.config.settings import Settings, TLSOptions

logger = logging.getLogger(__name__)


class K8sClient:
    """Thin wrapper around the Kubernetes Python client."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.context = settings.context
        self._core_v1: client.CoreV1Api | None = None
        self._api_client: client.ApiClient | None = None

    def _load_config(self) -> client.ApiClient:
        if self._api_client is not None:
            return self._api_client
        cfg = client.Configuration()
        try:
            config.load_kube_config(
                context=self.context,
                client_configuration=cfg,
            )
        except config.ConfigException:
            logger.debug("No usable kubeconfig, trying in-cluster config", exc_info=True)
            config.load_incluster_config(client_configuration=cfg)
        # Prevent indefinite hangs on unreachable clusters
        cfg.retries = 1
        if not cfg.connection_pool_maxsize:
            cfg.connection_pool_maxsize = 4
        apply_tls(cfg, self.settings.tls)
        self._api_client = client.ApiClient(configuration=cfg)
        return self._api_client

    @property
    def core_v1(self) -> client.CoreV1Api:
        if self._core_v1 is None:
            self._core_v1 = client.CoreV1Api(api_client=self._load_config())
        return self._core_v1

    def list_helm_secrets(self, namespace: str | None = None) -> list[Any]:
        """List all Helm release secrets, optionally filtered by namespace."""
        label = self.settings.helm_label_selector
        field_selector = f"type={self.settings.secret_type}"
        if namespace:
            result = self.core_v1.list_namespaced_secret(
                namespace=namespace,
                label_selector=label,
                field_selector=field_selector,
                _request_timeout=30,
            )
        else:
            result = self.core_v1.list_secret_for_all_namespaces(
                label_selector=label,
                field_selector=field_selector,
                _request_timeout=30,
            )
        return result.items

    def list_helm_configmaps(self, namespace: str | None = None) -> list[Any]:
        """List all Helm release ConfigMaps."""
        label = self.settings.helm_label_selector
        if namespace:
            result = self.core_v1.list_namespaced_config_map(
                namespace=namespace,
                label_selector=label,
                _request_timeout=30,
            )
        else:
            result = self.core_v1.list_config_map_for_all_namespaces(
                label_selector=label,
                _request_timeout=30,
            )
        return result.items


def apply_tls(cfg: client.Configuration, tls: TLSOptions) -> None:
    """Overlay explicit TLS options on a loaded client configuration.

    Does nothing unless TLS is enabled, so kubeconfig settings stay in effect.
    """
    if not tls.enabled:
        return
    if tls.ca_cert:
        cfg.ssl_ca_cert = tls.ca_cert
    if tls.cert:
        cfg.cert_file = tls.cert
    if tls.key:
        cfg.key_file = tls.key
    cfg.verify_ssl = tls.verify
    if tls.hostname:
        cfg.tls_server_name = tls.hostname
        cfg.assert_hostname = tls.hostname if tls.verify else False
