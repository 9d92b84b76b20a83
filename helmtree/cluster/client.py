"""kubernetes_asyncio client construction from Helm's connection settings."""

from __future__ import annotations

from typing import Any

import kubernetes_asyncio.config as k8s_config  # type: ignore[import-untyped]
from kubernetes_asyncio import client as k8s_client  # type: ignore[import-untyped]

from helmtree.models.config import KubeConnectionConfig
from helmtree.observability.logging import get_logger

_logger = get_logger("cluster.client")

_DEFAULT_NAMESPACE = "default"


async def build_api_client(kube: KubeConnectionConfig) -> k8s_client.ApiClient:
    """Load kubeconfig (or in-cluster config) and apply the overrides in *kube*.

    Raises:
        kubernetes_asyncio.config.ConfigException: no configuration source is
            usable and no API server override was given.
    """
    configuration = k8s_client.Configuration()
    try:
        await k8s_config.load_kube_config(
            config_file=kube.kubeconfig or None,
            context=kube.context or None,
            client_configuration=configuration,
            persist_config=False,
        )
        _logger.info("k8s client configured from kubeconfig", context=kube.context or "<current>")
    except k8s_config.ConfigException as kube_exc:
        try:
            k8s_config.load_incluster_config(client_configuration=configuration)
            _logger.info("k8s client configured from in-cluster service account")
        except k8s_config.ConfigException:
            if not kube.api_server:
                raise kube_exc from None
            _logger.info("k8s client configured from overrides only")

    _apply_overrides(configuration, kube)

    api_client = k8s_client.ApiClient(configuration)
    if kube.as_user:
        api_client.set_default_header("Impersonate-User", kube.as_user)
    return api_client


def _apply_overrides(configuration: Any, kube: KubeConnectionConfig) -> None:
    if kube.api_server:
        configuration.host = kube.api_server
    if kube.ca_file:
        configuration.ssl_ca_cert = kube.ca_file
    if kube.insecure_skip_tls_verify:
        configuration.verify_ssl = False
    if kube.tls_server_name:
        configuration.tls_server_name = kube.tls_server_name
    if kube.token:
        configuration.api_key = {"authorization": f"Bearer {kube.token}"}
        configuration.api_key_prefix = {}


def default_namespace(kube: KubeConnectionConfig) -> str:
    """Namespace of the selected kubeconfig context, or ``default``."""
    try:
        contexts, active = k8s_config.list_kube_config_contexts(config_file=kube.kubeconfig or None)
    except k8s_config.ConfigException:
        return _DEFAULT_NAMESPACE

    selected = active
    if kube.context:
        selected = next((c for c in contexts or [] if c.get("name") == kube.context), None)
    if not selected:
        return _DEFAULT_NAMESPACE
    return (selected.get("context") or {}).get("namespace") or _DEFAULT_NAMESPACE
