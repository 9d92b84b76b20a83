"""Configuration loading from the environment Helm provides to plugins."""

from __future__ import annotations

import os

from helmtree.errors import UnsupportedDriverError
from helmtree.models.config import HelmTreeConfig, KubeConnectionConfig, LogConfig, StorageDriver

_DRIVERS = {
    "": StorageDriver.SECRET,
    "secret": StorageDriver.SECRET,
    "secrets": StorageDriver.SECRET,
    "configmap": StorageDriver.CONFIGMAP,
    "configmaps": StorageDriver.CONFIGMAP,
}


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


def _env_int(key: str, default: int) -> int:
    try:
        return int(_env(key, str(default)))
    except ValueError:
        return default


def _env_float(key: str, default: float) -> float:
    try:
        return float(_env(key, str(default)))
    except ValueError:
        return default


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def _validate_log_format(value: str) -> str:
    valid = {"console", "json"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log format: {value}. Must be one of {valid}")
    return value.lower()


def _parse_driver(value: str) -> StorageDriver:
    driver = _DRIVERS.get(value.lower())
    if driver is None:
        raise UnsupportedDriverError(value)
    return driver


def load_config() -> HelmTreeConfig:
    """Load configuration from HELM_* environment variables."""
    burst = _env_int("HELM_BURST_LIMIT", 1000)
    qps = _env_float("HELM_QPS", 1000.0)
    if qps < 1:
        qps = float(min(100, burst))

    return HelmTreeConfig(
        namespace=_env("HELM_NAMESPACE"),
        driver=_parse_driver(_env("HELM_DRIVER")),
        kube=KubeConnectionConfig(
            api_server=_env("HELM_KUBEAPISERVER"),
            as_user=_env("HELM_KUBEASUSER"),
            ca_file=_env("HELM_KUBECAFILE"),
            context=_env("HELM_KUBECONTEXT"),
            insecure_skip_tls_verify=_env("HELM_KUBEINSECURE_SKIP_TLS_VERIFY") == "true",
            tls_server_name=_env("HELM_KUBETLS_SERVER_NAME"),
            token=_env("HELM_KUBETOKEN"),
            kubeconfig=_env("KUBECONFIG"),
            qps=qps,
            burst=burst,
        ),
        log=LogConfig(
            level=_validate_log_level(_env("HELMTREE_LOG_LEVEL", "warning")),
            format=_validate_log_format(_env("HELMTREE_LOG_FORMAT", "console")),
        ),
    )
