"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class StorageDriver(StrEnum):
    """Helm release storage backend."""

    SECRET = "secret"
    CONFIGMAP = "configmap"


@dataclass
class KubeConnectionConfig:
    """Connection overrides passed down by Helm to its plugins."""

    api_server: str = ""
    as_user: str = ""
    ca_file: str = ""
    context: str = ""
    insecure_skip_tls_verify: bool = False
    tls_server_name: str = ""
    token: str = ""
    kubeconfig: str = ""
    qps: float = 1000.0
    burst: int = 1000


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "warning"
    format: str = "console"


@dataclass
class HelmTreeConfig:
    """Top-level helm-tree configuration."""

    namespace: str = ""
    driver: StorageDriver = StorageDriver.SECRET
    kube: KubeConnectionConfig = field(default_factory=KubeConnectionConfig)
    log: LogConfig = field(default_factory=LogConfig)
