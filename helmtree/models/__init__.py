"""Core data structures for helm-tree."""

from helmtree.models.config import HelmTreeConfig, KubeConnectionConfig, LogConfig, StorageDriver
from helmtree.models.resources import (
    DeclaredObject,
    LiveObject,
    OwnerRef,
    Release,
    ResourceDescriptor,
)

__all__ = [
    "DeclaredObject",
    "HelmTreeConfig",
    "KubeConnectionConfig",
    "LiveObject",
    "LogConfig",
    "OwnerRef",
    "Release",
    "ResourceDescriptor",
    "StorageDriver",
]
