"""Cluster access: client construction, discovery, object listing and
release storage reads.

Submodules:
    client    -- kubernetes_asyncio ApiClient built from Helm's connection settings.
    discovery -- API group/resource discovery producing ResourceDescriptors.
    query     -- Concurrent, paginated listing of every discovered resource type.
    release   -- Helm release records (Secret/ConfigMap drivers) and manifest parsing.
"""

from helmtree.cluster.client import build_api_client, default_namespace
from helmtree.cluster.discovery import discover_resources
from helmtree.cluster.query import list_all_objects
from helmtree.cluster.release import get_release, parse_manifest

__all__ = [
    "build_api_client",
    "default_namespace",
    "discover_resources",
    "get_release",
    "list_all_objects",
    "parse_manifest",
]
