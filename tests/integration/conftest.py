"""Shared fixtures for helm-tree integration tests.

Provides an in-memory fake of the Kubernetes API (discovery, list calls
with pagination, Helm release Secrets) so the full pipeline can run
without a real cluster.
"""

from __future__ import annotations

import base64
import copy
import gzip
import inspect
import json
from typing import Any

import pytest
from kubernetes_asyncio.client import ApiClient
from kubernetes_asyncio.client.exceptions import ApiException

# ---------------------------------------------------------------------------
# Release encoding
# ---------------------------------------------------------------------------


def encode_release_secret(record: dict[str, Any]) -> str:
    """Encode a release the way Helm stores it, as seen through the Secret API."""
    helm_encoded = base64.b64encode(gzip.compress(json.dumps(record).encode()))
    return base64.b64encode(helm_encoded).decode()


def release_secret(name: str, namespace: str, version: int, manifest: str) -> dict[str, Any]:
    record = {
        "name": name,
        "namespace": namespace,
        "version": version,
        "info": {"status": "deployed"},
        "manifest": manifest,
    }
    return {
        "metadata": {
            "name": f"sh.helm.release.v1.{name}.v{version}",
            "namespace": namespace,
            "uid": f"helm-{name}-{version}",
            "labels": {"owner": "helm", "name": name, "version": str(version)},
        },
        "data": {"release": encode_release_secret(record)},
    }


def make_item(
    name: str,
    uid: str,
    namespace: str = "demo",
    owners: list[tuple[str, str, str]] | None = None,
    status: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build an API list item; owners are (kind, name, uid) triples."""
    metadata: dict[str, Any] = {"name": name, "uid": uid}
    if namespace:
        metadata["namespace"] = namespace
    if owners:
        metadata["ownerReferences"] = [
            {"apiVersion": "v1", "kind": kind, "name": oname, "uid": ouid, "controller": True}
            for kind, oname, ouid in owners
        ]
    item: dict[str, Any] = {"metadata": metadata}
    if status is not None:
        item["status"] = status
    return item


def _resource(name: str, kind: str, namespaced: bool = True, verbs: tuple[str, ...] = ("get", "list")) -> dict:
    return {"name": name, "kind": kind, "namespaced": namespaced, "verbs": list(verbs)}


# ---------------------------------------------------------------------------
# Fake API server
# ---------------------------------------------------------------------------

_CALL_API_SIGNATURE = inspect.signature(ApiClient.call_api)


class FakeCluster:
    """Answers ApiClient.call_api from in-memory discovery and object tables.

    Every list is served one item per page so pagination is always exercised.
    Call arguments are checked against the real ``ApiClient.call_api`` signature.
    """

    def __init__(self) -> None:
        self.groups: dict[str, list[dict[str, Any]]] = {}
        self.lists: dict[str, list[dict[str, Any]]] = {}
        self.release_secrets: dict[str, list[dict[str, Any]]] = {}
        self.requested_paths: list[str] = []
        self.closed = False

    def serve_group(self, group: str, version: str, resources: list[dict[str, Any]]) -> None:
        self.groups[f"{group}/{version}" if group else version] = resources

    def serve_list(self, path: str, items: list[dict[str, Any]]) -> None:
        self.lists[path] = items

    async def call_api(self, path: str, method: str, query_params=None, **kwargs: Any) -> dict[str, Any]:
        _CALL_API_SIGNATURE.bind(self, path, method, query_params=query_params, **kwargs)
        self.requested_paths.append(path)
        query = dict(query_params or [])
        if path == "/api":
            return {"versions": [gv for gv in self.groups if "/" not in gv]}
        if path == "/apis":
            groups = []
            for gv in self.groups:
                if "/" in gv:
                    group, version = gv.split("/", 1)
                    groups.append({"name": group, "preferredVersion": {"groupVersion": gv, "version": version}})
            return {"groups": groups}
        for gv, resources in self.groups.items():
            prefix = f"/apis/{gv}" if "/" in gv else f"/api/{gv}"
            if path == prefix:
                return {"resources": copy.deepcopy(resources)}

        if "labelSelector" in query:
            namespace = path.split("/")[4]
            return {"items": copy.deepcopy(self.release_secrets.get(namespace, []))}

        if path not in self.lists:
            raise ApiException(status=404, reason="Not Found")
        items = self.lists[path]
        start = int(query.get("continue") or 0)
        body: dict[str, Any] = {"items": copy.deepcopy(items[start : start + 1]), "metadata": {}}
        if start + 1 < len(items):
            body["metadata"]["continue"] = str(start + 1)
        return body

    async def close(self) -> None:
        self.closed = True


WEB_MANIFEST = """\
---
# Source: web/templates/deployment.yaml
apiVersion: apps/v1
kind: Deployment
metadata:
  name: web
---
# Source: web/templates/service.yaml
apiVersion: v1
kind: Service
metadata:
  name: web
---
apiVersion: v1
kind: ConfigMap
metadata:
  name: web-config
---
apiVersion: rbac.authorization.k8s.io/v1
kind: ClusterRole
metadata:
  name: web-reader
---
apiVersion: v1
kind: Secret
metadata:
  name: web-missing
"""


@pytest.fixture
def cluster() -> FakeCluster:
    """A cluster running release ``web`` in namespace ``demo``."""
    fake = FakeCluster()
    fake.serve_group(
        "",
        "v1",
        [
            _resource("pods", "Pod"),
            _resource("pods/log", "Pod"),
            _resource("services", "Service"),
            _resource("configmaps", "ConfigMap"),
            _resource("secrets", "Secret"),
            _resource("namespaces", "Namespace", namespaced=False),
            _resource("bindings", "Binding", verbs=("create",)),
        ],
    )
    fake.serve_group("apps", "v1", [_resource("deployments", "Deployment"), _resource("replicasets", "ReplicaSet")])
    fake.serve_group("discovery.k8s.io", "v1", [_resource("endpointslices", "EndpointSlice")])
    fake.serve_group("rbac.authorization.k8s.io", "v1", [_resource("clusterroles", "ClusterRole", namespaced=False)])

    ready = {"conditions": [{"type": "Ready", "status": "True"}]}
    fake.serve_list(
        "/apis/apps/v1/namespaces/demo/deployments",
        [make_item("web", "d1", status={"conditions": [{"type": "Available", "status": "True"}]})],
    )
    fake.serve_list(
        "/apis/apps/v1/namespaces/demo/replicasets",
        [make_item("web-abc", "rs1", owners=[("Deployment", "web", "d1")], status={"replicas": 2, "readyReplicas": 1})],
    )
    fake.serve_list(
        "/api/v1/namespaces/demo/pods",
        [
            make_item("web-abc-1", "p1", owners=[("ReplicaSet", "web-abc", "rs1")], status=ready),
            make_item(
                "web-abc-2",
                "p2",
                owners=[("ReplicaSet", "web-abc", "rs1")],
                status={"conditions": [{"type": "Ready", "status": "False", "reason": "ContainersNotReady"}]},
            ),
            make_item("unrelated", "p3", status=ready),
        ],
    )
    fake.serve_list("/api/v1/namespaces/demo/services", [make_item("web", "s1", status={"loadBalancer": {}})])
    fake.serve_list(
        "/apis/discovery.k8s.io/v1/namespaces/demo/endpointslices",
        [make_item("web-xyz", "es1", owners=[("Service", "web", "s1")])],
    )
    fake.serve_list("/api/v1/namespaces/demo/configmaps", [make_item("web-config", "c1")])
    fake.serve_list("/api/v1/namespaces/demo/secrets", [])
    fake.serve_list("/api/v1/namespaces", [make_item("demo", "ns1", namespace="")])
    fake.serve_list("/apis/rbac.authorization.k8s.io/v1/clusterroles", [make_item("web-reader", "cr1", namespace="")])

    fake.release_secrets["demo"] = [
        release_secret("web", "demo", 1, "apiVersion: v1\nkind: ConfigMap\nmetadata:\n  name: web-config\n"),
        release_secret("web", "demo", 2, WEB_MANIFEST),
    ]
    return fake
