"""API discovery: every listable resource type the cluster serves."""

from __future__ import annotations

import asyncio
from typing import Any

from kubernetes_asyncio.client.exceptions import ApiException  # type: ignore[import-untyped]

from helmtree.models.resources import ResourceDescriptor
from helmtree.observability.logging import get_logger

_logger = get_logger("cluster.discovery")


async def get_json(api_client: Any, path: str, query: list[tuple[str, Any]] | None = None) -> dict[str, Any]:
    """GET *path* and return the decoded JSON body."""
    return await api_client.call_api(
        path,
        "GET",
        query_params=query or [],
        response_types_map={200: "object"},
        auth_settings=["BearerToken"],
        _return_http_data_only=True,
    )


def parse_resource_list(body: dict[str, Any], group: str, version: str) -> list[ResourceDescriptor]:
    """Turn an APIResourceList into descriptors.

    Sub-resources (``pods/log``) and resources that cannot be listed are
    dropped.
    """
    descriptors = []
    for res in body.get("resources") or []:
        name = str(res.get("name", ""))
        if not name or "/" in name:
            continue
        if "list" not in (res.get("verbs") or []):
            continue
        descriptors.append(
            ResourceDescriptor(
                group=group,
                version=version,
                resource_plural=name,
                kind=str(res.get("kind", "")),
                namespaced=bool(res.get("namespaced", False)),
                singular_name=str(res.get("singularName") or ""),
                short_names=tuple(res.get("shortNames") or ()),
            )
        )
    return descriptors


async def _group_resources(api_client: Any, group: str, version: str) -> list[ResourceDescriptor]:
    path = f"/apis/{group}/{version}" if group else f"/api/{version}"
    try:
        body = await get_json(api_client, path)
    except ApiException as exc:
        # Aggregated APIs whose backing service is down answer 503; skip them.
        _logger.warning("api_group_discovery_failed", group=group, version=version, status=exc.status)
        return []
    return parse_resource_list(body, group, version)


async def discover_resources(api_client: Any) -> list[ResourceDescriptor]:
    """Return descriptors for the core group and each group's preferred version."""
    core = await get_json(api_client, "/api")
    targets: list[tuple[str, str]] = [("", v) for v in core.get("versions") or []]

    groups = await get_json(api_client, "/apis")
    for group in groups.get("groups") or []:
        preferred = group.get("preferredVersion") or {}
        version = preferred.get("version")
        if not version:
            versions = group.get("versions") or []
            if not versions:
                continue
            version = versions[0].get("version")
        targets.append((str(group.get("name", "")), str(version)))

    results = await asyncio.gather(*(_group_resources(api_client, g, v) for g, v in targets))
    descriptors = [d for group_descriptors in results for d in group_descriptors]
    _logger.info("completed querying APIs list", groups=len(targets), resources=len(descriptors))
    return descriptors
