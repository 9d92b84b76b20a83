"""Listing live objects of every discovered resource type."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any

from kubernetes_asyncio.client.exceptions import ApiException  # type: ignore[import-untyped]

from helmtree.catalog.api_catalog import disambiguation_name
from helmtree.cluster.discovery import get_json
from helmtree.errors import ClusterQueryError
from helmtree.models.resources import LiveObject, ResourceDescriptor
from helmtree.observability.logging import get_logger

_logger = get_logger("cluster.query")

_PAGE_SIZE = 250
# Forbidden, not found, method not allowed: the type is skipped, not fatal.
_SKIPPABLE_STATUSES = frozenset({403, 404, 405})


def list_path(descriptor: ResourceDescriptor, namespace: str, all_namespaces: bool) -> str:
    if descriptor.group:
        base = f"/apis/{descriptor.group}/{descriptor.version}"
    else:
        base = f"/api/{descriptor.version}"
    if descriptor.namespaced and not all_namespaces:
        return f"{base}/namespaces/{namespace}/{descriptor.resource_plural}"
    return f"{base}/{descriptor.resource_plural}"


async def list_objects(
    api_client: Any,
    descriptor: ResourceDescriptor,
    namespace: str,
    all_namespaces: bool,
) -> list[LiveObject]:
    """List every object of one type, following ``continue`` tokens."""
    path = list_path(descriptor, namespace, all_namespaces)
    objects: list[LiveObject] = []
    token = ""
    while True:
        query: list[tuple[str, Any]] = [("limit", _PAGE_SIZE)]
        if token:
            query.append(("continue", token))
        try:
            body = await get_json(api_client, path, query)
        except ApiException as exc:
            if exc.status in _SKIPPABLE_STATUSES:
                _logger.debug("list_skipped", resource=disambiguation_name(descriptor), status=exc.status)
                return []
            raise ClusterQueryError(disambiguation_name(descriptor), exc) from exc

        for item in body.get("items") or []:
            objects.append(LiveObject.from_dict(item, api_version=descriptor.group_version, kind=descriptor.kind))
        token = str((body.get("metadata") or {}).get("continue") or "")
        if not token:
            return objects


async def list_all_objects(
    api_client: Any,
    descriptors: Sequence[ResourceDescriptor],
    namespace: str,
    all_namespaces: bool = False,
    max_in_flight: int = 100,
) -> list[LiveObject]:
    """List all types concurrently; results keep descriptor order."""
    semaphore = asyncio.Semaphore(max(1, max_in_flight))

    async def _bounded(descriptor: ResourceDescriptor) -> list[LiveObject]:
        async with semaphore:
            return await list_objects(api_client, descriptor, namespace, all_namespaces)

    results = await asyncio.gather(*(_bounded(d) for d in descriptors))
    objects = [obj for batch in results for obj in batch]
    _logger.info("found api objects", total=len(objects), types=len(descriptors))
    return objects
