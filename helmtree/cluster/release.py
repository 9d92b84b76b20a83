"""Helm release records and manifest parsing.

Helm 3 stores each release revision as a Secret (default) or ConfigMap
labelled ``owner=helm,name=<release>,version=<n>``. The ``release`` data
key holds base64(gzip(json)); for Secrets the Kubernetes API adds one more
layer of base64.
"""

from __future__ import annotations

import base64
import binascii
import gzip
import json
import re
from typing import Any

import yaml

from helmtree.cluster.discovery import get_json
from helmtree.errors import ReleaseDecodeError, ReleaseNotFoundError
from helmtree.models.config import StorageDriver
from helmtree.models.resources import DeclaredObject, Release
from helmtree.observability.logging import get_logger

_logger = get_logger("cluster.release")

_GZIP_MAGIC = b"\x1f\x8b\x08"
_DOC_SEPARATOR = re.compile(r"^---[ \t]*(?:#.*)?$", re.MULTILINE)


def _storage_path(driver: StorageDriver, namespace: str) -> str:
    resource = "secrets" if driver is StorageDriver.SECRET else "configmaps"
    return f"/api/v1/namespaces/{namespace}/{resource}"


def _revision(item: dict[str, Any]) -> int:
    labels = (item.get("metadata") or {}).get("labels") or {}
    try:
        return int(labels.get("version", 0))
    except (TypeError, ValueError):
        return 0


def decode_release(encoded: str, driver: StorageDriver) -> dict[str, Any]:
    """Decode the ``release`` data value of a storage object."""
    try:
        payload = base64.b64decode(encoded)
        if driver is StorageDriver.SECRET:
            payload = base64.b64decode(payload)
        if payload.startswith(_GZIP_MAGIC):
            payload = gzip.decompress(payload)
        record = json.loads(payload)
    except (binascii.Error, EOFError, OSError, ValueError) as exc:
        raise ReleaseDecodeError(f"cannot decode release record: {exc}") from exc
    if not isinstance(record, dict):
        raise ReleaseDecodeError("release record is not a JSON object")
    return record


async def get_release(
    api_client: Any,
    name: str,
    namespace: str,
    driver: StorageDriver = StorageDriver.SECRET,
) -> Release:
    """Fetch the latest stored revision of release *name*.

    Raises:
        ReleaseNotFoundError: no storage object carries the release labels.
        ReleaseDecodeError: the newest record cannot be decoded.
    """
    body = await get_json(
        api_client,
        _storage_path(driver, namespace),
        [("labelSelector", f"owner=helm,name={name}")],
    )
    items = body.get("items") or []
    if not items:
        raise ReleaseNotFoundError(name, namespace)

    latest = max(items, key=_revision)
    encoded = (latest.get("data") or {}).get("release")
    if not encoded:
        raise ReleaseDecodeError(f"release {name} revision {_revision(latest)} has no release data")

    record = decode_release(encoded, driver)
    info = record.get("info") or {}
    release = Release(
        name=str(record.get("name") or name),
        namespace=str(record.get("namespace") or namespace),
        version=int(record.get("version") or _revision(latest)),
        status=str(info.get("status") or ""),
        manifest=str(record.get("manifest") or ""),
    )
    _logger.info("release_loaded", release=release.name, revision=release.version, status=release.status)
    return release


def _declared(doc: Any) -> list[DeclaredObject]:
    if not isinstance(doc, dict):
        return []
    if doc.get("kind") == "List" and isinstance(doc.get("items"), list):
        return [obj for item in doc["items"] for obj in _declared(item)]
    declared = DeclaredObject.from_manifest(doc)
    if not declared.kind or not declared.name:
        return []
    return [declared]


def parse_manifest(text: str) -> list[DeclaredObject]:
    """Split a multi-document manifest into declared objects.

    Documents that fail to parse are skipped; the rest keep their order.
    """
    objects: list[DeclaredObject] = []
    for chunk in _DOC_SEPARATOR.split(text):
        if not chunk.strip():
            continue
        try:
            doc = yaml.safe_load(chunk)
        except yaml.YAMLError as exc:
            _logger.debug("manifest_document_skipped", error=str(exc))
            continue
        objects.extend(_declared(doc))
    return objects
