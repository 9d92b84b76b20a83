"""Resource descriptors, live cluster objects and manifest-declared objects."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class ResourceDescriptor:
    """One kind of resource the cluster can serve."""

    group: str
    version: str
    resource_plural: str
    kind: str
    namespaced: bool
    singular_name: str = ""
    short_names: tuple[str, ...] = ()

    @property
    def group_version(self) -> str:
        """Return ``group/version``, or just ``version`` for the core group."""
        if self.group:
            return f"{self.group}/{self.version}"
        return self.version


@dataclass(frozen=True)
class OwnerRef:
    """A pointer from a live object to one of its owners."""

    api_version: str
    kind: str
    name: str
    uid: str
    is_controller: bool = False

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> OwnerRef:
        return cls(
            api_version=str(raw.get("apiVersion", "")),
            kind=str(raw.get("kind", "")),
            name=str(raw.get("name", "")),
            uid=str(raw.get("uid", "")),
            is_controller=bool(raw.get("controller", False)),
        )


@dataclass(frozen=True)
class LiveObject:
    """A materialized object as reported by the cluster.

    ``status`` is kept opaque; only the status evaluators in
    :mod:`helmtree.render.status` look inside it.
    """

    api_version: str
    kind: str
    namespace: str
    name: str
    uid: str
    owner_references: tuple[OwnerRef, ...] = ()
    status: dict[str, Any] | None = field(default=None, compare=False, hash=False)

    @property
    def key(self) -> tuple[str, str, str]:
        """Return the identity used for lookups: (kind, namespace, name)."""
        return (self.kind, self.namespace, self.name)

    @classmethod
    def from_dict(
        cls,
        raw: dict[str, Any],
        api_version: str = "",
        kind: str = "",
    ) -> LiveObject:
        """Build a LiveObject from an API item.

        List responses omit ``apiVersion``/``kind`` on their items, so the
        caller may supply them from the descriptor that was listed.
        """
        metadata = raw.get("metadata") or {}
        owner_refs = tuple(OwnerRef.from_dict(ref) for ref in metadata.get("ownerReferences") or [])
        status = raw.get("status")
        return cls(
            api_version=str(raw.get("apiVersion") or api_version),
            kind=str(raw.get("kind") or kind),
            namespace=str(metadata.get("namespace") or ""),
            name=str(metadata.get("name") or ""),
            uid=str(metadata.get("uid") or ""),
            owner_references=owner_refs,
            status=status if isinstance(status, dict) else None,
        )


@dataclass(frozen=True)
class DeclaredObject:
    """An object as written in the release manifest.

    Declared objects carry no uid and no owner references; when the live
    counterpart cannot be found they render as leaves.
    """

    api_version: str
    kind: str
    namespace: str
    name: str

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.kind, self.namespace, self.name)

    def with_namespace(self, namespace: str) -> DeclaredObject:
        return replace(self, namespace=namespace)

    @classmethod
    def from_manifest(cls, doc: dict[str, Any]) -> DeclaredObject:
        metadata = doc.get("metadata") or {}
        return cls(
            api_version=str(doc.get("apiVersion") or ""),
            kind=str(doc.get("kind") or ""),
            namespace=str(metadata.get("namespace") or ""),
            name=str(metadata.get("name") or ""),
        )


@dataclass(frozen=True)
class Release:
    """The stored record of one Helm release revision."""

    name: str
    namespace: str
    version: int
    status: str
    manifest: str
