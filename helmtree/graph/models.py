"""Data structures for the ownership graph."""

from __future__ import annotations

from dataclasses import dataclass

from helmtree.models.resources import LiveObject


@dataclass(frozen=True)
class ObjectKey:
    """Identity of an object for lookups.

    Names are unique only within (kind, namespace); owner edges use uids.
    """

    kind: str
    namespace: str
    name: str

    @classmethod
    def of(cls, obj: LiveObject) -> ObjectKey:
        return cls(obj.kind, obj.namespace, obj.name)


@dataclass(frozen=True)
class OwnershipEdge:
    """``owner_uid`` owns ``child``, as recorded in the child's ownerReferences."""

    owner_uid: str
    child: LiveObject
    controller: bool = False
