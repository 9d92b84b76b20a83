"""In-memory directory of live objects and the owner edges between them.

The owner graph is supplied by the cluster and is not guaranteed to be
acyclic. The directory records edges as reported; walking them safely is
the renderer's job.
"""

from __future__ import annotations

from collections.abc import Iterable

from helmtree.graph.models import ObjectKey, OwnershipEdge
from helmtree.models.resources import LiveObject
from helmtree.observability.logging import get_logger

_logger = get_logger("graph.directory")


class ObjectDirectory:
    """Immutable index over a snapshot of live objects.

    Two indexes are built once:

    * identity -> object, keyed by (kind, namespace, name); the first
      object wins when the cluster reports duplicates.
    * owner uid -> children, in the order the objects were supplied, so
      iteration (and therefore rendered output) is reproducible.
    """

    def __init__(self, objects: Iterable[LiveObject]) -> None:
        self._objects: tuple[LiveObject, ...] = tuple(objects)
        self._by_identity: dict[ObjectKey, LiveObject] = {}
        self._by_uid: dict[str, LiveObject] = {}
        self._children: dict[str, list[LiveObject]] = {}
        self._edges: list[OwnershipEdge] = []

        duplicates = 0
        for obj in self._objects:
            key = ObjectKey.of(obj)
            if key in self._by_identity:
                duplicates += 1
                continue
            self._by_identity[key] = obj
            if obj.uid:
                self._by_uid.setdefault(obj.uid, obj)

        for obj in self._objects:
            seen_owners: set[str] = set()
            for ref in obj.owner_references:
                if not ref.uid or ref.uid in seen_owners:
                    continue
                seen_owners.add(ref.uid)
                self._children.setdefault(ref.uid, []).append(obj)
                self._edges.append(OwnershipEdge(ref.uid, obj, ref.is_controller))

        self._orphans = tuple(
            obj
            for obj in self._objects
            if any(ref.uid and ref.uid not in self._by_uid for ref in obj.owner_references)
        )

        if duplicates:
            _logger.debug("duplicate_objects_ignored", count=duplicates)

    @classmethod
    def build(cls, objects: Iterable[LiveObject]) -> ObjectDirectory:
        return cls(objects)

    def __len__(self) -> int:
        return len(self._objects)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    @property
    def edges(self) -> list[OwnershipEdge]:
        return list(self._edges)

    @property
    def orphans(self) -> tuple[LiveObject, ...]:
        """Objects with an owner reference to a uid that is not in the directory.

        Typical when the owner lives in a namespace that was not queried.
        """
        return self._orphans

    def lookup(self, kind: str, namespace: str, name: str) -> LiveObject | None:
        return self._by_identity.get(ObjectKey(kind, namespace, name))

    def get_by_uid(self, uid: str) -> LiveObject | None:
        return self._by_uid.get(uid)

    def children_of(self, uid: str) -> list[LiveObject]:
        """Objects whose ownerReferences point at *uid*, in supply order.

        Owner references are followed by uid only, so a child in another
        namespace than its owner is still returned.
        """
        return list(self._children.get(uid, ()))
