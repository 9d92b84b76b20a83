"""Lookup table from kind name to resource descriptors.

Built once per run from the discovery results and read-only afterwards.
A kind name may match several descriptors when more than one API group
serves a kind of that name (e.g. ``Event`` in the core group and in
``events.k8s.io``); callers decide what an ambiguous match means.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from helmtree.models.resources import ResourceDescriptor


class KindResolution(StrEnum):
    """Outcome of resolving a kind name against the catalog."""

    NOT_FOUND = "not_found"
    UNIQUE = "unique"
    AMBIGUOUS = "ambiguous"


@dataclass(frozen=True)
class Resolution:
    """Result of :meth:`APICatalog.resolve`."""

    outcome: KindResolution
    candidates: tuple[ResourceDescriptor, ...] = ()

    @property
    def descriptor(self) -> ResourceDescriptor:
        """Return the single match. Only valid when outcome is UNIQUE."""
        if self.outcome is not KindResolution.UNIQUE:
            raise ValueError(f"no unique descriptor (outcome={self.outcome})")
        return self.candidates[0]


def disambiguation_name(descriptor: ResourceDescriptor) -> str:
    """Return ``plural.version.group`` (``plural.version`` for the core group)."""
    if descriptor.group:
        return f"{descriptor.resource_plural}.{descriptor.version}.{descriptor.group}"
    return f"{descriptor.resource_plural}.{descriptor.version}"


class APICatalog:
    """Kind name -> descriptors, case-insensitive.

    Fully-qualified names (``plural.version.group`` and ``plural.group``)
    are indexed separately so that every disambiguation name resolves to
    exactly one descriptor. They are consulted only for names containing
    a dot, which no Kubernetes kind does.
    """

    def __init__(self, descriptors: Iterable[ResourceDescriptor] = ()) -> None:
        self._by_kind: dict[str, list[ResourceDescriptor]] = {}
        self._by_qualified_name: dict[str, list[ResourceDescriptor]] = {}
        self._descriptors: list[ResourceDescriptor] = []
        for descriptor in descriptors:
            self._add(descriptor)

    @classmethod
    def build(cls, descriptors: Iterable[ResourceDescriptor]) -> APICatalog:
        return cls(descriptors)

    def _add(self, descriptor: ResourceDescriptor) -> None:
        self._descriptors.append(descriptor)
        self._by_kind.setdefault(descriptor.kind.lower(), []).append(descriptor)

        names = {disambiguation_name(descriptor).lower()}
        if descriptor.group:
            names.add(f"{descriptor.resource_plural}.{descriptor.group}".lower())
        for name in names:
            self._by_qualified_name.setdefault(name, []).append(descriptor)

    def __len__(self) -> int:
        return len(self._descriptors)

    @property
    def descriptors(self) -> list[ResourceDescriptor]:
        """All descriptors in discovery order."""
        return list(self._descriptors)

    def lookup(self, kind_name: str) -> list[ResourceDescriptor]:
        """Return every descriptor whose kind matches *kind_name*.

        Never raises: an empty list means the kind is unknown, more than one
        entry means it is ambiguous across API groups.
        """
        key = kind_name.lower()
        if "." in key:
            return list(self._by_qualified_name.get(key, ()))
        return list(self._by_kind.get(key, ()))

    def resolve(self, kind_name: str) -> Resolution:
        """Classify a lookup as not-found, unique or ambiguous."""
        matches = tuple(self.lookup(kind_name))
        if not matches:
            return Resolution(KindResolution.NOT_FOUND)
        if len(matches) > 1:
            return Resolution(KindResolution.AMBIGUOUS, matches)
        return Resolution(KindResolution.UNIQUE, matches)
