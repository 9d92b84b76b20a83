"""Tests for resolve_roots(): namespace defaulting and live substitution."""

from __future__ import annotations

import pytest

from helmtree.catalog.api_catalog import APICatalog
from helmtree.errors import AmbiguousKindError, UnknownKindError
from helmtree.graph.directory import ObjectDirectory
from helmtree.models.resources import DeclaredObject, LiveObject, ResourceDescriptor
from helmtree.reconcile.reconciler import resolve_roots

# ---------------------------------------------------------------------------
# Helper factories
# ---------------------------------------------------------------------------


def _descriptor(kind: str, group: str = "", namespaced: bool = True, plural: str | None = None) -> ResourceDescriptor:
    return ResourceDescriptor(
        group=group,
        version="v1",
        resource_plural=plural or f"{kind.lower()}s",
        kind=kind,
        namespaced=namespaced,
    )


def _declared(kind: str, name: str, namespace: str = "", api_version: str = "v1") -> DeclaredObject:
    return DeclaredObject(api_version=api_version, kind=kind, namespace=namespace, name=name)


def _live(kind: str, name: str, namespace: str, uid: str) -> LiveObject:
    return LiveObject(api_version="v1", kind=kind, namespace=namespace, name=name, uid=uid)


_CATALOG = APICatalog.build(
    [
        _descriptor("Pod"),
        _descriptor("ConfigMap"),
        _descriptor("Namespace", namespaced=False),
        _descriptor("ClusterRole", group="rbac.authorization.k8s.io", namespaced=False),
        _descriptor("Foo", group="g1"),
        _descriptor("Foo", group="g2"),
    ]
)


# =====================================================================
# Namespace defaulting
# =====================================================================


class TestNamespaceDefaulting:
    def test_namespaced_kind_gets_default_namespace(self) -> None:
        roots = resolve_roots([_declared("Pod", "web-0")], _CATALOG, ObjectDirectory([]), "demo")
        assert roots == [_declared("Pod", "web-0", namespace="demo")]

    def test_cluster_scoped_kind_stays_without_namespace(self) -> None:
        roots = resolve_roots([_declared("ClusterRole", "reader")], _CATALOG, ObjectDirectory([]), "demo")
        assert roots == [_declared("ClusterRole", "reader")]

    def test_explicit_namespace_kept(self) -> None:
        roots = resolve_roots([_declared("Pod", "web-0", namespace="other")], _CATALOG, ObjectDirectory([]), "demo")
        assert roots[0].namespace == "other"

    def test_explicit_namespace_skips_catalog(self) -> None:
        # Neither unknown nor ambiguous kinds matter when no defaulting is needed.
        docs = [_declared("Widget", "w", namespace="demo"), _declared("Foo", "f", namespace="demo")]
        roots = resolve_roots(docs, _CATALOG, ObjectDirectory([]), "demo")
        assert [r.name for r in roots] == ["w", "f"]


# =====================================================================
# Live substitution
# =====================================================================


class TestLiveSubstitution:
    def test_live_object_replaces_declared(self) -> None:
        live = _live("Pod", "web-0", "demo", "p1")
        roots = resolve_roots([_declared("Pod", "web-0")], _CATALOG, ObjectDirectory([live]), "demo")
        assert roots == [live]
        assert roots[0] is live

    def test_missing_live_object_keeps_declared(self) -> None:
        other = _live("Pod", "web-1", "demo", "p2")
        roots = resolve_roots([_declared("Pod", "web-0")], _CATALOG, ObjectDirectory([other]), "demo")
        assert isinstance(roots[0], DeclaredObject)

    def test_live_object_in_other_namespace_not_matched(self) -> None:
        live = _live("Pod", "web-0", "elsewhere", "p1")
        roots = resolve_roots([_declared("Pod", "web-0")], _CATALOG, ObjectDirectory([live]), "demo")
        assert isinstance(roots[0], DeclaredObject)

    def test_document_order_preserved(self) -> None:
        docs = [_declared("ConfigMap", "b"), _declared("Pod", "a"), _declared("Namespace", "demo")]
        live = [_live("Pod", "a", "demo", "p1"), _live("Namespace", "demo", "", "n1")]
        roots = resolve_roots(docs, _CATALOG, ObjectDirectory(live), "demo")
        assert [(r.kind, r.name) for r in roots] == [("ConfigMap", "b"), ("Pod", "a"), ("Namespace", "demo")]
        assert isinstance(roots[2], LiveObject)

    def test_empty_manifest(self) -> None:
        assert resolve_roots([], _CATALOG, ObjectDirectory([]), "demo") == []


# =====================================================================
# Fatal errors
# =====================================================================


class TestErrors:
    def test_unknown_kind(self) -> None:
        with pytest.raises(UnknownKindError) as exc_info:
            resolve_roots([_declared("Widget", "w")], _CATALOG, ObjectDirectory([]), "demo")
        assert exc_info.value.kind == "Widget"
        assert str(exc_info.value) == 'could not find api kind "Widget"'

    def test_ambiguous_kind_lists_sorted_candidates(self) -> None:
        with pytest.raises(AmbiguousKindError) as exc_info:
            resolve_roots([_declared("Foo", "f")], _CATALOG, ObjectDirectory([]), "demo")
        assert exc_info.value.kind == "Foo"
        assert exc_info.value.candidates == ["foos.v1.g1", "foos.v1.g2"]
        assert "[foos.v1.g1, foos.v1.g2]" in str(exc_info.value)

    def test_ambiguous_candidates_sorted_regardless_of_discovery_order(self) -> None:
        catalog = APICatalog.build([_descriptor("Foo", group="zeta"), _descriptor("Foo", group="alpha")])
        with pytest.raises(AmbiguousKindError) as exc_info:
            resolve_roots([_declared("Foo", "f")], catalog, ObjectDirectory([]), "demo")
        assert exc_info.value.candidates == ["foos.v1.alpha", "foos.v1.zeta"]

    def test_error_after_valid_documents_still_raises(self) -> None:
        docs = [_declared("Pod", "ok"), _declared("Widget", "bad")]
        with pytest.raises(UnknownKindError):
            resolve_roots(docs, _CATALOG, ObjectDirectory([]), "demo")
