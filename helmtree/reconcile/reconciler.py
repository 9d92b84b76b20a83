"""Map each manifest-declared object to its live counterpart.

Namespace defaulting needs to know whether a kind is namespaced, so every
declared object without a namespace is resolved against the API catalog
first. Unknown and ambiguous kinds abort the whole run before anything is
printed; a declared object that has no live counterpart is kept as-is and
renders as a leaf.
"""

from __future__ import annotations

from collections.abc import Iterable

from helmtree.catalog.api_catalog import APICatalog, KindResolution, disambiguation_name
from helmtree.errors import AmbiguousKindError, UnknownKindError
from helmtree.graph.directory import ObjectDirectory
from helmtree.models.resources import DeclaredObject, LiveObject
from helmtree.observability.logging import get_logger

_logger = get_logger("reconcile")

RootObject = LiveObject | DeclaredObject


def _default_namespace(doc: DeclaredObject, catalog: APICatalog, namespace: str) -> DeclaredObject:
    resolution = catalog.resolve(doc.kind)
    if resolution.outcome is KindResolution.NOT_FOUND:
        raise UnknownKindError(doc.kind)
    if resolution.outcome is KindResolution.AMBIGUOUS:
        raise AmbiguousKindError(doc.kind, [disambiguation_name(d) for d in resolution.candidates])
    if resolution.descriptor.namespaced:
        return doc.with_namespace(namespace)
    return doc


def resolve_roots(
    manifest_docs: Iterable[DeclaredObject],
    catalog: APICatalog,
    directory: ObjectDirectory,
    default_namespace: str,
) -> list[RootObject]:
    """Return one root per declared document, in document order.

    Raises:
        UnknownKindError: a namespace-less document's kind is not in the catalog.
        AmbiguousKindError: a namespace-less document's kind matches several
            API groups.
    """
    roots: list[RootObject] = []
    missing = 0
    for doc in manifest_docs:
        if not doc.namespace:
            doc = _default_namespace(doc, catalog, default_namespace)

        live = directory.lookup(doc.kind, doc.namespace, doc.name)
        if live is not None:
            roots.append(live)
        else:
            missing += 1
            _logger.debug("declared_object_not_live", kind=doc.kind, namespace=doc.namespace, name=doc.name)
            roots.append(doc)

    _logger.info("manifest_reconciled", roots=len(roots), not_found=missing)
    return roots
