"""Object directory: live objects indexed by identity and by owner uid."""

from helmtree.graph.directory import ObjectDirectory
from helmtree.graph.models import ObjectKey, OwnershipEdge

__all__ = [
    "ObjectDirectory",
    "ObjectKey",
    "OwnershipEdge",
]
