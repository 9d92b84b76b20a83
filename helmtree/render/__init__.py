"""Tree rendering of ownership hierarchies."""

from helmtree.render.color import ColorMode, resolve_color
from helmtree.render.status import ObjectStatus, Readiness, StatusRegistry, default_registry
from helmtree.render.tree import CYCLE_MARKER, TreeRenderer, render_tree

__all__ = [
    "CYCLE_MARKER",
    "ColorMode",
    "ObjectStatus",
    "Readiness",
    "StatusRegistry",
    "TreeRenderer",
    "default_registry",
    "render_tree",
    "resolve_color",
]
