"""Manifest reconciler: map declared objects onto live ones."""

from helmtree.reconcile.reconciler import RootObject, resolve_roots

__all__ = ["RootObject", "resolve_roots"]
