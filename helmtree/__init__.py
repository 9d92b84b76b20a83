"""helm-tree: show the ownership tree of the live objects in a Helm release."""

__version__ = "0.1.0"
