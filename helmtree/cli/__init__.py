"""helm-tree command-line interface.

Exposes:
    cli -- Click command entry point (registered as ``helm-tree`` script).
"""

from helmtree.cli.main import cli

__all__ = ["cli"]
