"""Entry point for `python -m helmtree`.

Usage:
    python -m helmtree RELEASE
    python -m helmtree -n kube-public RELEASE
"""

from __future__ import annotations

from helmtree.cli.main import cli

cli()
