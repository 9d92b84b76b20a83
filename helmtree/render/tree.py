"""Box-drawing tree view of an ownership graph.

Each root is a top-level branch under a header line. Children come from
the directory's owner index in its stable order. The walk keeps the set of
uids on the current root-to-node path: a node whose uid is already on the
path is printed once more with a cycle marker and not descended into.
Membership is per path, not per walk, so a descendant shared by two
branches is rendered under both.

The walk uses an explicit stack because owner chains reported by a
cluster have no depth bound.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import IO

import click

from helmtree.graph.directory import ObjectDirectory
from helmtree.models.resources import DeclaredObject, LiveObject
from helmtree.observability.logging import get_logger
from helmtree.render.status import ObjectStatus, Readiness, StatusRegistry, default_registry

_logger = get_logger("render.tree")

TEE = "├── "
ELBOW = "└── "
PIPE = "│   "
SPACE = "    "
CYCLE_MARKER = "(cycle)"

_READINESS_COLORS = {
    Readiness.READY: "green",
    Readiness.NOT_READY: "red",
    Readiness.UNKNOWN: "yellow",
}


@dataclass
class TreeNode:
    """An object waiting on the walk stack to be printed."""

    obj: LiveObject | DeclaredObject
    prefix: str = ""
    is_last: bool = True


@dataclass
class PathExit:
    """Pushed below a node's children; popping it takes the node off the current path."""

    uid: str


def format_label(obj: LiveObject | DeclaredObject) -> str:
    if obj.namespace:
        return f"{obj.kind} {obj.namespace}/{obj.name}"
    return f"{obj.kind} {obj.name}"


class TreeRenderer:
    """Renders roots and their descendants as text lines."""

    def __init__(
        self,
        directory: ObjectDirectory,
        statuses: StatusRegistry | None = None,
    ) -> None:
        self._directory = directory
        self._statuses = statuses if statuses is not None else default_registry()

    def lines(self, roots: Sequence[LiveObject | DeclaredObject], title: str = "") -> list[str]:
        """Return the styled output lines, header first."""
        out = [click.style(title or ".", bold=True)]
        for i, root in enumerate(roots):
            out.extend(self._walk(root, i == len(roots) - 1))
        return out

    def _walk(self, root: LiveObject | DeclaredObject, is_last_root: bool) -> list[str]:
        lines: list[str] = []
        visiting: set[str] = set()
        stack: list[TreeNode | PathExit] = [TreeNode(root, "", is_last_root)]

        while stack:
            node = stack.pop()
            if isinstance(node, PathExit):
                visiting.discard(node.uid)
                continue

            obj = node.obj
            connector = ELBOW if node.is_last else TEE
            uid = obj.uid if isinstance(obj, LiveObject) else ""

            if uid and uid in visiting:
                _logger.debug("owner_cycle_detected", kind=obj.kind, namespace=obj.namespace, name=obj.name)
                lines.append(f"{node.prefix}{connector}{format_label(obj)} {click.style(CYCLE_MARKER, dim=True)}")
                continue

            lines.append(f"{node.prefix}{connector}{self._describe(obj)}")
            if not uid:
                continue

            children = self._directory.children_of(uid)
            if not children:
                continue
            visiting.add(uid)
            stack.append(PathExit(uid))
            child_prefix = node.prefix + (SPACE if node.is_last else PIPE)
            last = len(children) - 1
            for i in range(last, -1, -1):
                stack.append(TreeNode(children[i], child_prefix, i == last))

        return lines

    def _describe(self, obj: LiveObject | DeclaredObject) -> str:
        label = format_label(obj)
        if not isinstance(obj, LiveObject):
            return label
        status = self._statuses.evaluate(obj)
        if status is None:
            return label
        return f"{label} {_style_status(status)}"


def _style_status(status: ObjectStatus) -> str:
    return click.style(status.tag, fg=_READINESS_COLORS[status.readiness])


def render_tree(
    out: IO[str],
    directory: ObjectDirectory,
    roots: Sequence[LiveObject | DeclaredObject],
    *,
    title: str = "",
    color: bool = False,
    statuses: StatusRegistry | None = None,
) -> None:
    """Write the tree for *roots* to *out*.

    With ``color=False`` click strips every escape sequence, so the
    structure of the output does not depend on the color setting.
    """
    renderer = TreeRenderer(directory, statuses)
    for line in renderer.lines(roots, title):
        click.echo(line, file=out, color=color)
