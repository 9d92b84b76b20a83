"""Click entry point: ``helm tree RELEASE``."""

from __future__ import annotations

import asyncio
import sys

import click

from helmtree import __version__
from helmtree.app import HelmTreeApp
from helmtree.config import load_config
from helmtree.errors import HelmTreeError
from helmtree.observability.logging import setup_logging, verbosity_to_level
from helmtree.render.color import ColorMode


@click.command(
    name="tree",
    epilog="Examples:\n\n\b\n  helm tree my-release\n  helm tree -n kube-public my-release",
)
@click.argument("release")
@click.option(
    "-A",
    "--all-namespaces",
    is_flag=True,
    default=False,
    help="Query all objects in all API groups, both namespaced and non-namespaced.",
)
@click.option(
    "-c",
    "--color",
    type=click.Choice([m.value for m in ColorMode]),
    default=ColorMode.AUTO.value,
    show_default=True,
    help="Enable or disable color output. 'auto' uses color only on a tty "
    "and is turned off by the NO_COLOR env variable.",
)
@click.option(
    "-n",
    "--namespace",
    default="",
    help="Namespace of the release (default: HELM_NAMESPACE or the kubeconfig context).",
)
@click.option("-v", "--v", "verbosity", type=int, default=None, help="Log verbosity (0-3).")
@click.version_option(version=f"v{__version__}", prog_name="helm-tree")
def cli(release: str, all_namespaces: bool, color: str, namespace: str, verbosity: int | None) -> None:
    """Show sub-resources of a helm release."""
    try:
        config = load_config()
    except (HelmTreeError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc

    level = verbosity_to_level(verbosity) if verbosity is not None else config.log.level
    setup_logging(level, config.log.format)

    app = HelmTreeApp(config)
    try:
        asyncio.run(
            app.run(
                release,
                sys.stdout,
                color_mode=ColorMode(color),
                all_namespaces=all_namespaces,
                namespace=namespace,
            )
        )
    except HelmTreeError as exc:
        raise click.ClickException(str(exc)) from exc
