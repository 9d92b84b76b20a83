"""Application pipeline for helm-tree.

Runs the stages of one invocation in order:
config → logging → K8s client → discovery → catalog → release
       → live objects → directory → reconcile → render

All cluster reads complete before the tree is rendered, and reconciliation
errors are raised before the first line is written, so a failed run never
prints a partial tree. The Kubernetes client is closed on every exit path.
"""

from __future__ import annotations

import asyncio
from typing import IO, TYPE_CHECKING, Any

import aiohttp
from kubernetes_asyncio.client.exceptions import ApiException  # type: ignore[import-untyped]

from helmtree.catalog.api_catalog import APICatalog
from helmtree.cluster.client import build_api_client, default_namespace
from helmtree.cluster.discovery import discover_resources
from helmtree.cluster.query import list_all_objects
from helmtree.cluster.release import get_release, parse_manifest
from helmtree.errors import ClusterQueryError, ComponentError
from helmtree.graph.directory import ObjectDirectory
from helmtree.models.config import HelmTreeConfig
from helmtree.observability.logging import get_logger
from helmtree.reconcile.reconciler import resolve_roots
from helmtree.render.color import ColorMode, resolve_color
from helmtree.render.status import StatusRegistry
from helmtree.render.tree import render_tree

if TYPE_CHECKING:
    import structlog


class HelmTreeApp:
    """Owns the Kubernetes client for one run and drives the pipeline.

    ``stop()`` is safe to call on an app that was never started.
    """

    def __init__(self, config: HelmTreeConfig, statuses: StatusRegistry | None = None) -> None:
        self.config = config
        self._statuses = statuses
        self._api_client: Any | None = None
        self._log: structlog.stdlib.BoundLogger = get_logger("app")

    async def start(self) -> None:
        """Build the Kubernetes client.

        Raises ComponentError if no usable cluster configuration exists.
        """
        self._log.debug("starting k8s client")
        try:
            self._api_client = await build_api_client(self.config.kube)
        except Exception as exc:
            raise ComponentError("k8s_client", exc) from exc

    async def stop(self) -> None:
        if self._api_client is None:
            return
        try:
            await self._api_client.close()
        except Exception as exc:
            self._log.debug("k8s client close raised (non-fatal)", error=str(exc))
        finally:
            self._api_client = None

    def resolve_namespace(self, namespace: str = "") -> str:
        return namespace or self.config.namespace or default_namespace(self.config.kube)

    async def run(
        self,
        release_name: str,
        out: IO[str],
        color_mode: ColorMode | str = ColorMode.AUTO,
        all_namespaces: bool = False,
        namespace: str = "",
    ) -> None:
        """Print the ownership tree of *release_name* to *out*."""
        color = resolve_color(color_mode, out)
        ns = self.resolve_namespace(namespace)
        self._log.info("parsed release", release=release_name, namespace=ns, all_namespaces=all_namespaces)

        await self.start()
        try:
            api_client = self._api_client
            descriptors = await discover_resources(api_client)
            catalog = APICatalog.build(descriptors)

            release = await get_release(api_client, release_name, ns, self.config.driver)
            manifest = parse_manifest(release.manifest)
            self._log.info("manifest parsed", documents=len(manifest))

            self._log.info("querying all api objects")
            objects = await list_all_objects(
                api_client,
                catalog.descriptors,
                ns,
                all_namespaces=all_namespaces,
                max_in_flight=self.config.kube.burst,
            )
        except (ApiException, aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise ClusterQueryError("cluster api", exc) from exc
        finally:
            await self.stop()

        directory = ObjectDirectory.build(objects)
        if directory.orphans:
            self._log.debug("objects with owners outside the snapshot", count=len(directory.orphans))

        roots = resolve_roots(manifest, catalog, directory, ns)
        render_tree(out, directory, roots, title=release.name, color=color, statuses=self._statuses)
        self._log.info("done printing tree view", roots=len(roots), objects=len(directory))
