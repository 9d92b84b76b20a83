"""API catalog: resolve kind names to discoverable resource types."""

from helmtree.catalog.api_catalog import (
    APICatalog,
    KindResolution,
    Resolution,
    disambiguation_name,
)

__all__ = [
    "APICatalog",
    "KindResolution",
    "Resolution",
    "disambiguation_name",
]
