"""Observability helpers (structured logging)."""

from helmtree.observability.logging import get_logger, setup_logging, verbosity_to_level

__all__ = ["get_logger", "setup_logging", "verbosity_to_level"]
