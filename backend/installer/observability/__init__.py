"""Logging, tracing and validation context helpers."""

from .context import get_cluster_id, get_host_id, validation_scope
from .logging import ValidationContextFilter, configure_logging

__all__ = [
    "ValidationContextFilter",
    "configure_logging",
    "get_cluster_id",
    "get_host_id",
    "validation_scope",
]
