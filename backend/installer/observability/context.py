"""Validation-scoped context utilities."""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

_cluster_id: ContextVar[str | None] = ContextVar("cluster_id", default=None)
_host_id: ContextVar[str | None] = ContextVar("host_id", default=None)


def get_cluster_id() -> str | None:
    """Return the cluster id being validated, if any."""
    return _cluster_id.get()


def get_host_id() -> str | None:
    """Return the host id being validated, if any."""
    return _host_id.get()


@contextmanager
def validation_scope(cluster_id: str | None, host_id: str | None = None) -> Iterator[None]:
    """Bind cluster and host ids to log records emitted inside the block."""
    cluster_token = _cluster_id.set(cluster_id)
    host_token = _host_id.set(host_id)
    try:
        yield
    finally:
        _host_id.reset(host_token)
        _cluster_id.reset(cluster_token)
