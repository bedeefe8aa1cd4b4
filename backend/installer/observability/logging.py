"""Logging configuration with validation context."""

from __future__ import annotations

import logging
from logging.handlers import SysLogHandler

from opentelemetry import trace

from installer.config import Settings, get_settings
from installer.observability.context import get_cluster_id, get_host_id

LOG_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s cluster_id=%(cluster_id)s host_id=%(host_id)s "
    "trace_id=%(trace_id)s span_id=%(span_id)s %(message)s"
)


class ValidationContextFilter(logging.Filter):
    """Attach cluster/host ids and trace ids to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        span = trace.get_current_span()
        span_context = span.get_span_context()
        if span_context and span_context.is_valid:
            record.trace_id = format(span_context.trace_id, "032x")
            record.span_id = format(span_context.span_id, "016x")
        else:
            record.trace_id = "-"
            record.span_id = "-"
        record.cluster_id = get_cluster_id() or "-"
        record.host_id = get_host_id() or "-"
        return True


def configure_logging(settings: Settings | None = None) -> None:
    """Configure base logging to include validation context."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    root_logger = logging.getLogger()
    context_filter = ValidationContextFilter()
    # Filters on the logger do not apply to records propagated from children
    for handler in root_logger.handlers:
        handler.addFilter(context_filter)

    if settings.syslog_host:
        syslog_handler = SysLogHandler(address=(settings.syslog_host, settings.syslog_port))
        syslog_handler.setLevel(logging.INFO)
        syslog_handler.setFormatter(logging.Formatter("%(name)s %(levelname)s cluster_id=%(cluster_id)s %(message)s"))
        syslog_handler.addFilter(context_filter)
        root_logger.addHandler(syslog_handler)
