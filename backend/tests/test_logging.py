from __future__ import annotations

import logging

from installer.config import Settings
from installer.observability import ValidationContextFilter, configure_logging, validation_scope
from installer.observability.otel import configure_tracing


def make_record() -> logging.LogRecord:
    return logging.LogRecord("installer.test", logging.INFO, __file__, 1, "hello", None, None)


def test_filter_defaults_outside_validation():
    record = make_record()

    assert ValidationContextFilter().filter(record) is True
    assert record.cluster_id == "-"
    assert record.host_id == "-"
    assert record.trace_id == "-"


def test_filter_attaches_validation_scope():
    record = make_record()

    with validation_scope("cluster-1", "host-7"):
        ValidationContextFilter().filter(record)

    assert record.cluster_id == "cluster-1"
    assert record.host_id == "host-7"


def test_scope_is_restored_after_block():
    with validation_scope("outer"):
        with validation_scope("inner", "h"):
            pass
        record = make_record()
        ValidationContextFilter().filter(record)

    assert record.cluster_id == "outer"
    assert record.host_id == "-"


def test_filter_picks_up_active_span():
    provider = configure_tracing(Settings(otel_endpoint=None))
    tracer = provider.get_tracer("installer.tests")
    record = make_record()

    with tracer.start_as_current_span("operators.validate_cluster"):
        ValidationContextFilter().filter(record)

    assert len(record.trace_id) == 32
    assert len(record.span_id) == 16


def test_configure_logging_attaches_context_filter(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)

    configure_logging(Settings(log_level="debug"))

    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert any(isinstance(f, ValidationContextFilter) for f in root.handlers[0].filters)
