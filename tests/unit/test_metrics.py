"""
Unit tests for assembly metrics collection.
"""

import pytest
from datetime import datetime

from jstree.models import AssemblyTimeout, UnknownNodeKind
from jstree.utils.metrics import AssemblyMetrics, emit_metric, track_assembly


def test_metrics_initialization():
    """Test metrics collector initialization."""
    metrics = AssemblyMetrics(mode="sequential", source="app.js")

    assert metrics.mode == "sequential"
    assert metrics.source == "app.js"
    assert metrics.status == "running"
    assert metrics.statements_count == 0
    assert metrics.node_counts == {}


def test_metrics_start_and_complete():
    """Test timing a completed assembly."""
    metrics = AssemblyMetrics("concurrent")

    metrics.start()
    assert isinstance(metrics.start_time, datetime)

    metrics.complete(status="completed")

    assert metrics.end_time is not None
    assert metrics.status == "completed"
    assert metrics.duration_ms is not None
    assert metrics.duration_ms >= 0


def test_metrics_complete_with_error():
    """Test completing metrics with an error."""
    metrics = AssemblyMetrics("sequential")

    metrics.start()
    metrics.complete(status="failed", error_message="Unknown node kind: Foo")

    assert metrics.status == "failed"
    assert metrics.error_message == "Unknown node kind: Foo"


def test_metrics_get_summary():
    """Test the metrics summary."""
    metrics = AssemblyMetrics("sequential", source="app.js")

    metrics.start()
    metrics.record_statements(2)
    for kind in ("Program", "Identifier", "Identifier", "Literal"):
        metrics.record_node(kind)
    metrics.complete()

    summary = metrics.get_metrics_summary()

    assert summary["mode"] == "sequential"
    assert summary["source"] == "app.js"
    assert summary["status"] == "completed"
    assert summary["statements_count"] == 2
    assert summary["nodes_count"] == 4
    assert summary["node_counts"]["Identifier"] == 2
    assert summary["duration_ms"] is not None
    assert "error_message" not in summary


def test_track_assembly_success():
    """Test the context manager completes the metrics."""
    with track_assembly("sequential") as metrics:
        metrics.record_statements(3)

    assert metrics.status == "completed"
    assert metrics.statements_count == 3


def test_track_assembly_failure():
    """Test errors mark the metrics failed and propagate."""
    with pytest.raises(UnknownNodeKind):
        with track_assembly("sequential") as metrics:
            raise UnknownNodeKind("Foo")

    assert metrics.status == "failed"
    assert "Foo" in metrics.error_message


def test_track_assembly_timeout():
    """Test timeouts are recorded as such."""
    with pytest.raises(AssemblyTimeout):
        with track_assembly("concurrent") as metrics:
            raise AssemblyTimeout(0.1)

    assert metrics.status == "timeout"


def test_emit_metric():
    """Test emitting a metric."""
    # This should not raise an exception
    emit_metric("nodes_assembled", 42.0, mode="sequential")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
