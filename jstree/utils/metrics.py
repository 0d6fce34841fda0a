"""
Metrics collection and emission for AST assembly.

This module provides metrics tracking for:
- Assembly execution time per program
- Number of top-level statements and nodes built per kind
- Final status (completed, failed, timeout)
"""

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional

from jstree.models.error import AssemblyTimeout
from jstree.utils.logging import get_logger

logger = get_logger(__name__)


class AssemblyMetrics:
    """
    Collects metrics during one assembly call.

    Tracks:
    - Execution start/end time
    - Top-level statement count
    - Node counts per kind
    - Errors
    """

    def __init__(self, mode: str, source: Optional[str] = None):
        """
        Initialize metrics collector.

        Args:
            mode: Assembly mode ('sequential' or 'concurrent')
            source: Source file the tree came from, when known
        """
        self.mode = mode
        self.source = source

        # Timing metrics
        self.start_time: Optional[datetime] = None
        self.end_time: Optional[datetime] = None
        self.duration_ms: Optional[int] = None

        # Assembly metrics
        self.statements_count: int = 0
        self.node_counts: Dict[str, int] = {}

        # Status
        self.status: str = "running"
        self.error_message: Optional[str] = None

    def start(self) -> None:
        """Mark assembly start."""
        self.start_time = datetime.now(timezone.utc)
        self.status = "running"

    def complete(self, status: str = "completed", error_message: Optional[str] = None) -> None:
        """
        Mark assembly completion.

        Args:
            status: Final status ('completed', 'failed', 'timeout')
            error_message: Error message if failed
        """
        self.end_time = datetime.now(timezone.utc)
        self.status = status
        self.error_message = error_message

        if self.start_time:
            duration = (self.end_time - self.start_time).total_seconds()
            self.duration_ms = int(duration * 1000)

        logger.debug(
            f"Assembly {status} ({self.mode})",
            extra={
                "mode": self.mode,
                "source_file": self.source,
                "status": self.status,
                "duration_ms": self.duration_ms,
                "statements_count": self.statements_count,
            }
        )

    def record_statements(self, count: int) -> None:
        """Record number of top-level statements assembled."""
        self.statements_count = count

    def record_node(self, kind: str) -> None:
        """Count one assembled node of the given kind."""
        self.node_counts[kind] = self.node_counts.get(kind, 0) + 1

    def get_metrics_summary(self) -> Dict[str, Any]:
        """
        Get summary of collected metrics.

        Returns:
            Dictionary of metrics
        """
        summary = {
            "mode": self.mode,
            "source": self.source,
            "status": self.status,
            "start_time": self.start_time.isoformat() if self.start_time else None,
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "duration_ms": self.duration_ms,
            "statements_count": self.statements_count,
            "nodes_count": sum(self.node_counts.values()),
            "node_counts": dict(self.node_counts),
        }

        if self.error_message:
            summary["error_message"] = self.error_message

        return summary


@contextmanager
def track_assembly(mode: str, source: Optional[str] = None) -> Iterator[AssemblyMetrics]:
    """
    Context manager timing one assembly call.

    Usage:
        with track_assembly("sequential") as metrics:
            program = build(view)
            metrics.record_statements(len(program.body))

    An AssemblyTimeout (or TimeoutError) raised inside the block completes the metrics as
    'timeout'; any other exception as 'failed'. The exception propagates.

    Args:
        mode: Assembly mode
        source: Source file, when known

    Yields:
        AssemblyMetrics for the call
    """
    metrics = AssemblyMetrics(mode, source)
    metrics.start()
    try:
        yield metrics
    except (AssemblyTimeout, TimeoutError) as e:
        metrics.complete(status="timeout", error_message=str(e))
        raise
    except Exception as e:
        metrics.complete(status="failed", error_message=str(e))
        raise
    else:
        metrics.complete()


def emit_metric(metric_name: str, value: float, **tags: Any) -> None:
    """
    Emit a metric as a structured log record.

    Args:
        metric_name: Metric name
        value: Metric value
        **tags: Metric tags/labels
    """
    logger.info(
        f"Metric: {metric_name}",
        extra={
            "metric_name": metric_name,
            "metric_value": value,
            "metric_tags": tags,
        }
    )
