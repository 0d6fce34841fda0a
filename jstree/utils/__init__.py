"""
Utility modules for jstree.
"""

from jstree.utils.logging import (
    get_logger,
    setup_logging,
    LogContext,
    log_assembly_phase,
    log_error_with_context,
)
from jstree.utils.metrics import (
    AssemblyMetrics,
    track_assembly,
    emit_metric,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "LogContext",
    "log_assembly_phase",
    "log_error_with_context",
    "AssemblyMetrics",
    "track_assembly",
    "emit_metric",
]
