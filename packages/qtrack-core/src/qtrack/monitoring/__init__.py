"""Quality monitoring — metrics snapshots and threshold gates."""

from qtrack.monitoring.gates import (
    DEFAULT_GATES,
    GateResult,
    GateSummary,
    QualityGate,
    QualityGateManager,
    format_value,
    health_score,
    load_gates,
    summarize,
)
from qtrack.monitoring.metrics import (
    MetricsCollector,
    MetricsSnapshot,
    flatten_metrics,
)

__all__ = [
    "DEFAULT_GATES",
    "GateResult",
    "GateSummary",
    "MetricsCollector",
    "MetricsSnapshot",
    "QualityGate",
    "QualityGateManager",
    "flatten_metrics",
    "format_value",
    "health_score",
    "load_gates",
    "summarize",
]
