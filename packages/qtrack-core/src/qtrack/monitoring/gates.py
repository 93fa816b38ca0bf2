"""Quality gates — named threshold rules evaluated against flattened metrics.

Each gate binds a dotted metric path to an operator and a threshold:

  gt  actual >  threshold
  lt  actual <  threshold
  gte actual >= threshold
  lte actual <= threshold
  eq  actual == threshold

Any other operator fails unconditionally. A metric missing from the map
reads as 0. Disabled gates are skipped entirely and produce no result.
"""

from __future__ import annotations

import logging
import operator
import threading
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from qtrack.errors import ValidationError

logger = logging.getLogger(__name__)

OPERATORS: dict[str, Callable[[float, float], bool]] = {
    "gt": operator.gt,
    "lt": operator.lt,
    "gte": operator.ge,
    "lte": operator.le,
    "eq": operator.eq,
}

# Fields an administrative update may change.
UPDATABLE_FIELDS = frozenset({"name", "description", "threshold", "operator", "metric", "enabled"})


class QualityGate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    description: str = ""
    threshold: float
    operator: str
    metric: str
    enabled: bool = True

    @field_serializer("threshold")
    def _threshold(self, value: float) -> float | int:
        return _plain(value)


class GateResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    gate_id: str
    passed: bool
    actual_value: float
    threshold: float
    message: str

    @field_serializer("actual_value", "threshold")
    def _numbers(self, value: float) -> float | int:
        return _plain(value)


class GateSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    total: int
    passed: int
    failed: int
    overall_health: float


DEFAULT_GATES: tuple[QualityGate, ...] = (
    QualityGate(
        id="test-coverage",
        name="Test Coverage",
        description="Minimum test coverage percentage",
        threshold=80,
        operator="gte",
        metric="coverage.percentage",
    ),
    QualityGate(
        id="performance-score",
        name="Performance Score",
        description="Lighthouse performance score",
        threshold=90,
        operator="gte",
        metric="lighthouse.performance",
    ),
    QualityGate(
        id="accessibility-score",
        name="Accessibility Score",
        description="Lighthouse accessibility score",
        threshold=95,
        operator="gte",
        metric="lighthouse.accessibility",
    ),
    QualityGate(
        id="security-vulnerabilities",
        name="Security Vulnerabilities",
        description="Maximum number of high/critical vulnerabilities",
        threshold=0,
        operator="lte",
        metric="security.vulnerabilities.high",
    ),
    QualityGate(
        id="bundle-size",
        name="Bundle Size",
        description="Maximum bundle size in KB",
        threshold=500,
        operator="lte",
        metric="bundle.size.kb",
    ),
    QualityGate(
        id="api-response-time",
        name="API Response Time",
        description="Maximum API response time in ms",
        threshold=200,
        operator="lte",
        metric="api.response.time.p95",
    ),
)


def _plain(value: float) -> float | int:
    """Integral floats become ints so 60.0 renders as 60."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def format_value(value: float) -> str:
    """Render a reading or threshold for display, 60.0 as ``60``."""
    return str(_plain(value))


def check(actual: float, threshold: float, op: str) -> bool:
    compare = OPERATORS.get(op)
    if compare is None:
        return False
    return compare(actual, threshold)


class QualityGateManager:
    """Holds the gate rule set and evaluates it against a flat metrics map."""

    def __init__(self, gates: Iterable[QualityGate] | None = None) -> None:
        source = DEFAULT_GATES if gates is None else gates
        self._gates: list[QualityGate] = [g.model_copy(deep=True) for g in source]
        self._lock = threading.Lock()

    def list_gates(self) -> list[QualityGate]:
        with self._lock:
            return [g.model_copy(deep=True) for g in self._gates]

    def get_gate(self, gate_id: str) -> QualityGate | None:
        with self._lock:
            for gate in self._gates:
                if gate.id == gate_id:
                    return gate.model_copy(deep=True)
        return None

    def update_gate(self, gate_id: str, updates: Mapping[str, Any]) -> QualityGate | None:
        """Merge allowed fields into the gate. Unknown ids are a no-op returning None."""
        changes = {k: v for k, v in updates.items() if k in UPDATABLE_FIELDS}
        with self._lock:
            for index, gate in enumerate(self._gates):
                if gate.id != gate_id:
                    continue
                try:
                    updated = QualityGate.model_validate({**gate.model_dump(), **changes})
                except PydanticValidationError as exc:
                    raise ValidationError(f"Invalid update for gate {gate_id}: {exc}") from exc
                self._gates[index] = updated
                logger.info("Quality gate %s updated: %s", gate_id, changes)
                return updated.model_copy(deep=True)
        logger.warning("Quality gate update ignored, unknown gate id: %s", gate_id)
        return None

    def evaluate(self, flat_metrics: Mapping[str, float]) -> list[GateResult]:
        with self._lock:
            enabled = [g for g in self._gates if g.enabled]
        results: list[GateResult] = []
        for gate in enabled:
            actual = flat_metrics.get(gate.metric, 0)
            passed = check(actual, gate.threshold, gate.operator)
            results.append(GateResult(
                gate_id=gate.id,
                passed=passed,
                actual_value=actual,
                threshold=gate.threshold,
                message=self._message(gate, actual, passed),
            ))
        return results

    @staticmethod
    def _message(gate: QualityGate, actual: float, passed: bool) -> str:
        status = "PASSED" if passed else "FAILED"
        return f"{gate.name}: {status} ({format_value(actual)} {gate.operator} {format_value(gate.threshold)})"


def health_score(results: list[GateResult]) -> float:
    """Percentage of evaluated gates that passed. No gates counts as healthy."""
    if not results:
        return 100.0
    passed = sum(1 for r in results if r.passed)
    return round(passed / len(results) * 100, 2)


def summarize(results: list[GateResult]) -> GateSummary:
    """Counts over the evaluated gates; disabled gates are left out of every field."""
    passed = sum(1 for r in results if r.passed)
    return GateSummary(
        total=len(results),
        passed=passed,
        failed=len(results) - passed,
        overall_health=health_score(results),
    )


def load_gates(path: str | Path) -> list[QualityGate]:
    """Load a gate set from YAML: either a list or a mapping with a ``gates`` key."""
    with open(path) as f:
        data = yaml.safe_load(f) or []
    if isinstance(data, dict):
        data = data.get("gates", [])
    if not isinstance(data, list):
        raise ValidationError(f"Gate file {path} must contain a list of gates")
    try:
        gates = [QualityGate.model_validate(item) for item in data]
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid gate definition in {path}: {exc}") from exc
    ids = [g.id for g in gates]
    if len(ids) != len(set(ids)):
        raise ValidationError(f"Duplicate gate ids in {path}")
    return gates
