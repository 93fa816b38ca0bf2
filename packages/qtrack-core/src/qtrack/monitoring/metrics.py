"""Metrics collector — point-in-time health snapshots with a rolling history.

Each slice of a snapshot (coverage, lighthouse, security, bundle, api, tests)
comes from its own sub-collector, a zero-argument callable. The defaults
return fixed readings; real instrumentation replaces them one by one.

History keeps snapshots whose timestamp is within the retention window
(7 days by default), oldest first.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Mapping

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DAY_SECONDS = 24 * 60 * 60
DEFAULT_RETENTION_DAYS = 7


class _Reading(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class CoverageMetrics(_Reading):
    percentage: float
    lines: int
    functions: int
    branches: int


class LighthouseMetrics(_Reading):
    performance: float
    accessibility: float
    best_practices: float
    seo: float


class VulnerabilityCounts(_Reading):
    critical: int
    high: int
    medium: int
    low: int


class SecurityMetrics(_Reading):
    vulnerabilities: VulnerabilityCounts


class BundleSize(_Reading):
    kb: float
    gzipped: float


class BundleMetrics(_Reading):
    size: BundleSize


class ResponseTimes(_Reading):
    p50: float
    p95: float
    p99: float


class ApiResponse(_Reading):
    time: ResponseTimes


class ApiErrors(_Reading):
    rate: float
    count: int


class ApiMetrics(_Reading):
    response: ApiResponse
    errors: ApiErrors


class TestRunMetrics(_Reading):
    __test__ = False

    total: int
    passed: int
    failed: int
    skipped: int
    duration: int


class MetricsSnapshot(_Reading):
    timestamp: int  # epoch milliseconds
    coverage: CoverageMetrics
    lighthouse: LighthouseMetrics
    security: SecurityMetrics
    bundle: BundleMetrics
    api: ApiMetrics
    tests: TestRunMetrics


SubCollector = Callable[[], Any]


def collect_coverage() -> CoverageMetrics:
    return CoverageMetrics(percentage=85, lines=1250, functions=180, branches=95)


def collect_lighthouse() -> LighthouseMetrics:
    return LighthouseMetrics(performance=92, accessibility=98, best_practices=95, seo=90)


def collect_security() -> SecurityMetrics:
    return SecurityMetrics(
        vulnerabilities=VulnerabilityCounts(critical=0, high=0, medium=2, low=5),
    )


def collect_bundle() -> BundleMetrics:
    return BundleMetrics(size=BundleSize(kb=450, gzipped=120))


def collect_api() -> ApiMetrics:
    return ApiMetrics(
        response=ApiResponse(time=ResponseTimes(p50=85, p95=180, p99=350)),
        errors=ApiErrors(rate=0.02, count=3),
    )


def collect_tests() -> TestRunMetrics:
    return TestRunMetrics(total=156, passed=154, failed=0, skipped=2, duration=45000)


DEFAULT_COLLECTORS: dict[str, SubCollector] = {
    "coverage": collect_coverage,
    "lighthouse": collect_lighthouse,
    "security": collect_security,
    "bundle": collect_bundle,
    "api": collect_api,
    "tests": collect_tests,
}


class MetricsCollector:
    """Produces snapshots on demand and keeps a bounded, age-pruned history."""

    def __init__(
        self,
        collectors: Mapping[str, SubCollector] | None = None,
        retention_days: int = DEFAULT_RETENTION_DAYS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        unknown = set(collectors or {}) - set(DEFAULT_COLLECTORS)
        if unknown:
            raise ValueError(f"Unknown metric collectors: {', '.join(sorted(unknown))}")
        self._collectors = {**DEFAULT_COLLECTORS, **(collectors or {})}
        self.retention_days = retention_days
        self._clock = clock
        self._history: list[MetricsSnapshot] = []
        self._lock = threading.Lock()

    def collect(self) -> MetricsSnapshot:
        readings = {name: fn() for name, fn in self._collectors.items()}
        snapshot = MetricsSnapshot(timestamp=int(self._clock() * 1000), **readings)
        self.record(snapshot)
        return snapshot

    def record(self, snapshot: MetricsSnapshot) -> None:
        with self._lock:
            self._history.append(snapshot)
            self._prune()

    def _prune(self) -> None:
        cutoff_ms = (self._clock() - self.retention_days * DAY_SECONDS) * 1000
        self._history = [s for s in self._history if s.timestamp > cutoff_ms]

    def latest(self) -> MetricsSnapshot | None:
        with self._lock:
            return self._history[-1] if self._history else None

    def history(self, limit: int = 100) -> list[MetricsSnapshot]:
        if limit <= 0:
            return []
        with self._lock:
            return self._history[-limit:]


def flatten_metrics(snapshot: MetricsSnapshot) -> dict[str, float]:
    """Flatten a snapshot into dotted-path keys, e.g. ``api.response.time.p95``."""
    flat: dict[str, float] = {}

    def walk(prefix: str, node: dict) -> None:
        for key, value in node.items():
            path = f"{prefix}.{key}" if prefix else key
            if isinstance(value, dict):
                walk(path, value)
            else:
                flat[path] = value

    data = snapshot.model_dump(by_alias=True)
    data.pop("timestamp")
    walk("", data)
    return flat
