"""Analytics service — aggregate counts and rates over a trailing period.

Totals and per-status counts cover everything stored; ``recentlyCreated``,
``executedInPeriod`` and the activity stats cover the period only.
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta
from typing import Callable

from qtrack.models import (
    CamelModel,
    Priority,
    TestCaseStatus,
    TicketCategory,
    TicketStatus,
    utcnow,
)
from qtrack.permissions import Role
from qtrack.repositories import (
    ActivityLogRepository,
    TestCaseRepository,
    TicketRepository,
    UserRepository,
)

PERIOD_DAYS = {"7d": 7, "30d": 30, "90d": 90}
DEFAULT_PERIOD = "7d"


class TicketStats(CamelModel):
    total: int
    open: int
    in_progress: int
    resolved: int
    closed: int
    by_priority: dict[str, int]
    by_category: dict[str, int]
    recently_created: int


class TestCaseStats(CamelModel):
    __test__ = False

    total: int
    pending: int
    passed: int
    failed: int
    blocked: int
    by_priority: dict[str, int]
    recently_created: int
    executed_in_period: int


class UserStats(CamelModel):
    total: int
    active: int
    by_role: dict[str, int]


class ActivityStats(CamelModel):
    total_in_period: int
    by_action: dict[str, int]


class PerformanceMetrics(CamelModel):
    overall_pass_rate: float
    avg_resolution_time_hours: float
    ticket_velocity: int
    test_execution_rate: int


class AnalyticsData(CamelModel):
    period: str
    tickets: TicketStats
    test_cases: TestCaseStats
    users: UserStats
    activities: ActivityStats
    metrics: PerformanceMetrics


def period_start(period: str, now: datetime) -> datetime:
    return now - timedelta(days=PERIOD_DAYS.get(period, PERIOD_DAYS[DEFAULT_PERIOD]))


def _tally(values, keys) -> dict[str, int]:
    counts = Counter(getattr(v, "value", v) for v in values)
    return {k.value: counts.get(k.value, 0) for k in keys}


class AnalyticsService:
    def __init__(
        self,
        tickets: TicketRepository,
        test_cases: TestCaseRepository,
        users: UserRepository,
        activity: ActivityLogRepository,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._tickets = tickets
        self._test_cases = test_cases
        self._users = users
        self._activity = activity
        self._clock = clock

    async def get_analytics(self, period: str = DEFAULT_PERIOD) -> AnalyticsData:
        if period not in PERIOD_DAYS:
            period = DEFAULT_PERIOD
        start = period_start(period, self._clock())

        tickets = await self._tickets.get_all()
        cases = await self._test_cases.get_all()
        users = await self._users.get_all()
        activities = [a for a in await self._activity.get_all() if a.created_at >= start]

        recent_tickets = [t for t in tickets if t.created_at >= start]
        executed_in_period = [tc for tc in cases if tc.executed_at and tc.executed_at >= start]
        ticket_status = _tally((t.status for t in tickets), TicketStatus)
        case_status = _tally((tc.status for tc in cases), TestCaseStatus)

        return AnalyticsData(
            period=period,
            tickets=TicketStats(
                total=len(tickets),
                open=ticket_status[TicketStatus.OPEN.value],
                in_progress=ticket_status[TicketStatus.IN_PROGRESS.value],
                resolved=ticket_status[TicketStatus.RESOLVED.value],
                closed=ticket_status[TicketStatus.CLOSED.value],
                by_priority=_tally((t.priority for t in tickets), Priority),
                by_category=_tally((t.category for t in tickets), TicketCategory),
                recently_created=len(recent_tickets),
            ),
            test_cases=TestCaseStats(
                total=len(cases),
                pending=case_status[TestCaseStatus.PENDING.value],
                passed=case_status[TestCaseStatus.PASSED.value],
                failed=case_status[TestCaseStatus.FAILED.value],
                blocked=case_status[TestCaseStatus.BLOCKED.value],
                by_priority=_tally((tc.priority for tc in cases), Priority),
                recently_created=len([tc for tc in cases if tc.created_at >= start]),
                executed_in_period=len(executed_in_period),
            ),
            users=UserStats(
                total=len(users),
                active=len([u for u in users if u.is_active]),
                by_role=_tally((u.role for u in users), Role),
            ),
            activities=ActivityStats(
                total_in_period=len(activities),
                by_action=dict(Counter(a.action for a in activities)),
            ),
            metrics=self._performance(tickets, cases, len(recent_tickets), len(executed_in_period)),
        )

    @staticmethod
    def _performance(tickets, cases, velocity: int, executions: int) -> PerformanceMetrics:
        executed = [tc for tc in cases if tc.executed_at]
        passed = [tc for tc in executed if tc.status == TestCaseStatus.PASSED]
        pass_rate = len(passed) / len(executed) * 100 if executed else 0.0

        resolved = [t for t in tickets if t.resolved_at]
        if resolved:
            total_seconds = sum((t.resolved_at - t.created_at).total_seconds() for t in resolved)
            avg_hours = total_seconds / len(resolved) / 3600
        else:
            avg_hours = 0.0

        return PerformanceMetrics(
            overall_pass_rate=round(pass_rate, 2),
            avg_resolution_time_hours=round(avg_hours, 2),
            ticket_velocity=velocity,
            test_execution_rate=executions,
        )
