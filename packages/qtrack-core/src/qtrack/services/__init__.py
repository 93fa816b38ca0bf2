"""Domain services. Each raises ``qtrack.errors`` exceptions and logs activity."""

from qtrack.services.activity import ActivityService
from qtrack.services.analytics import AnalyticsData, AnalyticsService
from qtrack.services.comments import CommentService
from qtrack.services.test_cases import TestCaseFilters, TestCaseService
from qtrack.services.test_suites import ExecutionResults, SuiteStats, TestSuiteService
from qtrack.services.tickets import TicketFilters, TicketService
from qtrack.services.users import UserService

__all__ = [
    "ActivityService",
    "AnalyticsData",
    "AnalyticsService",
    "CommentService",
    "ExecutionResults",
    "SuiteStats",
    "TestCaseFilters",
    "TestCaseService",
    "TestSuiteService",
    "TicketFilters",
    "TicketService",
    "UserService",
]
