"""Typed repositories, one per stored entity."""

from qtrack.repositories.activity import ActivityLogRepository
from qtrack.repositories.base import Repository
from qtrack.repositories.comments import CommentRepository
from qtrack.repositories.test_cases import TestCaseRepository
from qtrack.repositories.test_suites import TestSuiteRepository
from qtrack.repositories.tickets import TicketRepository
from qtrack.repositories.users import UserRepository

__all__ = [
    "ActivityLogRepository",
    "CommentRepository",
    "Repository",
    "TestCaseRepository",
    "TestSuiteRepository",
    "TicketRepository",
    "UserRepository",
]
