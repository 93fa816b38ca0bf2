"""Shared fixtures: repositories over in-memory storage."""

import pytest

from qtrack.collaboration import CollaborationHub
from qtrack.repositories import (
    ActivityLogRepository,
    CommentRepository,
    TestCaseRepository,
    TestSuiteRepository,
    TicketRepository,
    UserRepository,
)
from qtrack.storage import InMemoryStorage


@pytest.fixture
def memory():
    return InMemoryStorage()


@pytest.fixture
def activity_repo(memory):
    return ActivityLogRepository(memory)


@pytest.fixture
def ticket_repo(memory):
    return TicketRepository(memory)


@pytest.fixture
def case_repo(memory):
    return TestCaseRepository(memory)


@pytest.fixture
def suite_repo(memory):
    return TestSuiteRepository(memory)


@pytest.fixture
def comment_repo(memory):
    return CommentRepository(memory)


@pytest.fixture
def user_repo(memory):
    return UserRepository(memory)


@pytest.fixture
def hub():
    return CollaborationHub()
