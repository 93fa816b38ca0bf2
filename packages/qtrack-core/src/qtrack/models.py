"""Pydantic v2 models for all stored entities and their write payloads.

Field names are snake_case in Python and camelCase on the wire / in storage.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from qtrack.permissions import Role


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Record(CamelModel):
    """Common columns of every stored entity."""
    id: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


# ── Enumerations ────────────────────────────────────────────────────────────


class TicketStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class TicketCategory(str, Enum):
    BUG = "bug"
    FEATURE = "feature"
    SUPPORT = "support"
    ENHANCEMENT = "enhancement"


class TestCaseStatus(str, Enum):
    __test__ = False

    PENDING = "pending"
    PASSED = "passed"
    FAILED = "failed"
    BLOCKED = "blocked"


# Statuses that mean the case has actually been run.
EXECUTED_STATUSES = frozenset({TestCaseStatus.PASSED, TestCaseStatus.FAILED, TestCaseStatus.BLOCKED})


class TestSuiteStatus(str, Enum):
    __test__ = False

    DRAFT = "draft"
    ACTIVE = "active"
    ARCHIVED = "archived"


class EntityType(str, Enum):
    TICKET = "ticket"
    COMMENT = "comment"
    USER = "user"
    TEST_CASE = "test_case"
    TEST_SUITE = "test_suite"


# ── Users ───────────────────────────────────────────────────────────────────


class User(Record):
    email: str
    name: str
    role: Role
    avatar: str | None = None
    department: str | None = None
    is_active: bool = True
    last_login: datetime | None = None
    two_factor_enabled: bool = False


class UserCreate(CamelModel):
    email: str
    name: str
    role: Role
    avatar: str | None = None
    department: str | None = None


class UserUpdate(CamelModel):
    email: str | None = None
    name: str | None = None
    role: Role | None = None
    avatar: str | None = None
    department: str | None = None
    is_active: bool | None = None


# ── Tickets ─────────────────────────────────────────────────────────────────


class Ticket(Record):
    title: str
    description: str
    status: TicketStatus = TicketStatus.OPEN
    priority: Priority
    category: TicketCategory
    assigned_to: str | None = None
    reported_by: str
    tags: list[str] = Field(default_factory=list)
    attachments: list[str] = Field(default_factory=list)
    estimated_hours: float | None = None
    actual_hours: float | None = None
    resolved_at: datetime | None = None


class TicketCreate(CamelModel):
    title: str
    description: str
    priority: Priority
    category: TicketCategory
    assigned_to: str | None = None
    tags: list[str] = Field(default_factory=list)
    estimated_hours: float | None = None
    actual_hours: float | None = None


class TicketUpdate(CamelModel):
    title: str | None = None
    description: str | None = None
    status: TicketStatus | None = None
    priority: Priority | None = None
    category: TicketCategory | None = None
    assigned_to: str | None = None
    tags: list[str] | None = None
    attachments: list[str] | None = None
    estimated_hours: float | None = None
    actual_hours: float | None = None


# ── Comments ────────────────────────────────────────────────────────────────


class Comment(Record):
    ticket_id: str
    user_id: str
    content: str
    is_internal: bool = False
    attachments: list[str] = Field(default_factory=list)


class CommentCreate(CamelModel):
    ticket_id: str
    user_id: str
    content: str
    is_internal: bool = False
    attachments: list[str] = Field(default_factory=list)


class CommentUpdate(CamelModel):
    content: str | None = None
    attachments: list[str] | None = None


# ── Test cases & suites ─────────────────────────────────────────────────────


class TestCase(Record):
    __test__ = False

    title: str
    description: str
    steps: list[str] = Field(default_factory=list)
    expected_result: str
    actual_result: str | None = None
    status: TestCaseStatus = TestCaseStatus.PENDING
    priority: Priority
    assigned_to: str | None = None
    created_by: str
    tags: list[str] = Field(default_factory=list)
    linked_tickets: list[str] = Field(default_factory=list)
    executed_at: datetime | None = None


class TestCaseCreate(CamelModel):
    __test__ = False

    title: str
    description: str
    steps: list[str] = Field(default_factory=list)
    expected_result: str
    priority: Priority
    assigned_to: str | None = None
    tags: list[str] = Field(default_factory=list)
    linked_tickets: list[str] = Field(default_factory=list)


class TestCaseUpdate(CamelModel):
    __test__ = False

    title: str | None = None
    description: str | None = None
    steps: list[str] | None = None
    expected_result: str | None = None
    actual_result: str | None = None
    status: TestCaseStatus | None = None
    priority: Priority | None = None
    assigned_to: str | None = None
    tags: list[str] | None = None
    linked_tickets: list[str] | None = None


class TestSuite(Record):
    __test__ = False

    name: str
    description: str
    test_cases: list[str] = Field(default_factory=list)
    status: TestSuiteStatus = TestSuiteStatus.DRAFT
    created_by: str
    last_executed: datetime | None = None
    pass_rate: float | None = None


class TestSuiteCreate(CamelModel):
    __test__ = False

    name: str
    description: str
    test_cases: list[str] = Field(default_factory=list)


class TestCaseRun(CamelModel):
    """One case's outcome inside a suite execution."""
    status: TestCaseStatus
    actual_result: str | None = None


# ── Activity log ────────────────────────────────────────────────────────────


class ActivityLog(Record):
    user_id: str
    action: str
    entity_type: EntityType
    entity_id: str
    details: dict[str, Any] = Field(default_factory=dict)


def changes_from(update: BaseModel, nullable: frozenset[str] = frozenset()) -> dict[str, Any]:
    """Fields the client actually sent; explicit nulls only where the column allows them."""
    return {
        k: v for k, v in update.model_dump(exclude_unset=True).items()
        if v is not None or k in nullable
    }
