"""Test case service."""

from __future__ import annotations

from dataclasses import dataclass

from qtrack.errors import NotFoundError, ValidationError
from qtrack.models import (
    EXECUTED_STATUSES,
    EntityType,
    TestCase,
    TestCaseCreate,
    TestCaseStatus,
    TestCaseUpdate,
    changes_from,
    utcnow,
)
from qtrack.repositories import ActivityLogRepository, TestCaseRepository

NULLABLE_FIELDS = frozenset({"assigned_to", "actual_result"})


@dataclass
class TestCaseFilters:
    __test__ = False

    status: str | None = None
    assigned_to: str | None = None
    priority: str | None = None
    linked_ticket: str | None = None


class TestCaseService:
    __test__ = False

    def __init__(self, test_cases: TestCaseRepository, activity: ActivityLogRepository) -> None:
        self._test_cases = test_cases
        self._activity = activity

    async def list_test_cases(self, filters: TestCaseFilters | None = None) -> list[TestCase]:
        f = filters or TestCaseFilters()
        cases = await self._test_cases.get_all()
        if f.status:
            cases = [tc for tc in cases if tc.status == f.status]
        if f.assigned_to:
            cases = [tc for tc in cases if tc.assigned_to == f.assigned_to]
        if f.priority:
            cases = [tc for tc in cases if tc.priority == f.priority]
        if f.linked_ticket:
            cases = [tc for tc in cases if f.linked_ticket in tc.linked_tickets]
        return sorted(cases, key=lambda tc: tc.updated_at, reverse=True)

    async def get_test_case(self, test_case_id: str) -> TestCase:
        test_case = await self._test_cases.get_by_id(test_case_id)
        if test_case is None:
            raise NotFoundError(f"Test case with id {test_case_id} not found")
        return test_case

    async def create_test_case(self, data: TestCaseCreate, created_by: str) -> TestCase:
        self._validate(data)
        test_case = await self._test_cases.create({
            **data.model_dump(),
            "status": TestCaseStatus.PENDING,
            "created_by": created_by,
        })
        await self._activity.log(
            created_by, "test_case_created", EntityType.TEST_CASE, test_case.id,
            {"title": data.title, "priority": data.priority.value, "linkedTickets": data.linked_tickets},
        )
        return test_case

    async def update_test_case(self, test_case_id: str, data: TestCaseUpdate, updated_by: str) -> TestCase:
        existing = await self.get_test_case(test_case_id)
        changes = changes_from(data, NULLABLE_FIELDS)
        new_status = changes.get("status")
        if new_status in EXECUTED_STATUSES:
            changes["executed_at"] = utcnow()

        test_case = await self._test_cases.update(test_case_id, changes)
        if test_case is None:
            raise NotFoundError(f"Failed to update test case with id {test_case_id}")

        if new_status and new_status != existing.status:
            await self._activity.log(
                updated_by, "test_case_status_changed", EntityType.TEST_CASE, test_case_id,
                {"from": existing.status.value, "to": test_case.status.value},
            )
        return test_case

    async def execute_test_case(
        self,
        test_case_id: str,
        actual_result: str,
        status: TestCaseStatus,
        executed_by: str,
    ) -> TestCase:
        if status not in EXECUTED_STATUSES:
            raise ValidationError("Execution status must be passed, failed or blocked")
        await self.get_test_case(test_case_id)

        test_case = await self._test_cases.update(test_case_id, {
            "actual_result": actual_result,
            "status": status,
            "executed_at": utcnow(),
        })
        if test_case is None:
            raise NotFoundError(f"Failed to execute test case with id {test_case_id}")

        await self._activity.log(
            executed_by, "test_case_executed", EntityType.TEST_CASE, test_case_id,
            {"status": test_case.status.value, "actualResult": actual_result[:100]},
        )
        return test_case

    async def delete_test_case(self, test_case_id: str, deleted_by: str) -> None:
        test_case = await self.get_test_case(test_case_id)
        if not await self._test_cases.delete(test_case_id):
            raise NotFoundError(f"Failed to delete test case with id {test_case_id}")
        await self._activity.log(
            deleted_by, "test_case_deleted", EntityType.TEST_CASE, test_case_id, {"title": test_case.title},
        )

    @staticmethod
    def _validate(data: TestCaseCreate) -> None:
        if not data.title.strip():
            raise ValidationError("Title is required")
        if not data.description.strip():
            raise ValidationError("Description is required")
        if not data.steps:
            raise ValidationError("Test steps are required")
        if not data.expected_result.strip():
            raise ValidationError("Expected result is required")
