"""Roles and their permission sets.

Roles form a closed enumeration; each carries a fixed, typed permission set.
"""

from __future__ import annotations

from enum import Enum


class Permission(str, Enum):
    TICKETS_CREATE = "tickets.create"
    TICKETS_READ = "tickets.read"
    TICKETS_UPDATE = "tickets.update"
    TICKETS_DELETE = "tickets.delete"
    TICKETS_ASSIGN = "tickets.assign"
    TICKETS_TEST = "tickets.test"
    TICKETS_RESOLVE = "tickets.resolve"
    USERS_MANAGE = "users.manage"
    TEAM_MANAGE = "team.manage"
    PROJECTS_MANAGE = "projects.manage"
    PROJECTS_READ = "projects.read"
    REPORTS_VIEW = "reports.view"
    SETTINGS_MANAGE = "settings.manage"
    TEST_CASES_CREATE = "test-cases.create"
    TEST_CASES_READ = "test-cases.read"
    TEST_CASES_UPDATE = "test-cases.update"
    TEST_CASES_DELETE = "test-cases.delete"
    TEST_CASES_ASSIGN = "test-cases.assign"
    TEST_CASES_EXECUTE = "test-cases.execute"
    TEST_SUITES_MANAGE = "test-suites.manage"
    TEST_SUITES_CREATE = "test-suites.create"
    TEST_SUITES_READ = "test-suites.read"
    TEST_SUITES_EXECUTE = "test-suites.execute"
    COMMENTS_CREATE = "comments.create"
    ANALYTICS_VIEW = "analytics.view"
    SYSTEM_ADMIN = "system.admin"


class Role(str, Enum):
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    QA = "QA"
    DEV = "DEV"
    USER = "USER"

    @property
    def permissions(self) -> frozenset[Permission]:
        return _ROLE_PERMISSIONS[self]

    def has(self, permission: Permission) -> bool:
        return permission in _ROLE_PERMISSIONS[self]


P = Permission

_ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.ADMIN: frozenset({
        P.TICKETS_CREATE, P.TICKETS_READ, P.TICKETS_UPDATE, P.TICKETS_DELETE,
        P.USERS_MANAGE, P.PROJECTS_MANAGE, P.REPORTS_VIEW, P.SETTINGS_MANAGE,
        P.TEST_CASES_CREATE, P.TEST_CASES_READ, P.TEST_CASES_UPDATE, P.TEST_CASES_DELETE,
        P.TEST_SUITES_MANAGE, P.ANALYTICS_VIEW, P.SYSTEM_ADMIN,
    }),
    Role.MANAGER: frozenset({
        P.TICKETS_CREATE, P.TICKETS_READ, P.TICKETS_UPDATE, P.TICKETS_ASSIGN,
        P.REPORTS_VIEW, P.TEAM_MANAGE, P.TEST_CASES_READ, P.TEST_CASES_ASSIGN,
        P.TEST_SUITES_READ, P.ANALYTICS_VIEW, P.PROJECTS_READ,
    }),
    Role.QA: frozenset({
        P.TICKETS_CREATE, P.TICKETS_READ, P.TICKETS_UPDATE, P.TICKETS_TEST,
        P.TEST_CASES_CREATE, P.TEST_CASES_READ, P.TEST_CASES_UPDATE, P.TEST_CASES_EXECUTE,
        P.TEST_SUITES_CREATE, P.TEST_SUITES_READ, P.TEST_SUITES_EXECUTE,
        P.REPORTS_VIEW, P.COMMENTS_CREATE,
    }),
    Role.DEV: frozenset({
        P.TICKETS_READ, P.TICKETS_UPDATE, P.TICKETS_RESOLVE,
        P.COMMENTS_CREATE, P.TEST_CASES_READ, P.PROJECTS_READ,
    }),
    Role.USER: frozenset({
        P.TICKETS_CREATE, P.TICKETS_READ, P.COMMENTS_CREATE, P.REPORTS_VIEW,
    }),
}

del P
