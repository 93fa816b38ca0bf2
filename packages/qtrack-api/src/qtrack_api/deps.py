"""Shared dependencies -- the application container and per-request accessors."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Request

from qtrack.collaboration import CollaborationHub
from qtrack.config import QTrackConfig
from qtrack.monitoring import MetricsCollector, QualityGateManager, load_gates
from qtrack.repositories import (
    ActivityLogRepository,
    CommentRepository,
    TestCaseRepository,
    TestSuiteRepository,
    TicketRepository,
    UserRepository,
)
from qtrack.services import (
    ActivityService,
    AnalyticsService,
    CommentService,
    TestCaseService,
    TestSuiteService,
    TicketService,
    UserService,
)
from qtrack.storage import StoragePort, create_storage

logger = logging.getLogger(__name__)


@dataclass
class Container:
    """Everything a request handler needs, built once per application."""

    config: QTrackConfig
    storage: StoragePort
    gates: QualityGateManager
    collector: MetricsCollector
    hub: CollaborationHub
    tickets: TicketService
    test_cases: TestCaseService
    test_suites: TestSuiteService
    comments: CommentService
    users: UserService
    analytics: AnalyticsService
    activity: ActivityService

    @classmethod
    def build(cls, config: QTrackConfig, storage: StoragePort | None = None) -> Container:
        if storage is None:
            storage = create_storage(config.storage_backend, config.db_path)

        if config.gates_file:
            logger.info("Loading quality gates from %s", config.gates_file)
            gates = QualityGateManager(load_gates(config.gates_file))
        else:
            gates = QualityGateManager()

        ticket_repo = TicketRepository(storage)
        case_repo = TestCaseRepository(storage)
        suite_repo = TestSuiteRepository(storage)
        comment_repo = CommentRepository(storage)
        user_repo = UserRepository(storage)
        activity_repo = ActivityLogRepository(storage)
        hub = CollaborationHub()

        return cls(
            config=config,
            storage=storage,
            gates=gates,
            collector=MetricsCollector(retention_days=config.metrics_retention_days),
            hub=hub,
            tickets=TicketService(ticket_repo, activity_repo),
            test_cases=TestCaseService(case_repo, activity_repo),
            test_suites=TestSuiteService(suite_repo, case_repo, activity_repo),
            comments=CommentService(comment_repo, activity_repo, hub),
            users=UserService(user_repo, activity_repo),
            analytics=AnalyticsService(ticket_repo, case_repo, user_repo, activity_repo),
            activity=ActivityService(activity_repo),
        )


def get_container(request: Request) -> Container:
    return request.app.state.container
