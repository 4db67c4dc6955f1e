# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from ikigai_planner.core.auth import AuthSession
from ikigai_planner.core.state import AppState
from ikigai_planner.core.store import GoalStore, PlannerStore, ProjectStore, TaskStore

from .fakes import FakeAuthService, FakeGoalService, FakePlannerService, FakeScopedService

TODAY = date(2024, 5, 10)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI helpers.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the process environment.
    """
    return SimpleNamespace(
        app_name="Ikigai Planner (test)",
        log_level="DEBUG",
        api_url="http://planner.test/api",
        connect_timeout_seconds=1.0,
        read_timeout_seconds=1.0,
        remember_session=True,
        data_dir=tmp_path,
        session_path=tmp_path / "session.json",
    )


@pytest.fixture()
def auth_service() -> FakeAuthService:
    return FakeAuthService()


@pytest.fixture()
def planner_service() -> FakePlannerService:
    return FakePlannerService()


@pytest.fixture()
def task_service() -> FakeScopedService:
    return FakeScopedService("t", "Tarefa")


@pytest.fixture()
def project_service() -> FakeScopedService:
    return FakeScopedService("pr", "Projeto")


@pytest.fixture()
def goal_service() -> FakeGoalService:
    return FakeGoalService()


@pytest.fixture()
def state(
    settings: SimpleNamespace,
    auth_service: FakeAuthService,
    planner_service: FakePlannerService,
    task_service: FakeScopedService,
    project_service: FakeScopedService,
    goal_service: FakeGoalService,
) -> AppState:
    """AppState wired with in-memory fakes and a fixed clock."""
    return AppState(
        settings=settings,
        auth=AuthSession(auth_service),
        planners=PlannerStore(planner_service),
        tasks=TaskStore(task_service),
        projects=ProjectStore(project_service),
        goals=GoalStore(goal_service),
        today=lambda: TODAY,
    )
