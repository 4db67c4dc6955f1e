# src/ikigai_planner/core/state.py

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from .auth import AuthSession
from .models import Planner
from .store import GoalStore, PlannerStore, ProjectStore, TaskStore


@dataclass
class AppState:
    """
    Everything a front-end needs, wired once at startup and passed by reference.

    One store instance per entity kind; nothing here is a module-level singleton.
    """

    settings: Any

    auth: AuthSession
    planners: PlannerStore
    tasks: TaskStore
    projects: ProjectStore
    goals: GoalStore

    # Transport handle kept only so shutdown can close it.
    api: Any = None

    # Injectable clock (quick-add year default, current month for goals).
    today: Callable[[], date] = field(default=date.today)

    @property
    def current_planner(self) -> Planner | None:
        return self.planners.current

    def reset_planner_scope(self) -> None:
        """Forget planner-scoped collections (after switching or deleting a planner)."""
        self.tasks.items = []
        self.projects.items = []
        self.goals.items = []
