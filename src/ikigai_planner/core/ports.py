# src/ikigai_planner/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

Stores depend on these Protocols instead of the HTTP implementation.
That keeps the transport swappable and lets tests run against in-memory fakes.

Contract shared by every method:
- success returns the decoded JSON payload (already unwrapped from {"data": ...}),
- failure raises ApiError (carrying the server's message when it sent one).
"""

from typing import Any, Protocol

Payload = dict[str, Any]


class AuthService(Protocol):
    def is_authenticated(self) -> bool: ...
    def get_token(self) -> str | None: ...
    def set_token(self, token: str | None) -> None: ...

    async def register(self, data: Payload) -> Payload: ...
    async def login(self, data: Payload) -> Payload: ...
    async def logout(self) -> None: ...
    async def get_current_user(self) -> Payload: ...
    async def update_details(self, data: Payload) -> Payload: ...
    async def update_password(self, data: Payload) -> Payload: ...
    async def forgot_password(self, email: str) -> Payload: ...
    async def reset_password(self, token: str, password: str) -> Payload: ...


class PlannerService(Protocol):
    async def list(self) -> list[Payload]: ...
    async def get(self, planner_id: str) -> Payload: ...
    async def create(self, data: Payload) -> Payload: ...
    async def update(self, planner_id: str, data: Payload) -> Payload: ...
    async def delete(self, planner_id: str) -> None: ...


class PlannerScopedService(Protocol):
    """Tasks and projects: listed and created under a planner."""

    async def list(self, planner_id: str) -> list[Payload]: ...
    async def get(self, item_id: str) -> Payload: ...
    async def create(self, planner_id: str, data: Payload) -> Payload: ...
    async def update(self, item_id: str, data: Payload) -> Payload: ...
    async def delete(self, item_id: str) -> None: ...


TaskService = PlannerScopedService
ProjectService = PlannerScopedService


class GoalService(Protocol):
    async def list(
            self,
            planner_id: str,
            month: int | None = None,
            year: int | None = None,
    ) -> list[Payload]: ...
    async def get(self, goal_id: str) -> Payload: ...
    async def create(self, planner_id: str, data: Payload) -> Payload: ...
    async def update(self, goal_id: str, data: Payload) -> Payload: ...
    async def delete(self, goal_id: str) -> None: ...
