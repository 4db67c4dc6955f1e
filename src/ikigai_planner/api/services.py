# src/ikigai_planner/api/services.py

"""HTTP implementations of the service ports (see core/ports.py)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..core.ports import Payload
from .http import ApiClient, unwrap


def _as_list(payload: Any) -> list[Payload]:
    if isinstance(payload, list):
        return [p for p in payload if isinstance(p, Mapping)]
    return []


def _as_dict(payload: Any) -> Payload:
    return dict(payload) if isinstance(payload, Mapping) else {}


class HttpAuthService:
    def __init__(self, api: ApiClient) -> None:
        self.api = api

    def is_authenticated(self) -> bool:
        return bool(self.api.token)

    def get_token(self) -> str | None:
        return self.api.token

    def set_token(self, token: str | None) -> None:
        self.api.token = token

    async def _authenticate(self, path: str, data: Payload) -> Payload:
        # Auth endpoints answer {"success": true, "token": "...", ...}: keep the envelope.
        body = _as_dict(await self.api.request("POST", path, json=data))
        token = body.get("token")
        if isinstance(token, str) and token:
            self.set_token(token)

        user = body.get("user") or body.get("data")
        if isinstance(user, Mapping):
            return dict(user)

        # Token-only answer: ask who we are.
        return await self.get_current_user()

    async def register(self, data: Payload) -> Payload:
        return await self._authenticate("/auth/register", data)

    async def login(self, data: Payload) -> Payload:
        return await self._authenticate("/auth/login", data)

    async def logout(self) -> None:
        try:
            await self.api.get("/auth/logout")
        finally:
            self.set_token(None)

    async def get_current_user(self) -> Payload:
        return _as_dict(await self.api.get("/auth/me"))

    async def update_details(self, data: Payload) -> Payload:
        return _as_dict(await self.api.put("/auth/updatedetails", data))

    async def update_password(self, data: Payload) -> Payload:
        body = _as_dict(await self.api.request("PUT", "/auth/updatepassword", json=data))
        token = body.get("token")
        if isinstance(token, str) and token:
            self.set_token(token)
        return _as_dict(unwrap(body))

    async def forgot_password(self, email: str) -> Payload:
        return _as_dict(await self.api.post("/auth/forgotpassword", {"email": email}))

    async def reset_password(self, token: str, password: str) -> Payload:
        return _as_dict(await self.api.put(f"/auth/resetpassword/{token}", {"password": password}))


class HttpPlannerService:
    def __init__(self, api: ApiClient) -> None:
        self.api = api

    async def list(self) -> list[Payload]:
        return _as_list(await self.api.get("/planners"))

    async def get(self, planner_id: str) -> Payload:
        return _as_dict(await self.api.get(f"/planners/{planner_id}"))

    async def create(self, data: Payload) -> Payload:
        return _as_dict(await self.api.post("/planners", data))

    async def update(self, planner_id: str, data: Payload) -> Payload:
        return _as_dict(await self.api.put(f"/planners/{planner_id}", data))

    async def delete(self, planner_id: str) -> None:
        await self.api.delete(f"/planners/{planner_id}")


class HttpPlannerScopedService:
    """
    Resources nested under a planner for listing/creation and addressed by id
    otherwise: /planners/<pid>/<resource> and /<resource>/<id>.
    """

    resource = ""

    def __init__(self, api: ApiClient) -> None:
        self.api = api

    async def list(self, planner_id: str) -> list[Payload]:
        return _as_list(await self.api.get(f"/planners/{planner_id}/{self.resource}"))

    async def get(self, item_id: str) -> Payload:
        return _as_dict(await self.api.get(f"/{self.resource}/{item_id}"))

    async def create(self, planner_id: str, data: Payload) -> Payload:
        return _as_dict(await self.api.post(f"/planners/{planner_id}/{self.resource}", data))

    async def update(self, item_id: str, data: Payload) -> Payload:
        return _as_dict(await self.api.put(f"/{self.resource}/{item_id}", data))

    async def delete(self, item_id: str) -> None:
        await self.api.delete(f"/{self.resource}/{item_id}")


class HttpTaskService(HttpPlannerScopedService):
    resource = "tasks"


class HttpProjectService(HttpPlannerScopedService):
    resource = "projects"


class HttpGoalService(HttpPlannerScopedService):
    resource = "goals"

    async def list(
            self,
            planner_id: str,
            month: int | None = None,
            year: int | None = None,
    ) -> list[Payload]:
        params = {"month": month, "year": year}
        return _as_list(await self.api.get(f"/planners/{planner_id}/goals", params=params))
