# tests/test_http_services.py

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from ikigai_planner.api.http import ApiClient, unwrap
from ikigai_planner.api.services import (
    HttpAuthService,
    HttpGoalService,
    HttpPlannerService,
    HttpTaskService,
)
from ikigai_planner.core.errors import ApiError
from ikigai_planner.core.store import PlannerStore

BASE = "http://planner.test/api"


class Recorder:
    """
    MockTransport handler answering from a route table and keeping every request.

    Routes map (method, path) -> (status, json body or None); a fresh Response is
    built per request.
    """

    def __init__(self, routes: dict[tuple[str, str], tuple[int, Any]]) -> None:
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes.get(
            (request.method, request.url.path),
            (404, {"success": False, "error": "Rota não encontrada"}),
        )
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)


def _client(handler) -> ApiClient:
    return ApiClient(BASE, transport=httpx.MockTransport(handler))


def test_unwrap_envelope() -> None:
    assert unwrap({"success": True, "data": [1, 2]}) == [1, 2]
    assert unwrap({"title": "x"}) == {"title": "x"}
    assert unwrap(None) is None


@pytest.mark.asyncio
async def test_login_stores_token_and_sends_bearer_afterwards() -> None:
    rec = Recorder(
        {
            ("POST", "/api/auth/login"): (
                200, {"success": True, "token": "abc", "user": {"_id": "u1", "name": "Ana"}}
            ),
            ("GET", "/api/planners"): (200, {"success": True, "data": []}),
        }
    )
    api = _client(rec)
    auth = HttpAuthService(api)

    user = await auth.login({"email": "ana@example.com", "password": "x"})
    await HttpPlannerService(api).list()
    await api.aclose()

    assert user == {"_id": "u1", "name": "Ana"}
    assert auth.get_token() == "abc"
    assert "Authorization" not in rec.requests[0].headers
    assert json.loads(rec.requests[0].content) == {"email": "ana@example.com", "password": "x"}
    assert rec.requests[1].headers["Authorization"] == "Bearer abc"


@pytest.mark.asyncio
async def test_token_only_login_asks_for_current_user() -> None:
    rec = Recorder(
        {
            ("POST", "/api/auth/login"): (200, {"success": True, "token": "abc"}),
            ("GET", "/api/auth/me"): (200, {"success": True, "data": {"_id": "u1"}}),
        }
    )
    api = _client(rec)

    user = await HttpAuthService(api).login({"email": "a", "password": "b"})
    await api.aclose()

    assert user == {"_id": "u1"}
    assert rec.requests[1].headers["Authorization"] == "Bearer abc"


@pytest.mark.asyncio
async def test_logout_clears_token_even_when_server_fails() -> None:
    rec = Recorder({("GET", "/api/auth/logout"): (500, None)})
    api = _client(rec)
    api.token = "abc"
    auth = HttpAuthService(api)

    with pytest.raises(ApiError):
        await auth.logout()
    await api.aclose()

    assert auth.is_authenticated() is False


@pytest.mark.asyncio
async def test_error_status_becomes_api_error_with_server_message() -> None:
    rec = Recorder(
        {("GET", "/api/planners/p9"): (404, {"success": False, "error": "Planner não encontrado"})}
    )
    api = _client(rec)

    with pytest.raises(ApiError) as exc:
        await HttpPlannerService(api).get("p9")
    await api.aclose()

    assert exc.value.status == 404
    assert exc.value.server_message == "Planner não encontrado"


@pytest.mark.asyncio
async def test_network_error_becomes_api_error_without_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    api = _client(handler)
    with pytest.raises(ApiError) as exc:
        await HttpPlannerService(api).list()
    await api.aclose()

    assert exc.value.status is None
    assert exc.value.server_message is None


@pytest.mark.asyncio
async def test_scoped_routes() -> None:
    rec = Recorder(
        {
            ("GET", "/api/planners/p1/tasks"): (200, {"data": [{"_id": "t1", "title": "A"}]}),
            ("POST", "/api/planners/p1/tasks"): (201, {"data": {"_id": "t2", "title": "B"}}),
            ("PUT", "/api/tasks/t2"): (200, {"data": {"_id": "t2", "title": "C"}}),
            ("DELETE", "/api/tasks/t2"): (200, {"success": True, "data": {}}),
        }
    )
    api = _client(rec)
    tasks = HttpTaskService(api)

    assert await tasks.list("p1") == [{"_id": "t1", "title": "A"}]
    assert (await tasks.create("p1", {"title": "B"}))["_id"] == "t2"
    assert (await tasks.update("t2", {"title": "C"}))["title"] == "C"
    assert await tasks.delete("t2") is None
    await api.aclose()


@pytest.mark.asyncio
async def test_goal_list_sends_month_and_year_only_when_given() -> None:
    rec = Recorder({("GET", "/api/planners/p1/goals"): (200, {"data": []})})
    api = _client(rec)
    goals = HttpGoalService(api)

    await goals.list("p1", 5, 2024)
    await goals.list("p1")
    await api.aclose()

    assert dict(rec.requests[0].url.params) == {"month": "5", "year": "2024"}
    assert dict(rec.requests[1].url.params) == {}


@pytest.mark.asyncio
async def test_store_over_http_surfaces_server_message() -> None:
    rec = Recorder(
        {("POST", "/api/planners"): (400, {"success": False, "error": "Título obrigatório"})}
    )
    api = _client(rec)
    store = PlannerStore(HttpPlannerService(api))

    result = await store.create({"title": ""})
    await api.aclose()

    assert not result.ok
    assert store.error == "Título obrigatório"
    assert store.items == []
