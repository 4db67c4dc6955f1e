# src/ikigai_planner/core/store.py

"""
Remote-state stores.

One store per entity kind holds an in-memory collection and mediates every
create/read/update/delete through a remote service port.

Key invariants:
- `loading` is True exactly while a remote call is in flight (set before the
  await, cleared in `finally`),
- the collection is only mutated after the remote call succeeded
  (no provisional inserts/updates),
- `error` is cleared by every successful call and overwritten (never appended)
  by every failed one,
- remote failures are returned as Err(...) results, never re-raised.

There is no overlap protection: two concurrent operations on one store
interleave their `loading` toggles and the last one to resolve wins `error`.
Callers should not fire overlapping mutations against the same store.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Generic, TypeVar

from .errors import StoreWiringError, friendly_error_message
from .models import Goal, Planner, Project, Task
from .ports import GoalService, Payload, PlannerScopedService, PlannerService
from .result import Err, Ok, Result

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def as_payload(data: Any) -> Payload:
    """Accept a plain mapping or a record exposing to_api()/to_payload()."""
    for attr in ("to_payload", "to_api"):
        fn = getattr(data, attr, None)
        if callable(fn):
            return dict(fn())
    if isinstance(data, Mapping):
        return dict(data)
    raise StoreWiringError(f"Unsupported payload type: {type(data).__name__}")


def _require_id(value: str | None, name: str) -> str:
    if not value or not str(value).strip():
        raise StoreWiringError(f"{name} is required")
    return str(value)


class RemoteCallState:
    """
    The loading flag + single error slot shared by every store.

    Subclasses set `kind` (for logs) and `messages` (per-operation fallback
    error text used when the server sends no message of its own).
    """

    kind: str = "item"
    messages: dict[str, str] = {}

    def __init__(self, service: Any) -> None:
        self._service = service
        self.loading: bool = False
        self.error: str | None = None

    @property
    def service(self) -> Any:
        if self._service is None:
            raise StoreWiringError(f"{type(self).__name__} has no service wired")
        return self._service

    def _message(self, op: str) -> str:
        return self.messages.get(op) or f"Erro ao processar {self.kind}"

    async def _call(
        self,
        op: str,
        call: Callable[[], Awaitable[Any]],
        on_success: Callable[[Any], R],
    ) -> Result[R]:
        self.loading = True
        try:
            payload = await call()
            value = on_success(payload)
            self.error = None
            logger.debug("%s.%s ok", self.kind, op)
            return Ok(value)
        except StoreWiringError:
            raise
        except Exception as e:
            msg = friendly_error_message(e, self._message(op))
            self.error = msg
            logger.info("%s.%s failed: %s (%s)", self.kind, op, msg, e.__class__.__name__)
            return Err(msg, e)
        finally:
            self.loading = False

    def clear_error(self) -> None:
        self.error = None


class RemoteStore(RemoteCallState, Generic[T]):
    """
    In-memory collection of one entity kind.

    Subclasses also set `decode` (payload -> record) through __init__.
    """

    def __init__(self, service: Any, decode: Callable[[Mapping[str, Any]], T]) -> None:
        super().__init__(service)
        self._decode = decode
        self.items: list[T] = []
        self.current: T | None = None

    @staticmethod
    def _id_of(item: Any) -> str:
        return str(getattr(item, "id", ""))

    def find(self, item_id: str) -> T | None:
        for item in self.items:
            if self._id_of(item) == item_id:
                return item
        return None

    # ---- collection mutations (success paths only) ----

    def _replace_all(self, payload: Any) -> list[T]:
        self.items = [self._decode(p) for p in (payload or [])]
        return self.items

    def _append(self, payload: Any) -> T:
        item = self._decode(payload)
        self.items = [*self.items, item]
        return item

    def _replace_one(self, item_id: str, payload: Any) -> T:
        item = self._decode(payload)
        self.items = [item if self._id_of(x) == item_id else x for x in self.items]
        if self.current is not None and self._id_of(self.current) == item_id:
            self.current = item
        return item

    def _remove(self, item_id: str) -> None:
        self.items = [x for x in self.items if self._id_of(x) != item_id]
        if self.current is not None and self._id_of(self.current) == item_id:
            self.current = None

    # ---- shared operations ----

    async def update(self, item_id: str, data: Any) -> Result[T]:
        item_id = _require_id(item_id, "id")
        payload = as_payload(data)
        service = self.service
        return await self._call(
            "update",
            lambda: service.update(item_id, payload),
            lambda resp: self._replace_one(item_id, resp),
        )

    async def delete(self, item_id: str) -> Result[None]:
        item_id = _require_id(item_id, "id")
        service = self.service
        return await self._call(
            "delete",
            lambda: service.delete(item_id),
            lambda _resp: self._remove(item_id),
        )


class PlannerStore(RemoteStore[Planner]):
    kind = "planner"
    messages = {
        "fetch_all": "Erro ao buscar planners",
        "fetch_one": "Erro ao buscar planner",
        "create": "Erro ao criar planner",
        "update": "Erro ao atualizar planner",
        "delete": "Erro ao excluir planner",
    }

    def __init__(self, service: PlannerService) -> None:
        super().__init__(service, Planner.from_api)

    async def fetch_all(self) -> Result[list[Planner]]:
        service = self.service
        return await self._call("fetch_all", lambda: service.list(), self._replace_all)

    async def fetch_one(self, planner_id: str) -> Result[Planner]:
        planner_id = _require_id(planner_id, "planner_id")
        service = self.service

        def _set_current(resp: Any) -> Planner:
            self.current = self._decode(resp)
            return self.current

        return await self._call("fetch_one", lambda: service.get(planner_id), _set_current)

    async def create(self, data: Any) -> Result[Planner]:
        payload = as_payload(data)
        service = self.service
        return await self._call("create", lambda: service.create(payload), self._append)


class _PlannerScopedStore(RemoteStore[T]):
    """Tasks and projects: listed and created under a planner id."""

    async def fetch_all(self, planner_id: str) -> Result[list[T]]:
        planner_id = _require_id(planner_id, "planner_id")
        service = self.service
        return await self._call("fetch_all", lambda: service.list(planner_id), self._replace_all)

    async def create(self, planner_id: str, data: Any) -> Result[T]:
        planner_id = _require_id(planner_id, "planner_id")
        payload = as_payload(data)
        service = self.service
        return await self._call("create", lambda: service.create(planner_id, payload), self._append)


class TaskStore(_PlannerScopedStore[Task]):
    kind = "task"
    messages = {
        "fetch_all": "Erro ao buscar tarefas",
        "create": "Erro ao criar tarefa",
        "update": "Erro ao atualizar tarefa",
        "delete": "Erro ao excluir tarefa",
    }

    def __init__(self, service: PlannerScopedService) -> None:
        super().__init__(service, Task.from_api)


class ProjectStore(_PlannerScopedStore[Project]):
    kind = "project"
    messages = {
        "fetch_all": "Erro ao buscar projetos",
        "create": "Erro ao criar projeto",
        "update": "Erro ao atualizar projeto",
        "delete": "Erro ao excluir projeto",
    }

    def __init__(self, service: PlannerScopedService) -> None:
        super().__init__(service, Project.from_api)


class GoalStore(_PlannerScopedStore[Goal]):
    kind = "goal"
    messages = {
        "fetch_all": "Erro ao buscar metas",
        "create": "Erro ao criar meta",
        "update": "Erro ao atualizar meta",
        "delete": "Erro ao excluir meta",
    }

    def __init__(self, service: GoalService) -> None:
        super().__init__(service, Goal.from_api)

    async def fetch_all(
        self,
        planner_id: str,
        month: int | None = None,
        year: int | None = None,
    ) -> Result[list[Goal]]:
        planner_id = _require_id(planner_id, "planner_id")
        service = self.service
        return await self._call(
            "fetch_all",
            lambda: service.list(planner_id, month, year),
            self._replace_all,
        )
