# src/ikigai_planner/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from ..core.errors import ValidationError
from ..core.models import ENERGY_CATEGORIES, ENTROPY_CATEGORIES, LIFE_ROLES
from ..core.result import Result
from ..core.state import AppState
from ..core.store import RemoteCallState, RemoteStore
from ..planning.editing import description_patch, draft_from_record, edit_patch, tracked_payload
from ..planning.ikigai import add_value, ikigai_patch, remove_value
from ..planning.matrix import partition_tasks, priority_label
from ..planning.progress import PROGRESS_STEPS, progress_patch, toggle_complete_patch
from ..planning.validation import (
    validate_forgot_password,
    validate_login,
    validate_planner_title,
    validate_quick_add,
    validate_registration,
    validate_task_title,
)
from ..quickadd.parser import parse_quick_add
from .bootstrap import clear_session, save_session

CommandHandler = Callable[[AppState, list[str]], Awaitable[str]]

logger = logging.getLogger(__name__)

MONTH_NAMES = [
    "Janeiro", "Fevereiro", "Março", "Abril", "Maio", "Junho",
    "Julho", "Agosto", "Setembro", "Outubro", "Novembro", "Dezembro",
]


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        ValidationError from a handler is turned into a warning reply: local
        preconditions never reach the stores.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        # Args may hold passwords: never log them.
        logger.debug("Command /%s (%d args)", name, len(args))
        try:
            return await handler(state, args)
        except ValidationError as e:
            logger.debug("Command /%s rejected locally: %s", name, e.field_errors)
            return f"[Atenção] {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----

def report(store: RemoteCallState, result: Result[Any], success: str) -> str:
    """Success notice, or the store's error (dismissed once shown)."""
    if result.ok:
        return success
    msg = store.error or getattr(result, "message", "") or "Erro"
    store.clear_error()
    return f"[Erro] {msg}"


def pick(store: RemoteStore[Any], ref: str | None) -> Any | None:
    """Resolve a 1-based list position or an id against a store's collection."""
    if not ref:
        return None
    if ref.isdigit():
        idx = int(ref) - 1
        if 0 <= idx < len(store.items):
            return store.items[idx]
    return store.find(ref)


def _need_planner(state: AppState) -> str | None:
    planner = state.current_planner
    return planner.id if planner is not None else None


NO_PLANNER = "No planner open. Use /planners and /open <n>."


def _check(flag: bool) -> str:
    return "x" if flag else " "


def _fmt_tracked(i: int, item: Any, *, with_progress: bool) -> str:
    track = item.track
    due = f" (até {track.due_day})" if track.due_day else ""
    role = f" @{item.life_role}" if item.life_role else ""
    prog = f" {track.progress}%" if with_progress else ""
    return f"  {i}. [{_check(track.completed)}] {track.title}{role}{due}{prog}"


# ---- general ----

async def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


async def cmd_status(state: AppState, args: list[str]) -> str:
    user = state.auth.user
    planner = state.current_planner
    api_url = getattr(state.settings, "api_url", "?")
    return (
        "Status:\n"
        f"  API: {api_url}\n"
        f"  User: {user.email if user else '(not logged in)'}\n"
        f"  Planner: {planner.title if planner else '(none)'}\n"
        f"  Tasks/Projects/Goals loaded: "
        f"{len(state.tasks.items)}/{len(state.projects.items)}/{len(state.goals.items)}"
    )


async def cmd_tags(state: AppState, args: list[str]) -> str:
    return (
        "Quick-add tags: @papel #energia $entropia !data *importante *urgente\n"
        f"  Papéis: {', '.join(LIFE_ROLES)}\n"
        f"  Energia: {', '.join(ENERGY_CATEGORIES)}\n"
        f"  Entropia: {', '.join(ENTROPY_CATEGORIES)}"
    )


# ---- auth ----

async def cmd_login(state: AppState, args: list[str]) -> str:
    email = args[0] if args else ""
    password = args[1] if len(args) > 1 else ""
    validate_login(email, password)
    result = await state.auth.login(email, password)
    if result.ok:
        save_session(state)
    return report(state.auth, result, f"Bem-vindo, {state.auth.user.name if state.auth.user else email}!")


async def cmd_register(state: AppState, args: list[str]) -> str:
    """
    /register <name> <email> <password> <confirm>
    """
    name, email, password, confirm = (args + ["", "", "", ""])[:4]
    validate_registration(name, email, password, confirm)
    result = await state.auth.register(name, email, password)
    if result.ok:
        save_session(state)
    return report(state.auth, result, "Conta criada com sucesso!")


async def cmd_logout(state: AppState, args: list[str]) -> str:
    result = await state.auth.logout()
    clear_session(state)
    state.planners.items = []
    state.planners.current = None
    state.reset_planner_scope()
    return report(state.auth, result, "Sessão encerrada.")


async def cmd_forgot(state: AppState, args: list[str]) -> str:
    email = args[0] if args else ""
    validate_forgot_password(email)
    result = await state.auth.forgot_password(email)
    return report(state.auth, result, "Se o email existir, enviaremos instruções de recuperação.")


async def cmd_reset(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        return "Usage: /reset <token> <new password>"
    result = await state.auth.reset_password(args[0], args[1])
    return report(state.auth, result, "Senha redefinida com sucesso!")


async def cmd_password(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        return "Usage: /password <current> <new>"
    result = await state.auth.update_password(args[0], args[1])
    if result.ok:
        save_session(state)
    return report(state.auth, result, "Senha atualizada com sucesso!")


async def cmd_profile(state: AppState, args: list[str]) -> str:
    """
    /profile                 -> show
    /profile <name> [email]  -> update
    """
    if not args:
        user = state.auth.user
        if user is None:
            return "Not logged in."
        return f"{user.name} <{user.email}>"
    name = args[0]
    email = args[1] if len(args) > 1 else None
    result = await state.auth.update_profile(name=name, email=email)
    return report(state.auth, result, "Perfil atualizado com sucesso!")


# ---- planners ----

async def cmd_planners(state: AppState, args: list[str]) -> str:
    result = await state.planners.fetch_all()
    if not result.ok:
        return report(state.planners, result, "")
    if not state.planners.items:
        return "Nenhum planner. Crie um com /newplanner <título>."
    lines = ["Meus Planners:"]
    for i, p in enumerate(state.planners.items, start=1):
        mark = "*" if state.current_planner and state.current_planner.id == p.id else " "
        lines.append(f" {mark}{i}. {p.title}")
    return "\n".join(lines)


async def cmd_new_planner(state: AppState, args: list[str]) -> str:
    title = " ".join(args).strip()
    validate_planner_title(title)
    result = await state.planners.create({"title": title, **ikigai_patch(None)})
    return report(state.planners, result, "Planner criado com sucesso!")


async def cmd_open(state: AppState, args: list[str]) -> str:
    planner = pick(state.planners, args[0] if args else None)
    planner_id = planner.id if planner is not None else (args[0] if args else "")
    if not planner_id:
        return "Usage: /open <n|id>"
    result = await state.planners.fetch_one(planner_id)
    if not result.ok:
        return report(state.planners, result, "")
    state.reset_planner_scope()
    today = state.today()
    await state.tasks.fetch_all(planner_id)
    await state.projects.fetch_all(planner_id)
    await state.goals.fetch_all(planner_id, today.month, today.year)
    errors = [s.error for s in (state.tasks, state.projects, state.goals) if s.error]
    for s in (state.tasks, state.projects, state.goals):
        s.clear_error()
    head = f"Planner aberto: {result.value.title}"
    return head if not errors else head + "\n" + "\n".join(f"[Erro] {e}" for e in errors)


async def cmd_del_planner(state: AppState, args: list[str]) -> str:
    planner = pick(state.planners, args[0] if args else None)
    if planner is None:
        return "Usage: /delplanner <n|id>"
    was_current = state.current_planner is not None and state.current_planner.id == planner.id
    result = await state.planners.delete(planner.id)
    if result.ok and was_current:
        state.reset_planner_scope()
    return report(state.planners, result, "Planner excluído com sucesso!")


async def cmd_ikigai(state: AppState, args: list[str]) -> str:
    p = state.current_planner
    if p is None:
        return NO_PLANNER
    values = "\n".join(f"    {i}. {v}" for i, v in enumerate(p.ikigai.values, start=1)) or "    -"
    return (
        f"{p.title}\n"
        f"  Missão: {p.ikigai.mission or '-'}\n"
        f"  Visão: {p.ikigai.vision or '-'}\n"
        f"  Área do Ano ({state.today().year}): {p.ikigai.year_focus or '-'}\n"
        f"  Valores:\n{values}"
    )


def _ikigai_setter(part: str, success: str) -> Callable[[AppState, list[str]], Awaitable[str]]:
    async def handler(state: AppState, args: list[str]) -> str:
        planner_id = _need_planner(state)
        if planner_id is None:
            return NO_PLANNER
        patch = ikigai_patch(state.current_planner, **{part: " ".join(args).strip()})
        result = await state.planners.update(planner_id, patch)
        return report(state.planners, result, success)

    return handler


async def cmd_values(state: AppState, args: list[str]) -> str:
    """
    /values add <value>
    /values rm <n>
    """
    planner_id = _need_planner(state)
    if planner_id is None:
        return NO_PLANNER
    current = list(state.current_planner.ikigai.values)
    sub = args[0].lower() if args else ""
    if sub == "add":
        values = add_value(current, " ".join(args[1:]))
    elif sub in ("rm", "del") and len(args) > 1 and args[1].isdigit():
        values = remove_value(current, int(args[1]) - 1)
    else:
        return "Usage: /values add <valor> | /values rm <n>"
    if values == current:
        return "Nada a alterar."
    result = await state.planners.update(planner_id, ikigai_patch(state.current_planner, values=values))
    return report(state.planners, result, "Valores atualizados com sucesso!")


# ---- tasks ----

async def cmd_tasks(state: AppState, args: list[str]) -> str:
    if _need_planner(state) is None:
        return NO_PLANNER
    if not state.tasks.items:
        return "Nenhuma tarefa."
    lines = ["Tarefas:"]
    for i, t in enumerate(state.tasks.items, start=1):
        line = _fmt_tracked(i, t, with_progress=False)
        lines.append(f"{line} [{priority_label(t.importance, t.urgency)}]")
    return "\n".join(lines)


async def quick_add(state: AppState, text: str) -> str:
    planner_id = _need_planner(state)
    if planner_id is None:
        return NO_PLANNER
    validate_quick_add(text)
    draft = parse_quick_add(text, today=state.today())
    validate_quick_add(text, draft)
    validate_task_title(draft.title)
    payload = draft.to_payload()
    payload["priority"] = priority_label(draft.importance, draft.urgency)
    payload.setdefault("completed", False)
    result = await state.tasks.create(planner_id, payload)
    return report(state.tasks, result, "Tarefa criada com sucesso!")


async def cmd_add(state: AppState, args: list[str]) -> str:
    return await quick_add(state, " ".join(args))


async def cmd_done(state: AppState, args: list[str]) -> str:
    task = pick(state.tasks, args[0] if args else None)
    if task is None:
        return "Usage: /done <n|id>"
    result = await state.tasks.update(task.id, toggle_complete_patch(task))
    return report(state.tasks, result, "Tarefa atualizada com sucesso!")


async def edit_record(state: AppState, store: RemoteStore[Any], item: Any, text: str, success: str) -> str:
    """
    No text: show the record as an editable quick-add line.
    Text: apply the edited line over the record.
    """
    if not text.strip():
        lines = [f"Editar: {draft_from_record(item).to_quick_add()}"]
        if item.description:
            lines.append(f"  Descrição: {item.description}")
        return "\n".join(lines)
    draft = parse_quick_add(text, today=state.today())
    validate_quick_add(text, draft)
    result = await store.update(item.id, edit_patch(item, draft))
    return report(store, result, success)


async def set_description(store: RemoteStore[Any], item: Any, text: str, success: str) -> str:
    result = await store.update(item.id, description_patch(item, text))
    return report(store, result, success)


async def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <n|id>                    -> show the task as a quick-add line
    /edit <n|id> <quick-add line>   -> replace title and tags
    """
    task = pick(state.tasks, args[0] if args else None)
    if task is None:
        return "Usage: /edit <n|id> [texto @papel #energia $entropia !data *importante *urgente]"
    return await edit_record(state, state.tasks, task, " ".join(args[1:]), "Tarefa atualizada com sucesso!")


async def cmd_note(state: AppState, args: list[str]) -> str:
    task = pick(state.tasks, args[0] if args else None)
    if task is None:
        return "Usage: /note <n|id> <descrição>"
    return await set_description(state.tasks, task, " ".join(args[1:]), "Tarefa atualizada com sucesso!")


async def cmd_del_task(state: AppState, args: list[str]) -> str:
    task = pick(state.tasks, args[0] if args else None)
    if task is None:
        return "Usage: /deltask <n|id>"
    result = await state.tasks.delete(task.id)
    return report(state.tasks, result, "Tarefa excluída com sucesso!")


async def cmd_matrix(state: AppState, args: list[str]) -> str:
    if _need_planner(state) is None:
        return NO_PLANNER
    lines = ["Matriz de Priorização:"]
    for quadrant, tasks in partition_tasks(state.tasks.items).items():
        lines.append(f"  {quadrant.value} - {quadrant.description}")
        if not tasks:
            lines.append("    (vazio)")
        for t in tasks:
            lines.append(f"    [{_check(t.completed)}] {t.title}")
    return "\n".join(lines)


# ---- projects / goals ----

# kind -> (list heading, created, updated, deleted)
_TRACKED_NOTICES = {
    "project": (
        "Projetos",
        "Projeto criado com sucesso!",
        "Projeto atualizado com sucesso!",
        "Projeto excluído com sucesso!",
    ),
    "goal": (
        "Metas",
        "Meta criada com sucesso!",
        "Meta atualizada com sucesso!",
        "Meta excluída com sucesso!",
    ),
}


def _tracked_commands(kind: str) -> CommandHandler:
    """
    /project | /goal subcommands:
      (none)                list
      add <line>            create (title @papel !data)
      edit <n> [line]       show / replace title and tags
      note <n> <text>       set description
      done <n>              toggle completed
      progress <n> <pct>    set progress (0/25/50/75/100)
      del <n>               delete
    """
    heading, created, updated, deleted = _TRACKED_NOTICES[kind]

    async def handler(state: AppState, args: list[str]) -> str:
        planner_id = _need_planner(state)
        if planner_id is None:
            return NO_PLANNER
        store = state.projects if kind == "project" else state.goals
        sub = args[0].lower() if args else ""

        if not sub:
            if kind == "goal":
                today = state.today()
                head = f"{heading} de {MONTH_NAMES[today.month - 1]} {today.year}:"
            else:
                head = f"{heading}:"
            if not store.items:
                return f"{head}\n  (nenhum)"
            rows = [_fmt_tracked(i, x, with_progress=True) for i, x in enumerate(store.items, start=1)]
            return "\n".join([head, *rows])

        if sub == "add":
            text = " ".join(args[1:])
            draft = parse_quick_add(text, today=state.today())
            validate_task_title(draft.title)
            data = tracked_payload(draft)
            if kind == "goal":
                today = state.today()
                data.update({"month": today.month, "year": today.year})
            result = await store.create(planner_id, data)
            return report(store, result, created)

        item = pick(store, args[1] if len(args) > 1 else None)
        if item is None:
            return f"Usage: /{kind} {sub} <n|id>"

        if sub == "edit":
            return await edit_record(state, store, item, " ".join(args[2:]), updated)

        if sub == "note":
            return await set_description(store, item, " ".join(args[2:]), updated)

        if sub == "done":
            result = await store.update(item.id, toggle_complete_patch(item))
            return report(store, result, updated)

        if sub == "progress":
            raw = args[2] if len(args) > 2 else ""
            if not raw.isdigit() or int(raw) not in PROGRESS_STEPS:
                steps = "/".join(str(s) for s in PROGRESS_STEPS)
                return f"Usage: /{kind} progress <n> <{steps}>"
            result = await store.update(item.id, progress_patch(item, int(raw)))
            return report(store, result, updated)

        if sub in ("del", "rm"):
            result = await store.delete(item.id)
            return report(store, result, deleted)

        return f"Unknown subcommand: /{kind} {sub}"

    return handler


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show API, user and open planner.")
registry.register("tags", cmd_tags, help_text="Quick-add syntax and suggested tags.")
registry.register("login", cmd_login, help_text="Log in: /login <email> <password>.")
registry.register("register", cmd_register, help_text="Sign up: /register <name> <email> <pw> <confirm>.")
registry.register("logout", cmd_logout, help_text="Log out and forget the stored session.")
registry.register("profile", cmd_profile, help_text="Show or update profile: /profile [name] [email].")
registry.register("password", cmd_password, help_text="Change password: /password <current> <new>.")
registry.register("forgot", cmd_forgot, help_text="Request a password reset: /forgot <email>.")
registry.register("reset", cmd_reset, help_text="Reset password: /reset <token> <new>.")
registry.register("planners", cmd_planners, help_text="List planners.", aliases=["ls"])
registry.register("newplanner", cmd_new_planner, help_text="Create a planner: /newplanner <title>.")
registry.register("open", cmd_open, help_text="Open a planner: /open <n|id>.")
registry.register("delplanner", cmd_del_planner, help_text="Delete a planner: /delplanner <n|id>.")
registry.register("ikigai", cmd_ikigai, help_text="Show mission, vision, year focus and values.")
registry.register("mission", _ikigai_setter("mission", "Missão atualizada com sucesso!"), help_text="Set mission.")
registry.register("vision", _ikigai_setter("vision", "Visão atualizada com sucesso!"), help_text="Set vision.")
registry.register(
    "focus",
    _ikigai_setter("year_focus", "Área do ano atualizada com sucesso!"),
    help_text="Set the year focus.",
)
registry.register("values", cmd_values, help_text="Edit values: /values add <v> | /values rm <n>.")
registry.register("tasks", cmd_tasks, help_text="List tasks of the open planner.")
registry.register("add", cmd_add, help_text="Quick-add a task (plain text works too).", aliases=["a"])
registry.register("done", cmd_done, help_text="Toggle a task completed: /done <n|id>.")
registry.register("edit", cmd_edit, help_text="Edit a task as a quick-add line: /edit <n|id> [line].", aliases=["e"])
registry.register("note", cmd_note, help_text="Set a task description: /note <n|id> <text>.")
registry.register("deltask", cmd_del_task, help_text="Delete a task: /deltask <n|id>.")
registry.register("matrix", cmd_matrix, help_text="Show the priority matrix.", aliases=["m"])
registry.register("project", _tracked_commands("project"), help_text="Projects: add|edit|note|done|progress|del.")
registry.register("goal", _tracked_commands("goal"), help_text="Monthly goals: add|edit|note|done|progress|del.")
