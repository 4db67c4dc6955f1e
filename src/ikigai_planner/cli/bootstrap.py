# src/ikigai_planner/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires ApiClient -> HTTP services -> stores into AppState,
- persists the session token as JSON (optional) so restarts stay logged in.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

from ..api.http import ApiClient
from ..api.services import (
    HttpAuthService,
    HttpGoalService,
    HttpPlannerService,
    HttpProjectService,
    HttpTaskService,
)
from ..config import get_settings
from ..core.auth import AuthSession
from ..core.state import AppState
from ..core.store import GoalStore, PlannerStore, ProjectStore, TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.session_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, api: ApiClient | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings and the ApiClient injectable makes the app easier to test
    (an ApiClient over httpx.MockTransport) and avoids hidden global config reads.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if api is None:
        api = ApiClient.from_settings(settings)

    return AppState(
        settings=settings,
        auth=AuthSession(HttpAuthService(api)),
        planners=PlannerStore(HttpPlannerService(api)),
        tasks=TaskStore(HttpTaskService(api)),
        projects=ProjectStore(HttpProjectService(api)),
        goals=GoalStore(HttpGoalService(api)),
        api=api,
    )


def _session_path(state: AppState) -> Path | None:
    if not getattr(state.settings, "remember_session", False):
        return None
    raw_path = getattr(state.settings, "session_path", None)
    return Path(raw_path) if raw_path else None


def load_session(state: AppState) -> str | None:
    """Read the stored token and hand it to the auth service (best-effort)."""
    path = _session_path(state)
    if path is None or not path.exists():
        return None
    try:
        data = json.loads(path.read_text("utf-8"))
        token = data.get("token") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token.strip():
            return None
        state.auth.service.set_token(token)
        logger.info("Loaded session token from %s", path)
        return token
    except Exception:
        logger.exception("Failed to load session from %s", path)
        return None


def save_session(state: AppState) -> None:
    path = _session_path(state)
    if path is None:
        return
    token = state.auth.service.get_token()
    if not token:
        clear_session(state)
        return
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(json.dumps({"token": token}), "utf-8")
        os.replace(tmp, path)
        with contextlib.suppress(OSError):
            # The token is a credential: keep the file private on disk.
            os.chmod(path, 0o600)
        logger.info("Saved session token to %s", path)
    except Exception:
        logger.exception("Failed to save session to %s", path)


def clear_session(state: AppState) -> None:
    path = _session_path(state)
    if path is None:
        return
    with contextlib.suppress(FileNotFoundError):
        path.unlink()
        logger.info("Removed session file %s", path)
