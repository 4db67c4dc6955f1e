# src/ikigai_planner/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, restores a stored session,
then runs the console REPL until /exit (or EOF / Ctrl+C).
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state, load_session, save_session
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _restore_session(state: AppState) -> None:
    if load_session(state) is None:
        return
    result = await state.auth.load_user()
    if result.ok and state.auth.user is not None:
        logger.info("Session restored for %s", state.auth.user.email)
    else:
        # Stale token was dropped by the auth service; forget it on disk too.
        save_session(state)


async def _shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        save_session(state)
    except Exception:
        logger.exception("Failed to save session.")

    api = getattr(state, "api", None)
    if api is not None:
        try:
            await api.aclose()
        except Exception:
            logger.debug("HTTP client close failed.", exc_info=True)


async def run(settings) -> None:
    state = create_initial_state(settings=settings)
    try:
        await _restore_session(state)
        await run_console_loop(state)
    finally:
        await _shutdown(state)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    log_file = setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s (api=%s, log=%s)...", settings.app_name, settings.api_url, log_file)

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted.")

    logger.info("Bye.")


if __name__ == "__main__":
    main()
