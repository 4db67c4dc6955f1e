# src/ikigai_planner/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import quick_add
from ..cli.commands import registry as command_registry
from ..core.errors import ValidationError
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


async def handle_line(state: AppState, line: str) -> str:
    """
    One console line -> one reply.

    Slash commands go to the registry; any other text is a quick-add task
    for the open planner.
    """
    reply = await command_registry.handle(state, line)
    if reply is not None:
        return reply
    try:
        return await quick_add(state, line)
    except ValidationError as e:
        return f"[Atenção] {e}"


async def run_console_loop(state: AppState) -> None:
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "Ikigai Planner"))
    logger.info("Console connector started.")
    _print_ts(f"[{app_name}] Type /help for commands, plain text to quick-add a task, /exit to quit.\n")

    while True:
        try:
            # input() blocks; keep the event loop free while waiting for the user.
            user_input = (await asyncio.to_thread(input, ">>> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = await handle_line(state, user_input)
        except Exception:
            logger.exception("Console handler crashed.")
            reply = "Internal error while handling the command."

        _print_ts(reply)

    logger.info("Console connector finished.")
