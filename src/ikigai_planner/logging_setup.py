# src/ikigai_planner/logging_setup.py

"""
Logging for the console client.

The REPL shares the terminal with the log stream, so the console only shows
this package's own records (command handling, store failures, session
restore). Everything, including httpx request lines, also goes to
<data_dir>/ikigai.log for later inspection.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "ikigai.log"


class _ConsoleNoiseFilter(logging.Filter):
    """Own records pass; other loggers (httpx, py.warnings, ...) need ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "ikigai_planner" or record.name.startswith("ikigai_planner."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/ikigai",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Install the console + file handlers on the root logger and return the log file path.

    Safe to call again (handlers are replaced, not stacked); main() calls it
    before the first prompt is printed.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)

    # httpx logs one INFO line per request; httpcore is connection-level detail.
    logging.getLogger("httpx").setLevel(logging.INFO)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return log_file
