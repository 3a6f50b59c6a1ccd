# Argmatch Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Logging setup for applications embedding argmatch.

The parser itself only emits debug records on the `argmatch` logger. Call
`setup_logging()` once at startup to route them somewhere useful:

- "cli": a rich `RichHandler` on the console
- "json": a python-json-logger `JsonFormatter` on the console

An optional file handler receives the same records at its own level.
"""
from __future__ import annotations

import logging
import os

from pythonjsonlogger.json import JsonFormatter
from rich.logging import RichHandler

LOG_MODE_ENV = "ARGMATCH_LOG_MODE"
JSON_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
FILE_LOG_FORMAT = "%(asctime)s [%(name)s] [%(levelname)s] %(message)s"


def _console_handler(mode: str) -> logging.Handler:
    if mode == "cli":
        return RichHandler(
            rich_tracebacks=True,
            show_path=False,
            markup=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
    if mode == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter(JSON_LOG_FORMAT))
        return handler
    raise ValueError(f"Invalid log mode: {mode!r} (expected 'cli' or 'json')")


def _file_handler(log_filename: str, as_json: bool) -> logging.Handler:
    handler = logging.FileHandler(log_filename, "a", "UTF-8")
    if as_json:
        handler.setFormatter(JsonFormatter(JSON_LOG_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = "argmatch.log",
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
) -> None:
    """
    Replace the root logger's handlers with a console handler and an optional file handler.

    Args:
        mode (str | None): "cli" or "json". Falls back to `ARGMATCH_LOG_MODE`, then "cli".
        log_filename (str | None): File to append records to; None disables the file handler.
        json_log_to_file (bool): Write JSON lines to the file instead of plain text.
        file_log_level (int): Level of the file handler.
        console_log_level (int): Level of the console handler.

    Raises:
        ValueError: If `mode` is not "cli" or "json".
    """
    mode = mode or os.getenv(LOG_MODE_ENV) or "cli"
    console_handler = _console_handler(mode)
    console_handler.setLevel(console_log_level)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()
    root.addHandler(console_handler)

    if log_filename:
        file_handler = _file_handler(log_filename, json_log_to_file)
        file_handler.setLevel(file_log_level)
        root.addHandler(file_handler)

    logging.getLogger("argmatch").debug("Logging initialized in '%s' mode.", mode)
