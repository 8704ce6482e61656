"""
Logging and console output

Diagnostics go to stderr through rich so they never mix with the remote
command's output on stdout. Remote output itself is raw bytes and bypasses
both consoles.
"""
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install as install_traceback

from .constants import DEFAULT_LOG_LEVEL

FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(threadName)s - %(levelname)s - %(message)s"

# Resolved against sys.stdout / sys.stderr on every write
_stdout_console = Console(highlight=False, soft_wrap=True)
_stderr_console = Console(stderr=True, highlight=False, soft_wrap=True)

# Locals would include the connection password
install_traceback(console=_stderr_console, show_locals=False, width=120)


def _level_from_name(name: str) -> int:
    if name.isdigit():
        return int(name)
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def _file_handler(path: Path, level: int) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
    return handler


def setup_logging(level: str = DEFAULT_LOG_LEVEL, log_file: Optional[Path] = None) -> None:
    """
    Route all logging through rich on stderr, plus an optional file.

    Args:
        level: Level name (DEBUG ... CRITICAL) or number; unknown names fall back to WARNING
        log_file: Also append records here (parent directories are created)
    """
    log_level = _level_from_name(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = RichHandler(
        console=_stderr_console,
        show_path=log_level <= logging.DEBUG,
        rich_tracebacks=True,
        markup=False,
    )
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        root_logger.addHandler(_file_handler(log_file, log_level))

    # paramiko logs every transport negotiation step at INFO
    logging.getLogger("paramiko").setLevel(max(log_level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def get_stdout_console() -> Console:
    """Console for user-facing messages (usage text)"""
    return _stdout_console


def get_stderr_console() -> Console:
    """Console for errors and diagnostics"""
    return _stderr_console
