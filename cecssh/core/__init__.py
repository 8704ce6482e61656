"""
Core infrastructure layer
"""
from .client import RemoteClient, ParamikoShellChannel
from .constants import *
from .exceptions import *
from .logging import setup_logging, get_logger, get_stdout_console, get_stderr_console
from .interfaces import ShellChannel, SshSession, ConnectionFactory
from .telemetry import Telemetry, get_telemetry
from .utils import best_effort

__all__ = [
    "RemoteClient",
    "ParamikoShellChannel",
    "setup_logging",
    "get_logger",
    "get_stdout_console",
    "get_stderr_console",
    "ShellChannel",
    "SshSession",
    "ConnectionFactory",
    "Telemetry",
    "get_telemetry",
    "best_effort",
]
