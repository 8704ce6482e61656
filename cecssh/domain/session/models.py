"""
Session domain models
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from ...core.constants import (
    DEFAULT_SSH_PORT,
    ECHO_OFF_PREFIX,
    SETTLE_DELAY,
    DRAIN_POLL_INTERVAL,
    DRAIN_EMPTY_POLLS,
    DRAIN_CHUNK_SIZE,
    READ_CHUNK_SIZE,
    LIVENESS_INTERVAL,
    GRACE_PERIOD,
)


@dataclass(frozen=True)
class ConnectionConfig:
    """Connection parameters loaded from the configuration file"""
    host: str
    username: str
    password: str = field(repr=False)
    port: int = DEFAULT_SSH_PORT


@dataclass(frozen=True)
class RemoteCommand:
    """Remote command line built once from the operator's arguments"""
    args: Tuple[str, ...]
    command: str  # e.g. "cec-ctl -d /dev/cec1 -M"

    @property
    def exec_line(self) -> str:
        """Command run via exec so the shell is replaced by it"""
        return f"exec {self.command}"

    @property
    def dispatch_line(self) -> str:
        """Line written to the shell: echo off, then exec"""
        return f"{ECHO_OFF_PREFIX}{self.exec_line}"

    def __str__(self) -> str:
        return self.dispatch_line


class SessionState(Enum):
    """Session lifecycle, strictly forward"""
    DISCONNECTED = 0
    CONNECTED = 1
    SHELL_OPEN = 2
    DRAINING = 3
    EXECUTING = 4
    SHUTTING_DOWN = 5
    CLOSED = 6


@dataclass(frozen=True)
class SessionTimings:
    """Delays and bounds used by the orchestrator (seconds / bytes)"""
    settle_delay: float = SETTLE_DELAY
    drain_poll_interval: float = DRAIN_POLL_INTERVAL
    drain_empty_polls: int = DRAIN_EMPTY_POLLS
    drain_chunk_size: int = DRAIN_CHUNK_SIZE
    read_chunk_size: int = READ_CHUNK_SIZE
    liveness_interval: float = LIVENESS_INTERVAL
    grace_period: float = GRACE_PERIOD
    connect_timeout: Optional[float] = None
