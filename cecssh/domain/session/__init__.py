"""
Remote command session: quoting, interrupt forwarding, orchestration
"""
from .models import ConnectionConfig, RemoteCommand, SessionState, SessionTimings
from .quoting import quote_argument, build_remote_command
from .signals import SignalForwarder
from .orchestrator import SessionOrchestrator

__all__ = [
    "ConnectionConfig",
    "RemoteCommand",
    "SessionState",
    "SessionTimings",
    "quote_argument",
    "build_remote_command",
    "SignalForwarder",
    "SessionOrchestrator",
]
