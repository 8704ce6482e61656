"""
cec-ssh - run cec-ctl on a remote host over an interactive SSH shell

Provides:
- Connection configuration discovery (explicit path, cwd, PATH)
- POSIX shell quoting of the cec-ctl arguments
- Banner draining, echo suppression and live output streaming
- Ctrl+C forwarding to the remote process
"""

__version__ = "0.1.0"

# Export core components
from .core import (
    RemoteClient,
    SshSession,
    ShellChannel,
)

# Export domain models
from .domain.session import (
    ConnectionConfig,
    RemoteCommand,
    SessionState,
    SessionTimings,
    SessionOrchestrator,
    SignalForwarder,
    quote_argument,
    build_remote_command,
)

from .adapters.config import ConfigResolver

__all__ = [
    # Version
    "__version__",
    # Client
    "RemoteClient",
    "SshSession",
    "ShellChannel",
    # Session
    "ConnectionConfig",
    "RemoteCommand",
    "SessionState",
    "SessionTimings",
    "SessionOrchestrator",
    "SignalForwarder",
    "quote_argument",
    "build_remote_command",
    # Configuration
    "ConfigResolver",
]
