"""
POSIX shell quoting for the remote command line
"""
from typing import Iterable

from ...core.constants import REMOTE_PROGRAM
from .models import RemoteCommand

# Characters that make an argument need quoting (whitespace checked separately)
SHELL_SPECIAL_CHARS = frozenset("\"'\\$`*?[]()<>|&;")


def needs_quoting(arg: str) -> bool:
    """Check if arg contains whitespace or a shell-significant character"""
    return any(c.isspace() or c in SHELL_SPECIAL_CHARS for c in arg)


def quote_argument(arg: str) -> str:
    """
    Quote a single argument for a POSIX shell.

    Safe arguments are returned unchanged; everything else is wrapped in
    single quotes, with embedded single quotes written as '"'"'.

    Examples:
        "-M"        -> -M
        "my device" -> 'my device'
        "O'Brien"   -> 'O'"'"'Brien'
        ""          -> ''
    """
    if not arg:
        return "''"

    if not needs_quoting(arg):
        return arg

    return "'" + arg.replace("'", "'\"'\"'") + "'"


def build_remote_command(args: Iterable[str]) -> RemoteCommand:
    """
    Build the remote cec-ctl invocation.

    Args:
        args: Operator arguments, in order

    Returns:
        RemoteCommand whose dispatch_line is "stty -echo; exec cec-ctl ..."
    """
    args = tuple(args)
    command = " ".join([REMOTE_PROGRAM] + [quote_argument(a) for a in args])
    return RemoteCommand(args=args, command=command)
