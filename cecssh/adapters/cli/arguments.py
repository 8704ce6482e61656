"""
Command-line splitting: --config / -c versus cec-ctl arguments
"""
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ...core.exceptions import MissingConfigValueError, UsageError

CONFIG_FLAGS = ("--config", "-c")


@dataclass(frozen=True)
class Invocation:
    """Parsed command line"""
    config_path: Optional[str]
    command_args: Tuple[str, ...]


def split_arguments(argv: Sequence[str]) -> Invocation:
    """
    Split raw arguments into the config path and the cec-ctl arguments.

    Only the first --config/-c is consumed, together with the argument after
    it. Everything else is kept in order.

    Raises:
        MissingConfigValueError: --config is the last argument
        UsageError: no cec-ctl arguments remain
    """
    args = list(argv)
    config_path: Optional[str] = None

    for i, arg in enumerate(args):
        if arg in CONFIG_FLAGS:
            if i + 1 >= len(args):
                raise MissingConfigValueError(f"{arg} requires a path argument")
            config_path = args[i + 1]
            del args[i:i + 2]
            break

    if not args:
        raise UsageError("no cec-ctl arguments given")

    return Invocation(config_path=config_path, command_args=tuple(args))
