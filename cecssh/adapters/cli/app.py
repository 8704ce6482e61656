"""
Main CLI application
"""
import sys
from typing import BinaryIO, Optional, Sequence

import typer
from rich.markup import escape

from ...core.constants import EXIT_OK, EXIT_USAGE
from ...core.exceptions import (
    CecSshError,
    ConfigError,
    ConfigNotFoundError,
    ConnectionError,
    MissingConfigValueError,
    SettingsError,
    UsageError,
)
from ...core.interfaces import ConnectionFactory
from ...core.logging import setup_logging, get_logger, get_stdout_console, get_stderr_console
from ...domain.session.models import SessionTimings
from ...domain.session.orchestrator import SessionOrchestrator
from ...domain.session.quoting import build_remote_command
from ..config.loader import SettingsLoader
from ..config.resolver import ConfigResolver
from .arguments import split_arguments
from .connection import RemoteConnectionFactory

logger = get_logger(__name__)
console = get_stdout_console()
stderr_console = get_stderr_console()

EXIT_INTERRUPTED = 130

# Create main app
app = typer.Typer(
    name="cec-ssh",
    add_completion=False,
    help="Run cec-ctl on a remote host over SSH",
    rich_markup_mode="rich",
)


def _print_usage() -> None:
    console.print("Usage: cec-ssh \\[--config <path>] <cec-ctl arguments...>")
    console.print("Example: cec-ssh -d /dev/cec1 -M")


def _report(label: str, error: Exception) -> None:
    stderr_console.print(f"[red]{label}:[/red] {escape(str(error))}")


def run_session(
    argv: Sequence[str],
    factory: Optional[ConnectionFactory] = None,
    output: Optional[BinaryIO] = None,
    timings: Optional[SessionTimings] = None,
    forward_signals: bool = True,
) -> int:
    """
    Run one remote cec-ctl invocation.

    Args:
        argv: Raw arguments (without program name)
        factory: Session factory (default: paramiko RemoteClient)
        output: Binary sink for remote output (default: stdout buffer)
        timings: Orchestrator timings (default: constants + environment)
        forward_signals: Forward SIGINT to the remote side

    Returns:
        Process exit code
    """
    # Usage errors first, nothing else is touched
    try:
        invocation = split_arguments(argv)
    except MissingConfigValueError as e:
        _report("Error", e)
        return e.exit_code
    except UsageError:
        _print_usage()
        return EXIT_USAGE

    try:
        settings = SettingsLoader().load()
    except SettingsError as e:
        _report("Invalid setting", e)
        return e.exit_code
    setup_logging(level=settings.log_level, log_file=settings.log_file)

    try:
        config = ConfigResolver().resolve(invocation.config_path)
    except ConfigNotFoundError as e:
        _report("Error", e)
        stderr_console.print("Tried the following paths:")
        for path in e.tried_paths:
            stderr_console.print(f"  {escape(path)}")
        stderr_console.print("Use --config <path> to specify the configuration file.")
        return e.exit_code
    except ConfigError as e:
        _report("Configuration error", e)
        return e.exit_code

    command = build_remote_command(invocation.command_args)
    logger.debug(f"Remote command: {command.dispatch_line}")

    factory = factory or RemoteConnectionFactory(timeout=settings.connect_timeout)
    orchestrator = SessionOrchestrator(
        session=factory.create(config),
        command=command,
        timings=timings or SessionTimings(connect_timeout=settings.connect_timeout),
        output=output,
        forward_signals=forward_signals,
    )

    try:
        orchestrator.run()
    except ConnectionError as e:
        _report("Connection error", e)
        return e.exit_code
    except CecSshError as e:
        _report("Error", e)
        return e.exit_code
    except KeyboardInterrupt:
        stderr_console.print("\nInterrupted")
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.exception("Session failed")
        _report("Error", e)
        return 1

    return EXIT_OK


@app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
    add_help_option=False,
)
def main(ctx: typer.Context) -> None:
    """
    Run cec-ctl remotely with the given arguments.

    Every argument except --config/-c <path> is passed to cec-ctl.

    Examples:
        cec-ssh -d /dev/cec1 -M
        cec-ssh --config ./pi.json -d /dev/cec0 --playback
    """
    code = run_session(ctx.args, output=sys.stdout.buffer)
    if code != EXIT_OK:
        raise typer.Exit(code)


def run():
    """CLI entry point"""
    app()


if __name__ == "__main__":
    run()
