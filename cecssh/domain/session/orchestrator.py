"""
Single-shot remote command session over an interactive shell

Lifecycle:
1. Connect the transport
2. Open a pty shell
3. Drain login banner / MOTD
4. Dispatch "stty -echo; exec cec-ctl ..."
5. Stream output and watch liveness on two threads, stop at the first to end
6. Cancel, give the reader a grace period, force disconnect
"""
import sys
import threading
import time
from typing import BinaryIO, Callable, Optional

from ...core.constants import TERMINAL_TYPE, TERMINAL_COLUMNS, TERMINAL_ROWS
from ...core.exceptions import (
    ChannelError,
    ConnectionError,
    DispatchError,
    ShellOpenError,
)
from ...core.interfaces import ShellChannel, SshSession
from ...core.logging import get_logger
from ...core.telemetry import Telemetry, get_telemetry
from ...core.utils import best_effort
from .models import RemoteCommand, SessionState, SessionTimings
from .signals import SignalForwarder

logger = get_logger(__name__)


class SessionOrchestrator:
    """Owns one SSH session from connect to close"""

    def __init__(
        self,
        session: SshSession,
        command: RemoteCommand,
        timings: Optional[SessionTimings] = None,
        output: Optional[BinaryIO] = None,
        forward_signals: bool = True,
        telemetry: Optional[Telemetry] = None,
    ):
        """
        Args:
            session: Unconnected transport
            command: Remote command to dispatch
            timings: Delays and bounds (defaults from constants)
            output: Binary sink for remote output (default: stdout buffer)
            forward_signals: Install the SIGINT forwarder (main thread only)
            telemetry: Event/metric recorder (default: global instance)
        """
        self.session = session
        self.command = command
        self.timings = timings or SessionTimings()
        self.output = output if output is not None else sys.stdout.buffer
        self.forward_signals = forward_signals
        self.telemetry = telemetry or get_telemetry()

        self.bytes_streamed = 0
        self.banner_bytes = 0
        self.finished_by: Optional[str] = None

        self._state = SessionState.DISCONNECTED
        self._cancel = threading.Event()
        self._finished = threading.Event()
        self._finish_lock = threading.Lock()
        self._reader: Optional[threading.Thread] = None
        self._monitor: Optional[threading.Thread] = None
        self._forwarder: Optional[SignalForwarder] = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    # --------------------
    # Main flow
    # --------------------
    def run(self) -> None:
        """
        Run the whole session.

        Raises:
            ConnectionError: connect failed (nothing to shut down)
            ShellOpenError: shell could not be opened (after shutdown)
            DispatchError: command write failed (after shutdown)
        """
        self._connect()
        try:
            channel = self._open_shell()
            if self.forward_signals:
                self._forwarder = SignalForwarder(channel)
                self._forwarder.install()
            self._drain(channel)
            self._dispatch(channel)
            self._stream(channel)
        finally:
            self._shutdown()

    def _transition(self, new_state: SessionState) -> None:
        old_state = self._state
        if new_state is SessionState.SHUTTING_DOWN:
            allowed = old_state not in (SessionState.SHUTTING_DOWN, SessionState.CLOSED)
        else:
            allowed = new_state.value == old_state.value + 1
        if not allowed:
            raise RuntimeError(f"Invalid session transition {old_state.name} -> {new_state.name}")

        self._state = new_state
        logger.debug(f"Session state: {old_state.name} -> {new_state.name}")
        self.telemetry.record_event("session.state", {
            "from": old_state.name,
            "to": new_state.name,
        })

    # --------------------
    # Steps
    # --------------------
    def _connect(self) -> None:
        logger.info(f"Connecting to {self.session!r}")
        try:
            self.session.connect(timeout=self.timings.connect_timeout)
        except ConnectionError:
            # Transport may be half-open after a failed handshake
            with best_effort("disconnect after failed connect"):
                self.session.disconnect()
            raise
        self._transition(SessionState.CONNECTED)

    def _open_shell(self) -> ShellChannel:
        try:
            channel = self.session.open_shell(TERMINAL_TYPE, TERMINAL_COLUMNS, TERMINAL_ROWS)
        except (OSError, ChannelError) as e:
            raise ShellOpenError(f"Failed to open shell: {e}") from e
        self._transition(SessionState.SHELL_OPEN)
        return channel

    def _drain(self, channel: ShellChannel) -> None:
        """Discard banner output until the channel stays quiet for a few polls"""
        self._transition(SessionState.DRAINING)
        time.sleep(self.timings.settle_delay)

        with best_effort("banner drain"):
            empty_polls = 0
            while channel.data_available() or empty_polls < self.timings.drain_empty_polls:
                if channel.data_available():
                    data = channel.read(self.timings.drain_chunk_size)
                    if not data:
                        break
                    self.banner_bytes += len(data)
                    empty_polls = 0
                else:
                    empty_polls += 1
                    time.sleep(self.timings.drain_poll_interval)

        logger.debug(f"Discarded {self.banner_bytes} banner bytes")

    def _dispatch(self, channel: ShellChannel) -> None:
        line = self.command.dispatch_line + "\n"
        try:
            channel.write(line.encode("utf-8"))
        except (OSError, ChannelError) as e:
            raise DispatchError(f"Failed to send command to remote shell: {e}") from e
        logger.info(f"Dispatched: {self.command.exec_line}")
        self._transition(SessionState.EXECUTING)

    def _stream(self, channel: ShellChannel) -> None:
        self._reader = threading.Thread(
            target=self._run_until_finished,
            args=("reader", self._read_output, channel),
            daemon=True,
            name="cec-ssh-reader",
        )
        self._monitor = threading.Thread(
            target=self._run_until_finished,
            args=("monitor", self._monitor_liveness),
            daemon=True,
            name="cec-ssh-monitor",
        )
        self._reader.start()
        self._monitor.start()

        # Timed waits let the main thread run the SIGINT handler promptly
        # even when the signal was delivered to a worker thread
        while not self._finished.wait(self.timings.liveness_interval):
            pass
        logger.debug(f"{self.finished_by} finished first")

    def _shutdown(self) -> None:
        if self._state is SessionState.CLOSED:
            return
        self._transition(SessionState.SHUTTING_DOWN)
        self._cancel.set()

        if self._reader is not None:
            self._reader.join(timeout=self.timings.grace_period)
            if self._reader.is_alive():
                logger.debug("Reader still running after grace period, forcing disconnect")

        with best_effort("disconnect"):
            if self.session.is_connected():
                self.session.disconnect()

        if self._forwarder is not None:
            self._forwarder.uninstall()

        self._transition(SessionState.CLOSED)
        self.telemetry.record_metric("session.bytes_streamed", self.bytes_streamed)

    # --------------------
    # Background loops
    # --------------------
    def _run_until_finished(self, name: str, loop: Callable, *args) -> None:
        """Run loop, then mark the session finished if nobody did yet"""
        try:
            loop(*args)
        except Exception:
            logger.exception(f"Unexpected error in {name} loop")
        finally:
            with self._finish_lock:
                if self.finished_by is None:
                    self.finished_by = name
            self._finished.set()

    def _read_output(self, channel: ShellChannel) -> None:
        while not self._cancel.is_set():
            try:
                data = channel.read(self.timings.read_chunk_size)
            except TimeoutError:
                continue
            except (OSError, ChannelError) as e:
                logger.debug(f"Output stream ended: {e!r}")
                return

            if not data:
                logger.debug("Remote side closed the shell")
                return

            try:
                self.output.write(data)
                self.output.flush()
            except OSError as e:
                logger.debug(f"Local output closed: {e!r}")
                return
            self.bytes_streamed += len(data)
            self.telemetry.increment("session.output_chunks")

    def _monitor_liveness(self) -> None:
        while not self._cancel.is_set():
            if not self.session.is_connected():
                logger.debug("Transport reports disconnected")
                return
            self._cancel.wait(self.timings.liveness_interval)
