"""
Local interrupt forwarding to the remote shell
"""
import signal
from typing import Any, Optional

from ...core.constants import INTERRUPT_BYTE
from ...core.interfaces import ShellChannel
from ...core.logging import get_logger
from ...core.utils import best_effort

logger = get_logger(__name__)


class SignalForwarder:
    """
    Turns local SIGINT into a Ctrl+C byte on the remote channel.

    While installed, the local process is not interrupted: each SIGINT makes
    one best-effort write of 0x03. Must be installed from the main thread.
    """

    def __init__(self, channel: ShellChannel, signum: int = signal.SIGINT):
        self.channel = channel
        self.signum = signum
        self.forwarded = 0
        self._previous: Optional[Any] = None
        self._installed = False

    def install(self) -> None:
        """Replace the current handler for signum"""
        if self._installed:
            return
        self._previous = signal.signal(self.signum, self._handle)
        self._installed = True
        logger.debug(f"Forwarding {signal.Signals(self.signum).name} to remote channel")

    def uninstall(self) -> None:
        """Restore the handler that was active before install()"""
        if not self._installed:
            return
        signal.signal(self.signum, self._previous)
        self._installed = False
        self._previous = None

    def forward(self) -> None:
        """Write the interrupt byte; never raises"""
        with best_effort("interrupt forward"):
            if not self.channel.is_open():
                return
            self.channel.write(INTERRUPT_BYTE)
            self.forwarded += 1

    def _handle(self, signum, frame) -> None:
        self.forward()

    def __enter__(self) -> "SignalForwarder":
        self.install()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.uninstall()
