from __future__ import annotations
from typing import Optional

import paramiko

from .constants import (
    DEFAULT_SSH_PORT,
    READ_TIMEOUT,
    TERMINAL_WIDTH_PIXELS,
    TERMINAL_HEIGHT_PIXELS,
)
from .exceptions import (
    AuthenticationError,
    ChannelError,
    NetworkError,
    ShellOpenError,
)
from .interfaces import ShellChannel, SshSession
from .logging import get_logger

logger = get_logger(__name__)


class ParamikoShellChannel(ShellChannel):
    """ShellChannel over a paramiko Channel with a pty and shell attached"""

    def __init__(self, channel: paramiko.Channel, read_timeout: float = READ_TIMEOUT) -> None:
        self._channel = channel
        # recv() raises socket.timeout (TimeoutError) after this long
        self._channel.settimeout(read_timeout)

    def data_available(self) -> bool:
        return self._channel.recv_ready()

    def read(self, size: int) -> bytes:
        try:
            return self._channel.recv(size)
        except paramiko.SSHException as e:
            raise ChannelError(f"Channel read failed: {e}") from e

    def write(self, data: bytes) -> None:
        try:
            self._channel.sendall(data)
        except paramiko.SSHException as e:
            raise ChannelError(f"Channel write failed: {e}") from e

    def is_open(self) -> bool:
        return not self._channel.closed


class RemoteClient(SshSession):
    """
    Paramiko SSHClient wrapper for the single-shot shell session:
    - password login only
    - connect/shell-open bounded by timeout when one is given
    - shell opened on an explicit session channel so the pty request is ours
    """
    def __init__(
        self,
        host: str,
        user: str,
        password: str,
        port: int = DEFAULT_SSH_PORT,
        timeout: Optional[float] = None,
        read_timeout: float = READ_TIMEOUT,
    ) -> None:
        self.host = host
        self.user = user
        self.port = port
        self.timeout = timeout
        self.read_timeout = read_timeout
        self._password = password

        self.client = paramiko.SSHClient()
        self.client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

    def __repr__(self) -> str:
        return f"RemoteClient({self.user}@{self.host}:{self.port})"

    # --------------------
    # Connection management
    # --------------------
    def connect(self, timeout: Optional[float] = None) -> None:
        if timeout is not None:
            self.timeout = timeout

        logger.debug(f"Connecting to {self.user}@{self.host}:{self.port} (timeout={self.timeout})")
        try:
            self.client.connect(
                hostname=self.host,
                port=self.port,
                username=self.user,
                password=self._password,
                timeout=self.timeout,
                banner_timeout=self.timeout,
                auth_timeout=self.timeout,
            )
        except paramiko.AuthenticationException as e:
            raise AuthenticationError(f"Authentication failed for {self.user}@{self.host}: {e}") from e
        except (paramiko.SSHException, OSError) as e:
            raise NetworkError(f"Failed to connect to {self.host}:{self.port}: {e}") from e

    def open_shell(self, term: str, cols: int, rows: int) -> ParamikoShellChannel:
        transport = self.client.get_transport()
        if transport is None or not transport.is_active():
            raise ShellOpenError("SSH transport not available")

        try:
            channel = transport.open_session(timeout=self.timeout)
            channel.get_pty(
                term=term,
                width=cols,
                height=rows,
                width_pixels=TERMINAL_WIDTH_PIXELS,
                height_pixels=TERMINAL_HEIGHT_PIXELS,
            )
            channel.invoke_shell()
        except (paramiko.SSHException, OSError) as e:
            raise ShellOpenError(f"Failed to open shell: {e}") from e

        return ParamikoShellChannel(channel, read_timeout=self.read_timeout)

    def is_connected(self) -> bool:
        transport = self.client.get_transport()
        return transport is not None and transport.is_active()

    def disconnect(self) -> None:
        self.client.close()
