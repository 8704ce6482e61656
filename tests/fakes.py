import threading
import time
from collections import deque
from typing import List, Optional

from cecssh.core.interfaces import ConnectionFactory, ShellChannel, SshSession


class FakeChannel(ShellChannel):
    """In-memory shell channel; output queued with feed() or on dispatch"""

    def __init__(
        self,
        banner: bytes = b"",
        responses: Optional[List[bytes]] = None,
        eof_after_responses: bool = True,
        read_timeout: float = 0.01,
    ):
        self.read_timeout = read_timeout
        self.responses = list(responses or [])
        self.eof_after_responses = eof_after_responses
        self.writes: List[bytes] = []
        self.dispatched_at: Optional[float] = None
        self.fail_writes = False
        self.closed = False
        self._buffer = deque()
        self._eof = False
        self._cond = threading.Condition()
        if banner:
            self.feed(banner)

    def feed(self, data: bytes) -> None:
        with self._cond:
            self._buffer.append(data)
            self._cond.notify_all()

    def end(self) -> None:
        with self._cond:
            self._eof = True
            self._cond.notify_all()

    def data_available(self) -> bool:
        with self._cond:
            return bool(self._buffer)

    def read(self, size: int) -> bytes:
        with self._cond:
            if not self._buffer and not self._eof:
                self._cond.wait(self.read_timeout)
            if self._buffer:
                chunk = self._buffer.popleft()
                if len(chunk) > size:
                    self._buffer.appendleft(chunk[size:])
                    chunk = chunk[:size]
                return chunk
            if self._eof:
                return b""
        raise TimeoutError("no data")

    def write(self, data: bytes) -> None:
        if self.fail_writes or self.closed:
            raise OSError("Socket is closed")
        self.writes.append(data)
        if data.endswith(b"\n") and self.dispatched_at is None:
            self.dispatched_at = time.monotonic()
            for response in self.responses:
                self.feed(response)
            if self.eof_after_responses:
                self.end()

    def is_open(self) -> bool:
        return not self.closed

    def close(self) -> None:
        self.closed = True
        self.end()


class FakeSession(SshSession):
    """SshSession returning a FakeChannel"""

    def __init__(self, channel: Optional[FakeChannel] = None):
        self.channel = channel or FakeChannel()
        self.connected = False
        self.connect_error: Optional[Exception] = None
        self.shell_error: Optional[Exception] = None
        self.connect_timeout = "unset"
        self.shell_request = None
        self.shell_opened_at: Optional[float] = None
        self.disconnect_calls = 0

    def connect(self, timeout=None) -> None:
        self.connect_timeout = timeout
        if self.connect_error is not None:
            raise self.connect_error
        self.connected = True

    def open_shell(self, term, cols, rows):
        self.shell_request = (term, cols, rows)
        if self.shell_error is not None:
            raise self.shell_error
        self.shell_opened_at = time.monotonic()
        return self.channel

    def is_connected(self) -> bool:
        return self.connected

    def disconnect(self) -> None:
        self.disconnect_calls += 1
        self.connected = False
        self.channel.close()

    def drop(self) -> None:
        """Simulate the remote host going away without EOF on the channel"""
        self.connected = False


class FakeFactory(ConnectionFactory):
    def __init__(self, session: FakeSession):
        self.session = session
        self.configs = []

    def create(self, config):
        self.configs.append(config)
        return self.session


class RecordingOutput:
    """Binary sink remembering when the first byte arrived"""

    def __init__(self):
        self.data = b""
        self.first_write_at: Optional[float] = None

    def write(self, data: bytes) -> int:
        if self.first_write_at is None:
            self.first_write_at = time.monotonic()
        self.data += data
        return len(data)

    def flush(self) -> None:
        pass


