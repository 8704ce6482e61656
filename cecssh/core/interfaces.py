"""
Core interfaces for dependency injection
"""
from abc import ABC, abstractmethod
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.session.models import ConnectionConfig


class ShellChannel(ABC):
    """Interactive pseudo-terminal channel"""

    @abstractmethod
    def data_available(self) -> bool:
        """Check whether bytes can be read without blocking"""
        pass

    @abstractmethod
    def read(self, size: int) -> bytes:
        """
        Read up to size bytes.

        Returns b"" at end of stream. Raises TimeoutError when nothing
        arrived within the channel's read timeout.
        """
        pass

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Write all of data to the channel"""
        pass

    @abstractmethod
    def is_open(self) -> bool:
        """Check if the channel can still be written to"""
        pass


class SshSession(ABC):
    """SSH transport capability used by the session orchestrator"""

    @abstractmethod
    def connect(self, timeout: Optional[float] = None) -> None:
        """Connect and authenticate; raises ConnectionError on failure"""
        pass

    @abstractmethod
    def open_shell(self, term: str, cols: int, rows: int) -> ShellChannel:
        """Open an interactive shell on a pseudo-terminal"""
        pass

    @abstractmethod
    def is_connected(self) -> bool:
        """Check if the transport is still up"""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close the transport"""
        pass


class ConnectionFactory(ABC):
    """SSH session factory interface"""

    @abstractmethod
    def create(self, config: "ConnectionConfig") -> SshSession:
        """Create an unconnected session for config"""
        pass
