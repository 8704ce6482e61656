"""
Connection factory implementation
"""
from typing import Optional

from ...core.interfaces import ConnectionFactory
from ...core.client import RemoteClient
from ...domain.session.models import ConnectionConfig


class RemoteConnectionFactory(ConnectionFactory):
    """RemoteClient connection factory"""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    def create(self, config: ConnectionConfig) -> RemoteClient:
        """
        Create an unconnected SSH client.

        Args:
            config: Connection parameters

        Returns:
            RemoteClient; connect() is left to the orchestrator
        """
        return RemoteClient(
            host=config.host,
            user=config.username,
            password=config.password,
            port=config.port,
            timeout=self.timeout,
        )
