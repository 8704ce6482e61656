import socket
from unittest.mock import MagicMock, patch

import paramiko
import pytest

from cecssh.adapters.cli.connection import RemoteConnectionFactory
from cecssh.core.client import ParamikoShellChannel, RemoteClient
from cecssh.core.exceptions import (
    AuthenticationError,
    ChannelError,
    ConnectionError,
    NetworkError,
    ShellOpenError,
)
from cecssh.domain.session.models import ConnectionConfig


@pytest.fixture
def ssh_client():
    with patch("cecssh.core.client.paramiko.SSHClient") as ssh_cls:
        yield ssh_cls.return_value


def test_connect_uses_password_and_timeout(ssh_client):
    client = RemoteClient(host="pi", user="u", password="p", port=2222)

    client.connect(timeout=5.0)

    ssh_client.connect.assert_called_once_with(
        hostname="pi",
        port=2222,
        username="u",
        password="p",
        timeout=5.0,
        banner_timeout=5.0,
        auth_timeout=5.0,
    )


def test_connect_unbounded_by_default(ssh_client):
    RemoteClient(host="pi", user="u", password="p").connect()

    assert ssh_client.connect.call_args.kwargs["timeout"] is None


def test_authentication_failure_mapped(ssh_client):
    ssh_client.connect.side_effect = paramiko.AuthenticationException("bad password")

    with pytest.raises(AuthenticationError) as exc_info:
        RemoteClient(host="pi", user="u", password="p").connect()

    assert isinstance(exc_info.value, ConnectionError)
    assert exc_info.value.exit_code == 6


@pytest.mark.parametrize("error", [
    socket.timeout("timed out"),
    socket.gaierror("no such host"),
    ConnectionRefusedError("refused"),
    paramiko.SSHException("protocol banner"),
])
def test_network_failures_mapped(ssh_client, error):
    ssh_client.connect.side_effect = error

    with pytest.raises(NetworkError):
        RemoteClient(host="pi", user="u", password="p").connect()


def test_open_shell_requests_pty(ssh_client):
    transport = ssh_client.get_transport.return_value
    transport.is_active.return_value = True
    channel = transport.open_session.return_value
    client = RemoteClient(host="pi", user="u", password="p", timeout=3.0, read_timeout=0.5)

    shell = client.open_shell("xterm", 80, 24)

    transport.open_session.assert_called_once_with(timeout=3.0)
    channel.get_pty.assert_called_once_with(
        term="xterm", width=80, height=24, width_pixels=800, height_pixels=600,
    )
    channel.invoke_shell.assert_called_once_with()
    channel.settimeout.assert_called_once_with(0.5)
    assert isinstance(shell, ParamikoShellChannel)


def test_open_shell_without_transport(ssh_client):
    ssh_client.get_transport.return_value = None

    with pytest.raises(ShellOpenError):
        RemoteClient(host="pi", user="u", password="p").open_shell("xterm", 80, 24)


def test_open_shell_channel_failure(ssh_client):
    transport = ssh_client.get_transport.return_value
    transport.is_active.return_value = True
    transport.open_session.side_effect = paramiko.ChannelException(2, "Connect failed")

    with pytest.raises(ShellOpenError):
        RemoteClient(host="pi", user="u", password="p").open_shell("xterm", 80, 24)


def test_is_connected_and_disconnect(ssh_client):
    client = RemoteClient(host="pi", user="u", password="p")

    ssh_client.get_transport.return_value = None
    assert not client.is_connected()

    transport = MagicMock()
    transport.is_active.return_value = True
    ssh_client.get_transport.return_value = transport
    assert client.is_connected()

    client.disconnect()
    ssh_client.close.assert_called_once_with()


def test_repr_hides_password(ssh_client):
    assert "secret" not in repr(RemoteClient(host="pi", user="u", password="secret"))


def test_shell_channel_read_write():
    raw = MagicMock()
    raw.recv.return_value = b"data"
    raw.recv_ready.return_value = True
    raw.closed = False
    channel = ParamikoShellChannel(raw)

    assert channel.data_available()
    assert channel.read(16) == b"data"
    raw.recv.assert_called_once_with(16)
    channel.write(b"\x03")
    raw.sendall.assert_called_once_with(b"\x03")
    assert channel.is_open()


def test_shell_channel_timeout_propagates():
    raw = MagicMock()
    raw.recv.side_effect = socket.timeout()

    with pytest.raises(TimeoutError):
        ParamikoShellChannel(raw).read(16)


def test_shell_channel_ssh_errors_wrapped():
    raw = MagicMock()
    raw.recv.side_effect = paramiko.SSHException("boom")
    raw.sendall.side_effect = paramiko.SSHException("boom")
    channel = ParamikoShellChannel(raw)

    with pytest.raises(ChannelError):
        channel.read(16)
    with pytest.raises(ChannelError):
        channel.write(b"x")


def test_factory_builds_client_from_config(ssh_client):
    config = ConnectionConfig(host="h", username="u", password="p", port=2200)

    client = RemoteConnectionFactory(timeout=7.0).create(config)

    assert isinstance(client, RemoteClient)
    assert (client.host, client.user, client.port, client.timeout) == ("h", "u", 2200, 7.0)
    ssh_client.connect.assert_not_called()
