"""Tests for the asyncssh transport, with asyncssh's network side stubbed out."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List

import asyncssh
import pytest

from snips.core.config import ConnectionConfig
from snips.core.exceptions import ChannelError, ConfigError, ConnectionError
from snips.infrastructure.ssh.session import (
    AsyncSSHSession,
    AsyncSSHTransport,
    OutputCollector,
)

STDERR = 1  # asyncssh.EXTENDED_DATA_STDERR


class FakeChannel:
    def __init__(self) -> None:
        self.written: List[bytes] = []
        self.eof = False

    def write(self, data: bytes) -> None:
        assert not self.eof, "write after EOF"
        self.written.append(data)

    def write_eof(self) -> None:
        self.eof = True


class FakeConnection:
    """Delivers chunks to the session on the next loop iterations, then closes."""

    def __init__(self, chunks: List[bytes], refuse: bool = False, error: Exception = None) -> None:
        self.chunks = chunks
        self.refuse = refuse
        self.error = error
        self.channel = FakeChannel()
        self.command = None
        self.closed = False

    async def create_session(self, factory, command, encoding="utf-8"):
        if self.refuse:
            raise asyncssh.ChannelOpenError(2, "Connection refused")
        assert encoding is None
        self.command = command
        collector = factory()
        loop = asyncio.get_running_loop()

        def deliver(index: int = 0) -> None:
            if index < len(self.chunks):
                collector.data_received(self.chunks[index], None)
                loop.call_soon(deliver, index + 1)
            else:
                collector.connection_lost(self.error)

        loop.call_soon(deliver)
        return self.channel, collector

    def close(self) -> None:
        self.closed = True

    async def wait_closed(self) -> None:
        return None


class RecordingConnector:
    def __init__(self, result: Any) -> None:
        self.result = result
        self.kwargs: Dict[str, Any] = {}
        self.host = None

    async def __call__(self, host: str, **kwargs: Any) -> Any:
        self.host = host
        self.kwargs = kwargs
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


@pytest.mark.asyncio
async def test_collector_joins_chunks_in_order() -> None:
    """Stdout chunks are concatenated in arrival order once closed."""

    collector = OutputCollector()
    collector.data_received(b"id: ", None)
    collector.data_received(b"oops", STDERR)
    collector.data_received(b"AAAAAAAAAA", None)
    collector.connection_lost(None)

    assert await collector.wait_closed() == b"id: AAAAAAAAAA"


@pytest.mark.asyncio
async def test_collector_reports_broken_channel() -> None:
    """A channel lost with an error fails the wait."""

    collector = OutputCollector()
    collector.connection_lost(asyncssh.ConnectionLost("reset"))
    collector.connection_lost(None)

    with pytest.raises(ChannelError, match="reset"):
        await collector.wait_closed()


@pytest.mark.asyncio
async def test_exec_streams_input_and_collects_output() -> None:
    """Input is written then EOF is sent; output is gathered until close."""

    conn = FakeConnection([b"chunk-1 ", b"chunk-2 ", b"chunk-3"])
    session = AsyncSSHSession(conn)

    output = await session.exec("-private", b"payload")

    assert output == b"chunk-1 chunk-2 chunk-3"
    assert conn.command == "-private"
    assert conn.channel.written == [b"payload"]
    assert conn.channel.eof


@pytest.mark.asyncio
async def test_exec_with_empty_input_only_sends_eof() -> None:
    """Nothing is written for an empty payload."""

    conn = FakeConnection([b"signed"])

    assert await AsyncSSHSession(conn).exec("sign -ttl 5m", b"") == b"signed"
    assert conn.channel.written == []
    assert conn.channel.eof


@pytest.mark.asyncio
async def test_exec_channel_refused() -> None:
    """A refused channel surfaces as ChannelError."""

    session = AsyncSSHSession(FakeConnection([], refuse=True))

    with pytest.raises(ChannelError, match="refused"):
        await session.exec("", b"x")


@pytest.mark.asyncio
async def test_exec_times_out() -> None:
    """A channel that never closes fails once the deadline passes."""

    class SilentConnection(FakeConnection):
        async def create_session(self, factory, command, encoding="utf-8"):
            return self.channel, factory()

    session = AsyncSSHSession(SilentConnection([]), timeout=0.05)

    with pytest.raises(ChannelError, match="No response"):
        await session.exec("", b"x")


@pytest.mark.asyncio
async def test_close_is_idempotent() -> None:
    """Closing twice closes the connection once."""

    conn = FakeConnection([])
    session = AsyncSSHSession(conn)

    async with session:
        pass
    await session.close()

    assert conn.closed


@pytest.mark.asyncio
async def test_connect_passes_identity(rsa_pem: str) -> None:
    """Only the configured key is offered; host keys are not checked."""

    conn = FakeConnection([])
    connector = RecordingConnector(conn)
    config = ConnectionConfig(host="paste.example", port=2222, username="ubuntu", private_key=rsa_pem)

    session = await AsyncSSHTransport(connector=connector).connect(config)

    assert isinstance(session, AsyncSSHSession)
    assert connector.host == "paste.example"
    assert connector.kwargs["port"] == 2222
    assert connector.kwargs["username"] == "ubuntu"
    assert connector.kwargs["known_hosts"] is None
    assert connector.kwargs["agent_path"] is None
    assert len(connector.kwargs["client_keys"]) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "message"),
    [
        (asyncssh.PermissionDenied("bad key"), "Authentication failed"),
        (asyncssh.ConnectionLost("gone"), "closed unexpectedly"),
        (asyncssh.DisconnectError(11, "bye"), "ended unexpectedly"),
        (OSError("Network is unreachable"), "Failed to connect"),
    ],
)
async def test_connect_errors_are_mapped(rsa_pem: str, error: Exception, message: str) -> None:
    """Every way the handshake can end early becomes a ConnectionError."""

    transport = AsyncSSHTransport(connector=RecordingConnector(error))

    with pytest.raises(ConnectionError, match=message) as excinfo:
        await transport.connect(ConnectionConfig(private_key=rsa_pem))

    assert excinfo.value.__cause__ is error


@pytest.mark.asyncio
async def test_connect_times_out(rsa_pem: str) -> None:
    """An unresponsive host fails once the deadline passes."""

    async def hang(host: str, **kwargs: Any) -> None:
        await asyncio.Event().wait()

    transport = AsyncSSHTransport(connector=hang)

    with pytest.raises(ConnectionError, match="Timed out"):
        await transport.connect(ConnectionConfig(private_key=rsa_pem, timeout=0.05))


@pytest.mark.asyncio
async def test_connect_requires_key() -> None:
    """A config without key material cannot open a session."""

    with pytest.raises(ConfigError):
        await AsyncSSHTransport(connector=RecordingConnector(None)).connect(ConnectionConfig())


@pytest.mark.asyncio
async def test_connect_rejects_garbage_key() -> None:
    """Unparseable key text is a configuration error."""

    with pytest.raises(ConfigError, match="import"):
        await AsyncSSHTransport(connector=RecordingConnector(None)).connect(
            ConnectionConfig(private_key="not a key")
        )
