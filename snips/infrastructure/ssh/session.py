"""
asyncssh-backed session transport
"""
import asyncio
from typing import Any, Callable, List, Optional

import asyncssh

from ...core.config import ConnectionConfig
from ...core.exceptions import ChannelError, ConfigError, ConnectionError
from ...core.interfaces import Session, SessionTransport
from ...core.logging import get_logger

logger = get_logger(__name__)


class OutputCollector(asyncssh.SSHClientSession):
    """
    Collects stdout chunks of one exec channel.

    data_received() appends in arrival order; the join happens only once
    connection_lost() reports the channel closed.
    """

    def __init__(self) -> None:
        self._chunks: List[bytes] = []
        self._closed: asyncio.Future = asyncio.get_running_loop().create_future()

    def data_received(self, data: bytes, datatype: Optional[int]) -> None:
        # stderr arrives with datatype EXTENDED_DATA_STDERR
        if datatype is None:
            self._chunks.append(data)

    def connection_lost(self, exc: Optional[Exception]) -> None:
        if self._closed.done():
            return
        if exc is None:
            self._closed.set_result(b"".join(self._chunks))
        else:
            error = ChannelError(f"Channel closed with an error: {exc}")
            error.__cause__ = exc
            self._closed.set_exception(error)

    async def wait_closed(self) -> bytes:
        return await self._closed


class AsyncSSHSession(Session):
    """One authenticated connection"""

    def __init__(self, conn: asyncssh.SSHClientConnection, timeout: Optional[float] = None) -> None:
        self._conn = conn
        self._timeout = timeout
        self._closed = False

    async def exec(self, command_line: str, input_bytes: bytes) -> bytes:
        try:
            return await asyncio.wait_for(self._exec(command_line, input_bytes), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            raise ChannelError(f"No response within {self._timeout}s for command {command_line!r}") from e

    async def _exec(self, command_line: str, input_bytes: bytes) -> bytes:
        logger.debug("Opening channel for command %r (%d bytes of input)", command_line, len(input_bytes))
        try:
            chan, collector = await self._conn.create_session(
                OutputCollector, command_line, encoding=None
            )
        except asyncssh.ChannelOpenError as e:
            raise ChannelError(f"Remote refused to open a channel: {e.reason}") from e

        if input_bytes:
            chan.write(input_bytes)
        chan.write_eof()

        output = await collector.wait_closed()
        logger.debug("Channel closed after %d bytes of output", len(output))
        return output

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._conn.close()
        await self._conn.wait_closed()


class AsyncSSHTransport(SessionTransport):
    """
    Opens sessions with asyncssh.

    Host keys are not verified; only the configured key is offered, never
    the local agent or ~/.ssh keys.
    """

    def __init__(self, connector: Callable[..., Any] = asyncssh.connect) -> None:
        self._connector = connector

    async def connect(self, config: ConnectionConfig) -> Session:
        if not config.private_key:
            raise ConfigError("No private key configured for the session")

        try:
            client_key = asyncssh.import_private_key(config.private_key)
        except asyncssh.KeyImportError as e:
            raise ConfigError(f"Failed to import private key: {e}") from e

        target = f"{config.username}@{config.host}:{config.port}"
        logger.debug("Connecting to %s", target)
        try:
            conn = await asyncio.wait_for(
                self._connector(
                    config.host,
                    port=config.port,
                    username=config.username,
                    client_keys=[client_key],
                    known_hosts=None,
                    agent_path=None,
                    config=None,
                ),
                timeout=config.timeout,
            )
        except asyncio.TimeoutError as e:
            raise ConnectionError(f"Timed out after {config.timeout}s connecting to {target}") from e
        except asyncssh.PermissionDenied as e:
            raise ConnectionError(f"Authentication failed for {target}: {e.reason}") from e
        except asyncssh.ConnectionLost as e:
            raise ConnectionError(f"Client closed unexpectedly ({target}): {e.reason}") from e
        except asyncssh.DisconnectError as e:
            raise ConnectionError(f"Client ended unexpectedly ({target}): {e.reason}") from e
        except OSError as e:
            raise ConnectionError(f"Failed to connect to {target}: {e}") from e

        logger.debug("Session ready: %s", target)
        return AsyncSSHSession(conn, timeout=config.timeout)
