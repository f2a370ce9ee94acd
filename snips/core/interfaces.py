"""
Core interfaces for dependency injection
"""
from abc import ABC, abstractmethod

from .config import ConnectionConfig


class Session(ABC):
    """An authenticated SSH session able to run one command at a time"""

    @abstractmethod
    async def exec(self, command_line: str, input_bytes: bytes) -> bytes:
        """
        Run a command, feeding input_bytes as its stdin.

        Returns:
            Every stdout chunk received before the channel closed, in arrival order

        Raises:
            ChannelError: If the remote refuses or breaks the channel
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the session. Safe to call more than once."""
        pass

    async def __aenter__(self) -> "Session":
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.close()


class SessionTransport(ABC):
    """SSH session factory interface"""

    @abstractmethod
    async def connect(self, config: ConnectionConfig) -> Session:
        """
        Open an authenticated session.

        Raises:
            ConnectionError: If authentication fails or the remote hangs up first
        """
        pass
