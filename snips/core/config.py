"""
Connection configuration shared by every session a client opens
"""
from dataclasses import dataclass, replace
from typing import Optional, Dict, Any

from .constants import DEFAULT_SSH_HOST, DEFAULT_SSH_PORT, DEFAULT_SSH_USER


@dataclass(frozen=True)
class ConnectionConfig:
    host: str = DEFAULT_SSH_HOST
    port: int = DEFAULT_SSH_PORT
    username: str = DEFAULT_SSH_USER
    private_key: Optional[str] = None  # PEM text
    timeout: Optional[float] = None  # seconds, None waits forever

    def with_key(self, private_key: str) -> "ConnectionConfig":
        return replace(self, private_key=private_key)

    def with_username(self, username: str) -> "ConnectionConfig":
        return replace(self, username=username)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, without key material"""
        return {
            "host": self.host,
            "port": self.port,
            "username": self.username,
            "has_private_key": self.private_key is not None,
            "timeout": self.timeout,
        }

    def __repr__(self) -> str:
        return (
            f"ConnectionConfig(host={self.host!r}, port={self.port!r}, "
            f"username={self.username!r}, private_key={'<set>' if self.private_key else None}, "
            f"timeout={self.timeout!r})"
        )
