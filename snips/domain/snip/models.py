"""
Snip domain models
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, List, Union, TYPE_CHECKING

from ...core.config import ConnectionConfig
from ...core.constants import UPLOAD_VERB, PRIVATE_FLAG

if TYPE_CHECKING:
    from ...core.interfaces import SessionTransport


class Visibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


@dataclass(frozen=True)
class Size:
    """Size as reported by the service, e.g. 63 B"""
    value: int
    unit: str

    def __str__(self) -> str:
        return f"{self.value} {self.unit}"

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "unit": self.unit}


@dataclass
class UploadCommand:
    """Command tokens and the payload streamed as the channel's stdin"""
    tokens: List[str]
    payload: bytes

    @classmethod
    def build(cls, content: Union[str, bytes], private: bool = False) -> "UploadCommand":
        tokens = [UPLOAD_VERB]
        if private:
            tokens.append(PRIVATE_FLAG)
        payload = content.encode("utf-8") if isinstance(content, str) else bytes(content)
        return cls(tokens=tokens, payload=payload)

    @property
    def command_line(self) -> str:
        return " ".join(token for token in self.tokens if token)


@dataclass(frozen=True)
class ParsedFields:
    """Fields found in a sanitized transcript; any of them may be missing"""
    id: Optional[str] = None
    size: Optional[Size] = None
    type: Optional[str] = None
    visibility: Optional[str] = None
    remote_shell_command: Optional[str] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class Snip:
    """A validated upload"""
    id: str
    size: Size
    type: str
    visibility: Visibility
    remote_shell_command: Optional[str]
    url: Optional[str]
    config: ConnectionConfig = field(repr=False, compare=False)
    transport: Optional["SessionTransport"] = field(default=None, repr=False, compare=False)

    @property
    def is_private(self) -> bool:
        return self.visibility is Visibility.PRIVATE

    async def sign(self) -> str:
        """Request a 5 minute signed link, authenticated as this snip"""
        from .signing import sign_snip

        return await sign_snip(self, self.transport)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "id": self.id,
            "size": self.size.to_dict(),
            "type": self.type,
            "visibility": self.visibility.value,
            "remote_shell_command": self.remote_shell_command,
            "url": self.url,
        }
