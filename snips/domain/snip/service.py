"""
Upload orchestration
"""
from typing import Optional, Union

from ...core.config import ConnectionConfig
from ...core.interfaces import SessionTransport
from ...core.keys import KeyProvisioner
from ...core.logging import get_logger
from ...core.utils import decode_transcript
from .models import Snip, UploadCommand
from .parser import parse_transcript
from .sanitizer import strip_ansi
from .signing import sign_snip
from .validation import validate_fields

logger = get_logger(__name__)


class SnipsClient:
    """
    Client for uploading to https://snips.sh or a self-hosted instance.

    If no private key is configured one is generated on first use. The key is
    never written anywhere: without keeping it (see setup()) the uploaded
    snips cannot be managed later.
    """

    def __init__(
        self,
        config: Optional[ConnectionConfig] = None,
        transport: Optional[SessionTransport] = None,
    ) -> None:
        """
        Args:
            config: Connection settings, snips.sh defaults when omitted
            transport: Session transport, asyncssh when omitted
        """
        if transport is None:
            from ...infrastructure.ssh.session import AsyncSSHTransport

            transport = AsyncSSHTransport()

        self._keys = KeyProvisioner(config or ConnectionConfig())
        self._transport = transport

    @property
    def config(self) -> ConnectionConfig:
        return self._keys.config

    async def setup(self) -> ConnectionConfig:
        """
        Generate any missing credentials now rather than on first upload.

        Returns:
            The connection config with its private key filled in
        """
        return await self._keys.ensure()

    async def upload(self, content: Union[str, bytes], private: bool = False) -> Snip:
        """
        Upload a snip.

        Args:
            content: Body of the snip, str is sent as UTF-8
            private: Create a private snip (no public URL)

        Returns:
            The validated Snip

        Raises:
            ConnectionError: Session could not be established
            ChannelError: Command channel refused or broken
            ValidationError: Reply lacked id, size, type or visibility
            InvariantError: Reply's URL contradicts its visibility
        """
        config = await self.setup()
        command = UploadCommand.build(content, private=private)

        session = await self._transport.connect(config)
        try:
            raw = await session.exec(command.command_line, command.payload)
        finally:
            await session.close()

        transcript = strip_ansi(decode_transcript(raw))
        fields = parse_transcript(transcript)
        logger.debug("Parsed upload response: %s", fields)

        snip = validate_fields(fields, config, self._transport)
        logger.info("Uploaded %s snip %s (%s)", snip.visibility.value, snip.id, snip.size)
        return snip

    async def sign(self, snip: Snip) -> str:
        """Request a 5 minute signed link for snip; returns the raw reply"""
        return await sign_snip(snip, self._transport)
