"""
Signed link requests for existing snips
"""
from typing import Optional, TYPE_CHECKING

from ...core.config import ConnectionConfig
from ...core.constants import SIGN_VERB, SIGN_TTL, SIGN_USER_PREFIX
from ...core.interfaces import SessionTransport
from ...core.logging import get_logger
from ...core.utils import decode_transcript

if TYPE_CHECKING:
    from .models import Snip

logger = get_logger(__name__)

SIGN_COMMAND = f"{SIGN_VERB} -ttl {SIGN_TTL}"


async def sign_id(
    snip_id: str,
    config: ConnectionConfig,
    transport: Optional[SessionTransport] = None,
) -> str:
    """
    Ask the service for a time-limited link to a snip.

    The session authenticates as "f:<id>" with the key the snip was uploaded
    with. The reply is returned as received, escape codes included.

    Args:
        snip_id: Id of the snip to sign
        config: Connection config holding the owner's key
        transport: Session transport, asyncssh when omitted

    Returns:
        Raw transcript text
    """
    if transport is None:
        from ...infrastructure.ssh.session import AsyncSSHTransport

        transport = AsyncSSHTransport()

    config = config.with_username(f"{SIGN_USER_PREFIX}{snip_id}")
    logger.debug("Signing snip %s", snip_id)

    session = await transport.connect(config)
    try:
        raw = await session.exec(SIGN_COMMAND, b"")
    finally:
        await session.close()

    return decode_transcript(raw)


async def sign_snip(snip: "Snip", transport: Optional[SessionTransport] = None) -> str:
    """Signed link request for a Snip, under the identity it was uploaded with"""
    return await sign_id(snip.id, snip.config, transport)
