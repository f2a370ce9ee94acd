"""
snips - client for https://snips.sh

Uploads text over SSH and turns the service's styled reply into a Snip:
- Key provisioning (bring your own key or get a generated 4096-bit RSA key)
- Upload of public and private snips
- Signed, time-limited links to existing snips
"""

__version__ = "0.1.0"

# Export core components
from .core import (
    ConnectionConfig,
    Session,
    SessionTransport,
    KeyProvisioner,
    generate_private_key,
    load_private_key,
    write_private_key,
)
from .core.exceptions import (
    SnipsError,
    ConfigError,
    ConnectionError,
    ChannelError,
    ValidationError,
    InvariantError,
)

# Export domain models
from .domain.snip import (
    Snip,
    Size,
    Visibility,
    SnipsClient,
    strip_ansi,
    extract_url,
    parse_transcript,
)

from .infrastructure.ssh.session import AsyncSSHTransport

__all__ = [
    # Version
    "__version__",
    # Client
    "SnipsClient",
    "ConnectionConfig",
    "Session",
    "SessionTransport",
    "AsyncSSHTransport",
    # Keys
    "KeyProvisioner",
    "generate_private_key",
    "load_private_key",
    "write_private_key",
    # Models
    "Snip",
    "Size",
    "Visibility",
    # Transcript handling
    "strip_ansi",
    "extract_url",
    "parse_transcript",
    # Errors
    "SnipsError",
    "ConfigError",
    "ConnectionError",
    "ChannelError",
    "ValidationError",
    "InvariantError",
]
