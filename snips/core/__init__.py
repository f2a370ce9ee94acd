"""
Core infrastructure layer
"""
from .config import ConnectionConfig
from .constants import *
from .exceptions import *
from .logging import setup_logging, get_logger, get_stdout_console, get_stderr_console
from .interfaces import Session, SessionTransport
from .keys import (
    KeyProvisioner,
    ensure_identity,
    generate_private_key,
    load_private_key,
    write_private_key,
    public_key_line,
)
from .utils import load_ssh_config, decode_transcript

__all__ = [
    "ConnectionConfig",
    "setup_logging",
    "get_logger",
    "get_stdout_console",
    "get_stderr_console",
    "Session",
    "SessionTransport",
    "KeyProvisioner",
    "ensure_identity",
    "generate_private_key",
    "load_private_key",
    "write_private_key",
    "public_key_line",
    "load_ssh_config",
    "decode_transcript",
]
