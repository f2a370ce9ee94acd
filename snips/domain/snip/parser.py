"""
Field extraction from a sanitized snips.sh transcript

Every extractor is independent of the others and of line order. They return
None when their field is not there.
"""
import re
from typing import Optional

from .models import ParsedFields, Size

ID_PATTERN = re.compile(r"\bid:\s*([A-Za-z0-9_-]{10})(?![A-Za-z0-9_-])")
SIZE_PATTERN = re.compile(r"\bsize:\s*(\d+)\s*([A-Z])\b")
TYPE_PATTERN = re.compile(r"\btype:\s*([a-z]+)")
VISIBILITY_PATTERN = re.compile(r"\bvisibility:\s*([a-z]+)")
SSH_COMMAND_PATTERN = re.compile(r"\bssh ([^\r\n]*)")
URL_PATTERN = re.compile(r"https?://\S+")


def _first_group(pattern: re.Pattern, text: str) -> Optional[str]:
    match = pattern.search(text)
    return match.group(1) if match else None


def extract_id(text: str) -> Optional[str]:
    return _first_group(ID_PATTERN, text)


def extract_size(text: str) -> Optional[Size]:
    match = SIZE_PATTERN.search(text)
    if not match:
        return None
    return Size(value=int(match.group(1)), unit=match.group(2))


def extract_type(text: str) -> Optional[str]:
    return _first_group(TYPE_PATTERN, text)


def extract_visibility(text: str) -> Optional[str]:
    return _first_group(VISIBILITY_PATTERN, text)


def extract_remote_shell_command(text: str) -> Optional[str]:
    command = _first_group(SSH_COMMAND_PATTERN, text)
    if command is None:
        return None
    return command.rstrip() or None


def extract_url(text: str) -> Optional[str]:
    """First http(s) URL in text, scanning left to right"""
    match = URL_PATTERN.search(text)
    return match.group(0) if match else None


def parse_transcript(text: str) -> ParsedFields:
    """Run every extractor over a sanitized transcript"""
    return ParsedFields(
        id=extract_id(text),
        size=extract_size(text),
        type=extract_type(text),
        visibility=extract_visibility(text),
        remote_shell_command=extract_remote_shell_command(text),
        url=extract_url(text),
    )
