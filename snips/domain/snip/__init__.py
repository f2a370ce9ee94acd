"""
Snip domain module
"""
from .models import Snip, Size, Visibility, ParsedFields, UploadCommand
from .parser import parse_transcript, extract_url
from .sanitizer import strip_ansi
from .service import SnipsClient
from .signing import sign_snip, sign_id
from .validation import validate_fields

__all__ = [
    "Snip",
    "Size",
    "Visibility",
    "ParsedFields",
    "UploadCommand",
    "parse_transcript",
    "extract_url",
    "strip_ansi",
    "SnipsClient",
    "sign_snip",
    "sign_id",
    "validate_fields",
]
