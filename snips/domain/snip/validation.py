"""
Turn parsed transcript fields into a Snip or a descriptive failure
"""
from typing import Optional, TYPE_CHECKING

from ...core.config import ConnectionConfig
from ...core.exceptions import ValidationError, InvariantError
from .models import ParsedFields, Snip, Visibility

if TYPE_CHECKING:
    from ...core.interfaces import SessionTransport


def _require_visibility(value: Optional[str]) -> Visibility:
    if value is None:
        raise ValidationError("visibility", "Response didn't contain a visibility")
    try:
        return Visibility(value)
    except ValueError:
        raise ValidationError(
            "visibility",
            f"Response contained an unknown visibility '{value}', expected 'public' or 'private'",
        ) from None


def validate_fields(
    fields: ParsedFields,
    config: ConnectionConfig,
    transport: Optional["SessionTransport"] = None,
) -> Snip:
    """
    Check fields in order and build the Snip.

    Raises:
        ValidationError: For the first of id, size, type, visibility that is missing
        InvariantError: If the URL does not agree with the visibility
    """
    if fields.id is None:
        raise ValidationError("id", "Response didn't contain a valid id")
    if fields.size is None:
        raise ValidationError("size", "Response didn't contain a size and unit")
    if fields.type is None:
        raise ValidationError("type", "Response didn't contain a content type")
    visibility = _require_visibility(fields.visibility)

    url_present = fields.url is not None
    if url_present != (visibility is Visibility.PUBLIC):
        raise InvariantError(visibility.value, url_present)

    return Snip(
        id=fields.id,
        size=fields.size,
        type=fields.type,
        visibility=visibility,
        remote_shell_command=fields.remote_shell_command,
        url=fields.url,
        config=config,
        transport=transport,
    )
