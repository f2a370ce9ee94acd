"""
Unified exception definitions
"""


class SnipsError(Exception):
    """Base exception class"""
    pass


class ConfigError(SnipsError):
    """Configuration error"""
    pass


class ConnectionError(SnipsError):
    """Session could not be established or ended before it was ready"""
    pass


class ChannelError(SnipsError):
    """Remote refused or broke the exec channel"""
    pass


class ValidationError(SnipsError):
    """A required transcript field is missing or malformed"""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class InvariantError(SnipsError):
    """Transcript fields contradict each other"""

    def __init__(self, visibility: str, url_present: bool) -> None:
        if url_present:
            message = f"Snip visibility is '{visibility}' but the response unexpectedly contained a URL"
        else:
            message = f"Snip visibility is '{visibility}' but the response did not contain a URL"
        super().__init__(message)
        self.visibility = visibility
        self.url_present = url_present
