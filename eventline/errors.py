"""
Exception types raised by events and their argument containers.

Each error also derives from the matching builtin exception so callers can
catch either ``IndexError``/``AttributeError``/``TypeError`` or the package
specific type.
"""


class EventlineError(Exception):
    """Base class for every error raised by eventline."""


class ListenerIndexError(EventlineError, IndexError):
    """Raised when reading a listener slot that does not exist."""


class ArgumentIndexError(EventlineError, IndexError):
    """Raised when reading a positional argument that does not exist."""


class MemberAccessError(EventlineError, AttributeError):
    """Raised when reading or writing a member an event does not define."""


class InvalidListenerError(EventlineError, TypeError):
    """Raised when a non-callable value is registered as a listener."""
