class SessionError(Exception):
    """Base exception for session state machine errors."""


class SessionBusyError(SessionError):
    """Raised when a document is submitted while the session is not idle."""


class InvalidSessionStateError(SessionError):
    """Raised when an operation or snapshot violates the session state rules."""


class NegotiationInProgressError(SessionError):
    """Raised when a negotiation draft is requested while one is being drafted."""
