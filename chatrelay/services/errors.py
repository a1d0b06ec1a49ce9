# chatrelay/services/errors.py
"""
Failure kinds raised by the registry and message log.

Each carries the HTTP status it maps to; the mapping to a response is done
by the exception handler installed in `chatrelay.main.create_app`.
"""


class ChatRelayError(Exception):
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(ChatRelayError):
    """Malformed or missing input, or a non-positive limit."""
    status_code = 422


class Conflict(ChatRelayError):
    """A participant with that name already exists."""
    status_code = 409


class NotFound(ChatRelayError):
    """Unknown participant on liveness refresh."""
    status_code = 404


class UnknownSender(ChatRelayError):
    """Message posted by a name that is not registered."""
    status_code = 422


class StoreError(ChatRelayError):
    """The database was unavailable or failed; detail is the driver's message."""
    status_code = 500
