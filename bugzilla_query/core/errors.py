"""
Errors
======
Exception hierarchy raised by the Bugzilla session.

    BugzillaQueryError
    ├── ConfigurationError     - bad host URL or header value (raised while building a session)
    ├── TransportError         - network, DNS, TLS, timeout or non-2xx HTTP status
    │   └── BugzillaApiError   - server answered with its {"error": true, ...} envelope
    ├── DeserializationError   - body is not JSON or does not match the response schema
    └── BugNotFoundError       - single-bug fetch returned zero bugs

Every failure propagates to the caller. Nothing here is retried.
"""
from typing import Optional


class BugzillaQueryError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(BugzillaQueryError):
    """The session cannot be built from the given host or credentials."""


class TransportError(BugzillaQueryError):
    """The HTTP exchange failed before a usable body was received."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class BugzillaApiError(TransportError):
    """
    Bugzilla reported a failure through its error envelope.

    Attributes
    ----------
    code : int
        Bugzilla's numeric error code (e.g. 101 for an invalid bug ID).
    message : str
        Human-readable message from the server.
    """

    def __init__(self, code: int, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(f"Bugzilla error {code}: {message}", status_code=status_code)
        self.code = code
        self.message = message


class DeserializationError(BugzillaQueryError):
    """The response body does not match the expected schema."""


class BugNotFoundError(BugzillaQueryError):
    """A single-bug fetch returned no bugs."""

    def __init__(self, bug_id: str) -> None:
        super().__init__(f"Bug {bug_id} not found")
        self.bug_id = bug_id
