"""Failure taxonomy for HTTP execution.

All three failures are opaque above the session: the service forwards them
untouched and the view-model stores whichever one arrives in a Failed state.
"""

from typing import Optional


class NetworkError(Exception):
    """Base class for every failure the HTTP executor can surface."""

    description = "An unknown error has occurred"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.description)


class BadResponse(NetworkError):
    """Response status was anything other than exactly 200."""

    description = "Received a non-200 HTTP response"

    def __init__(self, status_code: Optional[int], url: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        super().__init__(f"{self.description}: status={status_code} url={url}")


class DecodeFailure(NetworkError):
    """Response body did not decode into the expected shape."""

    description = "Response payload could not be decoded"


class TransportFailure(NetworkError):
    """Connection, timeout or other transport-level fault from requests."""

    description = "The request could not be completed"
