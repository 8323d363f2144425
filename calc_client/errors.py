from __future__ import annotations


class ClientError(Exception):
    """Base class for every failure a flow turns into a notification."""


class TransportError(ClientError):
    """The HTTP call itself could not complete (DNS, refused, aborted...)."""


class RequestFailed(ClientError):
    """The service answered with a status outside 200-299."""

    def __init__(self, status: int):
        self.status = status
        super().__init__(f"Error: {status}")


class DecodeError(ClientError):
    """Response body was not JSON, or did not have the expected shape."""


class ValidationError(ClientError):
    """Client-side precondition failed before any network call."""
