"""Typed errors raised by the task API client."""

from __future__ import annotations


class TaskClientError(Exception):
    """Base class for every error carrying a human-readable message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingSessionError(TaskClientError):
    """A task operation was attempted without a stored token.

    No request is sent and the page shows nothing for it.
    """

    def __init__(self, message: str = "Not logged in."):
        super().__init__(message)


class ApiError(TaskClientError):
    """
    A request failed at the transport level or with a non-success status.

    Attributes:
        message: Generic per-operation text, or the server's own ``error``
            field for the auth endpoints.
        status_code: HTTP status of the response, ``None`` for transport
            failures.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AuthenticationRejectedError(ApiError):
    """The remote service answered 401 or 403; the session must be dropped."""
