"""Exceptions raised by the auditable item graph client."""

from typing import Any


class AigClientError(Exception):
    """Base exception for all aig-client errors."""

    def __init__(self, source: str, message: str):
        super().__init__(message)
        self.source = source


class GuardError(AigClientError, ValueError):
    """Raised when a required argument is missing or has the wrong type.

    Always raised before any network activity.
    """

    def __init__(self, source: str, name: str, value: Any = None, message: str | None = None):
        super().__init__(source, message or f"{source}: '{name}' must be a non-empty string")
        self.name = name
        self.value = value


class NotSupportedError(AigClientError):
    """Raised for operations this client cannot perform."""

    def __init__(self, source: str, operation: str, message: str | None = None):
        super().__init__(source, message or f"{source}: '{operation}' is not supported")
        self.operation = operation


class RestClientError(AigClientError):
    """The remote service answered with an error status."""

    def __init__(
        self,
        source: str,
        message: str,
        status_code: int | None = None,
        details: Any = None,
    ):
        super().__init__(source, message)
        self.status_code = status_code
        self.details = details


class NotFoundError(RestClientError):
    """The requested resource does not exist."""
