"""Error taxonomy of the client.

Every failure surfaced by an operation is a `WebStoreError` subclass, so
callers can branch on "invalid input", "network", "missing" and "malformed"
without inspecting messages.
"""

from __future__ import annotations

from typing import Sequence


class WebStoreError(Exception):
    """Base class for all client errors."""


class InvalidOptions(WebStoreError, ValueError):
    """Caller-supplied options violate a documented constraint.

    Raised before any network activity; never worth retrying.
    """

    def __init__(self, message: str, *, errors: Sequence[str] = ()) -> None:
        self.errors = list(errors)
        if self.errors:
            message = f"{message}: " + "; ".join(self.errors)
        super().__init__(message)


class NetworkError(WebStoreError):
    """Transport-level failure (connection, TLS, timeout, unexpected status)."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class NotFound(WebStoreError):
    """Upstream reports that the requested listing does not exist."""

    def __init__(self, resource: str, id: str | None = None) -> None:
        self.resource = resource
        self.id = id
        target = f" '{id}'" if id else ""
        super().__init__(f"{resource}{target} not found")


class ParseError(WebStoreError):
    """Upstream payload does not have the expected shape."""

    def __init__(self, message: str, *, section: str, field: str | None = None) -> None:
        self.section = section
        self.field = field
        where = f"{section}.{field}" if field else section
        super().__init__(f"{where}: {message}")
