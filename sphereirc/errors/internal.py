"""Centralized internal error hierarchy.

These exceptions give semantic categories to the failures the client can
report. Only configuration and lookup errors ever reach a caller; transport
failures are absorbed by the connection that hit them and malformed protocol
lines are dropped without raising at all.

Classes:
  SphereIRCError       – Base for all client errors.
  ConfigurationError   – Invalid or missing configuration (fatal at startup).
  ServerLookupError    – No connection matches the requested hostname.
  UnknownEventError    – Handler registered for an unknown event key.
  NetworkError         – Socket level failures on one connection.
"""

from __future__ import annotations

from collections.abc import Mapping


class SphereIRCError(Exception):
    """Base class for all client errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class ConfigurationError(SphereIRCError, ValueError):
    """Raised when the client configuration cannot be used.

    Covers a missing or empty nick, username or password on the top-level
    configuration, an empty hostname on a server entry, and unreadable
    configuration files. No partial client is ever built.
    """


class ServerLookupError(SphereIRCError, LookupError):
    """Raised when no configured connection has the requested hostname."""

    def __init__(self, hostname: str) -> None:
        super().__init__(
            f"{hostname} is not a registered IRC server.", data={"hostname": hostname}
        )
        self.hostname = hostname


class UnknownEventError(SphereIRCError, ValueError):
    """Raised when a handler is registered for an unrecognized event key."""


class NetworkError(SphereIRCError):
    """Socket connect, read or write failure on a single connection."""


__all__ = [
    "SphereIRCError",
    "ConfigurationError",
    "ServerLookupError",
    "UnknownEventError",
    "NetworkError",
]
