"""SphereIRC - a small multi-server IRC client core."""

from .client import IRCClient  # noqa: F401
from .config import ClientConfig, ServerConfig  # noqa: F401
from .errors import (  # noqa: F401
    ConfigurationError,
    ServerLookupError,
    SphereIRCError,
    UnknownEventError,
)
from .irc import ConnectionState, Event, IRCEvent, ServerConnection  # noqa: F401

__all__ = [
    "IRCClient",
    "ClientConfig",
    "ServerConfig",
    "ServerConnection",
    "ConnectionState",
    "Event",
    "IRCEvent",
    "SphereIRCError",
    "ConfigurationError",
    "ServerLookupError",
    "UnknownEventError",
]
