"""IRC subsystem package.

Contains line framing, parsing, membership tracking, handler dispatch,
transport and the per-server connection state machine.
"""

from .codec import LineCodec  # noqa: F401
from .connection import ServerConnection  # noqa: F401
from .dispatcher import (  # noqa: F401
    WILDCARD,
    EventDispatcher,
    HandlerRegistration,
    resolve_event_kind,
)
from .events import INERT_EVENTS, WELCOME_EVENTS, IRCEvent  # noqa: F401
from .membership import ChannelMembership, validate_channel  # noqa: F401
from .models import ConnectionState, Event, ParsedMessage  # noqa: F401
from .parser import classify, parse_irc_message, split_user_prefix  # noqa: F401
from .transport import StreamTransport, Transport  # noqa: F401

__all__ = [
    "ChannelMembership",
    "ConnectionState",
    "Event",
    "EventDispatcher",
    "HandlerRegistration",
    "INERT_EVENTS",
    "IRCEvent",
    "LineCodec",
    "ParsedMessage",
    "ServerConnection",
    "StreamTransport",
    "Transport",
    "WELCOME_EVENTS",
    "WILDCARD",
    "classify",
    "parse_irc_message",
    "resolve_event_kind",
    "split_user_prefix",
    "validate_channel",
]
