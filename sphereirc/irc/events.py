"""IRC event identifiers.

Numeric events arrive as ``:<server> ### <client> ...``; verb events as
``:<nick>!<user>@<host> VERB ...``. See https://defs.ircdocs.horse/defs/numerics.html
and RFC 1459 for the full catalogue; only the subset below is recognised.
"""

from __future__ import annotations

from enum import Enum


class IRCEvent(Enum):
    UNKNOWN = ""

    SERVER_WELCOME = "001"
    YOUR_HOST = "002"
    SERVER_CREATED = "003"
    SERVER_VERSION = "004"
    SERVER_BOUNCE = "005"
    YOUR_ID = "042"
    SERVER_NUM_USERS = "251"
    SERVER_NUM_OPS = "252"
    SERVER_NUM_UNKNOWN_CONNS = "253"
    SERVER_NUM_CHANNELS = "254"
    SERVER_NUM_CLIENTS = "255"
    SERVER_LOCAL_USERS = "265"
    SERVER_GLOBAL_USERS = "266"
    TOPIC = "332"
    TOPIC_TIMESTAMP = "333"
    NAMES_REPLY = "353"
    END_OF_NAMES = "366"
    MOTD = "372"
    MOTD_START = "375"
    MOTD_END = "376"
    YOUR_DISPLAYED_HOST = "396"

    JOIN = "JOIN"
    KICK = "KICK"
    MODE = "MODE"
    NOTICE = "NOTICE"
    PRIVMSG = "PRIVMSG"
    PART = "PART"

    @classmethod
    def from_key(cls, key: str) -> IRCEvent:
        """Map a numeric code or verb to its event, UNKNOWN when unrecognised."""
        if not key:
            return cls.UNKNOWN
        try:
            return cls(key.upper())
        except ValueError:
            return cls.UNKNOWN


# 001-005, 251-255 and 375-376 mean registration went through
WELCOME_EVENTS = frozenset(
    {
        IRCEvent.SERVER_WELCOME,
        IRCEvent.YOUR_HOST,
        IRCEvent.SERVER_CREATED,
        IRCEvent.SERVER_VERSION,
        IRCEvent.SERVER_BOUNCE,
        IRCEvent.SERVER_NUM_USERS,
        IRCEvent.SERVER_NUM_OPS,
        IRCEvent.SERVER_NUM_UNKNOWN_CONNS,
        IRCEvent.SERVER_NUM_CHANNELS,
        IRCEvent.SERVER_NUM_CLIENTS,
        IRCEvent.MOTD_START,
        IRCEvent.MOTD_END,
    }
)

# Recognised but carry nothing the client acts on
INERT_EVENTS = frozenset(
    {
        IRCEvent.YOUR_ID,
        IRCEvent.SERVER_LOCAL_USERS,
        IRCEvent.SERVER_GLOBAL_USERS,
        IRCEvent.END_OF_NAMES,
        IRCEvent.YOUR_DISPLAYED_HOST,
    }
)

MESSAGE_EVENTS = frozenset({IRCEvent.NOTICE, IRCEvent.PRIVMSG})

__all__ = ["IRCEvent", "WELCOME_EVENTS", "INERT_EVENTS", "MESSAGE_EVENTS"]
