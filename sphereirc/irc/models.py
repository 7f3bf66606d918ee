"""Shared IRC data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto

from .events import IRCEvent


class ConnectionState(Enum):
    DISCONNECTED = auto()
    CONNECTING = auto()
    REGISTERING = auto()
    JOINED = auto()


@dataclass(slots=True)
class ParsedMessage:
    """One protocol line split into its fields.

    ``prefix`` is the source without its leading colon (``nick!user@host`` or
    a server name), ``params`` the middle arguments and ``trailing`` the text
    after the first `` :`` separator, if any.
    """

    raw: str
    prefix: str | None
    command: str
    params: list[str] = field(default_factory=list)
    trailing: str | None = None

    def param(self, index: int) -> str | None:
        if 0 <= index < len(self.params):
            return self.params[index]
        return None


@dataclass(slots=True)
class Event:
    """Classified event handed to registered handlers.

    Attributes:
        kind: Which IRC event this is.
        message: The parsed line the event came from.
        sender: Nick of the originating user, when the source is a user.
        channel: Channel the event concerns, None for server or private traffic.
        target: Secondary subject (kicked nick, MODE target, message target).
        text: Payload text (message body, topic, MOTD line, kick reason, mode).
        action: True when ``text`` came from a CTCP ACTION.
        ctcp_request: CTCP request keyword intercepted by the client (VERSION).
        names: Nicks listed by a names reply.
        set_by: Who set the topic (topic timestamp reply).
        set_at: When the topic was set (topic timestamp reply).
    """

    kind: IRCEvent
    message: ParsedMessage
    sender: str | None = None
    channel: str | None = None
    target: str | None = None
    text: str = ""
    action: bool = False
    ctcp_request: str | None = None
    names: list[str] = field(default_factory=list)
    set_by: str | None = None
    set_at: datetime | None = None

    @property
    def is_private(self) -> bool:
        return self.kind in (IRCEvent.PRIVMSG, IRCEvent.NOTICE) and self.channel is None

    def __str__(self) -> str:
        return self.text
