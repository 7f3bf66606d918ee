"""IRC message parsing and classification."""

from __future__ import annotations

import re
from datetime import UTC, datetime

from .events import INERT_EVENTS, MESSAGE_EVENTS, WELCOME_EVENTS, IRCEvent
from .models import Event, ParsedMessage

USER_PREFIX_RE = re.compile(r"^:?(.+?)!(.+)$")
ACTION_RE = re.compile(r"\x01ACTION (.+)\x01")
CTCP_VERSION_REQUEST = "\x01VERSION\x01"


def parse_irc_message(raw_line: str) -> ParsedMessage | None:
    """Split ``[:prefix] <command> <params...> [:trailing]`` into fields.

    Returns None for an empty line. Never raises: a line with a prefix and
    nothing else yields a message with an empty command.
    """
    line = raw_line.strip()
    if not line:
        return None

    prefix: str | None = None
    rest = line
    if rest.startswith(":"):
        if " " not in rest:
            return ParsedMessage(raw=line, prefix=rest[1:], command="")
        prefix_token, rest = rest.split(" ", 1)
        prefix = prefix_token[1:]

    trailing: str | None = None
    if rest.startswith(":"):
        # no command at all, only trailing text
        return ParsedMessage(raw=line, prefix=prefix, command="", trailing=rest[1:])
    head, sep, tail = rest.partition(" :")
    if sep:
        trailing = tail

    tokens = [t for t in head.split(" ") if t]
    if not tokens:
        return ParsedMessage(raw=line, prefix=prefix, command="", trailing=trailing)
    return ParsedMessage(
        raw=line,
        prefix=prefix,
        command=tokens[0],
        params=tokens[1:],
        trailing=trailing,
    )


def split_user_prefix(prefix: str | None) -> tuple[str, str] | None:
    """Return ``(nick, user@host)`` for a user prefix, None for anything else."""
    if not prefix:
        return None
    match = USER_PREFIX_RE.match(prefix)
    if not match:
        return None
    return match.group(1), match.group(2)


def _source_nick(prefix: str | None) -> str | None:
    if not prefix:
        return None
    return prefix.split("!", 1)[0]


def _parse_epoch(value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        return datetime.fromtimestamp(int(value), tz=UTC)
    except (ValueError, OverflowError, OSError):
        return None


def _message_body(message: ParsedMessage) -> str:
    if message.trailing is not None:
        return message.trailing
    return " ".join(message.params[1:])


def classify(message: ParsedMessage, own_nick: str) -> Event | None:  # noqa: C901
    """Turn a parsed line into an Event, or None when it must be dropped.

    Dropped lines are NOTICE/PRIVMSG frames whose source is not a
    ``nick!user`` prefix and messages echoed back from our own nick.
    """
    kind = IRCEvent.from_key(message.command)

    if kind in WELCOME_EVENTS:
        return Event(kind=kind, message=message, text=message.trailing or "")

    if kind is IRCEvent.END_OF_NAMES:
        return Event(kind=kind, message=message, channel=message.param(1))

    if kind in INERT_EVENTS:
        return Event(kind=kind, message=message, text=message.trailing or "")

    if kind is IRCEvent.TOPIC:
        return Event(
            kind=kind,
            message=message,
            channel=message.param(1),
            text=message.trailing or "",
        )

    if kind is IRCEvent.TOPIC_TIMESTAMP:
        return Event(
            kind=kind,
            message=message,
            channel=message.param(1),
            set_by=message.param(2),
            set_at=_parse_epoch(message.param(3)),
        )

    if kind is IRCEvent.NAMES_REPLY:
        names = (message.trailing or "").split()
        return Event(kind=kind, message=message, channel=message.param(2), names=names)

    if kind is IRCEvent.MOTD:
        return Event(kind=kind, message=message, text=message.trailing or "")

    if kind is IRCEvent.JOIN:
        channel = message.trailing if message.trailing is not None else message.param(0)
        if channel:
            # a JOIN echo carries one channel; keep the first of a list
            channel = channel.split(",", 1)[0].strip()
        return Event(
            kind=kind,
            message=message,
            sender=_source_nick(message.prefix),
            channel=channel or None,
        )

    if kind is IRCEvent.KICK:
        return Event(
            kind=kind,
            message=message,
            sender=_source_nick(message.prefix),
            channel=message.param(0),
            target=message.param(1),
            text=message.trailing or "",
        )

    if kind is IRCEvent.MODE:
        target = message.param(0)
        mode = message.param(1)
        if mode is None:
            mode = message.trailing or ""
        return Event(
            kind=kind,
            message=message,
            sender=_source_nick(message.prefix),
            channel=target if target and target.startswith("#") else None,
            target=target,
            text=mode,
        )

    if kind is IRCEvent.PART:
        channel = message.param(0)
        if channel is None:
            channel = message.trailing
            reason = ""
        else:
            reason = message.trailing or ""
        return Event(
            kind=kind,
            message=message,
            sender=_source_nick(message.prefix),
            channel=channel,
            text=reason,
        )

    if kind in MESSAGE_EVENTS:
        return _classify_message(kind, message, own_nick)

    return Event(kind=IRCEvent.UNKNOWN, message=message, text=message.raw)


def _classify_message(
    kind: IRCEvent, message: ParsedMessage, own_nick: str
) -> Event | None:
    user = split_user_prefix(message.prefix)
    if user is None:
        return None
    nick = user[0]
    if own_nick and nick.lower() == own_nick.lower():
        return None

    target = message.param(0) or ""
    body = _message_body(message)
    channel = target if target.startswith("#") else None

    if kind is IRCEvent.PRIVMSG and channel is None and body == CTCP_VERSION_REQUEST:
        return Event(
            kind=kind,
            message=message,
            sender=nick,
            target=target,
            text=body,
            ctcp_request="VERSION",
        )

    action = ACTION_RE.search(body)
    if action:
        return Event(
            kind=kind,
            message=message,
            sender=nick,
            channel=channel,
            target=target,
            text=action.group(1),
            action=True,
        )
    return Event(kind=kind, message=message, sender=nick, channel=channel, target=target, text=body)


def build_version_reply(target: str, version: str) -> str:
    return f"PRIVMSG {target} :\x01VERSION {version}\x01"


__all__ = [
    "parse_irc_message",
    "classify",
    "split_user_prefix",
    "build_version_reply",
    "CTCP_VERSION_REQUEST",
]
