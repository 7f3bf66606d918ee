"""Joined-channel tracking for one connection."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from .events import IRCEvent
from .models import Event


def validate_channel(channel: Any) -> str:
    """Normalize a channel name to its ``#``-prefixed form.

    Names that are not strings or are shorter than two characters are
    rejected with an empty string.
    """
    if not isinstance(channel, str) or len(channel) < 2:
        return ""
    if channel[0] != "#":
        channel = "#" + channel
    return channel


class ChannelMembership:
    """Ordered set of channels the server confirmed we are in.

    Keys are case-folded since IRC channel names are case-insensitive; the
    name as first joined is kept for display.
    """

    def __init__(self) -> None:
        self._channels: dict[str, str] = {}

    def __contains__(self, channel: object) -> bool:
        return validate_channel(channel).lower() in self._channels

    def __iter__(self) -> Iterator[str]:
        return iter(self.channels)

    def __len__(self) -> int:
        return len(self._channels)

    @property
    def channels(self) -> tuple[str, ...]:
        return tuple(self._channels.values())

    def record_join(self, channel: str | None) -> bool:
        normalized = validate_channel(channel)
        key = normalized.lower()
        if not normalized or key in self._channels:
            return False
        self._channels[key] = normalized
        return True

    def record_kick(self, channel: str | None, kicked_nick: str | None, own_nick: str) -> bool:
        if not kicked_nick or kicked_nick.lower() != own_nick.lower():
            return False
        key = validate_channel(channel).lower()
        if key not in self._channels:
            return False
        del self._channels[key]
        return True

    def apply(self, event: Event, own_nick: str) -> bool:
        """Update membership from a JOIN or KICK event; True if it changed."""
        if event.kind is IRCEvent.JOIN:
            if event.sender and event.sender.lower() != own_nick.lower():
                return False
            return self.record_join(event.channel)
        if event.kind is IRCEvent.KICK:
            return self.record_kick(event.channel, event.target, own_nick)
        return False

    def clear(self) -> None:
        self._channels.clear()
