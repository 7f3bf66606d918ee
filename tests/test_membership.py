import pytest

from sphereirc.irc.events import IRCEvent
from sphereirc.irc.membership import ChannelMembership, validate_channel
from sphereirc.irc.models import Event, ParsedMessage


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("dev", "#dev"),
        ("#dev", "#dev"),
        ("ab", "#ab"),
        ("a", ""),
        ("#", ""),
        ("", ""),
        (None, ""),
        (42, ""),
    ],
)
def test_validate_channel(raw, expected):
    assert validate_channel(raw) == expected


def _event(kind: IRCEvent, channel: str, sender: str | None = None, target: str | None = None) -> Event:
    message = ParsedMessage(raw="", prefix=None, command=kind.value)
    return Event(kind=kind, message=message, sender=sender, channel=channel, target=target)


def test_join_is_ordered_and_deduplicated():
    members = ChannelMembership()
    assert members.record_join("#b")
    assert members.record_join("a1")
    assert not members.record_join("#b")
    assert members.channels == ("#b", "#a1")
    assert len(members) == 2
    assert "b" in members


def test_only_own_join_counts():
    members = ChannelMembership()
    assert not members.apply(_event(IRCEvent.JOIN, "#dev", sender="bob"), "sphere")
    assert members.apply(_event(IRCEvent.JOIN, "#dev", sender="SPHERE"), "sphere")
    assert list(members) == ["#dev"]


def test_kick_of_self_removes_channel():
    members = ChannelMembership()
    members.record_join("#dev")
    assert not members.apply(_event(IRCEvent.KICK, "#dev", target="bob"), "sphere")
    assert "#dev" in members
    assert members.apply(_event(IRCEvent.KICK, "#dev", target="sphere"), "sphere")
    assert "#dev" not in members


def test_kick_from_channel_not_joined_is_ignored():
    members = ChannelMembership()
    assert not members.record_kick("#other", "sphere", "sphere")


def test_clear():
    members = ChannelMembership()
    members.record_join("#dev")
    members.clear()
    assert members.channels == ()


def test_channel_names_compare_case_insensitively():
    members = ChannelMembership()
    assert members.record_join("#Dev")
    assert not members.record_join("#dev")
    assert "#DEV" in members
    assert members.channels == ("#Dev",)
    assert members.apply(_event(IRCEvent.KICK, "#dev", target="sphere"), "sphere")
    assert members.channels == ()
