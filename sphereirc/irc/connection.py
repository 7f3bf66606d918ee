"""Per-server connection state machine."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from ..constants import LINE_TERMINATOR, READ_CHUNK_SIZE, USER_MODE
from ..errors import NetworkError, log_error
from ..logs.logger import logger
from .codec import LineCodec
from .dispatcher import EventDispatcher, HandlerRegistration
from .events import INERT_EVENTS, MESSAGE_EVENTS, WELCOME_EVENTS, IRCEvent
from .membership import ChannelMembership
from .models import ConnectionState, Event
from .parser import build_version_reply, classify, parse_irc_message
from .transport import StreamTransport, Transport

if TYPE_CHECKING:  # pragma: no cover
    from ..config.model import ServerConfig


class ServerConnection:  # pylint: disable=too-many-instance-attributes
    """One IRC server: socket, registration, auto-join, membership, handlers.

    Every method runs on the host's event loop; nothing here blocks waiting
    for a server reply. Replies are picked up by the next ``poll()``.
    """

    def __init__(
        self,
        server: ServerConfig,
        *,
        version: str,
        transport_factory: Callable[[], Transport] = StreamTransport,
    ) -> None:
        self.hostname = server.hostname
        self.port = server.port
        self.start_channels: tuple[str, ...] = tuple(server.channels)
        self.nick = server.nick or ""
        self.username = server.username or ""
        self.password = server.password or ""
        self.real_name = server.real_name or ""
        self.quit_message = server.quit_message or ""
        self.part_message = server.part_message or ""
        self.version = version
        self.state = ConnectionState.DISCONNECTED
        self.membership = ChannelMembership()
        self.dispatcher = EventDispatcher()
        self.codec = LineCodec()
        self._transport_factory = transport_factory
        self._transport: Transport | None = None
        self._join_sent = False

    def __repr__(self) -> str:
        return (
            f"<ServerConnection {self.hostname}:{self.port} "
            f"nick={self.nick} state={self.state.name}>"
        )

    @property
    def connected(self) -> bool:
        return self._transport is not None and self._transport.connected

    @property
    def joined_channels(self) -> tuple[str, ...]:
        return self.membership.channels

    @property
    def event_handlers(self) -> tuple[HandlerRegistration, ...]:
        return self.dispatcher.handlers

    def _set_state(self, new_state: ConnectionState) -> None:
        if self.state != new_state:
            logger.log_event(
                "irc",
                "state_change",
                level=logging.DEBUG,
                server=self.hostname,
                old_state=self.state.name,
                new_state=new_state.name,
            )
            self.state = new_state

    async def connect(self) -> bool:
        """Open the socket and send PASS/NICK/USER.

        Returns False when already connecting/connected or when the socket
        cannot be opened; the connection is then left Disconnected.
        """
        if self.state is not ConnectionState.DISCONNECTED:
            logger.log_event(
                "irc",
                "connect_skipped",
                level=logging.DEBUG,
                server=self.hostname,
                state=self.state.name,
            )
            return False
        self._set_state(ConnectionState.CONNECTING)
        logger.log_event("irc", "connect_start", server=self.hostname, port=self.port)
        try:
            transport = self._transport_factory()
            await transport.open(self.hostname, self.port)
        except Exception as e:  # noqa: BLE001
            # any failure stays local to this server and leaves it reconnectable
            log_error(
                "Connection failed",
                e,
                context={"server": self.hostname, "port": self.port},
            )
            self._set_state(ConnectionState.DISCONNECTED)
            return False
        self._transport = transport
        logger.log_event("irc", "connect_success", server=self.hostname)
        self._set_state(ConnectionState.REGISTERING)
        await self.send_raw_line(f"PASS {self.password}")
        await self.send_raw_line(f"NICK {self.nick}")
        await self.send_raw_line(f"USER {self.username} {USER_MODE} * :{self.real_name}")
        return self.connected

    async def disconnect(self) -> bool:
        """Send QUIT and close the socket; a no-op when not connected."""
        if self._transport is None:
            return False
        if not self._transport.connected:
            await self._handle_connection_lost()
            return False
        logger.log_event(
            "irc", "disconnect_start", server=self.hostname, port=self.port
        )
        await self.send_raw_line(f"QUIT :{self.quit_message}")
        await self._close_transport()
        self._reset()
        logger.log_event("irc", "disconnected", level=logging.WARNING, server=self.hostname)
        return True

    async def send_raw_line(self, line: str) -> bool:
        transport = self._transport
        if transport is None or not transport.connected:
            logger.log_event(
                "irc",
                "send_not_connected",
                level=logging.DEBUG,
                server=self.hostname,
                line=line,
            )
            return False
        try:
            transport.write(f"{line}{LINE_TERMINATOR}".encode("utf-8"))
            await transport.drain()
        except NetworkError as e:
            log_error("Write failed", e, context={"server": self.hostname})
            await self._handle_connection_lost()
            return False
        return True

    async def send_message(self, target: str, text: str) -> bool:
        return await self.send_raw_line(f"PRIVMSG {target} :{text}")

    async def poll(self) -> int:
        """Read whatever the socket has buffered and process complete lines.

        Returns the number of lines handled this tick.
        """
        transport = self._transport
        if transport is None:
            return 0
        if not transport.connected:
            await self._handle_connection_lost()
            return 0
        try:
            data = await transport.read_available(READ_CHUNK_SIZE)
        except NetworkError as e:
            log_error("Read failed", e, context={"server": self.hostname})
            await self._handle_connection_lost()
            return 0
        lines = self.codec.feed(data) if data else []
        for line in lines:
            await self.handle_line(line)
        if self._transport is not None and not self._transport.connected:
            await self._handle_connection_lost()
        return len(lines)

    async def handle_line(self, line: str) -> None:
        if not self.connected or not line:
            return
        if line.startswith("PING"):
            await self.send_raw_line(line.replace("PING", "PONG", 1))
            logger.log_event("irc", "ping", level=logging.DEBUG, server=self.hostname, raw=line)
            return
        logger.log_event("irc", "raw", level=logging.DEBUG, server=self.hostname, raw=line)
        message = parse_irc_message(line)
        if message is None:
            return
        event = classify(message, self.nick)
        if event is None:
            return
        await self._apply(event)
        if event.ctcp_request:
            return
        await self.dispatcher.dispatch(self, event)

    async def _apply(self, event: Event) -> None:  # noqa: C901
        kind = event.kind
        if kind in WELCOME_EVENTS:
            await self._join_start_channels()
        elif kind is IRCEvent.TOPIC:
            logger.log_event(
                "irc", "topic", server=self.hostname, topic_channel=event.channel, topic=event.text
            )
        elif kind is IRCEvent.TOPIC_TIMESTAMP:
            logger.log_event(
                "irc",
                "topic_set",
                server=self.hostname,
                topic_channel=event.channel,
                setter=event.set_by,
                set_at=event.set_at.isoformat() if event.set_at else event.message.param(3),
            )
        elif kind is IRCEvent.NAMES_REPLY:
            logger.log_event(
                "irc",
                "names",
                server=self.hostname,
                names_channel=event.channel,
                names=", ".join(event.names),
            )
        elif kind in INERT_EVENTS:
            pass
        elif kind is IRCEvent.MOTD:
            logger.log_event("irc", "motd", server=self.hostname, text=event.text)
        elif kind is IRCEvent.JOIN:
            self._apply_join(event)
        elif kind is IRCEvent.KICK:
            self._apply_kick(event)
        elif kind is IRCEvent.MODE:
            logger.log_event(
                "irc",
                "mode",
                server=self.hostname,
                setter=event.sender,
                mode=event.text,
                target=event.target,
            )
        elif kind is IRCEvent.PART:
            logger.log_event(
                "irc",
                "part",
                level=logging.DEBUG,
                server=self.hostname,
                channel=event.channel,
                nick=event.sender,
            )
        elif kind in MESSAGE_EVENTS:
            await self._apply_message(event)
        else:
            logger.log_event("irc", "unknown", server=self.hostname, raw=event.message.raw)

    async def _join_start_channels(self) -> None:
        # JOIN goes out once per connection lifecycle
        if self._join_sent:
            return
        self._join_sent = True
        self._set_state(ConnectionState.JOINED)
        if not self.start_channels:
            return
        channels = ",".join(self.start_channels)
        logger.log_event("irc", "join_sent", server=self.hostname, channels=channels)
        await self.send_raw_line(f"JOIN {channels}")

    def _apply_join(self, event: Event) -> None:
        if self.membership.apply(event, self.nick):
            logger.log_event("irc", "joined", server=self.hostname, channel=event.channel)
        else:
            logger.log_event(
                "irc",
                "user_joined",
                level=logging.DEBUG,
                server=self.hostname,
                channel=event.channel,
                nick=event.sender,
            )

    def _apply_kick(self, event: Event) -> None:
        logger.log_event(
            "irc",
            "kick",
            server=self.hostname,
            channel=event.channel,
            nick=event.target,
            reason=event.text,
        )
        if self.membership.apply(event, self.nick):
            logger.log_event(
                "irc", "kicked", level=logging.WARNING, server=self.hostname, channel=event.channel
            )

    async def _apply_message(self, event: Event) -> None:
        """Answer CTCP VERSION or log the message.

        Channel chat renders as ``nick: text``. An ACTION renders as
        ``nick text`` with a separating space rather than the nick and text
        run together.
        """
        if event.ctcp_request == "VERSION":
            logger.log_event("irc", "ctcp_version", server=self.hostname, nick=event.sender)
            await self.send_raw_line(build_version_reply(event.sender or "", self.version))
            return
        if event.channel is not None:
            if event.action:
                human = f"{event.sender} {event.text}"
            else:
                human = f"{event.sender}: {event.text}"
            logger.log_event("irc", "chat", human=human, server=self.hostname, channel=event.channel)
            return
        logger.log_event(
            "irc", "private_message", human=event.text, server=self.hostname, channel=event.sender
        )

    async def _close_transport(self) -> None:
        transport = self._transport
        self._transport = None
        if transport is not None:
            await transport.close()

    async def _handle_connection_lost(self) -> None:
        if self._transport is None:
            return
        logger.log_event(
            "irc", "connection_lost", level=logging.WARNING, server=self.hostname
        )
        await self._close_transport()
        self._reset()

    def _reset(self) -> None:
        self.membership.clear()
        self.codec.reset()
        self._join_sent = False
        self._set_state(ConnectionState.DISCONNECTED)

    def snapshot(self) -> dict[str, Any]:
        return {
            "hostname": self.hostname,
            "port": self.port,
            "nick": self.nick,
            "state": self.state.name,
            "connected": self.connected,
            "start_channels": list(self.start_channels),
            "joined_channels": list(self.joined_channels),
            "handlers": len(self.dispatcher.handlers),
        }
