"""Multi-server IRC client."""

from __future__ import annotations

import asyncio
import logging
import platform
from collections.abc import Callable, Mapping
from typing import Any

from .config.model import ClientConfig
from .constants import CLIENT_NAME, CLIENT_VERSION
from .errors import ServerLookupError
from .irc import (
    WILDCARD,
    ConnectionState,
    HandlerRegistration,
    IRCEvent,
    ServerConnection,
    StreamTransport,
    Transport,
    resolve_event_kind,
)
from .irc.dispatcher import EventCallback
from .logs.logger import logger

ENGINE = f"{platform.python_implementation()} {platform.python_version()}"


class IRCClient:
    """Owns one ServerConnection per configured server.

    The host drives the client: ``await connect()`` once, then ``await poll()``
    every tick, and ``await disconnect()`` on shutdown.
    """

    def __init__(
        self,
        config: ClientConfig | Mapping[str, Any],
        *,
        transport_factory: Callable[[], Transport] = StreamTransport,
    ) -> None:
        """Build connections from configuration.

        Args:
            config: A ClientConfig or a raw mapping (validated, not mutated).
            transport_factory: Creates the socket primitive for each connection.

        Raises:
            ConfigurationError: If nick/username/password or a hostname is
                missing or empty.
        """
        if not isinstance(config, ClientConfig):
            config = ClientConfig.from_dict(config)
        self.config = config
        self._servers: list[ServerConnection] = [
            ServerConnection(
                server.inherit(config),
                version=self.version,
                transport_factory=transport_factory,
            )
            for server in config.servers
        ]
        logger.log_event(
            "client",
            "created",
            level=logging.DEBUG,
            nick=config.nick,
            servers=len(self._servers),
        )

    @property
    def version(self) -> str:
        """CTCP VERSION banner, semi-required by some networks."""
        return f"{CLIENT_NAME} {CLIENT_VERSION} / {ENGINE}"

    @property
    def servers(self) -> tuple[ServerConnection, ...]:
        return tuple(self._servers)

    @property
    def active(self) -> bool:
        return any(s.state is not ConnectionState.DISCONNECTED for s in self._servers)

    async def connect(self) -> list[bool]:
        """Connect every server concurrently; one result per server, in order."""
        return list(await asyncio.gather(*(s.connect() for s in self._servers)))

    async def disconnect(self) -> None:
        for server in self._servers:
            await server.disconnect()

    def get_server(self, hostname: str) -> ServerConnection:
        for server in self._servers:
            if server.hostname == hostname:
                return server
        raise ServerLookupError(hostname)

    def _resolve(self, server: ServerConnection | str) -> ServerConnection:
        if isinstance(server, ServerConnection):
            return server
        return self.get_server(server)

    async def send_message(self, server: ServerConnection | str, channel: str, message: str) -> bool:
        return await self._resolve(server).send_message(channel, message)

    async def send_raw_line(self, server: ServerConnection | str, line: str) -> bool:
        return await self._resolve(server).send_raw_line(line)

    def add_event_handler(
        self,
        hostname: str,
        event: IRCEvent | str,
        callback: EventCallback,
        override: bool = False,
    ) -> HandlerRegistration:
        """Register ``callback(connection, channel, event)`` for an event.

        ``hostname`` "*" registers the same entry on every connection; ``event``
        "*" matches every dispatched event.

        Raises:
            ServerLookupError: If no connection has ``hostname``.
            UnknownEventError: If ``event`` is not a recognised event key.
        """
        kind = resolve_event_kind(event)
        registration = HandlerRegistration(
            server_scope=hostname,
            event_kind=kind,
            callback=callback,
            override=bool(override),
        )
        targets = self._servers if hostname == WILDCARD else [self.get_server(hostname)]
        for server in targets:
            server.dispatcher.register(registration)
        logger.log_event(
            "client",
            "handler_registered",
            level=logging.DEBUG,
            scope=hostname,
            event=kind.name if kind else WILDCARD,
        )
        return registration

    async def poll(self) -> int:
        """Process buffered input on every connection, in registration order."""
        handled = 0
        for server in self._servers:
            handled += await server.poll()
        return handled

    def log(self, server: ServerConnection | str, channel: str | None, line: str) -> None:
        if server == WILDCARD:
            for s in self._servers:
                self.log(s, channel, line)
            return
        hostname = server.hostname if isinstance(server, ServerConnection) else server
        logger.log_event("client", "log", human=line, server=hostname, channel=channel)

    def snapshot(self) -> list[dict[str, Any]]:
        return [s.snapshot() for s in self._servers]
