"""Event handler registry and dispatch."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..errors import UnknownEventError
from ..logs.logger import logger
from .events import IRCEvent
from .models import Event

if TYPE_CHECKING:  # pragma: no cover
    from .connection import ServerConnection

WILDCARD = "*"

EventCallback = Callable[["ServerConnection", str | None, Event], Any]


@dataclass(frozen=True, slots=True)
class HandlerRegistration:
    """One ``add_event_handler`` call.

    ``event_kind`` None means the handler receives every dispatched event.
    ``override`` is recorded but does not change dispatch order.
    """

    server_scope: str
    event_kind: IRCEvent | None
    callback: EventCallback
    override: bool = False

    def matches(self, hostname: str, kind: IRCEvent) -> bool:
        if self.server_scope not in (WILDCARD, hostname):
            return False
        return self.event_kind is None or self.event_kind is kind


def resolve_event_kind(kind: IRCEvent | str) -> IRCEvent | None:
    """Accept an IRCEvent, its code/verb, its member name or ``"*"``."""
    if isinstance(kind, IRCEvent):
        return kind
    if not isinstance(kind, str) or not kind:
        raise UnknownEventError(f"Unknown IRC event: {kind!r}", data={"event": kind})
    if kind == WILDCARD:
        return None
    resolved = IRCEvent.from_key(kind)
    if resolved is not IRCEvent.UNKNOWN:
        return resolved
    try:
        return IRCEvent[kind.upper()]
    except KeyError:
        raise UnknownEventError(
            f"Unknown IRC event: {kind!r}", data={"event": kind}
        ) from None


class EventDispatcher:
    def __init__(self) -> None:
        self._handlers: list[HandlerRegistration] = []

    @property
    def handlers(self) -> tuple[HandlerRegistration, ...]:
        return tuple(self._handlers)

    def register(self, registration: HandlerRegistration) -> None:
        self._handlers.append(registration)

    def handlers_for(self, hostname: str, kind: IRCEvent) -> list[HandlerRegistration]:
        return [h for h in self._handlers if h.matches(hostname, kind)]

    async def dispatch(self, connection: ServerConnection, event: Event) -> int:
        """Invoke matching handlers in registration order; return how many ran."""
        matching = self.handlers_for(connection.hostname, event.kind)
        if not matching:
            return 0
        logger.log_event(
            "irc",
            "dispatch",
            level=logging.DEBUG,
            server=connection.hostname,
            channel=event.channel,
            event=event.kind.name,
            handlers=len(matching),
        )
        for registration in matching:
            await self._invoke(registration, connection, event)
        return len(matching)

    @staticmethod
    async def _invoke(
        registration: HandlerRegistration, connection: ServerConnection, event: Event
    ) -> None:
        handler = registration.callback
        try:
            if inspect.iscoroutinefunction(handler):
                await handler(connection, event.channel, event)
            else:
                maybe = handler(connection, event.channel, event)
                if inspect.isawaitable(maybe):
                    await maybe
        except Exception as e:  # noqa: BLE001
            logger.log_event(
                "irc",
                "handler_error",
                level=logging.ERROR,
                server=connection.hostname,
                channel=event.channel,
                event=event.kind.name,
                error=str(e),
                error_type=type(e).__name__,
            )
