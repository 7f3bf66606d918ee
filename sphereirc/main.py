#!/usr/bin/env python3
"""
Main entry point for the SphereIRC client
"""

import asyncio
import logging
import signal
import sys

from .client import IRCClient
from .config import load_client_config, print_config_summary
from .constants import TICK_INTERVAL
from .errors import ConfigurationError, log_error
from .irc import Event, ServerConnection
from .logging_config import LoggerConfigurator
from .logs.logger import logger


def log_chat(connection: ServerConnection, channel: str | None, event: Event) -> None:
    """Default PRIVMSG handler: echo chat into the log."""
    logger.log_event(
        "app",
        "chat",
        level=logging.DEBUG,
        human=f"{event.sender}: {event.text}",
        server=connection.hostname,
        channel=channel or event.sender,
    )


def _install_signal_handlers(stop: asyncio.Event) -> None:  # pragma: no cover
    loop = asyncio.get_running_loop()

    def handler(signum: int) -> None:
        if stop.is_set():
            return
        logging.warning(f"Signal received - initiating shutdown (signal={signum})")
        stop.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, handler, sig)
        except (NotImplementedError, RuntimeError):
            # Not available on this platform / loop; Ctrl+C still raises
            pass


async def run_client(
    client: IRCClient,
    stop: asyncio.Event,
    tick_interval: float = TICK_INTERVAL,
) -> None:
    """Tick loop: poll every connection until stopped or all disconnected."""
    try:
        while not stop.is_set() and client.active:
            await client.poll()
            await asyncio.sleep(tick_interval)
    finally:
        await client.disconnect()


async def main(config_path: str | None = None) -> int:
    """Load configuration, connect and run until shutdown.

    Returns:
        Process exit code.
    """
    try:
        config = load_client_config(config_path)
        print_config_summary(config)
        client = IRCClient(config)
    except ConfigurationError as e:
        log_error("Configuration error", e)
        return 1

    client.add_event_handler("*", "PRIVMSG", log_chat)
    stop = asyncio.Event()
    _install_signal_handlers(stop)

    logger.log_event("app", "start", version=client.version)
    results = await client.connect()
    if not any(results):
        logger.log_event("app", "no_connections", level=logging.ERROR)
        return 1
    try:
        await run_client(client, stop)
    finally:
        logger.log_event("app", "shutdown")
    return 0


def health_check(config_path: str | None = None) -> int:
    try:
        config = load_client_config(config_path)
    except ConfigurationError as e:
        logger.log_event("app", "health_check_failed", level=logging.ERROR, error=str(e))
        return 1
    logger.log_event("app", "health_check_ok", servers=len(config.servers))
    return 0


def run(argv: list[str] | None = None) -> None:
    """Synchronous entry point for the application.

    Usage: ``sphereirc [--health-check] [config.json]``

    Raises:
        SystemExit: Always, with the resulting exit code.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    LoggerConfigurator().configure()

    check_only = "--health-check" in args
    if check_only:
        args.remove("--health-check")
    config_path = args[0] if args else None

    if check_only:
        sys.exit(health_check(config_path))

    try:
        code = asyncio.run(main(config_path))
    except KeyboardInterrupt:
        code = 0
    except asyncio.CancelledError:
        code = 0
    sys.exit(code)


if __name__ == "__main__":
    run()
