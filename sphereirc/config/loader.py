"""Configuration loading utilities."""

from __future__ import annotations

import logging
import os

from ..constants import CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE
from ..logs.logger import logger
from .model import ClientConfig
from .repository import ConfigRepository


def resolve_config_path(path: str | None = None) -> str:
    """Explicit path first, then the environment, then the default file."""
    if path:
        return path
    return os.environ.get(CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE)


def load_client_config(path: str | None = None) -> ClientConfig:
    """Load and validate the client configuration file.

    Raises:
        ConfigurationError: If the file cannot be read or fails validation.
    """
    config_file = resolve_config_path(path)
    raw = ConfigRepository(config_file).load_raw()
    config = ClientConfig.from_dict(raw)
    logger.log_event(
        "config", "loaded", path=config_file, servers=len(config.servers)
    )
    return config


def print_config_summary(config: ClientConfig) -> None:
    logger.log_event(
        "config",
        "summary",
        level=logging.DEBUG,
        nick=config.nick,
        servers=len(config.servers),
    )
    for server in config.servers:
        logger.log_event(
            "config",
            "server_summary",
            server=server.hostname,
            port=server.port,
            channels=", ".join(server.channels) or "-",
        )
