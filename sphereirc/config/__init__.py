"""Configuration package exports."""

from .loader import (  # noqa: F401
    load_client_config,
    print_config_summary,
    resolve_config_path,
)
from .model import ClientConfig, ServerConfig
from .repository import ConfigRepository

__all__ = [
    "ClientConfig",
    "ServerConfig",
    "ConfigRepository",
    "load_client_config",
    "print_config_summary",
    "resolve_config_path",
]
