"""
Configuration constants for the SphereIRC client core

This module contains all tunable constants used throughout the client.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Attempts to parse the environment variable as a float. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value else default


# Client identity (CTCP VERSION banner)
CLIENT_NAME = "SphereIRC"
CLIENT_VERSION = _get_env_str("CLIENT_VERSION", "0.1")

# Connection defaults
DEFAULT_PORT = _get_env_int("DEFAULT_PORT", 6667)  # Plain-text IRC port
USER_MODE = _get_env_int("USER_MODE", 8)  # Mode bitmask sent with USER (8 = +i)
DEFAULT_QUIT_MESSAGE = _get_env_str("DEFAULT_QUIT_MESSAGE", "Quit")
DEFAULT_PART_MESSAGE = _get_env_str("DEFAULT_PART_MESSAGE", "Leaving")
LINE_TERMINATOR = "\r\n"  # Appended to every outbound protocol line

# Read loop
READ_CHUNK_SIZE = _get_env_int(
    "READ_CHUNK_SIZE", 4096
)  # Max bytes pulled from one socket per tick
READ_POLL_TIMEOUT = _get_env_float(
    "READ_POLL_TIMEOUT", 0.01
)  # Seconds a tick waits for buffered bytes before moving on
TICK_INTERVAL = _get_env_float(
    "TICK_INTERVAL", 0.05
)  # Seconds between host ticks in the bundled runner

# Configuration file
CONFIG_FILE_ENV = "SPHEREIRC_CONFIG"
DEFAULT_CONFIG_FILE = "config.json"
