"""Error hierarchy and error logging helpers."""

from .handling import log_error  # noqa: F401
from .internal import (  # noqa: F401
    ConfigurationError,
    NetworkError,
    ServerLookupError,
    SphereIRCError,
    UnknownEventError,
)

__all__ = [
    "SphereIRCError",
    "ConfigurationError",
    "ServerLookupError",
    "UnknownEventError",
    "NetworkError",
    "log_error",
]
