from __future__ import annotations

from ..logging_config import log_structured_error
from .internal import (
    ConfigurationError,
    NetworkError,
    ServerLookupError,
    SphereIRCError,
)


def _categorize(error: Exception) -> str:
    if isinstance(error, ConfigurationError):
        return "config"
    if isinstance(error, ServerLookupError):
        return "lookup"
    if isinstance(error, NetworkError | OSError):
        return "network"
    if isinstance(error, SphereIRCError):
        return "client"
    return "general"


def log_error(message: str, error: Exception, context: dict | None = None) -> None:
    """Logs an error message with the associated exception details.

    The error is categorized from its type and forwarded to structured logging
    so repeated failures are aggregated.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    merged: dict = {}
    if isinstance(error, SphereIRCError) and error.data:
        merged.update(error.data)
    if context:
        merged.update(context)
    log_structured_error(
        error_type=_categorize(error),
        message=message,
        exception=error,
        context=merged or None,
    )
