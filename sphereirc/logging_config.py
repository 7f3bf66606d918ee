r"""
Logging configuration module for the SphereIRC client.

Provides a clean, configurable logging setup using colorlog library with
structured error logging and aggregation capabilities.
"""

import atexit
import logging
import os
import sys
import threading
import time
from collections import Counter, defaultdict, deque
from typing import Any

import colorlog


_HISTORY_LIMIT = 1000  # entries kept per error category
_RECENT_WINDOW = 3600.0  # seconds counted as "recent"


class ErrorAggregator:
    """Counts failures per category and per server.

    Connection failures are logged with a ``server`` context entry, so a
    server that keeps failing gets its own line in the shutdown report.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, deque[dict[str, Any]]] = defaultdict(
            lambda: deque(maxlen=_HISTORY_LIMIT)
        )
        self._per_server: Counter[tuple[str, str]] = Counter()
        self.start_time = time.monotonic()

    def record_error(
        self, error_type: str, message: str, context: dict[str, Any] | None = None
    ) -> None:
        context = dict(context or {})
        with self._lock:
            self._entries[error_type].append(
                {"timestamp": time.monotonic(), "message": message, "context": context}
            )
            server = context.get("server")
            if isinstance(server, str):
                self._per_server[(error_type, server)] += 1

    def get_error_summary(self) -> dict[str, Any]:
        """Per category: totals, last-hour count, hourly rate, last entry and servers."""
        now = time.monotonic()
        with self._lock:
            runtime_hours = max((now - self.start_time) / 3600, 1)
            summary: dict[str, Any] = {}
            for error_type, entries in self._entries.items():
                summary[error_type] = {
                    "total_count": len(entries),
                    "recent_count": sum(
                        1 for e in entries if now - e["timestamp"] < _RECENT_WINDOW
                    ),
                    "rate_per_hour": len(entries) / runtime_hours,
                    "last_occurrence": entries[-1] if entries else None,
                    "servers": {
                        server: count
                        for (kind, server), count in self._per_server.items()
                        if kind == error_type
                    },
                }
            return summary

    def failing_servers(self, error_type: str = "network") -> list[tuple[str, int]]:
        """Servers with recorded failures of ``error_type``, most failures first."""
        with self._lock:
            counts = [(s, n) for (kind, s), n in self._per_server.items() if kind == error_type]
        return sorted(counts, key=lambda item: item[1], reverse=True)

    def should_alert(self, error_type: str, threshold_rate: float = 10.0) -> bool:
        stats = self.get_error_summary().get(error_type)
        return bool(stats) and stats["rate_per_hour"] > threshold_rate

    def log_summary_report(self) -> None:
        summary = self.get_error_summary()
        if not summary:
            logging.info("No errors recorded in current session")
            return

        logging.warning("ERROR SUMMARY REPORT")
        for error_type, stats in summary.items():
            logging.warning(
                f"  {error_type}: {stats['total_count']} total, "
                f"{stats['recent_count']} in last hour"
            )
            for server, count in sorted(stats["servers"].items()):
                logging.warning(f"    {server}: {count}")
            if stats["last_occurrence"]:
                logging.warning(f"    Last: {stats['last_occurrence']['message']}")

    def reset(self) -> None:
        with self._lock:
            self._entries.clear()
            self._per_server.clear()
            self.start_time = time.monotonic()


# Global error aggregator instance
error_aggregator = ErrorAggregator()


def log_structured_error(
    error_type: str,
    message: str,
    exception: Exception | None = None,
    context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Log an error with structured context and aggregation.

    Args:
        error_type: Category of the error (e.g., 'network', 'config', 'lookup')
        message: Descriptive error message
        exception: The exception that occurred (optional)
        context: Additional context data for debugging
        level: Logging level (default: ERROR)
    """
    structured_message = f"[{error_type.upper()}] {message}"

    if exception:
        structured_message += f" | Exception: {type(exception).__name__}: {str(exception)}"

    if context:
        context_str = " | ".join(f"{k}={v}" for k, v in context.items())
        structured_message += f" | Context: {context_str}"

    logging.log(level, structured_message)

    error_aggregator.record_error(error_type, message, context)

    if error_aggregator.should_alert(error_type):
        logging.critical(
            f"HIGH ERROR RATE ALERT: {error_type} occurring at "
            f"{error_aggregator.get_error_summary()[error_type]['rate_per_hour']:.1f}/hour"
        )


class LoggerConfigurator:
    """Handles logging configuration cleanly using colorlog.

    Supports environment variable configuration for log levels.
    """

    def __init__(self, config=None):
        self.config = config or {}
        self._summary_registered = False

    def configure(self):
        """Configure logging with colored output using colorlog.

        Uses environment variables:
        - DEBUG: Set to 'true', '1', or 'yes' for DEBUG level, otherwise INFO
        """
        debug_env = os.environ.get("DEBUG", "").lower()
        log_level = logging.DEBUG if debug_env in ("true", "1", "yes") else logging.INFO

        formatter = colorlog.ColoredFormatter(
            "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message_log_color)s%(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "magenta",
            },
            secondary_log_colors={
                "message": {
                    "ERROR": "red",
                    "CRITICAL": "magenta",
                }
            },
            reset=True,
        )

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)

        logging.basicConfig(
            level=log_level,
            handlers=[handler],
            format="%(message)s",
        )

        root_logger = logging.getLogger()
        root_logger.setLevel(log_level)

        # asyncio debug chatter is not useful at the client's DEBUG level
        logging.getLogger("asyncio").setLevel(logging.INFO)

        for h in root_logger.handlers:
            h.setFormatter(formatter)

        if not self._summary_registered:
            atexit.register(self._log_final_error_summary)
            self._summary_registered = True

    def _log_final_error_summary(self):
        """Log final error summary on application exit."""
        try:
            error_aggregator.log_summary_report()
        except Exception as e:  # noqa: BLE001
            logging.error(f"Failed to log final error summary: {e}")
